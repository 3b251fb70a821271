# bomb_tracer/core/interpreter.py
"""
Core Layer (抽象インタプリタ)

このモジュールは、命令サイクル（フェッチ→時間の進行→PC更新→実行→履歴の記録）の
駆動に関する抽象化を提供します。
具体的な命令の振る舞いは各命令セット（arch）の命令マップに委譲されます。
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List

from bomb_tracer.common.types import LineNumber, RegisterLayoutInfo, RegisterInfo, TIME_REGISTER
from bomb_tracer.core.snapshot import Instruction, Metadata, Snapshot
from bomb_tracer.core.state import MachineState
from bomb_tracer.debugger.history import History

# @intent:responsibility 命令の実行時に参照される、ステップ単位の不変な文脈。
@dataclass(frozen=True)
class StepContext:
    origin_pc: LineNumber # 実行中の命令が置かれていた行
    history: History # このステップ開始時点の履歴

# 命令実行関数の型: 実行前の状態（Tは加算済み）を受け取り、新しい状態を返す
ExecFunc = Callable[[MachineState, Instruction, StepContext], MachineState]

# 終端命令。PCを進めない
TERMINAL_OPS = ("DEFUSE", "EXPLODE")

# @intent:responsibility 抽象インタプリタの基本機能とインターフェースを定義します。
class AbstractInterpreter(ABC):
    """
    全ての命令セットの実行系の基底となる抽象クラス。
    インタプリタ自体は状態を持たず、状態は常に引数と戻り値でやり取りされます。
    """
    # @intent:responsibility 命令セットの名称（"SPARSE"/"FIXED"）。
    @property
    @abstractmethod
    def architecture(self) -> str:
        pass

    # @intent:responsibility プログラムカウンタの初期値（1始まり/0始まり）。
    @property
    @abstractmethod
    def initial_pc(self) -> LineNumber:
        pass

    # @intent:responsibility オペコードから実行関数への対応表を返します。
    @abstractmethod
    def _execute_map(self) -> Dict[str, ExecFunc]:
        pass

    # @intent:responsibility 命令の表示用文字列を返します。
    @abstractmethod
    def format_instruction(self, instruction: Instruction) -> str:
        pass

    # @intent:responsibility 命令の説明文（ツールチップ）を返します。
    @abstractmethod
    def get_tooltip(self, instruction: Instruction) -> str:
        pass

    # @intent:responsibility 現在のPCの命令をフェッチします。
    def _fetch(self, state: MachineState) -> Instruction:
        """
        存在しない行はEMPTY命令としてフェッチされます。
        範囲外アクセスの扱いを変える命令セットはこのメソッドをオーバーライドします。
        """
        return state.program.get(state.pc)

    # @intent:responsibility 命令実行前のPC更新。デフォルトは1行進める。終端命令は進めない。
    def _next_pc(self, instruction: Instruction, pc: LineNumber) -> LineNumber:
        if instruction.op in TERMINAL_OPS:
            return pc
        return pc + 1

    # @intent:responsibility 1命令を実行し、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （フェッチ→T加算→PC更新→実行→履歴の記録）を定義します。
    def step(self, state: MachineState, history: History) -> Snapshot:
        """
        1命令を実行し、新しい状態と履歴を含むSnapshotを返します。
        引数の状態・履歴は変更されません。
        """
        origin_pc = state.pc

        # 1. フェッチ
        instruction = self._fetch(state)

        # 2. 時間の進行（命令の種類によらず常に加算）
        registers = state.registers.with_register(TIME_REGISTER, state.registers.t + 1)

        # 3. PC更新
        working = state.replace(registers=registers, pc=self._next_pc(instruction, origin_pc), outcome=None)

        # 4. 実行（未知のオペコードはEMPTYとして扱う）
        executor = self._execute_map().get(instruction.op)
        if executor:
            working = executor(working, instruction, StepContext(origin_pc=origin_pc, history=history))

        # 5. 履歴の記録（同じ時刻は上書き）
        new_history = history.record(working.registers.t, working.registers)

        return Snapshot(
            state=working,
            instruction=instruction,
            history=new_history,
            metadata=Metadata(
                origin_pc=origin_pc,
                symbol_info=f"{origin_pc}: {self.format_instruction(instruction)}",
            ),
        )

    # @intent:responsibility レジスタをUI上でどのように配置すべきかの定義を返します。
    def get_register_layout(self, state: MachineState, player_register: str) -> List[RegisterLayoutInfo]:
        names = [name for name in state.registers if name != TIME_REGISTER]
        return [
            RegisterLayoutInfo("Registers", [RegisterInfo(name, name == player_register) for name in names]),
            RegisterLayoutInfo("Time", [RegisterInfo(TIME_REGISTER)]),
        ]
