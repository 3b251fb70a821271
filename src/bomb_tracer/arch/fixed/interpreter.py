# src/bomb_tracer/arch/fixed/interpreter.py
"""
固定長形式のインタプリタ。

0始まりの固定長プログラム、専用の分岐ニーモニック（BEQ/BNE/BGT/BLT/JMP）を扱います。
自己書き換えと時間移動はサポートしません。
"""
from typing import Dict

from bomb_tracer.common.types import ARCH_FIXED, LineNumber
from bomb_tracer.core.interpreter import AbstractInterpreter, ExecFunc
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import MachineState
from bomb_tracer.arch.fixed import disassembler
from bomb_tracer.arch.fixed.instructions.maps import EXECUTE_MAP

# プログラムの範囲外に出た場合に実行される命令
OUT_OF_BOUNDS = Instruction("EXPLODE")

# @intent:responsibility 固定長形式の命令セットを実行します。
class FixedInterpreter(AbstractInterpreter):
    @property
    def architecture(self) -> str:
        return ARCH_FIXED

    @property
    def initial_pc(self) -> LineNumber:
        return 0

    def _execute_map(self) -> Dict[str, ExecFunc]:
        return EXECUTE_MAP

    # @intent:responsibility 範囲外のPCは即座に敗北（EXPLODE）として扱います。
    # @intent:rationale Tは通常どおり加算・記録され、PCはその行に留まります。
    def _fetch(self, state: MachineState) -> Instruction:
        if not state.program.contains(state.pc):
            return OUT_OF_BOUNDS
        return state.program.get(state.pc)

    def format_instruction(self, instruction: Instruction) -> str:
        return disassembler.format_instruction(instruction)

    def get_tooltip(self, instruction: Instruction) -> str:
        return disassembler.get_tooltip(instruction)
