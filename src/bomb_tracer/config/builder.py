from typing import Any, Optional

from bomb_tracer.common.types import ARCH_FIXED, ARCH_SPARSE
from bomb_tracer.core.interpreter import AbstractInterpreter
from bomb_tracer.core.resolver import coerce_int
from bomb_tracer.core.state import MachineState, RegisterSnapshot
from bomb_tracer.arch.sparse.interpreter import SparseInterpreter
from bomb_tracer.arch.fixed.interpreter import FixedInterpreter
from bomb_tracer.memory.program_store import load_program
from .models import LevelConfig

# @intent:responsibility レベル定義（Config）に基づいて、インタプリタと初期状態を生成します。
class SessionBuilder:
    def build_interpreter(self, architecture: str) -> AbstractInterpreter:
        if architecture == ARCH_SPARSE:
            return SparseInterpreter()
        elif architecture == ARCH_FIXED:
            return FixedInterpreter()
        else:
            raise ValueError(f"Unsupported architecture: {architecture}")

    # @intent:responsibility Configで定義された初期状態を生成します。
    # @intent:rationale プログラムは毎回新しく読み込み、以前のセッションと共有しない。
    def build_initial_state(self, level: LevelConfig, interpreter: AbstractInterpreter,
                            player_value: Optional[Any] = None) -> MachineState:
        """
        `player_value`が指定された場合は、プレイヤーレジスタの初期値を整数に変換して上書きします。
        """
        registers = dict(level.initial_registers)
        if player_value is not None:
            registers[level.player_register] = coerce_int(player_value)

        return MachineState(
            registers=RegisterSnapshot(registers),
            pc=interpreter.initial_pc,
            program=load_program(level.program, interpreter.architecture),
        )
