# src/bomb_tracer/arch/sparse/instructions/control.py
"""
制御系命令 (JUMP, CJUMP, DEFUSE, EXPLODE)。
"""
import operator
from typing import Callable, Dict

from bomb_tracer.core.interpreter import StepContext
from bomb_tracer.core.resolver import resolve
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import GameStatus, MachineState

# CJUMPの比較演算子。未知の演算子は常に不成立
COMPARATORS: Dict[str, Callable[[int, int], bool]] = {
    "<": operator.lt,
    ">": operator.gt,
    "=": operator.eq,
    "≠": operator.ne,
}

def _arg(instruction: Instruction, index: int):
    # 欠けたオペランドは0として解決される
    return instruction.args[index] if index < len(instruction.args) else 0

# @intent:note 分岐命令の実装について
# AbstractInterpreter.step() は実行前に PC を1行進めている。
# 不成立時は何もしなくて良い。成立時は PC = 分岐先 とする。
# 分岐先はレジスタを通して解決される（JUMP T のような記述が可能）。

# @intent:responsibility JUMP target : 無条件の絶対ジャンプ
def jump(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return state.replace(pc=resolve(_arg(instruction, 0), state.registers))

# @intent:responsibility CJUMP left, op, right, target : 条件成立時に絶対ジャンプ
def cjump(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    regs = state.registers
    left = resolve(_arg(instruction, 0), regs)
    compare = COMPARATORS.get(str(_arg(instruction, 1)))
    right = resolve(_arg(instruction, 2), regs)
    target = resolve(_arg(instruction, 3), regs)
    if compare is not None and compare(left, right):
        return state.replace(pc=target)
    return state

# --- Terminal Instructions ---

def defuse(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return state.replace(outcome=GameStatus.WON)

def explode(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return state.replace(outcome=GameStatus.LOST)
