# src/bomb_tracer/arch/fixed/instructions/control.py
"""
固定長形式の制御系命令 (JMP, BEQ, BNE, BGT, BLT)。
"""
import operator
from typing import Callable

from bomb_tracer.core.interpreter import StepContext
from bomb_tracer.core.resolver import coerce_int, resolve
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import MachineState

# @intent:note 分岐先はレジスタを通さず、生の行番号（整数）として解釈する。
#              `JMP A` はレジスタAの値ではなく、行0へのジャンプとなる。
def _raw_target(instruction: Instruction, index: int) -> int:
    args = instruction.args
    return coerce_int(args[index]) if index < len(args) else 0

def _branch(state: MachineState, instruction: Instruction, compare: Callable[[int, int], bool]) -> MachineState:
    args = instruction.args
    regs = state.registers
    left = resolve(args[0] if len(args) > 0 else 0, regs)
    right = resolve(args[1] if len(args) > 1 else 0, regs)
    if compare(left, right):
        return state.replace(pc=_raw_target(instruction, 2))
    return state

# @intent:responsibility JMP target
def jmp(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return state.replace(pc=_raw_target(instruction, 0))

# @intent:responsibility BEQ left, right, target (left = right)
def beq(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return _branch(state, instruction, operator.eq)

# @intent:responsibility BNE left, right, target (left ≠ right)
def bne(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return _branch(state, instruction, operator.ne)

# @intent:responsibility BGT left, right, target (left > right)
def bgt(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return _branch(state, instruction, operator.gt)

# @intent:responsibility BLT left, right, target (left < right)
def blt(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    return _branch(state, instruction, operator.lt)
