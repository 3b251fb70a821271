# src/bomb_tracer/arch/sparse/instructions/alu.py
"""
レジスタ演算命令 (ADD)。
"""
from bomb_tracer.core.interpreter import StepContext
from bomb_tracer.core.resolver import resolve
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import MachineState

# @intent:responsibility ADD src1, src2, dest : dest ← src1 + src2
# @intent:note オペランドが不足している場合は0として扱う。書き込み先がない場合は何もしない。
def add(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    args = instruction.args
    if len(args) < 3:
        return state
    regs = state.registers
    value = resolve(args[0], regs) + resolve(args[1], regs)
    return state.replace(registers=regs.with_register(str(args[2]), value))
