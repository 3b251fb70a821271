# src/bomb_tracer/arch/sparse/instructions/memory.py
"""
プログラムと履歴を操作する命令 (COPY, TTRAVEL)。
"""
from bomb_tracer.core.interpreter import StepContext
from bomb_tracer.core.resolver import resolve
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import MachineState

# @intent:responsibility COPY source[, target] : source行の命令をtarget行へ挿入する（自己書き換え）
# @intent:note 2オペランド形式と1オペランド形式でPC補正の規則が異なる。
#              2オペランド形式: 実行中の行がtarget以上なら、ずれた分だけPCをさらに1進める。
#              1オペランド形式: 現在行の直後に挿入する。PC補正なし。
def copy(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    args = instruction.args
    regs = state.registers
    source = resolve(args[0] if args else 0, regs)
    copied = state.program.get(source)

    if len(args) >= 2:
        target = resolve(args[1], regs)
        program = state.program.insert_at(target, copied)
        pc = state.pc + 1 if ctx.origin_pc >= target else state.pc
        return state.replace(program=program, pc=pc)

    program = state.program.insert_at(ctx.origin_pc + 1, copied)
    return state.replace(program=program)

# @intent:responsibility TTRAVEL : 現在のT（加算済み）の時刻に記録されたレジスタへ全体を巻き戻す
# @intent:note 記録のない時刻の場合は何もしない。PCは巻き戻さない。
def ttravel(state: MachineState, instruction: Instruction, ctx: StepContext) -> MachineState:
    recorded = ctx.history.lookup(state.registers.t)
    if recorded is None:
        return state
    return state.replace(registers=recorded)
