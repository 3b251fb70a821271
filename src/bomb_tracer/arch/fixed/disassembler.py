# src/bomb_tracer/arch/fixed/disassembler.py
"""
固定長形式の命令を表示用テキストと説明文に変換します。
"""
from typing import Callable, Dict, Sequence

from bomb_tracer.common.types import Operand
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.arch.sparse.disassembler import TOOLTIP_MAP as SPARSE_TOOLTIPS, format_arg

_BRANCH_SYMBOLS = {"BEQ": "=", "BNE": "≠", "BGT": ">", "BLT": "<"}

def format_instruction(instruction: Instruction) -> str:
    op = instruction.op
    args = [str(a) for a in instruction.args]
    if op == "ADD":
        a = args + [""] * (3 - len(args))
        return f"{a[2]} ← {a[0]} + {a[1]}"
    if op in _BRANCH_SYMBOLS:
        a = args + [""] * (3 - len(args))
        return f"{op} {a[0]}, {a[1]} → {a[2]}"
    if op == "JMP":
        return f"JMP {args[0] if args else ''}".rstrip()
    return f"{op} {', '.join(args)}".rstrip()

def _tooltip_branch(op: str) -> Callable[[Sequence[Operand]], str]:
    def tooltip(args: Sequence[Operand]) -> str:
        a = list(args) + [""] * (3 - len(args))
        return f"If {format_arg(a[0])} {_BRANCH_SYMBOLS[op]} {format_arg(a[1])}, jump to instruction {a[2]}"
    return tooltip

TOOLTIP_MAP: Dict[str, Callable[[Sequence[Operand]], str]] = {
    "ADD": SPARSE_TOOLTIPS["ADD"],
    "JMP": lambda args: f"Jump to instruction {args[0] if args else ''}",
    "BEQ": _tooltip_branch("BEQ"),
    "BNE": _tooltip_branch("BNE"),
    "BGT": _tooltip_branch("BGT"),
    "BLT": _tooltip_branch("BLT"),
    "EMPTY": lambda args: "No operation (does nothing)",
    "DEFUSE": lambda args: "Defuse the bomb and win the game!",
    "EXPLODE": lambda args: "Explode the bomb and lose the game!",
}

def get_tooltip(instruction: Instruction) -> str:
    tooltip = TOOLTIP_MAP.get(instruction.op)
    if tooltip:
        return tooltip(instruction.args)
    return ""
