# src/bomb_tracer/arch/sparse/disassembler.py
"""
疎な行番号形式の命令を表示用テキストと説明文に変換します。
"""
import re
from typing import Callable, Dict, Sequence

from bomb_tracer.common.types import Operand
from bomb_tracer.core.snapshot import Instruction

_REGISTER_TOKEN = re.compile(r"^[A-Z]$")

# @intent:responsibility 説明文用にオペランドを整形します。レジスタ名は "Register X" と表記します。
def format_arg(arg: Operand) -> str:
    if isinstance(arg, str) and _REGISTER_TOKEN.match(arg):
        return f"Register {arg}"
    return str(arg)

def _args(args: Sequence[Operand], count: int) -> list:
    return [str(a) for a in args] + [""] * (count - len(args))

# @intent:responsibility 命令の表示用文字列を返します。
def format_instruction(instruction: Instruction) -> str:
    op = instruction.op
    args = instruction.args
    if op == "ADD":
        a = _args(args, 3)
        return f"{a[2]} ← {a[0]} + {a[1]}"
    if op == "CJUMP":
        a = _args(args, 4)
        return f"CJUMP {a[0]} {a[1]} {a[2]} → {a[3]}"
    if op == "JUMP":
        return f"JUMP {_args(args, 1)[0]}"
    if op == "COPY":
        if len(args) == 2:
            return f"COPY {args[0]} → {args[1]}"
        return f"COPY {_args(args, 1)[0]}"
    if op in ("EMPTY", "TTRAVEL", "DEFUSE", "EXPLODE"):
        return op
    return f"{op} {', '.join(str(a) for a in args)}".rstrip()

def _tooltip_add(args: Sequence[Operand]) -> str:
    a = list(args) + [""] * (3 - len(args))
    return f"{format_arg(a[2])} ← {format_arg(a[0])} + {format_arg(a[1])}"

def _tooltip_cjump(args: Sequence[Operand]) -> str:
    a = list(args) + [""] * (4 - len(args))
    return f"If {format_arg(a[0])} {a[1]} {format_arg(a[2])}, jump to instruction {a[3]}"

def _tooltip_copy(args: Sequence[Operand]) -> str:
    if len(args) == 2:
        return f"Copy the instruction at line {args[0]} into line {args[1]}"
    source = args[0] if args else ""
    return f"Copy the instruction at line {source} and insert it after the current line"

TOOLTIP_MAP: Dict[str, Callable[[Sequence[Operand]], str]] = {
    "ADD": _tooltip_add,
    "JUMP": lambda args: f"Jump to instruction {args[0] if args else ''}",
    "CJUMP": _tooltip_cjump,
    "COPY": _tooltip_copy,
    "EMPTY": lambda args: "No operation (does nothing)",
    "TTRAVEL": lambda args: "Reset registers to their state at time T",
    "DEFUSE": lambda args: "Defuse the bomb and win the game!",
    "EXPLODE": lambda args: "Explode the bomb and lose the game!",
}

# @intent:responsibility 命令の説明文を返します。未知のオペコードは空文字列です。
def get_tooltip(instruction: Instruction) -> str:
    tooltip = TOOLTIP_MAP.get(instruction.op)
    if tooltip:
        return tooltip(instruction.args)
    return ""
