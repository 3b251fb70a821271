# src/bomb_tracer/arch/fixed/instructions/maps.py
"""
固定長形式の命令マップ。
ADDと終端命令は疎な形式と同じ実装を共有します。
"""
from typing import Dict

from bomb_tracer.core.interpreter import ExecFunc
from bomb_tracer.arch.sparse.instructions import alu
from bomb_tracer.arch.sparse.instructions import control as sparse_control
from bomb_tracer.arch.fixed.instructions import control

EXECUTE_MAP: Dict[str, ExecFunc] = {
    "ADD": alu.add,
    "JMP": control.jmp,
    "BEQ": control.beq,
    "BNE": control.bne,
    "BGT": control.bgt,
    "BLT": control.blt,
    "DEFUSE": sparse_control.defuse,
    "EXPLODE": sparse_control.explode,
    # COPY/TTRAVEL はこの命令セットに含まれない（無操作）
}
