# src/bomb_tracer/arch/sparse/instructions/maps.py
"""
疎な行番号形式の命令マップ。
"""
from typing import Dict

from bomb_tracer.core.interpreter import ExecFunc
from bomb_tracer.arch.sparse.instructions import alu, control, memory

EXECUTE_MAP: Dict[str, ExecFunc] = {
    "ADD": alu.add,
    "JUMP": control.jump,
    "CJUMP": control.cjump,
    "COPY": memory.copy,
    "TTRAVEL": memory.ttravel,
    "DEFUSE": control.defuse,
    "EXPLODE": control.explode,
    # EMPTY と未知のオペコードは対応表に存在しない（無操作）
}
