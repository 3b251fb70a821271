# src/bomb_tracer/arch/sparse/interpreter.py
"""
疎な行番号形式のインタプリタ。

1始まりの行番号、汎用ニーモニック（JUMP/CJUMP）、自己書き換え（COPY）、
時間移動（TTRAVEL）をサポートします。
存在しない行や範囲外の行はEMPTYとして実行され、実行は継続されます。
"""
from typing import Dict

from bomb_tracer.common.types import ARCH_SPARSE, LineNumber
from bomb_tracer.core.interpreter import AbstractInterpreter, ExecFunc
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.arch.sparse import disassembler
from bomb_tracer.arch.sparse.instructions.maps import EXECUTE_MAP

# @intent:responsibility 疎な行番号形式の命令セットを実行します。
class SparseInterpreter(AbstractInterpreter):
    @property
    def architecture(self) -> str:
        return ARCH_SPARSE

    @property
    def initial_pc(self) -> LineNumber:
        return 1

    def _execute_map(self) -> Dict[str, ExecFunc]:
        return EXECUTE_MAP

    def format_instruction(self, instruction: Instruction) -> str:
        return disassembler.format_instruction(instruction)

    def get_tooltip(self, instruction: Instruction) -> str:
        return disassembler.get_tooltip(instruction)
