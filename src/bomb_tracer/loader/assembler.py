# bomb_tracer/loader/assembler.py
"""
1行形式の命令テキストを解析するアセンブラ。
レベル定義（YAML）で `"CJUMP A < 10 8"` のように記述された命令をInstructionへ変換します。
"""
import re
from typing import Dict, List, Optional, Tuple

from bomb_tracer.common.types import LineNumber, Operand
from bomb_tracer.core.snapshot import Instruction

# 表示用の矢印はオペランドの区切りとして読み捨てる
_ARROWS = ("→", "->")
_INT_TOKEN = re.compile(r"^[+-]?\d+$")
_LINE_PREFIX = re.compile(r"^\s*([+-]?\d+)\s*:\s*(.*)$")

# @intent:responsibility 命令テキストとInstructionの相互変換を行います。
class InstructionAssembler:
    # @intent:responsibility 1行を解析してInstructionを返します。空行・コメント行はNoneを返します。
    def parse_line(self, line: str) -> Optional[Instruction]:
        line = line.split(';')[0].strip()
        if not line:
            return None

        parts = re.split(r'\s+', line, maxsplit=1)
        mnemonic = parts[0].upper()
        operands = parts[1] if len(parts) > 1 else ""
        return Instruction(mnemonic, tuple(self._parse_operands(operands)))

    # @intent:responsibility `"行番号: 命令"` 形式の行の並びを、行番号付きの対応表に変換します。
    # @intent:pre-condition 行番号は重複してはなりません。
    def assemble(self, lines: List[str]) -> Dict[LineNumber, Instruction]:
        program: Dict[LineNumber, Instruction] = {}
        for line_num, line in enumerate(lines, 1):
            number, body = self._split_line_number(line)
            instruction = self.parse_line(body)
            if instruction is None:
                continue
            if number is None:
                raise ValueError(f"Missing line number on line {line_num}: {line}")
            if number in program:
                raise ValueError(f"Duplicate line number {number} on line {line_num}")
            program[number] = instruction
        return program

    def _split_line_number(self, line: str) -> Tuple[Optional[int], str]:
        match = _LINE_PREFIX.match(line)
        if match:
            return int(match.group(1)), match.group(2)
        return None, line

    def _parse_operands(self, operands: str) -> List[Operand]:
        for arrow in _ARROWS:
            operands = operands.replace(arrow, " ")
        tokens = [tok for tok in re.split(r'[\s,]+', operands) if tok]
        return [self._parse_val(tok) for tok in tokens]

    def _parse_val(self, token: str) -> Operand:
        if _INT_TOKEN.match(token):
            return int(token)
        return token
