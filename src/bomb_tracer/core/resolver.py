# bomb_tracer/core/resolver.py
"""
オペランド解決ロジック。

命令のオペランド（数値リテラル、レジスタ名、数値文字列）を
レジスタのスナップショットに対して整数値へ解決します。
不正なオペランドは例外を送出せず、0に縮退します。
"""
import re
from typing import Any, Mapping

from bomb_tracer.common.types import Operand, RegisterName

# 先頭の符号付き整数部分のみを読む（"12abc" -> 12, "3.9" -> 3）
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# @intent:responsibility 任意の値を整数に変換します。変換できない値は0になります。
def coerce_int(value: Any) -> int:
    """
    数値はそのまま整数化し、文字列は先頭の整数部分を解釈します。
    解釈できない値は0を返します。
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    return 0

# @intent:responsibility オペランドをレジスタのスナップショットに対して解決します。
# @intent:pre-condition `registers`はレジスタ名から整数値への対応表である必要があります。
def resolve(operand: Operand, registers: Mapping[RegisterName, int]) -> int:
    if isinstance(operand, (int, float)):
        return coerce_int(operand)
    if isinstance(operand, str) and operand in registers:
        return registers[operand]
    return coerce_int(operand)
