"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスや定数を定義します。
"""
from typing import Dict, List, NamedTuple, Union

# @intent:data_structure プログラムの行番号。疎であり、負値や0も一時的に取り得ます。
LineNumber = int

# @intent:data_structure レジスタ名（慣例として英大文字1文字）。
RegisterName = str

# @intent:data_structure 命令のオペランド。数値リテラル、レジスタ名、数値文字列のいずれか。
Operand = Union[int, str]

# @intent:data_structure レジスタ名と値の対応表。レベル定義やUIで使用されます。
RegisterValues = Dict[RegisterName, int]

# 経過ステップ数を保持する予約レジスタ
TIME_REGISTER: RegisterName = "T"

# 命令セットの種別
ARCH_SPARSE = "SPARSE"
ARCH_FIXED = "FIXED"
SUPPORTED_ARCHITECTURES = (ARCH_SPARSE, ARCH_FIXED)

# ビューポート上で連続しない行の間に挿入されるマーカー
GAP_MARKER = "..."

# @intent:data_structure 単一のレジスタの表示定義。UIが動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: RegisterName
    player_settable: bool = False

# @intent:data_structure レジスタグループの表示定義。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
