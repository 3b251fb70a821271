# bomb_tracer/core/snapshot.py
"""
命令レコードと実行結果の不変スナップショット

このモジュールは、プログラムを構成する命令と、1ステップ実行後の
完全な状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、実行履歴の記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from bomb_tracer.common.types import LineNumber, Operand
from bomb_tracer.core.state import MachineState

if TYPE_CHECKING:
    from bomb_tracer.debugger.history import History

# @intent:responsibility 1つの命令（オペコードとオペランド列）を記録します。
@dataclass(frozen=True) # 不変データ構造
class Instruction:
    """
    オペコードと順序付きオペランド列からなる命令。
    プログラムの変更は命令の置き換えで表現され、命令自体は変更されません。
    """
    op: str # 例: "ADD"
    args: Tuple[Operand, ...] = () # 例: ("A", "B", "C")

    def __post_init__(self):
        # @intent:rationale frozenのため、正規化はobject.__setattr__で行う。
        object.__setattr__(self, "op", str(self.op).upper())
        object.__setattr__(self, "args", tuple(self.args))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instruction":
        """
        `{"op": ..., "args": [...]}` 形式の辞書から命令を生成します。
        `args`の省略およびnullは空のオペランド列として扱います。
        """
        args = data.get("args")
        if args is None:
            args = ()
        elif not isinstance(args, (list, tuple)):
            raise ValueError(f"Instruction args must be a list: {data!r}")
        return cls(op=data.get("op", "EMPTY"), args=tuple(args))

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "args": list(self.args)}

# 存在しない行を読んだ場合に返される合成の無操作命令
EMPTY_INSTRUCTION = Instruction("EMPTY")

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（実行した行、表示用テキスト）を記録するデータクラス。
    """
    origin_pc: LineNumber
    symbol_info: Optional[str] = None # 例: "5: JUMP 3"

# @intent:responsibility 1ステップ実行直後の完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、レジスタ・PC・プログラム・履歴の完全な状態を記録した不変のデータ構造。
    """
    state: MachineState
    instruction: Instruction
    history: "History"
    metadata: Metadata = field(default_factory=lambda: Metadata(origin_pc=0))

    # @intent:rationale snapshot, pc, store, historyは常に一体として差し替えられるため、
    #                  部分的な更新が外部から観測されることはない。
