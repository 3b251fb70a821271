# bomb_tracer/debugger/history.py
"""
実行履歴モジュール。

時間レジスタ`T`の値をキーとして、レジスタのスナップショットを記録します。
TTRAVEL命令はこの履歴からスナップショットを取り出して巻き戻しを行います。
"""
from typing import Dict, Iterator, List, Mapping, Optional

from bomb_tracer.core.state import RegisterSnapshot

# @intent:responsibility 時刻からレジスタスナップショットへの不変な対応表を保持します。
class History(Mapping[int, RegisterSnapshot]):
    """
    時刻（`T`の値）をキーとする追記型の履歴。
    同じ時刻への書き込みは上書きとなり、常に最後に観測されたスナップショットを保持します。
    """
    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[int, RegisterSnapshot] = None):
        self._entries: Dict[int, RegisterSnapshot] = dict(entries or {})

    # @intent:responsibility 初期スナップショットを時刻0に持つ履歴を生成します。
    @classmethod
    def start(cls, initial: RegisterSnapshot) -> "History":
        return cls({0: initial})

    # @intent:responsibility 挿入または上書きを行った新しい履歴を返します。
    # @intent:post-condition 元の履歴は変更されません。
    def record(self, time_key: int, snapshot: RegisterSnapshot) -> "History":
        entries = dict(self._entries)
        entries[time_key] = snapshot
        return History(entries)

    def lookup(self, time_key: int) -> Optional[RegisterSnapshot]:
        return self._entries.get(time_key)

    def times(self) -> List[int]:
        return sorted(self._entries)

    def __getitem__(self, time_key: int) -> RegisterSnapshot:
        return self._entries[time_key]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"History(times={self.times()!r})"
