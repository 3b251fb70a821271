# bomb_tracer/core/state.py
"""
Core Layer (マシン状態)

このモジュールは、レジスタのスナップショット、ゲームの進行状態、
および1ステップごとに丸ごと差し替えられるマシン状態を定義します。
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterator, Mapping, Optional, TYPE_CHECKING

from bomb_tracer.common.types import LineNumber, RegisterName, TIME_REGISTER

if TYPE_CHECKING:
    from bomb_tracer.memory.program_store import ProgramStore

# @intent:responsibility レジスタ名から整数値への不変な対応表を保持します。
class RegisterSnapshot(Mapping[RegisterName, int]):
    """
    ある瞬間の全レジスタの値。
    一度生成されたスナップショットは変更されず、ステップごとに新しいインスタンスが作られます。
    """
    __slots__ = ("_values",)

    # @intent:pre-condition `values`は予約レジスタ`T`を含む必要があります。
    def __init__(self, values: Mapping[RegisterName, int]):
        self._values = dict(values)
        if TIME_REGISTER not in self._values:
            self._values[TIME_REGISTER] = 0

    def __getitem__(self, name: RegisterName) -> int:
        return self._values[name]

    def __iter__(self) -> Iterator[RegisterName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RegisterSnapshot({self._values!r})"

    @property
    def t(self) -> int:
        return self._values[TIME_REGISTER]

    # @intent:responsibility 1つのレジスタを書き換えた新しいインスタンスを返す（不変性の維持）。
    # @intent:rationale 書き込み先はレベル定義に存在しないレジスタ名でもよく、その場合は新設される。
    def with_register(self, name: RegisterName, value: int) -> "RegisterSnapshot":
        values = dict(self._values)
        values[name] = value
        return RegisterSnapshot(values)

    def to_dict(self) -> dict:
        return dict(self._values)

# @intent:responsibility ゲームの進行状態を定義します。wonとlostは終端状態です。
class GameStatus(Enum):
    WAITING = "waiting"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)

# @intent:responsibility 1ステップで一体として差し替えられるマシン状態を保持します。
@dataclass(frozen=True)
class MachineState:
    """
    レジスタ、プログラムカウンタ、プログラム、およびそのステップで確定した終端結果。
    """
    registers: RegisterSnapshot
    pc: LineNumber
    program: "ProgramStore"
    outcome: Optional[GameStatus] = None # DEFUSE/EXPLODEを実行したステップのみ設定される

    # @intent:responsibility dataclasses.replaceのラッパー。
    def replace(self, **changes) -> "MachineState":
        return replace(self, **changes)
