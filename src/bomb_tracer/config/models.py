from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from bomb_tracer.common.types import ARCH_SPARSE, RegisterValues

@dataclass
class LevelConfig:
    id: str
    name: str
    program: Union[List[Any], Dict[Any, Any]] = field(default_factory=list)
    initial_registers: RegisterValues = field(default_factory=dict)
    description: str = ""
    architecture: str = ARCH_SPARSE # "SPARSE", "FIXED"
    player_register: str = "A" # プレイヤーが初期値を設定するレジスタ
    order: int = 0 # レベル選択での表示順
