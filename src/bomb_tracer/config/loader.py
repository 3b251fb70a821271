import warnings
from importlib import resources
from typing import Any, Dict, List, Mapping

import yaml

from bomb_tracer.common.types import SUPPORTED_ARCHITECTURES, ARCH_SPARSE, TIME_REGISTER
from bomb_tracer.loader.assembler import InstructionAssembler
from bomb_tracer.memory.program_store import load_program
from .models import LevelConfig

_KNOWN_KEYS = {
    "id", "name", "description", "architecture", "program",
    "initial_registers", "initialRegisters", "player_register", "order",
}

# @intent:responsibility レベル定義をYAMLまたは辞書から読み込み、LevelConfigへ変換します。
class LevelLoader:
    def load_from_file(self, path: str) -> List[LevelConfig]:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return self._parse_document(data, source=str(path))

    def load_from_string(self, text: str) -> List[LevelConfig]:
        return self._parse_document(yaml.safe_load(text), source="<string>")

    # @intent:responsibility パッケージに同梱されたレベル定義を表示順に読み込みます。
    def load_bundled_levels(self) -> List[LevelConfig]:
        levels: List[LevelConfig] = []
        level_dir = resources.files("bomb_tracer").joinpath("levels")
        for entry in sorted(level_dir.iterdir(), key=lambda p: p.name):
            if entry.name.endswith((".yaml", ".yml")):
                levels.extend(self._parse_document(yaml.safe_load(entry.read_text(encoding="utf-8")), source=entry.name))
        return sorted(levels, key=lambda level: level.order)

    def _parse_document(self, data: Any, source: str) -> List[LevelConfig]:
        if not isinstance(data, Mapping):
            raise ValueError(f"Invalid level file {source}: top level must be a mapping")
        if "levels" in data:
            return [self.parse_level(item) for item in data.get("levels") or []]
        return [self.parse_level(data)]

    # @intent:responsibility 1つのレベル定義（プレーンなデータ）を検証し、LevelConfigを返します。
    def parse_level(self, data: Mapping[str, Any]) -> LevelConfig:
        if not isinstance(data, Mapping):
            raise ValueError(f"Invalid level definition: {data!r}")

        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            warnings.warn(f"Ignoring unknown level keys: {', '.join(sorted(unknown))}")

        name = str(data.get("name", data.get("id", "Untitled")))
        level_id = str(data.get("id", name))

        architecture = str(data.get("architecture", ARCH_SPARSE)).upper()
        if architecture not in SUPPORTED_ARCHITECTURES:
            raise ValueError(f"Unsupported architecture for level '{level_id}': {architecture}")

        program = data.get("program", [])
        if isinstance(program, str):
            # "行番号: 命令" 形式のテキストブロック
            program = InstructionAssembler().assemble(program.splitlines())
        if not isinstance(program, (list, Mapping)):
            raise ValueError(f"Program of level '{level_id}' must be a list or a mapping")
        try:
            load_program(program, architecture)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid program in level '{level_id}': {e}") from e

        raw_registers = data.get("initial_registers", data.get("initialRegisters", {}))
        registers = {str(reg): self._parse_int(value) for reg, value in (raw_registers or {}).items()}
        if TIME_REGISTER not in registers:
            raise ValueError(f"Initial registers of level '{level_id}' must include '{TIME_REGISTER}'")

        player_register = str(data.get("player_register", "A"))
        if player_register not in registers:
            raise ValueError(f"Player register '{player_register}' is not defined in level '{level_id}'")

        return LevelConfig(
            id=level_id,
            name=name,
            program=program if isinstance(program, list) else dict(program),
            initial_registers=registers,
            description=str(data.get("description", "")),
            architecture=architecture,
            player_register=player_register,
            order=self._parse_int(data.get("order", 0)),
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
