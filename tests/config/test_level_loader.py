# tests/config/test_level_loader.py
"""
bomb_tracer.configパッケージ（LevelLoader, SessionBuilder）の単体テスト。
"""
import pytest

from bomb_tracer.arch.fixed.interpreter import FixedInterpreter
from bomb_tracer.arch.sparse.interpreter import SparseInterpreter
from bomb_tracer.common.types import ARCH_FIXED, ARCH_SPARSE
from bomb_tracer.config.builder import SessionBuilder
from bomb_tracer.config.loader import LevelLoader
from bomb_tracer.config.models import LevelConfig
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.core.state import GameStatus
from bomb_tracer.debugger.session import create_session, reset_session, run_to_completion

LEVEL_YAML = """
id: custom
name: Custom
description: A tiny bomb.
program:
  1: CJUMP A = 2 10
  2: EXPLODE
  10: DEFUSE
initial_registers:
  A: 0
  T: 0
"""

@pytest.fixture
def loader():
    return LevelLoader()

# @intent:test_suite レベル定義の読み込みと検証。

class TestLevelLoader:
    def test_load_bundled_levels(self, loader):
        levels = loader.load_bundled_levels()
        assert [level.id for level in levels] == [
            "tutorial", "doubling", "copying", "more_copying", "doubling_fixed",
        ]
        assert levels[-1].architecture == ARCH_FIXED
        assert all(level.architecture in (ARCH_SPARSE, ARCH_FIXED) for level in levels)

    def test_bundled_program_shapes(self, loader):
        levels = {level.id: level for level in loader.load_bundled_levels()}
        copying = create_session(levels["copying"])
        assert copying.program.get(6) == Instruction("COPY", ("B",))
        assert copying.program.get(7) == Instruction("CJUMP", ("T", ">", "15", 4))
        doubling = create_session(levels["doubling"])
        assert doubling.program.get(1) == Instruction("CJUMP", ("A", "<", 10, 8))

    def test_load_from_string_with_mapping_program(self, loader):
        (level,) = loader.load_from_string(LEVEL_YAML)
        assert level.id == "custom"
        session = create_session(level)
        assert session.program.lines() == [1, 2, 10]
        session = run_to_completion(reset_session(session, 2))
        assert session.status == GameStatus.WON

    def test_load_from_file(self, loader, tmp_path):
        path = tmp_path / "levels.yaml"
        path.write_text(
            "levels:\n"
            "  - name: One\n"
            "    program: [DEFUSE]\n"
            "    initial_registers: {A: 1, T: 0}\n"
            "  - name: Two\n"
            "    architecture: fixed\n"
            "    program: [EXPLODE]\n"
            "    initialRegisters: {A: 2, T: 0}\n",
            encoding="utf-8",
        )
        levels = loader.load_from_file(str(path))
        assert [level.name for level in levels] == ["One", "Two"]
        assert levels[1].architecture == ARCH_FIXED
        assert levels[1].initial_registers == {"A": 2, "T": 0}

    def test_missing_time_register(self, loader):
        with pytest.raises(ValueError, match="must include 'T'"):
            loader.parse_level({"name": "x", "program": [], "initial_registers": {"A": 0}})

    def test_missing_player_register(self, loader):
        with pytest.raises(ValueError, match="Player register"):
            loader.parse_level({"name": "x", "program": [], "initial_registers": {"B": 0, "T": 0}})

    def test_unsupported_architecture(self, loader):
        with pytest.raises(ValueError, match="Unsupported architecture"):
            loader.parse_level({"name": "x", "architecture": "Z80", "initial_registers": {"A": 0, "T": 0}})

    def test_invalid_program(self, loader):
        with pytest.raises(ValueError):
            loader.parse_level({"name": "x", "program": "DEFUSE", "initial_registers": {"A": 0, "T": 0}})

    def test_invalid_register_value(self, loader):
        with pytest.raises(ValueError, match="Invalid integer"):
            loader.parse_level({"name": "x", "initial_registers": {"A": [1], "T": 0}})

    def test_hex_register_value(self, loader):
        level = loader.parse_level({"name": "x", "initial_registers": {"A": "0x10", "T": "0"}})
        assert level.initial_registers == {"A": 16, "T": 0}

    def test_unknown_keys_warn(self, loader):
        with pytest.warns(UserWarning, match="colour"):
            loader.parse_level({"name": "x", "colour": "red", "initial_registers": {"A": 0, "T": 0}})

    def test_top_level_must_be_mapping(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("- DEFUSE\n")

    # @intent:test_case_program_validation 命令として解釈できない要素は読み込み時点でValueErrorとなることを検証します。
    @pytest.mark.parametrize("program", [
        [{"op": "DEFUSE"}, 7],
        [None],
        [{"op": "JUMP", "args": "12"}],
        [{"op": "JUMP", "args": 12}],
        {"one": "DEFUSE"},
    ])
    def test_invalid_instruction_entries(self, loader, program):
        with pytest.raises(ValueError, match="Invalid program"):
            loader.parse_level({"name": "x", "program": program, "initial_registers": {"A": 0, "T": 0}})

    def test_invalid_entry_in_yaml_is_rejected_at_load(self, loader):
        text = (
            "name: Broken\n"
            "program:\n"
            "  - {op: DEFUSE, args: null}\n"
            "  - 7\n"
            "initial_registers: {A: 0, T: 0}\n"
        )
        with pytest.raises(ValueError, match="Broken"):
            loader.load_from_string(text)

    def test_null_args_mean_no_operands(self, loader):
        level = loader.parse_level({
            "name": "x",
            "program": [{"op": "DEFUSE", "args": None}],
            "initial_registers": {"A": 0, "T": 0},
        })
        session = run_to_completion(create_session(level))
        assert session.program.get(1) == Instruction("DEFUSE")
        assert session.status == GameStatus.WON

    def test_text_block_program(self, loader):
        (level,) = loader.load_from_string(
            "name: Text\n"
            "program: |\n"
            "  1: CJUMP A = 2 10 ; 分岐\n"
            "  2: EXPLODE\n"
            "\n"
            "  10: DEFUSE\n"
            "initial_registers: {A: 2, T: 0}\n"
        )
        session = create_session(level)
        assert session.program.lines() == [1, 2, 10]
        assert session.program.get(1) == Instruction("CJUMP", ("A", "=", 2, 10))
        assert run_to_completion(session).status == GameStatus.WON

    def test_text_block_requires_line_numbers(self, loader):
        with pytest.raises(ValueError, match="Missing line number"):
            loader.parse_level({"name": "x", "program": "DEFUSE\n", "initial_registers": {"A": 0, "T": 0}})

    def test_text_block_not_allowed_for_fixed(self, loader):
        with pytest.raises(ValueError, match="FIXED"):
            loader.parse_level({
                "name": "x", "architecture": "FIXED",
                "program": "0: DEFUSE\n", "initial_registers": {"A": 0, "T": 0},
            })

class TestSessionBuilder:
    def test_build_interpreter(self):
        builder = SessionBuilder()
        assert isinstance(builder.build_interpreter(ARCH_SPARSE), SparseInterpreter)
        assert isinstance(builder.build_interpreter(ARCH_FIXED), FixedInterpreter)
        with pytest.raises(ValueError):
            builder.build_interpreter("MC6800")

    def test_build_initial_state(self):
        level = LevelConfig(id="x", name="x", program=["DEFUSE"], initial_registers={"A": 1, "T": 0})
        builder = SessionBuilder()
        state = builder.build_initial_state(level, builder.build_interpreter(ARCH_SPARSE), "9")
        assert state.registers == {"A": 9, "T": 0}
        assert state.pc == 1
        assert state.outcome is None
        # レベル定義自体は変更されない
        assert level.initial_registers == {"A": 1, "T": 0}
