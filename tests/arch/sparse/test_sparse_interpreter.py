# tests/arch/sparse/test_sparse_interpreter.py
"""
bomb_tracer.arch.sparse.interpreterの単体テスト。
疎な行番号形式の各命令（ADD, JUMP, CJUMP, COPY, TTRAVEL, DEFUSE, EXPLODE）の実行を検証します。
"""
import pytest

from bomb_tracer.arch.sparse.interpreter import SparseInterpreter
from bomb_tracer.core.snapshot import Instruction, Snapshot, EMPTY_INSTRUCTION
from bomb_tracer.core.state import GameStatus, MachineState, RegisterSnapshot
from bomb_tracer.debugger.history import History
from bomb_tracer.memory.program_store import SparseProgramStore

ADD_ABC = Instruction("ADD", ("A", "B", "C"))

# @intent:test_suite 疎な行番号形式のインタプリタの検証。

class TestSparseInterpreter:
    @pytest.fixture
    def interpreter(self):
        return SparseInterpreter()

    def make_state(self, program, registers=None, pc=1):
        regs = RegisterSnapshot(registers if registers is not None else {"A": 0, "B": 0, "T": 0})
        return MachineState(registers=regs, pc=pc, program=SparseProgramStore(program))

    def run(self, interpreter, state, history=None) -> Snapshot:
        return interpreter.step(state, history or History.start(state.registers))

    # @intent:test_case_time 命令の種類によらず、Tが1ずつ増えて履歴に記録されることを検証します。
    @pytest.mark.parametrize("instruction", [
        EMPTY_INSTRUCTION,
        ADD_ABC,
        Instruction("JUMP", (5,)),
        Instruction("CJUMP", ("A", "=", 0, 9)),
        Instruction("COPY", (1,)),
        Instruction("TTRAVEL"),
        Instruction("DEFUSE"),
        Instruction("EXPLODE"),
        Instruction("FOO", (1, 2)),
    ])
    def test_time_always_advances(self, interpreter, instruction):
        state = self.make_state({1: instruction}, {"A": 0, "B": 0, "T": 6})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers.t == 7
        assert snapshot.history.lookup(7) == snapshot.state.registers

    def test_missing_line_is_noop(self, interpreter):
        state = self.make_state({1: ADD_ABC}, pc=42)
        snapshot = self.run(interpreter, state)
        assert snapshot.instruction is EMPTY_INSTRUCTION
        assert snapshot.state.pc == 43
        assert snapshot.state.outcome is None
        assert snapshot.state.registers == {"A": 0, "B": 0, "T": 1}

    def test_unknown_opcode_is_noop(self, interpreter):
        state = self.make_state({1: Instruction("FOO", ("A",))})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.pc == 2
        assert snapshot.state.registers == {"A": 0, "B": 0, "T": 1}

    def test_add(self, interpreter):
        state = self.make_state({1: Instruction("ADD", ("A", 5, "B"))}, {"A": 3, "T": 0})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers["B"] == 8
        assert snapshot.state.pc == 2

    # @intent:test_case_add_time オペランドの解決にはT加算後の値が使われることを検証します。
    def test_add_uses_incremented_time(self, interpreter):
        state = self.make_state({1: Instruction("ADD", ("T", 0, "C"))}, {"T": 4})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers["C"] == 5

    def test_add_with_malformed_operands(self, interpreter):
        state = self.make_state({1: Instruction("ADD", ("12abc", "xyz", "A"))})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers["A"] == 12

    def test_add_can_overwrite_time(self, interpreter):
        state = self.make_state({1: Instruction("ADD", (0, 0, "T"))}, {"T": 9})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers.t == 0
        assert snapshot.history.lookup(0)["T"] == 0

    def test_jump_resolves_register(self, interpreter):
        state = self.make_state({1: Instruction("JUMP", ("A",))}, {"A": 7, "T": 0})
        assert self.run(interpreter, state).state.pc == 7

    def test_jump_out_of_bounds_is_allowed(self, interpreter):
        state = self.make_state({1: Instruction("JUMP", (-100,))})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.pc == -100
        assert self.run(interpreter, snapshot.state, snapshot.history).state.pc == -99

    @pytest.mark.parametrize("left, op, right, taken", [
        (1, "<", 2, True),
        (2, "<", 2, False),
        (3, ">", 2, True),
        (1, ">", 2, False),
        (2, "=", 2, True),
        (1, "=", 2, False),
        (1, "≠", 2, True),
        (2, "≠", 2, False),
        (1, "!=", 2, False), # 未知の演算子は常に不成立
    ])
    def test_cjump(self, interpreter, left, op, right, taken):
        state = self.make_state({1: Instruction("CJUMP", ("A", op, right, 9))}, {"A": left, "T": 0})
        expected = 9 if taken else 2
        assert self.run(interpreter, state).state.pc == expected

    def test_cjump_target_resolves_register(self, interpreter):
        state = self.make_state({1: Instruction("CJUMP", ("T", ">", "0", "B"))}, {"B": 12, "T": 0})
        assert self.run(interpreter, state).state.pc == 12

    # @intent:test_case_copy_two_operands 2オペランドCOPYで、挿入位置が実行行以下ならPCが補正されることを検証します。
    def test_copy_two_operands_below_pc(self, interpreter):
        copy = Instruction("COPY", (1, 3))
        state = self.make_state({1: ADD_ABC, 5: copy}, pc=5)
        snapshot = self.run(interpreter, state)

        program = snapshot.state.program
        assert program.lines() == [1, 3, 6]
        assert program.get(1) == ADD_ABC
        assert program.get(3) == ADD_ABC
        assert program.get(2) is EMPTY_INSTRUCTION
        assert program.get(6) == copy
        # 5+1 に、自分自身がずれた分の +1
        assert snapshot.state.pc == 7

    def test_copy_two_operands_at_pc(self, interpreter):
        copy = Instruction("COPY", (1, 2))
        state = self.make_state({1: ADD_ABC, 2: copy}, pc=2)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.program.items() == [(1, ADD_ABC), (2, ADD_ABC), (3, copy)]
        assert snapshot.state.pc == 4

    def test_copy_two_operands_above_pc(self, interpreter):
        copy = Instruction("COPY", (1, 10))
        state = self.make_state({1: ADD_ABC, 2: copy}, pc=2)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.program.lines() == [1, 2, 10]
        assert snapshot.state.pc == 3

    def test_copy_operands_resolve_registers(self, interpreter):
        copy = Instruction("COPY", ("A", "B"))
        state = self.make_state({1: ADD_ABC, 2: copy}, {"A": 1, "B": 20, "T": 0}, pc=2)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.program.get(20) == ADD_ABC

    def test_copy_missing_source_inserts_empty(self, interpreter):
        copy = Instruction("COPY", (9, 1))
        state = self.make_state({1: copy}, pc=1)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.program.items() == [(1, EMPTY_INSTRUCTION), (2, copy)]
        assert snapshot.state.pc == 3

    # @intent:test_case_copy_one_operand 1オペランドCOPYは現在行の直後に挿入し、PCを補正しないことを検証します。
    def test_copy_one_operand(self, interpreter):
        copy = Instruction("COPY", (1,))
        defuse = Instruction("DEFUSE")
        state = self.make_state({1: ADD_ABC, 2: copy, 3: defuse}, pc=2)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.program.items() == [(1, ADD_ABC), (2, copy), (3, ADD_ABC), (4, defuse)]
        assert snapshot.state.pc == 3

    def test_copy_does_not_modify_input_program(self, interpreter):
        state = self.make_state({1: ADD_ABC, 2: Instruction("COPY", (1, 1))}, pc=2)
        self.run(interpreter, state)
        assert state.program.lines() == [1, 2]

    def test_ttravel_without_record_is_noop(self, interpreter):
        state = self.make_state({1: Instruction("TTRAVEL")}, {"A": 3, "T": 0})
        snapshot = self.run(interpreter, state)
        assert snapshot.state.registers == {"A": 3, "T": 1}
        assert snapshot.state.pc == 2

    def test_ttravel_restores_recorded_snapshot(self, interpreter):
        recorded = RegisterSnapshot({"A": 42, "T": 5})
        history = History.start(RegisterSnapshot({"A": 0, "T": 0})).record(5, recorded)
        state = self.make_state({1: Instruction("TTRAVEL")}, {"A": 0, "T": 4})
        snapshot = self.run(interpreter, state, history)
        assert snapshot.state.registers == recorded
        assert snapshot.state.pc == 2

    # @intent:test_case_ttravel_rewind Tを巻き戻したプログラムが、記録済みのレジスタに戻ることを検証します。
    def test_ttravel_rewind_program(self, interpreter):
        state = self.make_state({
            1: Instruction("ADD", ("A", 1, "A")),
            2: Instruction("ADD", ("A", 10, "A")),
            3: Instruction("ADD", (0, 0, "T")),
            4: Instruction("TTRAVEL"),
        }, {"A": 0, "T": 0})
        history = History.start(state.registers)
        for _ in range(4):
            snapshot = interpreter.step(state, history)
            state, history = snapshot.state, snapshot.history

        assert state.registers == {"A": 1, "T": 1}
        assert state.pc == 5

    # @intent:test_case_history_overwrite 同じTが2度現れた場合、後のスナップショットが残ることを検証します。
    def test_history_keeps_latest_snapshot_per_time(self, interpreter):
        state = self.make_state({
            1: Instruction("ADD", ("A", 1, "A")),
            2: Instruction("ADD", (0, 0, "T")),
            3: Instruction("JUMP", (1,)),
        }, {"A": 0, "T": 0})
        history = History.start(state.registers)
        for _ in range(6):
            snapshot = interpreter.step(state, history)
            state, history = snapshot.state, snapshot.history

        assert history.lookup(1) == {"A": 2, "T": 1}
        assert history.lookup(0) == {"A": 2, "T": 0}

    @pytest.mark.parametrize("op, outcome", [
        ("DEFUSE", GameStatus.WON),
        ("EXPLODE", GameStatus.LOST),
    ])
    def test_terminal_instructions_hold_pc(self, interpreter, op, outcome):
        state = self.make_state({3: Instruction(op)}, pc=3)
        snapshot = self.run(interpreter, state)
        assert snapshot.state.outcome == outcome
        assert snapshot.state.pc == 3

    def test_snapshot_metadata(self, interpreter):
        state = self.make_state({1: Instruction("JUMP", (4,))})
        snapshot = self.run(interpreter, state)
        assert snapshot.metadata.origin_pc == 1
        assert snapshot.metadata.symbol_info == "1: JUMP 4"
