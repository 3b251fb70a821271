# bomb_tracer/memory/program_store.py
"""
Memory Layer (プログラムストア)

このモジュールは、行番号から命令への対応表（プログラムストア）を抽象化します。
疎な行番号を持ち自己書き換え可能な形式と、0始まりの固定長配列形式の
2つの実装を提供し、命令セットの種別に応じてセッション生成時に選択されます。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from bomb_tracer.common.types import ARCH_FIXED, ARCH_SPARSE, LineNumber
from bomb_tracer.core.snapshot import Instruction, EMPTY_INSTRUCTION
from bomb_tracer.loader.assembler import InstructionAssembler

# @intent:data_structure レベル定義に記述される命令。Instruction、辞書、アセンブリ文字列のいずれか。
InstructionSource = Union[Instruction, Dict[str, Any], str]

# @intent:responsibility プログラムストアの共通インターフェースを定義します。
class ProgramStore(ABC):
    """
    行番号から命令への不変な対応表。
    存在しない行は無操作（EMPTY）として扱われ、エラーにはなりません。
    """
    # @intent:responsibility 指定行の命令を返します。存在しない行はEMPTY命令を返します。
    def get(self, line: LineNumber) -> Instruction:
        if self.contains(line):
            return self._read(line)
        return EMPTY_INSTRUCTION

    @abstractmethod
    def _read(self, line: LineNumber) -> Instruction:
        pass

    @abstractmethod
    def contains(self, line: LineNumber) -> bool:
        pass

    # @intent:responsibility 格納されている行番号を昇順で返します。
    @abstractmethod
    def lines(self) -> List[LineNumber]:
        pass

    # @intent:responsibility 指定行に命令を挿入した新しいストアを返します。
    # @intent:rationale 自己書き換えをサポートしない実装では、自分自身をそのまま返します。
    @abstractmethod
    def insert_at(self, target: LineNumber, instruction: Instruction) -> "ProgramStore":
        pass

    def items(self) -> List[Tuple[LineNumber, Instruction]]:
        return [(line, self._read(line)) for line in self.lines()]

    def __len__(self) -> int:
        return len(self.lines())

    def __iter__(self) -> Iterator[LineNumber]:
        return iter(self.lines())

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.contains(line)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProgramStore):
            return NotImplemented
        return type(self) is type(other) and self.items() == other.items()

    def __repr__(self) -> str:
        body = ", ".join(f"{line}: {instr.op} {list(instr.args)}" for line, instr in self.items())
        return f"{type(self).__name__}({{{body}}})"

# @intent:responsibility 疎な行番号で命令を保持する、自己書き換え可能なストア。
class SparseProgramStore(ProgramStore):
    """
    行番号（連続しなくてよい）から命令への対応表。
    """
    def __init__(self, entries: Mapping[LineNumber, Instruction] = None):
        self._entries: Dict[LineNumber, Instruction] = dict(entries or {})

    def _read(self, line: LineNumber) -> Instruction:
        return self._entries[line]

    def contains(self, line: LineNumber) -> bool:
        return line in self._entries

    def lines(self) -> List[LineNumber]:
        return sorted(self._entries)

    # @intent:responsibility `target`以上の行を1つずつ上にずらし、`target`に命令を設定します。
    # @intent:post-condition 元のストアは変更されず、行数はちょうど1つ増えます。
    # @intent:rationale 他の命令に埋め込まれたジャンプ先は更新しない。
    #                  ずれによって絶対ジャンプ先が無効になり得るのは既知の性質である。
    def insert_at(self, target: LineNumber, instruction: Instruction) -> "SparseProgramStore":
        shifted: Dict[LineNumber, Instruction] = {}
        for line, instr in self._entries.items():
            if line >= target:
                shifted[line + 1] = instr
            else:
                shifted[line] = instr
        shifted[target] = instruction
        return SparseProgramStore(shifted)

# @intent:responsibility 0始まりの固定長配列として命令を保持するストア。
class FixedProgramStore(ProgramStore):
    """
    固定長のプログラム。自己書き換えはサポートしません。
    """
    def __init__(self, instructions: Sequence[Instruction] = ()):
        self._instructions: Tuple[Instruction, ...] = tuple(instructions)

    def _read(self, line: LineNumber) -> Instruction:
        return self._instructions[line]

    def contains(self, line: LineNumber) -> bool:
        return 0 <= line < len(self._instructions)

    def lines(self) -> List[LineNumber]:
        return list(range(len(self._instructions)))

    def insert_at(self, target: LineNumber, instruction: Instruction) -> "FixedProgramStore":
        return self

# @intent:responsibility レベル定義の命令記述をInstructionに変換します。
def to_instruction(source: InstructionSource) -> Instruction:
    if isinstance(source, Instruction):
        return source
    if isinstance(source, dict):
        return Instruction.from_dict(source)
    if isinstance(source, str):
        return InstructionAssembler().parse_line(source) or EMPTY_INSTRUCTION
    raise ValueError(f"Invalid instruction definition: {source!r}")

# @intent:responsibility 命令列または行番号付きの対応表から新しいプログラムストアを生成します。
# @intent:pre-condition 対応表のキーは整数化した後も一意である必要があります。
def load_program(initial: Union[Sequence[InstructionSource], Mapping[Any, InstructionSource]],
                 architecture: str = ARCH_SPARSE) -> ProgramStore:
    """
    命令列は、疎な形式では1から、固定長形式では0から連続した行番号に割り当てられます。
    対応表のキーは整数に変換されます（疎な形式のみ）。
    """
    if architecture == ARCH_FIXED:
        if isinstance(initial, Mapping):
            raise ValueError("FIXED programs must be defined as an ordered list of instructions")
        return FixedProgramStore([to_instruction(item) for item in initial])

    if architecture != ARCH_SPARSE:
        raise ValueError(f"Unsupported architecture: {architecture}")

    if isinstance(initial, Mapping):
        entries = {int(line): to_instruction(item) for line, item in initial.items()}
    else:
        entries = {index: to_instruction(item) for index, item in enumerate(_as_list(initial), 1)}
    return SparseProgramStore(entries)

def _as_list(items: Iterable[InstructionSource]) -> List[InstructionSource]:
    if isinstance(items, (str, bytes)):
        raise ValueError("Program must be a list or a mapping of instructions, not a string")
    return list(items)
