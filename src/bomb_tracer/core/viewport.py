# bomb_tracer/core/viewport.py
"""
ビューポート構築モジュール。

疎で、COPY命令によって大きくずれ得る行番号空間のうち、表示すべき行だけを選び出します。
描画コストはアドレス空間の広さではなく、格納されている行数に比例します。
"""
from dataclasses import dataclass
from typing import List, Optional, Set, Union

from bomb_tracer.common.types import GAP_MARKER, LineNumber
from bomb_tracer.core.snapshot import Instruction
from bomb_tracer.memory.program_store import ProgramStore

# @intent:responsibility ビューポートの1行（行番号と命令、またはギャップ）を表します。
@dataclass(frozen=True)
class ViewportEntry:
    line: Union[LineNumber, str] # 行番号、またはGAP_MARKER
    instruction: Optional[Instruction] = None # ギャップの場合はNone

    @property
    def is_gap(self) -> bool:
        return self.line == GAP_MARKER

    def is_current(self, pc: LineNumber) -> bool:
        return not self.is_gap and self.line == pc

GAP_ENTRY = ViewportEntry(GAP_MARKER, None)

# @intent:responsibility 表示すべき行番号の集合を計算します。
# @intent:post-condition 格納された全ての行とその前後、およびPCとその前後を含みます。
def visible_lines(program: ProgramStore, pc: LineNumber) -> List[LineNumber]:
    keys: Set[LineNumber] = set()
    for line in program.lines():
        keys.update((line - 1, line, line + 1))
    keys.update((pc - 1, pc, pc + 1))
    return sorted(keys)

# @intent:responsibility ギャップマーカーを挟んだ表示用の行の並びを構築します。
def build_viewport(program: ProgramStore, pc: LineNumber) -> List[ViewportEntry]:
    """
    連続しない行の間には、ちょうど1つのギャップマーカーを挿入します。
    格納されていない行にはEMPTY命令が割り当てられます。
    """
    entries: List[ViewportEntry] = []
    previous: Optional[LineNumber] = None
    for line in visible_lines(program, pc):
        if previous is not None and line - previous > 1:
            entries.append(GAP_ENTRY)
        entries.append(ViewportEntry(line, program.get(line)))
        previous = line
    return entries
