# bomb_tracer/debugger/session.py
"""
セッション制御モジュール。

1つのレベルのプレイ状態（レジスタ、PC、プログラム、履歴、進行状態）を
不変のSessionとして保持し、リセット・1ステップ実行・最後までの実行を
新しいSessionを返す純粋関数として提供します。
プレゼンテーション層はこのモジュールだけを介してコアを操作します。
"""
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Union

from bomb_tracer.common.types import ARCH_SPARSE, LineNumber
from bomb_tracer.config.builder import SessionBuilder
from bomb_tracer.config.loader import LevelLoader
from bomb_tracer.config.models import LevelConfig
from bomb_tracer.core.interpreter import AbstractInterpreter
from bomb_tracer.core.snapshot import Instruction, Snapshot
from bomb_tracer.core.state import GameStatus, MachineState, RegisterSnapshot
from bomb_tracer.core.viewport import ViewportEntry, build_viewport
from bomb_tracer.debugger.history import History
from bomb_tracer.memory.program_store import ProgramStore

# 最後まで実行する際のステップ数の上限（無限ループ対策）
DEFAULT_MAX_STEPS = 10_000

# @intent:responsibility 1つのレベルのプレイ状態を不変に保持します。
@dataclass(frozen=True)
class Session:
    """
    呼び出し側が所有するセッション値。
    ステップ実行やリセットは常に新しいSessionを返し、既存のSessionは変更されません。
    """
    level: LevelConfig
    interpreter: AbstractInterpreter
    state: MachineState
    history: History
    status: GameStatus = GameStatus.WAITING
    last_snapshot: Optional[Snapshot] = None

    @property
    def registers(self) -> RegisterSnapshot:
        return self.state.registers

    @property
    def pc(self) -> LineNumber:
        return self.state.pc

    @property
    def program(self) -> ProgramStore:
        return self.state.program

    @property
    def architecture(self) -> str:
        return self.interpreter.architecture

    @property
    def player_register(self) -> str:
        return self.level.player_register

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

def _as_level(level: Union[LevelConfig, Mapping[str, Any]]) -> LevelConfig:
    if isinstance(level, LevelConfig):
        return level
    return LevelLoader().parse_level(level)

def _fresh_session(level: LevelConfig, player_value: Optional[Any]) -> Session:
    builder = SessionBuilder()
    interpreter = builder.build_interpreter(level.architecture)
    state = builder.build_initial_state(level, interpreter, player_value)
    return Session(
        level=level,
        interpreter=interpreter,
        state=state,
        history=History.start(state.registers),
    )

# @intent:responsibility レベル定義から新しいセッションを生成します。
def create_session(level: Union[LevelConfig, Mapping[str, Any]]) -> Session:
    """
    `level`はLevelConfig、または `program`・`initialRegisters` 等を持つプレーンな辞書です。
    """
    return _fresh_session(_as_level(level), None)

# @intent:responsibility プレイヤーレジスタを上書きして、セッションを初期状態に戻します。
# @intent:post-condition プログラム・レジスタ・履歴は新しく生成され、以前のセッションと共有されません。
def reset_session(session: Session, new_value: Any = None) -> Session:
    return _fresh_session(session.level, new_value)

# @intent:responsibility 明示的な実行要求。waitingの場合のみrunningへ遷移します。
def start(session: Session) -> Session:
    if session.status == GameStatus.WAITING:
        return replace(session, status=GameStatus.RUNNING)
    return session

# @intent:responsibility 1命令を実行した新しいセッションを返します。
# @intent:rationale 終端状態では何もせず、同じセッションを返します。
def step(session: Session) -> Session:
    if session.is_terminal:
        return session

    snapshot = session.interpreter.step(session.state, session.history)
    status = snapshot.state.outcome or GameStatus.RUNNING
    return replace(
        session,
        state=snapshot.state,
        history=snapshot.history,
        status=status,
        last_snapshot=snapshot,
    )

# @intent:responsibility 終端状態に達するか、ステップ数の上限に達するまで実行します。
def run_to_completion(session: Session, max_steps: int = DEFAULT_MAX_STEPS) -> Session:
    session = start(session)
    for _ in range(max_steps):
        if session.is_terminal:
            break
        session = step(session)
    return session

def get_viewport(session: Session) -> List[ViewportEntry]:
    return build_viewport(session.program, session.pc)

# @intent:responsibility 命令の説明文を返します。状態には影響しません。
def get_tooltip(instruction: Instruction, architecture: str = ARCH_SPARSE) -> str:
    return SessionBuilder().build_interpreter(architecture).get_tooltip(instruction)

def format_instruction(instruction: Instruction, architecture: str = ARCH_SPARSE) -> str:
    return SessionBuilder().build_interpreter(architecture).format_instruction(instruction)
