# bomb_tracer/debugger/runner.py
"""
自動実行モジュール。

一定の間隔でstepを呼び出し、終端状態に達するか停止要求があるまで実行を継続します。
コア自体は非同期の仕組みを持たず、実行の周期はこのスケジューラが決定します。
"""
import time
from typing import Callable, Optional

from bomb_tracer.core.state import GameStatus
from bomb_tracer.debugger import session as session_ops
from bomb_tracer.debugger.session import Session

# 自動実行の周期（秒）
DEFAULT_INTERVAL = 0.5

# @intent:responsibility セッションを一定周期でステップ実行します。
class AutoRunner:
    """
    外部スケジューラとしてstepを繰り返し呼び出すクラス。
    キャンセルは「stepを呼ぶのをやめる」ことで行われます。
    """
    def __init__(self, session: Session, interval: float = DEFAULT_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep,
                 on_step: Optional[Callable[[Session], None]] = None):
        self._session = session
        self._interval = interval
        self._sleep = sleep
        self._on_step = on_step
        self._running: bool = False

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._running

    # @intent:responsibility 終端状態・停止要求・ステップ上限のいずれかまで実行し、最終セッションを返します。
    def run(self, max_steps: Optional[int] = None) -> Session:
        self._running = True
        self._session = session_ops.start(self._session)
        steps = 0

        while self._running and not self._session.is_terminal:
            if max_steps is not None and steps >= max_steps:
                break
            self._sleep(self._interval)
            if not self._running:
                break

            self._session = session_ops.step(self._session)
            steps += 1
            if self._on_step:
                self._on_step(self._session)

        self._running = False
        if self._session.status == GameStatus.WON:
            print(f"Bomb defused at T={self._session.registers.t}.")
        elif self._session.status == GameStatus.LOST:
            print(f"Boom! The bomb exploded at line {self._session.pc} (T={self._session.registers.t}).")
        return self._session

    def stop(self) -> None:
        self._running = False
