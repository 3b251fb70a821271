# src/bomb_tracer/ui/main_window.py
"""
メインウィンドウの実装。
レベル選択、レジスタ表示、プログラム表示、操作ボタンを保持し、レイアウトを管理します。
"""
from typing import List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QListWidget,
    QPushButton, QSpinBox, QGroupBox,
)
from PySide6.QtCore import Qt, QTimer

from bomb_tracer.config.loader import LevelLoader
from bomb_tracer.config.models import LevelConfig
from bomb_tracer.core.state import GameStatus
from bomb_tracer.debugger import session as session_ops
from bomb_tracer.debugger.runner import DEFAULT_INTERVAL
from bomb_tracer.debugger.session import Session
from .register_view import RegisterView
from .program_view import ProgramView
from .fonts import get_monospace_font

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    セッションはウィンドウが所有し、操作のたびに新しいSessionへ差し替えます。
    """
    def __init__(self, levels: Optional[List[LevelConfig]] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Bomb Tracer")
        self.setGeometry(100, 100, 1000, 640)

        self.levels = levels if levels is not None else LevelLoader().load_bundled_levels()
        self.session: Optional[Session] = None

        # 自動実行用タイマー（一定周期でstepを呼ぶ外部スケジューラ）
        self.run_timer = QTimer(self)
        self.run_timer.setInterval(int(DEFAULT_INTERVAL * 1000))
        self.run_timer.timeout.connect(self._on_timer)

        self._create_widgets()
        if self.levels:
            self.level_list.setCurrentRow(0)

    def _create_widgets(self) -> None:
        central = QWidget()
        root_layout = QHBoxLayout(central)

        # レベル選択サイドバー
        self.level_list = QListWidget()
        self.level_list.setFixedWidth(200)
        for level in self.levels:
            self.level_list.addItem(level.name)
        self.level_list.currentRowChanged.connect(self._select_level)
        root_layout.addWidget(self.level_list)

        game_area = QVBoxLayout()
        self.name_label = QLabel()
        self.name_label.setFont(get_monospace_font(16, bold=True))
        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        game_area.addWidget(self.name_label)
        game_area.addWidget(self.description_label)

        views = QHBoxLayout()
        self.register_view = RegisterView()
        self.register_view.setFixedWidth(220)
        self.program_view = ProgramView()
        views.addWidget(self.register_view)
        views.addWidget(self.program_view, 1)
        game_area.addLayout(views, 1)

        controls = QGroupBox("Controls")
        controls_layout = QHBoxLayout(controls)
        self.player_label = QLabel()
        self.player_input = QSpinBox()
        self.player_input.setRange(-1_000_000, 1_000_000)
        self.player_input.valueChanged.connect(self._on_player_value_changed)
        self.reset_button = QPushButton("Reset Level")
        self.reset_button.clicked.connect(self.reset_level)
        self.run_button = QPushButton("Run")
        self.run_button.clicked.connect(self.run)
        self.step_button = QPushButton("Step")
        self.step_button.clicked.connect(self.manual_step)
        for widget in (self.player_label, self.player_input, self.reset_button, self.run_button, self.step_button):
            controls_layout.addWidget(widget)
        game_area.addWidget(controls)

        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setStyleSheet("font-size: 20px;")
        game_area.addWidget(self.status_label)

        root_layout.addLayout(game_area, 1)
        self.setCentralWidget(central)

    # @intent:responsibility 選択されたレベルでセッションを作り直します。
    def _select_level(self, row: int) -> None:
        if row < 0 or row >= len(self.levels):
            return
        level = self.levels[row]
        self.run_timer.stop()
        self.session = session_ops.create_session(level)

        self.name_label.setText(level.name)
        self.description_label.setText(level.description)
        self.player_label.setText(f"Register {level.player_register} initial value:")
        self.player_input.blockSignals(True)
        self.player_input.setValue(self.session.registers[level.player_register])
        self.player_input.blockSignals(False)
        self.register_view.clear_changes()
        self._refresh()

    def _on_player_value_changed(self, value: int) -> None:
        self.reset_level()

    # @intent:responsibility 入力値でレベルを初期状態に戻します。
    def reset_level(self) -> None:
        if self.session is None:
            return
        self.run_timer.stop()
        self.session = session_ops.reset_session(self.session, self.player_input.value())
        self.register_view.clear_changes()
        self._refresh()

    def run(self) -> None:
        if self.session is None or self.session.status != GameStatus.WAITING:
            return
        self.session = session_ops.start(self.session)
        self.run_timer.start()
        self._refresh()

    # @intent:responsibility 手動の1ステップ実行。自動実行中であれば停止します。
    def manual_step(self) -> None:
        if self.session is None:
            return
        self.run_timer.stop()
        self.session = session_ops.step(session_ops.start(self.session))
        self._refresh()

    def _on_timer(self) -> None:
        if self.session is None or self.session.is_terminal:
            self.run_timer.stop()
            return
        self.session = session_ops.step(self.session)
        if self.session.is_terminal:
            self.run_timer.stop()
        self._refresh()

    # @intent:responsibility セッションの状態を全てのビューとボタンに反映します。
    def _refresh(self) -> None:
        session = self.session
        self.register_view.set_session(session)
        self.program_view.update_program(session)

        self.run_button.setEnabled(session.status == GameStatus.WAITING and not self.run_timer.isActive())
        self.step_button.setEnabled(not session.is_terminal)

        if session.status == GameStatus.WON:
            self.status_label.setText("Bomb defused! You win!")
            self.status_label.setStyleSheet("font-size: 20px; color: green;")
        elif session.status == GameStatus.LOST:
            self.status_label.setText("Boom! The bomb exploded!")
            self.status_label.setStyleSheet("font-size: 20px; color: red;")
        else:
            self.status_label.setText("")
