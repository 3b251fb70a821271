# src/bomb_tracer/ui/register_view.py
"""
レジスタを表示する汎用ウィジェット。
インタプリタのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Mapping

from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt

from bomb_tracer.debugger.session import Session
from bomb_tracer.ui.fonts import get_monospace_font_family

# @intent:responsibility レジスタ値を表示する汎用UIウィジェットを提供します。
class RegisterView(QWidget):
    """
    セッションのレジスタ状態を表示するウィジェット。
    値が変化したレジスタは強調表示されます。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._previous_values: Dict[str, int] = {}

    # @intent:responsibility 表示対象のセッションを設定し、必要ならUIレイアウトを再構築します。
    # @intent:rationale ADDの書き込み先として新設されたレジスタも表示するため、
    #                  レジスタ名の集合が変わった場合のみ再構築する。
    def set_session(self, session: Session) -> None:
        if set(session.registers) != set(self._register_labels):
            self._setup_ui(session)
        self.update_registers(session.registers)

    # @intent:responsibility 変化の強調表示をリセットします（レベル切替・リセット時）。
    def clear_changes(self) -> None:
        self._previous_values.clear()

    def _setup_ui(self, session: Session) -> None:
        # 既存のウィジェットをクリア
        while self.layout.count():
            item = self.layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()

        for group in session.interpreter.get_register_layout(session.state, session.player_register):
            group_box = QGroupBox(group.group_name)
            group_box.setStyleSheet("""
                QGroupBox {
                    font-weight: bold;
                    border: 1px solid #222;
                    border-radius: 4px;
                    margin-top: 20px;
                    color: #EEE;
                }
                QGroupBox::title {
                    subcontrol-origin: margin;
                    left: 10px;
                    color: #00AAAA;
                }
            """)
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)

            for reg in group.registers:
                suffix = " (input)" if reg.player_settable else ""
                label_name = QLabel(f"{reg.name}{suffix}:")
                label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")

                label_value = QLabel("0")
                label_value.setAlignment(Qt.AlignRight)
                group_layout.addRow(label_name, label_value)
                self._register_labels[reg.name] = label_value

            self.layout.addWidget(group_box)
        self.layout.addStretch()

    # @intent:responsibility レジスタ値を更新します。
    def update_registers(self, registers: Mapping[str, int]) -> None:
        for name, label in self._register_labels.items():
            value = registers.get(name, 0)
            changed = name in self._previous_values and self._previous_values[name] != value
            color = "#FF5555" if changed else "#FFD700" # Red if changed, else Gold
            label.setText(str(value))
            label.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: {color};")
            self._previous_values[name] = value

    def get_displayed_value(self, name: str) -> str:
        return self._register_labels[name].text()
