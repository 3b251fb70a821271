"""
プログラムのビューポートを表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor
from PySide6.QtCore import Qt

from bomb_tracer.core.viewport import ViewportEntry
from bomb_tracer.debugger.session import Session, get_viewport
from bomb_tracer.ui.fonts import get_monospace_font

# @intent:responsibility ビューポートの行を表形式で表示し、現在のPCをハイライトするUIウィジェットを提供します。
class ProgramView(QWidget):
    """
    疎なプログラムのうち、表示すべき行だけを並べるウィジェット。
    各行にはその命令の説明文がツールチップとして設定されます。
    """
    HIGHLIGHT_COLOR = QColor("#2E5E2E") # Dark Green
    NORMAL_COLOR = QColor("#101010")    # Default Background

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Line", "Instruction"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(11))

        # 行ヘッダ（番号）を隠す
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionMode(QTableWidget.NoSelection)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB;")

        self.layout.addWidget(self.table)

        # 現在表示しているビューポート
        self.entries: List[ViewportEntry] = []
        self.current_row = -1

    # @intent:responsibility セッションのプログラムとPCから表示を再構築します。
    def update_program(self, session: Session) -> None:
        self.entries = get_viewport(session)
        self.current_row = -1
        self.table.setRowCount(len(self.entries))

        for row, entry in enumerate(self.entries):
            if entry.is_gap:
                line_item = QTableWidgetItem("")
                instr_item = QTableWidgetItem(str(entry.line))
                instr_item.setTextAlignment(Qt.AlignCenter)
            else:
                line_item = QTableWidgetItem(str(entry.line))
                instr_item = QTableWidgetItem(session.interpreter.format_instruction(entry.instruction))
                tooltip = session.interpreter.get_tooltip(entry.instruction)
                line_item.setToolTip(tooltip)
                instr_item.setToolTip(tooltip)
                if entry.is_current(session.pc):
                    self.current_row = row

            background = self.HIGHLIGHT_COLOR if row == self.current_row else self.NORMAL_COLOR
            line_item.setBackground(background)
            instr_item.setBackground(background)
            self.table.setItem(row, 0, line_item)
            self.table.setItem(row, 1, instr_item)

        if self.current_row != -1:
            self.table.scrollToItem(self.table.item(self.current_row, 0), QTableWidget.PositionAtCenter)
