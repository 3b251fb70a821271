"""
UIフォント管理モジュール。

クロスプラットフォーム（Windows/Mac/Linux）で最適な等幅フォントを選択する機能を提供します。
"""
from PySide6.QtGui import QFont, QFontDatabase

PREFERRED_FONTS = ["Consolas", "Menlo", "Monaco", "Courier New"]

# @intent:responsibility 現在のシステムで利用可能な最適な等幅フォントファミリー名を返します。
def get_monospace_font_family() -> str:
    """
    優先順位: Consolas -> Menlo -> Monaco -> Courier New -> システムの等幅フォント
    """
    available_families = QFontDatabase.families()
    for font in PREFERRED_FONTS:
        if font in available_families:
            return font
    return QFontDatabase.systemFont(QFontDatabase.FixedFont).family()

def get_monospace_font(size: int = 10, bold: bool = False) -> QFont:
    font = QFont(get_monospace_font_family(), size)
    font.setBold(bold)
    return font
