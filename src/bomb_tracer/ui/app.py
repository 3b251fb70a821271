# src/bomb_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
引数にレベル定義のYAMLファイルが与えられればそれを、無ければ同梱のレベルを読み込みます。
"""
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from bomb_tracer.config.loader import LevelLoader
from bomb_tracer.config.models import LevelConfig
from .main_window import MainWindow

def load_levels(paths: List[str]) -> Optional[List[LevelConfig]]:
    if not paths:
        return None # MainWindow側で同梱レベルを読み込む
    loader = LevelLoader()
    levels: List[LevelConfig] = []
    for path in paths:
        levels.extend(loader.load_from_file(path))
    return levels

# @intent:responsibility レベルを読み込み、メインウィンドウを表示します。
def main():
    app = QApplication(sys.argv)
    try:
        levels = load_levels([arg for arg in app.arguments()[1:] if not arg.startswith("-")])
    except (OSError, ValueError) as e:
        print(f"Error: failed to load levels: {e}")
        sys.exit(1)
    main_win = MainWindow(levels)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
