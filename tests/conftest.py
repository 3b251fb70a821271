# tests/conftest.py
"""
テスト共通のフィクスチャ。
"""
import os

import pytest

# ディスプレイのない環境でもQtウィジェットを生成できるようにする
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# PySide6のテストにはQApplicationのインスタンスが必要
@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app
