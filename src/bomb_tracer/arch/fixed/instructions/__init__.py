"""
固定長形式の命令セット実装パッケージ。
"""
