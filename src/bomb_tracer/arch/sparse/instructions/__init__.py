"""
疎な行番号形式の命令セット実装パッケージ。
"""
