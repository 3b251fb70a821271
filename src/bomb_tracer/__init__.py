"""
Bomb Tracer

レジスタに初期値を与え、小さなアセンブリ風プログラムが爆弾を解除するか
爆発させるかを観察するパズルの実行エンジン。
"""
__version__ = "0.1.0"
