# src/bomb_tracer/arch/sparse/__init__.py
"""
Sparse (self-modifying) Instruction Set Package
"""
from .interpreter import SparseInterpreter
