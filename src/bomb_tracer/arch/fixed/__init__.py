# src/bomb_tracer/arch/fixed/__init__.py
"""
Fixed-length Instruction Set Package
"""
from .interpreter import FixedInterpreter
