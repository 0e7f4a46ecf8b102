"""
CHIP-8 Tracer

CHIP-8仮想マシンのコアエンジンと、そのホスト（PySide6フロントエンド）を提供するパッケージ。
"""
from .core.machine import Machine
from .core.quirks import Quirks

__all__ = ["Machine", "Quirks"]
