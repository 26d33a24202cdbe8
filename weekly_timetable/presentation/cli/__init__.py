"""コマンドラインインターフェース"""
from .main import TimetableCLI, main

__all__ = ['TimetableCLI', 'main']
