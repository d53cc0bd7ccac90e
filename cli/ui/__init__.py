# cli/ui - 콘솔 출력 (rich)
"""
콘솔/로깅 유틸리티
"""

from .console import SYMBOL_ERROR, console, get_console, print_error, setup_logging

__all__ = [
    "SYMBOL_ERROR",
    "console",
    "get_console",
    "print_error",
    "setup_logging",
]
