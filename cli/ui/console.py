"""
cli/ui/console.py - Rich 콘솔 유틸리티

stdout은 플러그인 출력 전용이므로 로그와 진단 메시지는 stderr 콘솔로 보냅니다.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# botocore 노이즈 로그 제한
NOISY_LOGGERS = (
    "botocore.httpchecksum",
    "botocore.credentials",
    "botocore.loaders",
    "botocore.session",
    "urllib3.connectionpool",
)


def get_console() -> Console:
    """stderr로 출력하는 Rich Console 인스턴스를 생성하고 반환합니다."""
    return Console(
        stderr=True,
        highlight=False,
        soft_wrap=True,
        markup=True,
    )


# 전역 콘솔 인스턴스
console = get_console()


def setup_logging(debug: bool = False) -> None:
    """루트 logger에 Rich 핸들러 설정

    Args:
        debug: True면 DEBUG, 아니면 WARNING 레벨
    """
    level = logging.DEBUG if debug else logging.WARNING

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=debug)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# 상태 심볼
SYMBOL_ERROR = "✗"


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")
