"""Console formatting for the end-to-end scripts (ANSI color only on a tty)."""

from __future__ import annotations

import sys

_USE_COLOR = sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    if not _USE_COLOR:
        return text
    return f"\033[{code}m{text}\033[0m"


def dim(text: str) -> str:
    return _c("2", text)


def bold(text: str) -> str:
    return _c("1", text)


def section_header(title: str, width: int = 60) -> str:
    padding = max(0, width - len(title) - 4)
    left = padding // 2
    return bold(f"{'─' * left}[ {title} ]{'─' * (padding - left)}")


def format_pass(message: str) -> str:
    return f"  {_c('32', 'PASS')} {message}"


def format_info(message: str) -> str:
    return f"  {_c('36', 'info')} {message}"


def format_error(title: str, detail: str = "") -> str:
    line = f"  {_c('31', 'ERROR')} {title}"
    return f"{line}: {detail}" if detail else line


__all__ = ["bold", "dim", "format_error", "format_info", "format_pass", "section_header"]
