"""Console output and log helpers"""

from __future__ import annotations

from typing import TextIO

from rich.console import Console

CONSOLE: Console = Console()

# The full-screen form owns the terminal, so log lines only go to a file.
_log_console: Console | None = None
_debug: bool = False


def configure_logging(stream: TextIO | None, debug: bool = False) -> None:
    """Send log lines to ``stream``; ``None`` drops them"""
    global _log_console, _debug
    _debug = debug
    if stream is None:
        _log_console = None
        return
    _log_console = Console(file=stream, force_terminal=False, width=120, log_path=False)


def _log(message: str) -> None:
    if _log_console is not None:
        _log_console.log(message)


def log_status(message: str) -> None:
    _log(f"[blue][INFO][/blue] {message}")


def log_warning(message: str) -> None:
    _log(f"[yellow][WARNING][/yellow] {message}")


def log_error(message: str) -> None:
    _log(f"[red][ERROR][/red] {message}")


def log_debug(message: str) -> None:
    if _debug:
        _log(f"[cyan][DEBUG][/cyan] {message}")


def print_error(message: str) -> None:
    """Print error message"""
    CONSOLE.print(f"[red][ERROR][/red] {message}")
