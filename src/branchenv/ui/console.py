"""Console output for branchenv, written as GitHub Actions workflow commands."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


def escape_data(message: str) -> str:
    """Escape a workflow command message so it stays on one line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value (name=..., title=...)."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class Console:
    """Centralized console output and run failure tracking."""

    def __init__(
        self,
        debug: bool = False,
        stream: Optional[TextIO] = None,
        err_stream: Optional[TextIO] = None,
    ):
        """
        Initialize console.

        Args:
            debug: If True, show stack traces when printing exceptions
            stream: Where workflow commands go (defaults to stdout)
            err_stream: Where exceptions go (defaults to stderr)
        """
        self.debug_mode = debug
        self._stream = stream
        self._err_stream = err_stream
        self.failed = False

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    @property
    def err_stream(self) -> TextIO:
        return self._err_stream or sys.stderr

    def command(self, command: str, message: str, **properties: str) -> None:
        """Print a workflow command: ::command key=value,...::message"""
        props = ",".join(f"{k}={escape_property(v)}" for k, v in properties.items())
        line = f"::{command} {props}::" if props else f"::{command}::"
        print(line + escape_data(message), file=self.stream)

    def warning(self, message: str) -> None:
        """Report a non-fatal problem."""
        self.command("warning", message)

    def set_failed(self, message: str | Exception) -> None:
        """
        Mark the run as failed and print an error annotation.

        This does not stop anything; callers return on their own.
        """
        self.failed = True
        self.command("error", str(message))

    def debug(self, message: str) -> None:
        """Print a debug line (shown by the runner when step debugging is on)."""
        self.command("debug", message)

    def info(self, message: str) -> None:
        """Print informational message."""
        print(message, file=self.stream)

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}", file=self.stream)
        print("-" * len(title), file=self.stream)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug_mode:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=self.err_stream)
        else:
            print(f"Error: {exc}", file=self.err_stream)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console | None) -> None:
    """Set the global console instance."""
    global _console
    _console = console
