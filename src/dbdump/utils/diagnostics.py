"""Level-gated diagnostic output on stderr.

Diagnostics never go into the generated script. Components receive a
Diagnostics instance explicitly instead of consulting a process-wide level.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from dbdump.global_models import LogLevel

_SEVERITY = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


class Diagnostics:
    """Write debug, info, warning and error messages to a Rich console."""

    def __init__(
        self,
        level: LogLevel = LogLevel.WARNING,
        console: Optional[Console] = None,
    ):
        """
        Initialize the diagnostics channel.

        Args:
            level: Minimum level that is printed
            console: Rich console to print to. Uses stderr if not provided.
        """
        self.level = LogLevel(level)
        self.console = console if console is not None else Console(stderr=True)

    def enabled(self, level: LogLevel) -> bool:
        """Return True if messages at the given level are printed."""
        return _SEVERITY[LogLevel(level)] >= _SEVERITY[self.level]

    def debug(self, message: str) -> None:
        if self.enabled(LogLevel.DEBUG):
            self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)

    def info(self, message: str) -> None:
        if self.enabled(LogLevel.INFO):
            self.console.print(escape(message), highlight=False)

    def warning(self, message: str) -> None:
        if self.enabled(LogLevel.WARNING):
            self.console.print(
                f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False
            )

    def error(self, message: str) -> None:
        # Errors are always shown
        self.console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def quiet_diagnostics() -> Diagnostics:
    """Return a Diagnostics instance that prints nothing."""
    return Diagnostics(LogLevel.ERROR, Console(stderr=True, quiet=True))
