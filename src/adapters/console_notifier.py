"""Console notification adapter for the command line."""

from __future__ import annotations

from rich.console import Console

from adapters.notification_formatting import format_plain, format_rich
from core.models import Notification


class ConsoleNotifier:
    """Print each notification to a rich console as it is delivered."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def __call__(self, notification: Notification) -> None:
        if self._console.is_terminal:
            self._console.print(format_rich(notification))
        else:
            # Piped output stays grep-friendly.
            self._console.print(format_plain(notification), markup=False, highlight=False)
