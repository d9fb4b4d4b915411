"""Shared notification formatting helpers.

Keeping formatting here prevents drift between the panel and the command line
and keeps messages consistent regardless of where they are shown.
"""

from __future__ import annotations

from rich.text import Text

from core.models import DANGER, SUCCESS, WARNING, Notification

# Textual toast severities for each notification kind.
SEVERITIES = {
    SUCCESS: "information",
    WARNING: "warning",
    DANGER: "error",
}

STYLES = {
    SUCCESS: "bold green",
    WARNING: "bold yellow",
    DANGER: "bold red",
}


def severity_for(notification: Notification) -> str:
    return SEVERITIES.get(notification.kind, "information")


def format_plain(notification: Notification) -> str:
    """Single-line text used in logs and plain terminals."""

    if notification.title:
        return f"[{notification.kind}] {notification.title}: {notification.text}"
    return f"[{notification.kind}] {notification.text}"


def format_rich(notification: Notification) -> Text:
    """Styled line for the rich console."""

    style = STYLES.get(notification.kind, "bold")
    label = notification.title or notification.kind.capitalize()
    return Text.assemble((f"{label}: ", style), notification.text)
