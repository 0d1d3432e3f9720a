"""Rich rendering utilities for verification results."""

from __future__ import annotations

from rich.markup import escape
from rich.table import Table

from pom_verifier.messages import MessageSet, Severity, sorted_messages


_SEVERITY_STYLE = {
    Severity.REQUIRED: "bold red",
    Severity.WARNING: "yellow",
}


def build_message_table(messages: MessageSet, title: str = "Hosting review") -> Table:
    """Build a Rich Table listing messages, REQUIRED first.

    Args:
        messages: Messages from one or more verification passes.
        title: Table title.

    Returns:
        A Rich Table object for rendering.
    """
    table = Table(title=title)
    table.add_column("#", style="dim", width=4)
    table.add_column("Severity", width=10)
    table.add_column("Message")

    for i, msg in enumerate(sorted_messages(messages), start=1):
        style = _SEVERITY_STYLE[msg.severity]
        table.add_row(str(i), f"[{style}]{msg.severity.value}[/{style}]", escape(msg.text))
    return table
