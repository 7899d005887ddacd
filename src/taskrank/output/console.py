"""Rich Console factory and theme for taskrank output.

Consoles render into a StringIO buffer so renderers return plain
strings.  In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TASKRANK_THEME = Theme(
    {
        "tr.ok": "bold green",
        "tr.error": "bold red",
        "tr.warning": "bold yellow",
        "tr.op": "bold cyan",
        "tr.key": "dim",
        "tr.id": "bold blue",
        "tr.title": "bold",
        "tr.rank": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TASKRANK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
