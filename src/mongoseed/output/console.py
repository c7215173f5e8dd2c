"""Rich Console factory and theme for mongoseed output.

Consoles render to a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SEED_THEME = Theme(
    {
        "seed.ok": "bold green",
        "seed.error": "bold red",
        "seed.warning": "bold yellow",
        "seed.op": "bold cyan",
        "seed.key": "dim",
        "seed.db": "bold blue",
        "seed.collection": "bold",
        "seed.path": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SEED_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
