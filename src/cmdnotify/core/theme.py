"""Centralized Rich theme and styled diagnostic helpers."""

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "title": "bold #7aa2f7",
        "label": "#565f89",
        "value": "#c0caf5",
        "warning": "bold #bb9af7",
        "error": "bold #f7768e",
        "muted": "#414868",
    }
)

# Diagnostics share stderr with the wrapped program; stdout stays untouched.
console = Console(theme=THEME, stderr=True, highlight=False)


def print_error(text: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗[/error] {text}")


def print_warning(text: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]![/warning] {text}")
