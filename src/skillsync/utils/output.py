"""Rich console output utilities."""

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", style="red", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow", soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}", soft_wrap=True)


def print_dim(message: str) -> None:
    """Print a secondary message."""
    console.print(escape(message), style="dim", soft_wrap=True)


# symbol -> style for per-item status lines
STATUS_STYLES = {
    "✓": "green",
    "✗": "red",
    "⚠": "yellow",
    "○": "dim",
}


def status_line(symbol: str, name: str, message: str, width: int = 30) -> None:
    """Print an indented ``<symbol> <name padded> <message>`` line."""
    style = STATUS_STYLES.get(symbol, "default")
    console.print(
        f"  [{style}]{symbol}[/{style}] {escape(name.ljust(width))} "
        f"[{style}]{escape(message)}[/{style}]",
        soft_wrap=True,
    )


def first_line(message: str) -> str:
    """Return the first line of a (possibly multi-line) error message."""
    lines = str(message).strip().splitlines()
    return lines[0] if lines else ""
