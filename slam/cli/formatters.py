"""Rich formatters for slam CLI output."""

from typing import Iterable

from rich.console import Console
from rich.table import Table

from slam.models.screen import Layout, Orientation, Output


# Global console instance
console = Console()


def format_output(output: Output) -> str:
    """One-line summary of an output, e.g. ``HDMI-1 1920x1080@60 left-of eDP-1``."""
    if output.is_disconnected:
        return f"{output.name} off"

    parts = [output.name, f"{output.mode.resolution}@{output.mode.rate}"]
    if output.state.output:
        parts.append(f"same-as {output.state.output}")
    if output.position.output:
        parts.append(f"{output.position.kind.value} {output.position.output}")
    if output.orientation is not Orientation.NORMAL:
        parts.append(f"rotate {output.orientation.value}")
    if output.is_primary:
        parts.append("(primary)")
    return " ".join(parts)


def format_layout_table(layouts: Iterable[Layout]) -> Table:
    """Format layouts as a Rich table.

    Args:
        layouts: Layouts in catalog order

    Returns:
        Rich Table object ready for display
    """
    table = Table(title="Layouts", show_header=True, header_style="bold cyan")

    table.add_column("Current", style="green", width=7, justify="center")
    table.add_column("Name", style="bold")
    table.add_column("Outputs", style="blue")

    for layout in layouts:
        table.add_row(
            "✓" if layout.is_current else "",
            layout.name,
            "\n".join(format_output(output) for output in layout.outputs.values()),
        )

    return table
