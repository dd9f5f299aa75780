"""Generate a default settings file for the sentiment analysis."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from ..settings import AnalysisSettings


def init_config(output: Path, console: Console | None = None) -> bool:
    """Write default settings to output unless the file already exists."""
    console = console or Console()
    if output.exists():
        console.print(f"[yellow]{output} already exists, not overwriting[/]")
        return False

    header = "# Comment sentiment settings\n# gap must be >= 0 and < 1, min_comment_length >= 10\n"
    output.write_text(header + AnalysisSettings.default().to_yaml(), encoding="utf-8")
    console.print(f"[green]Generated {output}[/]")
    return True
