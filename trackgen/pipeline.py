"""
Pipeline orchestrator for track generation.

Coordinates the two stages:
    Preset (build the document) -> Save (dedup, normalize, write XML).
Handles console reporting; errors propagate to the caller.
"""

import time
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from trackgen.config import Settings
from trackgen.context import GenerationContext
from trackgen.models import Vec3
from trackgen.presets import find_preset
from trackgen.tools.placement_tools import build_segment_line
from trackgen.tools.blueprint_factory import make_spawn_point
from trackgen.track import TrackDocument, make_track, save_track


console = Console()


def _format_item_counts(document: TrackDocument, limit: int = 8) -> Table:
    """Table of the most common itemIDs in a track."""
    counts = Counter(instance.itemID for instance in document.get_instances())
    table = Table(show_header=True, header_style="bold")
    table.add_column("itemID")
    table.add_column("count", justify="right")
    for item_id, count in counts.most_common(limit):
        table.add_row(item_id, str(count))
    return table


def save_and_report(document: TrackDocument, settings: Settings, verbose: bool = False) -> Path:
    """Save `document` and print a summary panel."""
    generated = len(document.get_instances())
    path = save_track(document, settings=settings)
    saved = len(document.get_instances())

    if verbose:
        console.print(_format_item_counts(document))

    console.print(Panel(
        f"[bold green]Track saved![/bold green]\n\n"
        f"Name: {document.name}\n"
        f"Blueprints: {saved} ({generated - saved} duplicates removed)\n"
        f"Output: {path}",
        title="Complete"
    ))
    return path


def run_preset(
    ref: str | int,
    settings: Settings | None = None,
    context: GenerationContext | None = None,
    verbose: bool = False,
) -> Path:
    """
    Build a preset track and save it.

    Returns the path of the written .track file.
    """
    settings = settings or Settings.from_env()
    context = context or GenerationContext(seed=settings.seed)
    preset = find_preset(ref)

    console.print(Panel(f"Preset {preset.key}", style="bold blue"))
    console.print(f"[dim]{preset.description}[/dim]")

    started = time.perf_counter()
    document = preset.build(context, settings)
    elapsed = time.perf_counter() - started
    console.print(
        f"[green]✓[/green] Generated {len(document.get_instances())} blueprints in {elapsed:.2f}s"
    )

    return save_and_report(document, settings, verbose=verbose)


def run_line(
    name: str,
    start: Vec3,
    end: Vec3,
    variant: int = 4,
    settings: Settings | None = None,
    context: GenerationContext | None = None,
) -> Path:
    """Save a track holding a single segment line from `start` to `end` plus a spawn point."""
    settings = settings or Settings.from_env()
    context = context or GenerationContext(seed=settings.seed)

    document = make_track(name, settings=settings, context=context)
    document.set_instances(build_segment_line(variant, start, end, context))
    document.add_instances(make_spawn_point((0, 1, -20), context=context))
    document.set_option("hideDefaultSpawnpoint", True)
    return save_and_report(document, settings)
