"""
Command-line interface for track generation.

Usage:
    trackgen presets
    trackgen run 7
    trackgen run loop-trainer --tracks-dir ./tracks --seed 42 --verbose
    trackgen line bridge --start 0 0 0 --end 40 10 0 --variant 2
    trackgen show ./tracks/grid/grid.track
    trackgen aliases
"""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from trackgen.config import Settings
from trackgen.errors import TrackGenError
from trackgen.pipeline import run_line, run_preset
from trackgen.presets import list_presets
from trackgen.tools.blueprint_parser import read_track
from trackgen.tools.prefab_lookup import list_aliases


# Load environment variables from .env file (for TRACKGEN_* settings).
load_dotenv()


console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _settings(tracks_dir: Path | None, seed: int | None) -> Settings:
    settings = Settings.from_env(dotenv=False)
    updates = {}
    if tracks_dir is not None:
        updates["tracks_dir"] = tracks_dir
    if seed is not None:
        updates["seed"] = seed
    return settings.model_copy(update=updates)


tracks_dir_option = click.option(
    "--tracks-dir", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Folder that receives <track>/<track>.track (default: TRACKGEN_TRACKS_DIR or ./tracks)."
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Generate drone racing track files from presets."""
    _setup_logging(verbose)
    ctx.obj = {"verbose": verbose}


@main.command()
@click.argument("preset")
@tracks_dir_option
@click.option("--seed", type=int, default=None, help="Seed for random presets.")
@click.pass_context
def run(ctx: click.Context, preset: str, tracks_dir: Path | None, seed: int | None):
    """
    Build and save a preset.

    PRESET: preset number (e.g. 7 or 07) or name (e.g. line-prefab)
    """
    try:
        run_preset(preset, settings=_settings(tracks_dir, seed), verbose=ctx.obj["verbose"])
    except TrackGenError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise click.Abort()


@main.command()
def presets():
    """List available presets."""
    table = Table(title="Presets")
    table.add_column("#", justify="right")
    table.add_column("name")
    table.add_column("description")
    for p in list_presets():
        table.add_row(f"{p.number:02d}", p.name, p.description)
    console.print(table)


@main.command()
@click.argument("name")
@click.option("--start", nargs=3, type=float, default=(0.0, 0.0, 0.0), help="Start point x y z.")
@click.option("--end", nargs=3, type=float, required=True, help="End point x y z.")
@click.option("--variant", type=click.IntRange(1, 9), default=4, help="Segment colour variant.")
@tracks_dir_option
def line(name: str, start: tuple, end: tuple, variant: int, tracks_dir: Path | None):
    """Save a track NAME holding one segment line."""
    try:
        run_line(name, start, end, variant=variant, settings=_settings(tracks_dir, None))
    except (TrackGenError, ValueError) as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise click.Abort()


@main.command()
@click.argument("track_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show(track_file: Path):
    """Print a summary of a saved .track file."""
    try:
        parsed = read_track(track_file)
    except TrackGenError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise click.Abort()

    console.print(f"[bold]{parsed.name}[/bold] (localID {parsed.local_id})")
    table = Table(show_header=True, header_style="bold")
    for column in ("itemID", "type", "position", "rotation (rad)"):
        table.add_column(column)
    for bp in parsed.blueprints:
        table.add_row(
            bp.itemID,
            bp.blueprintType or "",
            ", ".join(f"{c:.3f}" for c in bp.position),
            ", ".join(f"{c:.3f}" for c in bp.rotation),
        )
    console.print(table)
    console.print(f"{len(parsed.blueprints)} blueprints")


@main.command()
def aliases():
    """List prefab aliases usable in place of asset names."""
    table = Table(title="Prefab aliases")
    table.add_column("alias")
    table.add_column("asset")
    for alias, asset in list_aliases().items():
        table.add_row(alias, asset)
    console.print(table)


if __name__ == "__main__":
    main()
