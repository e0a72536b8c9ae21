"""
Numbered track presets.

Each preset builds one complete track from the placement tools. Presets
are looked up by number ("7", "07") or name ("line-prefab") and are pure
callers of the core: they never touch files, the pipeline saves them.
"""

import math
from dataclasses import dataclass
from typing import Callable

from trackgen.config import Settings
from trackgen.context import GenerationContext
from trackgen.errors import PresetNotFoundError
from trackgen.tools import geometry as v
from trackgen.tools.blueprint_factory import make_blueprint, make_spawn_point
from trackgen.tools.placement_tools import (
    build_segment_line,
    generate_grid,
    generate_hoop_loop,
    generate_node_mesh,
    generate_random_scatter,
)
from trackgen.track import TrackDocument, make_track


PresetFn = Callable[[GenerationContext, Settings], TrackDocument]


@dataclass
class Preset:
    number: int
    name: str
    description: str
    build: PresetFn

    @property
    def key(self) -> str:
        return f"{self.number:02d}-{self.name}"


PRESETS: dict[int, Preset] = {}


def preset(number: int, name: str, description: str):
    """Register a preset builder under `number`."""
    def register(fn: PresetFn) -> PresetFn:
        PRESETS[number] = Preset(number, name, description, fn)
        return fn
    return register


def find_preset(ref: str | int) -> Preset:
    """Look up a preset by number or name. Raises PresetNotFoundError."""
    text = str(ref).strip()
    if text.isdigit() and int(text) in PRESETS:
        return PRESETS[int(text)]
    for p in PRESETS.values():
        if text in (p.name, p.key):
            return p
    raise PresetNotFoundError(f"Preset {ref} not found.")


def list_presets() -> list[Preset]:
    return [PRESETS[n] for n in sorted(PRESETS)]


def _finish(track: TrackDocument, context: GenerationContext, spawn_position) -> TrackDocument:
    """Add the drone spawn and hide the game's default one."""
    track.add_instances(make_spawn_point(spawn_position, context=context))
    track.set_option("hideDefaultSpawnpoint", True)
    return track


# ============================================================================
# Presets
# ============================================================================

@preset(1, "random-cylinders", "Thousands of randomly placed 5m cylinders above the ground")
def random_cylinders(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("randomcyl", settings=settings, context=context)
    extent = 60
    count = int(extent * extent * (extent / 2) * 0.1)
    pieces = generate_random_scatter(["cylinder0x5"], count, extent, math.pi, context)
    track.set_instances([p for p in pieces if p.position[1] > 0])
    return _finish(track, context, (0, 0, -100))


@preset(2, "grid", "A 20x20x20 lattice of 1m cubes")
def grid(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("grid", settings=settings, context=context)
    track.set_instances(generate_grid("cube1", (20, 20, 20), 7, offset=(0, 3, 0), context=context))
    return _finish(track, context, (0, 0, -100))


@preset(3, "random-items", "Random mix of cubes, cylinders, plates and walls")
def random_items(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("randitems", settings=settings, context=context)
    extent = 60
    count = int(extent * extent * (extent / 2) * 0.1)
    type_keys = ["cube1", "cube5", "cylinder0x1", "cylinder0x5", "cylinder0x1", "cylinder0x5", "plate", "wall"]
    pieces = generate_random_scatter(type_keys, count, extent, math.pi, context)
    track.set_instances([p for p in pieces if p.position[1] > 0])
    return _finish(track, context, (0, 0, -100))


@preset(4, "loop-trainer", "Twenty hoop loops of growing radius")
def loop_trainer(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("looptrainer", settings=settings, context=context)
    gap, rad_start, rad_step, arc, density = 5, 3, 0.3, 0.85, 1.5
    for i in range(20):
        radius = rad_start + i * rad_step
        rings = math.floor(math.pi * radius * density * arc)
        track.add_instances(*generate_hoop_loop((0, 5, gap * i), radius, rings, arc, context=context))
    return _finish(track, context, (0, 0.1, -30))


@preset(5, "mesh", "Space frame of 5m struts, 10 nodes per side")
def mesh(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("mesh", settings=settings, context=context)
    track.set_instances(generate_node_mesh((10, 10, 10), 5, origin=(0, 3, 0), context=context))
    return _finish(track, context, (0, 0, -100))


@preset(6, "orientation-survey", "Four colours rotated a quarter turn apart around Z")
def orientation_survey(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("rotationsurvey", settings=settings, context=context)
    base = (0, 5, 0)
    for colour in range(1, 5):
        angle = (colour - 1) * v.HALF_PI
        item_id = f"DrawingBoardCylinder0.5mx5m0{colour}"
        track.add_instances(
            make_blueprint(item_id, base, (0, 0, angle), context),
            make_blueprint(item_id, v.add(v.rotate_z(angle, base), base), (0, 0, angle), context),
        )
    return _finish(track, context, (0, 1, -20))


@preset(7, "line-prefab", "One diagonal segment line")
def line_prefab(context: GenerationContext, settings: Settings) -> TrackDocument:
    track = make_track("lineprefab", settings=settings, context=context)
    track.set_instances(build_segment_line(4, (0, 0, 0), (10, 10, 0), context))
    return _finish(track, context, (0, 1, -20))


@preset(9, "box", "Segment lines radiating from one point to a sphere around it")
def box(context: GenerationContext, settings: Settings, num_lines: int = 4) -> TrackDocument:
    track = make_track("rotations", settings=settings, context=context)
    start = (0, 40, 20)
    radius = 40
    columns, rows = num_lines * 2, num_lines // 2
    for i in range(columns):
        for j in range(rows):
            azimuth = (i / columns) * v.TAU - math.pi
            elevation = (j / rows) * math.pi - v.HALF_PI
            end = v.add(start, v.spherical_to_rect(radius, azimuth, elevation))
            variant = (i * rows + j) % 4 + 1
            track.add_instances(*build_segment_line(variant, start, end, context))
    return _finish(track, context, (0, 1, -20))
