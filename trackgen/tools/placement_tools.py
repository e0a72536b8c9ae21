"""
Procedural placement tools for track presets.

These tools generate blueprint arrays deterministically so presets only
decide what to build; these functions handle the math.

Primitive Actions:
- build_segment_line: Tile a straight line between two points with cylinder segments

Composite Actions (built on the blueprint factory):
- generate_grid: One object per lattice point
- generate_hoop_loop: Hoops arranged around a vertical loop
- generate_node_mesh: Three orthogonal struts per lattice node
- generate_random_scatter: Random objects inside a cube
"""

import logging
import math

from trackgen.context import GenerationContext, resolve_context
from trackgen.errors import DegenerateLineError
from trackgen.models import BlueprintInstance, Vec3, ORIGIN
from trackgen.tools import geometry as v
from trackgen.tools.blueprint_factory import make_blueprint, translate_blueprint
from trackgen.tools.unit_decomposer import decompose_units


logger = logging.getLogger(__name__)


# ============================================================================
# Segment Lines
# ============================================================================

# Physical lengths (m) of the 0.5m-wide cylinder segment prefabs.
SEGMENT_UNITS = (5, 1)

# Line lengths are snapped to this many decimals so 39.99999999999999 tiles as 40.
LENGTH_DECIMALS = 9

# Remainders shorter than this are float drift, not a missing segment.
REMAINDER_EPSILON = 1e-9


def segment_type_id(length: float, variant: int | str) -> str:
    """Asset name for a cylinder segment of `length` metres in colour `variant`."""
    return f"DrawingBoardCylinder0.5mx{length:g}m0{variant}"


def build_segment_line(
    variant: int | str,
    point_a: Vec3,
    point_b: Vec3,
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """
    Tile the line from point_a to point_b with cylinder segments.

    Uses as many 5m segments as fit, then 1m segments, then one extra 1m
    segment for any fractional leftover. Every segment shares the same
    orientation (long axis along the line, zero roll).

    Full segments are anchored at their near end and laid end to end from
    point_a. The fractional segment is anchored at the walking position
    pulled back by the leftover length.

    Raises:
        DegenerateLineError: point_a and point_b are the same point
    """
    delta = v.tidy(v.sub(point_b, point_a))
    length = round(v.magnitude(delta), LENGTH_DECIMALS)
    if length == 0:
        raise DegenerateLineError(f"Segment line needs two distinct points, got {point_a} twice")

    direction = v.tidy(v.unit(delta))
    orientation = v.direction_to_angles(direction)

    ctx = resolve_context(context)
    cur_pos = tuple(float(c) for c in point_a)
    pieces: list[BlueprintInstance] = []

    for group in decompose_units(length, SEGMENT_UNITS):
        if group.is_remainder:
            leftover = group.remainder
            if leftover < REMAINDER_EPSILON:
                continue
            position = v.sub(cur_pos, v.scale(leftover, direction))
            pieces.append(make_blueprint(
                segment_type_id(min(SEGMENT_UNITS), variant), position, orientation, ctx
            ))
            continue

        for unit in group.items:
            pieces.append(make_blueprint(segment_type_id(unit, variant), cur_pos, orientation, ctx))
            cur_pos = v.add(cur_pos, v.scale(unit, direction))

    logger.debug("Segment line %s -> %s: length %.3f, %d pieces", point_a, point_b, length, len(pieces))
    return pieces


def build_segment_path(
    variant: int | str,
    points: list[Vec3],
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """Chain segment lines through consecutive points, skipping repeated points."""
    pieces: list[BlueprintInstance] = []
    for start, end in zip(points, points[1:]):
        if v.distance(start, end) == 0:
            continue
        pieces.extend(build_segment_line(variant, start, end, context))
    return pieces


# ============================================================================
# Composite Placement Generators
# ============================================================================

def lattice(nx: int, ny: int, nz: int):
    """Yield integer lattice points (i, j, k), x varying slowest."""
    for i in range(nx):
        for j in range(ny):
            for k in range(nz):
                yield (float(i), float(j), float(k))


def generate_grid(
    type_key: str,
    counts: tuple[int, int, int],
    spacing: float,
    offset: Vec3 = ORIGIN,
    rotation: Vec3 = ORIGIN,
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """
    Place one object on every point of an nx × ny × nz grid.

    Grid point (i, j, k) lands at (offset + (i, j, k)) * spacing.
    """
    pieces = []
    for point in lattice(*counts):
        position = v.scale(spacing, v.add(offset, point))
        pieces.append(make_blueprint(type_key, position, rotation, context))
    return pieces


def generate_hoop_loop(
    origin: Vec3,
    radius: float,
    ring_count: int,
    arc: float = 0.85,
    type_key: str = "lightHoop1",
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """
    Hoops around a vertical loop in the XY plane.

    `origin` is the bottom of the loop; `arc` is the fraction of a full turn
    covered, starting at the bottom. Each hoop is turned to face along the loop.
    """
    if ring_count <= 0:
        return []

    centre = v.add(origin, (0.0, radius, 0.0))
    pieces = []
    for i in range(ring_count):
        fraction = i / ring_count
        turn = -0.25 + arc * fraction
        position = v.add(centre, v.rotate_z(v.TAU * turn, (radius, 0.0, 0.0)))
        rotation = (v.HALF_PI - v.TAU * turn, v.HALF_PI, 0.0)
        pieces.append(make_blueprint(type_key, position, rotation, context))
    return pieces


def generate_node_mesh(
    counts: tuple[int, int, int],
    spacing: float = 5.0,
    origin: Vec3 = ORIGIN,
    type_key: str = "cylinder0x5",
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """
    Space frame: three orthogonal struts at every lattice node.

    One strut per node stays vertical, the other two are tipped onto the
    X and Z axes.
    """
    strut_rotations: list[Vec3] = [
        (0.0, 0.0, 0.0),
        (v.HALF_PI, 0.0, 0.0),
        (0.0, 0.0, v.HALF_PI),
    ]
    pieces = []
    for point in lattice(*counts):
        world = v.add(v.scale(spacing, point), origin)
        node = [make_blueprint(type_key, ORIGIN, rot, context) for rot in strut_rotations]
        pieces.extend(translate_blueprint(world, strut) for strut in node)
    return pieces


def generate_random_scatter(
    type_keys: list[str],
    count: int,
    extent: float,
    max_angle: float = math.pi,
    context: GenerationContext | None = None,
) -> list[BlueprintInstance]:
    """
    Scatter `count` objects uniformly in the cube [-extent, extent)^3.

    Types are picked uniformly from `type_keys` and every axis gets a
    random rotation in [-max_angle, max_angle). Randomness comes from the
    context's rng so seeded runs repeat exactly.
    """
    ctx = resolve_context(context)
    rng = ctx.rng
    pieces = []
    for _ in range(count):
        type_key = rng.choice(type_keys)
        position = tuple(rng.uniform(-extent, extent) for _ in range(3))
        rotation = tuple(rng.uniform(-max_angle, max_angle) for _ in range(3))
        pieces.append(make_blueprint(type_key, position, rotation, ctx))
    return pieces
