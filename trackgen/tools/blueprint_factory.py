"""
Blueprint factory: create and move placed instances.

Every instance gets a fresh id from the generation context. Positions and
rotations are stored exactly as given (world units, radians); rounding and
degree conversion only happen when the track is saved.
"""

import logging

from trackgen.context import GenerationContext, resolve_context
from trackgen.models import BlueprintInstance, SpawnpointInfo, Vec3, ORIGIN
from trackgen.tools import geometry as v
from trackgen.tools.blueprint_parser import ParsedBlueprint
from trackgen.tools.prefab_lookup import is_alias, resolve_type_id


logger = logging.getLogger(__name__)

SPAWNPOINT_BLUEPRINT_TYPE = "TrackBlueprintSpawnpoint"
DEFAULT_SPAWN_POSITION: Vec3 = (0.0, 0.0, -30.0)


def _vec(values) -> Vec3:
    x, y, z = values
    return (float(x), float(y), float(z))


def make_blueprint(
    type_key: str,
    position: Vec3 = ORIGIN,
    rotation: Vec3 = ORIGIN,
    context: GenerationContext | None = None,
) -> BlueprintInstance:
    """
    Place a single object.

    Args:
        type_key: Alias from the prefab table or a canonical asset name
        position: World position
        rotation: Euler rotation in radians
        context: Id source; the process default when omitted
    """
    ctx = resolve_context(context)
    if not is_alias(type_key):
        logger.debug("No alias for %r, using it as the asset name", type_key)

    return BlueprintInstance(
        id=ctx.new_id(),
        itemID=resolve_type_id(type_key),
        position=_vec(position),
        rotation=_vec(rotation),
    )


def make_spawn_point(
    position: Vec3 = DEFAULT_SPAWN_POSITION,
    rotation: Vec3 = ORIGIN,
    number: int | None = None,
    context: GenerationContext | None = None,
) -> BlueprintInstance:
    """
    Place a drone spawn point.

    Without an explicit `number` the context hands out the next one, so
    repeated calls produce "Spawn 2", "Spawn 3", ...
    """
    ctx = resolve_context(context)
    if number is None:
        number = ctx.next_spawn_number()

    return BlueprintInstance(
        id=ctx.new_id(),
        itemID=f"SpawnPointSingle0{number}",
        position=_vec(position),
        rotation=_vec(rotation),
        blueprintType=SPAWNPOINT_BLUEPRINT_TYPE,
        spawnpoint=SpawnpointInfo(name=f"Spawn {number}"),
    )


def translate_blueprint(delta: Vec3, instance: BlueprintInstance) -> BlueprintInstance:
    """Return a copy of `instance` moved by `delta`."""
    return instance.model_copy(update={"position": v.add(instance.position, _vec(delta))})


def rotate_blueprint(delta: Vec3, instance: BlueprintInstance) -> BlueprintInstance:
    """Return a copy of `instance` with `delta` (radians) added to its rotation."""
    return instance.model_copy(update={"rotation": v.add(instance.rotation, _vec(delta))})


def instance_from_parsed(parsed: ParsedBlueprint, context: GenerationContext | None = None) -> BlueprintInstance:
    """
    Turn a blueprint read from a track or template back into an instance.

    The item keeps its asset id, transform, purpose and type; it gets a new
    id from the context.
    """
    ctx = resolve_context(context)
    spawnpoint = None
    if parsed.spawnName is not None:
        spawnpoint = SpawnpointInfo(name=parsed.spawnName)
        if parsed.spawnType:
            spawnpoint = spawnpoint.model_copy(update={"spawnpointType": parsed.spawnType})

    return BlueprintInstance(
        id=ctx.new_id(),
        itemID=parsed.itemID,
        position=_vec(parsed.position),
        rotation=_vec(parsed.rotation),
        purpose=parsed.purpose,
        blueprintType=parsed.blueprintType,
        spawnpoint=spawnpoint,
    )
