"""
Convert placed blueprints to the track file representation.

Runs right before a track is saved:
1. Drop superimposed duplicates (same asset ignoring colour, same position, same rotation)
2. Normalize each survivor into the dict shape the XML encoder writes,
   with fixed-precision positions and rotations in degrees
"""

from trackgen.models import BlueprintInstance, FixedVector3, Vec3
from trackgen.tools.geometry import radians_to_degrees


DEFAULT_DECIMALS = 5

# Trailing itemID characters that encode the colour variant, e.g. "...5m04".
DEFAULT_VARIANT_SUFFIX_LENGTH = 2

# Applied to every blueprint unless it declares its own value.
FLAG_DEFAULTS = {
    "purpose": "Functional",
    "blueprintType": "TrackBlueprintFlag",
}

XSI_TYPE_KEY = "@_xsi:type"


# ============================================================================
# Fixed Precision
# ============================================================================

def format_fixed(value: float, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Format a float with a fixed number of decimals.

    Anything that rounds to zero is written as positive zero, so -0.0 and
    -0.000001 both become "0.00000".
    """
    rounded = round(value, decimals) + 0.0
    return f"{rounded:.{decimals}f}"


def fixed_vector(values: Vec3, decimals: int = DEFAULT_DECIMALS) -> FixedVector3:
    x, y, z = values
    return FixedVector3(
        x=format_fixed(x, decimals),
        y=format_fixed(y, decimals),
        z=format_fixed(z, decimals),
    )


def degrees_vector(values: Vec3, decimals: int = DEFAULT_DECIMALS) -> FixedVector3:
    """Radians in, fixed-precision degrees out."""
    return fixed_vector(tuple(radians_to_degrees(a) for a in values), decimals)


# ============================================================================
# Dedup
# ============================================================================

def _variant_free_id(item_id: str, suffix_length: int) -> str:
    if suffix_length <= 0:
        return item_id
    return item_id[:-suffix_length]


def remove_superimposed_duplicates(
    instances: list[BlueprintInstance],
    suffix_length: int = DEFAULT_VARIANT_SUFFIX_LENGTH,
) -> list[BlueprintInstance]:
    """
    Drop blueprints that sit exactly on top of an earlier one.

    Two blueprints are duplicates when their itemIDs match after removing
    the last `suffix_length` characters (the colour variant) and their raw
    float positions and rotations are exactly equal. The first occurrence
    wins and the original order is kept.
    """
    seen = set()
    unique = []
    for instance in instances:
        key = (
            _variant_free_id(instance.itemID, suffix_length),
            tuple(instance.position),
            tuple(instance.rotation),
        )
        if key in seen:
            continue
        seen.add(key)
        unique.append(instance)
    return unique


# ============================================================================
# Normalization
# ============================================================================

def normalize_instance(instance: BlueprintInstance, decimals: int = DEFAULT_DECIMALS) -> dict:
    """
    Turn a blueprint into the dict written under <TrackBlueprint>.

    The unique id is dropped. Flag defaults only fill fields the blueprint
    left empty, so a spawn point keeps its own xsi:type.
    """
    purpose = instance.purpose or FLAG_DEFAULTS["purpose"]
    blueprint_type = instance.blueprintType or FLAG_DEFAULTS["blueprintType"]

    out = {
        XSI_TYPE_KEY: blueprint_type,
        "itemID": instance.itemID,
        "position": fixed_vector(instance.position, decimals).model_dump(),
        "rotation": degrees_vector(instance.rotation, decimals).model_dump(),
    }
    if instance.spawnpoint is not None:
        out["spawnpoint"] = {
            XSI_TYPE_KEY: instance.spawnpoint.spawnpointType,
            "name": instance.spawnpoint.name,
        }
    out["purpose"] = purpose
    return out


def prepare_instances(
    instances: list[BlueprintInstance],
    decimals: int = DEFAULT_DECIMALS,
    suffix_length: int = DEFAULT_VARIANT_SUFFIX_LENGTH,
) -> list[dict]:
    """Dedup then normalize the whole collection, keeping order."""
    return [
        normalize_instance(instance, decimals)
        for instance in remove_superimposed_duplicates(instances, suffix_length)
    ]
