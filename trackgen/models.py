"""
Pydantic models for track blueprint data.

These models define the structure for placed blueprint instances and the
fixed-precision vectors they are serialized with. Used throughout the
generators and the save pipeline.
"""

from pydantic import BaseModel, ConfigDict

# Plain float triple. Positions are world units, rotations are radians.
Vec3 = tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)


class FixedVector3(BaseModel):
    """A 3D vector rendered as fixed-precision decimal strings for the track file."""
    x: str
    y: str
    z: str


class SpawnpointInfo(BaseModel):
    """Extra payload carried by spawn point blueprints."""
    model_config = ConfigDict(frozen=True)

    name: str
    spawnpointType: str = "NamedDroneSpawnpoint"


class BlueprintInstance(BaseModel):
    """
    A single placed object in a track.

    `id` is a fresh unique identifier that never reaches the saved file.
    `itemID` is the resolved game asset name. Position and rotation are kept
    as raw floats (rotation in radians) until the document is saved.
    Instances are frozen: translate/rotate helpers return copies.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    itemID: str
    position: Vec3 = ORIGIN
    rotation: Vec3 = ORIGIN
    purpose: str | None = None
    blueprintType: str | None = None
    spawnpoint: SpawnpointInfo | None = None
