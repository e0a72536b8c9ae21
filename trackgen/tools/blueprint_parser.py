"""
Track Parser - Read saved .track files back into structured data.

Track format (XML, abbreviated):
<Track xmlns:xsi="...">
  <name>loops</name>
  <localID><str>loops</str></localID>
  <blueprints>
    <TrackBlueprint xsi:type="TrackBlueprintFlag">
      <itemID>DrawingBoardCube1mx1m04</itemID>
      <position><x>0.00000</x><y>5.00000</y><z>0.00000</z></position>
      <rotation><x>0.00000</x><y>90.00000</y><z>0.00000</z></rotation>
      <purpose>Functional</purpose>
    </TrackBlueprint>
  </blueprints>
</Track>
"""

from dataclasses import dataclass
from pathlib import Path

from trackgen.fileio import read_text_file
from trackgen.errors import TrackReadError
from trackgen.models import Vec3
from trackgen.tools import xml_codec
from trackgen.tools.blueprint_converter import XSI_TYPE_KEY
from trackgen.tools.geometry import degrees_to_radians


@dataclass
class ParsedBlueprint:
    """A single blueprint read from a track file. Rotation is back in radians."""
    itemID: str
    position: Vec3
    rotation: Vec3
    blueprintType: str | None = None
    purpose: str | None = None
    spawnName: str | None = None
    spawnType: str | None = None


@dataclass
class ParsedTrack:
    """A parsed track with its name, local id and blueprints."""
    name: str
    local_id: str
    blueprints: list[ParsedBlueprint]
    tree: dict


def _vector(raw: dict, convert=float) -> Vec3:
    return (convert(float(raw["x"])), convert(float(raw["y"])), convert(float(raw["z"])))


def parse_blueprint(raw: dict) -> ParsedBlueprint:
    """Parse one <TrackBlueprint> dict. Raises TrackReadError on missing fields."""
    try:
        spawn = raw.get("spawnpoint")
        return ParsedBlueprint(
            itemID=raw["itemID"],
            position=_vector(raw["position"]),
            rotation=_vector(raw["rotation"], degrees_to_radians),
            blueprintType=raw.get(XSI_TYPE_KEY),
            purpose=raw.get("purpose"),
            spawnName=spawn.get("name") if isinstance(spawn, dict) else None,
            spawnType=spawn.get("spawnpointType") if isinstance(spawn, dict) else None,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise TrackReadError(f"Invalid blueprint entry {raw!r}: {e}") from e


def parse_track(text: str) -> ParsedTrack:
    """Parse the XML text of a track file."""
    tree = xml_codec.decode(text)
    track = tree.get("Track")
    if not isinstance(track, dict):
        raise TrackReadError("Document has no <Track> root")

    blueprints_node = track.get("blueprints") or {}
    raw_items = blueprints_node.get("TrackBlueprint", []) if isinstance(blueprints_node, dict) else []
    # A single blueprint decodes as a dict rather than a one-item list.
    if isinstance(raw_items, dict):
        raw_items = [raw_items]

    local_id = track.get("localID")
    return ParsedTrack(
        name=track.get("name", ""),
        local_id=local_id.get("str", "") if isinstance(local_id, dict) else "",
        blueprints=[parse_blueprint(item) for item in raw_items],
        tree=tree,
    )


def read_track(path: str | Path) -> ParsedTrack:
    """Read and parse a .track file."""
    return parse_track(read_text_file(path))
