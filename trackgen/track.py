"""
Track documents: creation from the template and saving to disk.

A track is the template JSON deep-merged under a small per-track skeleton.
Placed blueprints live at Track.blueprints.TrackBlueprint inside that tree;
callers reach them through `get_instances` / `set_instances` instead of
walking the nesting themselves.
"""

import copy
import logging
from pathlib import Path

from pydantic import BaseModel

from trackgen.config import Settings
from trackgen.context import GenerationContext
from trackgen.errors import TemplateLoadError, TrackReadError
from trackgen.fileio import atomic_write_text, ensure_folder, read_json_file
from trackgen.models import BlueprintInstance
from trackgen.tools import xml_codec
from trackgen.tools.blueprint_converter import normalize_instance, remove_superimposed_duplicates
from trackgen.tools.blueprint_factory import instance_from_parsed
from trackgen.tools.blueprint_parser import parse_blueprint


logger = logging.getLogger(__name__)

TRACK_FILE_SUFFIX = ".track"


# ============================================================================
# Template Merge
# ============================================================================

def merge_deep_left(override: dict, fallback: dict) -> dict:
    """
    Recursively merge two dicts; `override` wins.

    Keys present in both are merged when both values are dicts, otherwise
    the override value is taken. Keys only in `fallback` fill the gaps.
    Key order follows `fallback`, with override-only keys appended.
    Neither input is modified.
    """
    merged = {}
    for key, fallback_value in fallback.items():
        if key not in override:
            merged[key] = copy.deepcopy(fallback_value)
            continue
        value = override[key]
        if isinstance(value, dict) and isinstance(fallback_value, dict):
            merged[key] = merge_deep_left(value, fallback_value)
        else:
            merged[key] = copy.deepcopy(value)

    for key, value in override.items():
        if key not in fallback:
            merged[key] = copy.deepcopy(value)
    return merged


def track_skeleton(name: str) -> dict:
    """Per-track values that always override the template."""
    return {
        "Track": {
            "name": name,
            "lastTrackItemID": 0,
            "localID": {"str": name},
        }
    }


# ============================================================================
# Document Model
# ============================================================================

class TrackDocument(BaseModel):
    """
    In-memory track: the merged template tree plus the placed blueprints.

    The blueprint list is stored inside the tree at
    Track.blueprints.TrackBlueprint. `get_instances` returns that list
    itself, so appending to it adds blueprints to the track.
    """
    tree: dict

    @property
    def track(self) -> dict:
        return self.tree.setdefault("Track", {})

    @property
    def name(self) -> str:
        return self.track["name"]

    @property
    def local_id(self) -> str:
        local = self.track.get("localID")
        if isinstance(local, dict) and local.get("str"):
            return local["str"]
        return self.name

    def get_instances(self) -> list[BlueprintInstance]:
        blueprints = self.track.get("blueprints")
        if not isinstance(blueprints, dict):
            blueprints = {}
            self.track["blueprints"] = blueprints
        items = blueprints.get("TrackBlueprint")
        if not isinstance(items, list):
            items = [] if items is None else [items]
            blueprints["TrackBlueprint"] = items
        return items

    def set_instances(self, instances: list[BlueprintInstance]) -> None:
        self.get_instances()
        self.track["blueprints"]["TrackBlueprint"] = list(instances)

    def add_instances(self, *instances: BlueprintInstance) -> None:
        self.get_instances().extend(instances)

    def set_option(self, key: str, value) -> None:
        """Set a top-level Track field, e.g. hideDefaultSpawnpoint."""
        self.track[key] = value

    def to_tree(self, normalized: list[dict]) -> dict:
        """Copy of the tree with the blueprint list swapped for `normalized`."""
        track = dict(self.track)
        blueprints = dict(track.get("blueprints") or {})
        blueprints["TrackBlueprint"] = normalized
        track["blueprints"] = blueprints
        return {**self.tree, "Track": track}


# ============================================================================
# Load / Save
# ============================================================================

def load_template(path: str | Path) -> dict:
    """Read the template JSON. Raises TemplateLoadError if it can't be read."""
    template = read_json_file(path)
    logger.debug("Loaded track template %s", path)
    return template


def make_track(
    name: str = "trackname",
    template_path: str | Path | None = None,
    settings: Settings | None = None,
    context: GenerationContext | None = None,
) -> TrackDocument:
    """
    Create a new track called `name` from the template.

    The template path comes from `template_path`, then `settings`, then the
    packaged default template. Blueprints already present in the template
    are read the same way a saved track is (fixed strings, degrees) and
    become instances with fresh ids, so they are saved like any other.
    """
    if template_path is None:
        template_path = (settings or Settings()).template_path
    template = load_template(template_path)
    document = TrackDocument(tree=merge_deep_left(track_skeleton(name), template))

    raw_items = document.get_instances()
    if raw_items:
        try:
            adopted = [
                item if isinstance(item, BlueprintInstance)
                else instance_from_parsed(parse_blueprint(item), context)
                for item in raw_items
            ]
        except TrackReadError as e:
            raise TemplateLoadError(f"Template {template_path} has an invalid blueprint: {e}") from e
        document.set_instances(adopted)
        logger.debug("Adopted %d blueprints from template %s", len(adopted), template_path)
    return document


def track_path(document: TrackDocument, tracks_dir: str | Path) -> Path:
    """Where `document` is saved: <tracks_dir>/<local id>/<name>.track."""
    return Path(tracks_dir) / document.local_id / f"{document.name}{TRACK_FILE_SUFFIX}"


def save_track(
    document: TrackDocument,
    tracks_dir: str | Path | None = None,
    settings: Settings | None = None,
) -> Path:
    """
    Dedup, normalize and write the track as XML.

    The document's blueprint list is replaced by its deduplicated version.
    The file is written to a temp file and renamed into place, so a failed
    save never leaves a truncated .track behind.

    Returns:
        Path of the written .track file

    Raises:
        TrackWriteError: the folder or file could not be written
    """
    settings = settings or Settings.from_env()
    tracks_dir = Path(tracks_dir) if tracks_dir is not None else settings.tracks_dir

    instances = document.get_instances()
    unique = remove_superimposed_duplicates(instances, settings.variant_suffix_length)
    dropped = len(instances) - len(unique)
    if dropped:
        logger.info("Removed %d superimposed blueprints from %s", dropped, document.name)
    document.set_instances(unique)

    normalized = [normalize_instance(instance, settings.decimals) for instance in unique]
    content = xml_codec.encode(document.to_tree(normalized))

    path = track_path(document, tracks_dir)
    ensure_folder(path.parent)
    atomic_write_text(path, content)
    logger.info("Saved %s (%d blueprints) to %s", document.name, len(unique), path)
    return path
