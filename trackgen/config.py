"""
Runtime settings for track generation.

Values come from the environment (optionally a .env file in the working
directory) so presets can be pointed at the game's track folder without
code changes:

    TRACKGEN_TRACKS_DIR      where .track folders are written (default ./tracks)
    TRACKGEN_TEMPLATE        JSON template merged under every new track
    TRACKGEN_DECIMALS        fixed precision of saved positions/rotations
    TRACKGEN_VARIANT_SUFFIX  trailing itemID characters ignored by dedup
    TRACKGEN_SEED            seed for preset randomness (unset = random)
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from trackgen.errors import ConfigError


DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "data" / "template.json"


class Settings(BaseModel):
    """Resolved configuration for one generation session."""
    tracks_dir: Path = Path("./tracks")
    template_path: Path = DEFAULT_TEMPLATE_PATH
    decimals: int = 5
    variant_suffix_length: int = 2
    seed: int | None = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from TRACKGEN_* environment variables."""
        if dotenv:
            load_dotenv()

        values: dict = {}
        env_map = {
            "TRACKGEN_TRACKS_DIR": "tracks_dir",
            "TRACKGEN_TEMPLATE": "template_path",
            "TRACKGEN_DECIMALS": "decimals",
            "TRACKGEN_VARIANT_SUFFIX": "variant_suffix_length",
            "TRACKGEN_SEED": "seed",
        }
        for env_name, field_name in env_map.items():
            raw = os.environ.get(env_name)
            if raw:
                values[field_name] = raw

        # pydantic coerces the strings to Path/int.
        try:
            return cls(**values)
        except ValidationError as e:
            problems = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
            raise ConfigError(f"Invalid TRACKGEN_* setting ({problems})") from e
