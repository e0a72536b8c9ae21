"""
Shared test fixtures for track generation tests.
"""
import pytest

from trackgen.config import Settings
from trackgen.context import GenerationContext, sequential_ids, set_default_context


@pytest.fixture(autouse=True)
def fresh_default_context():
    """Every test starts with deterministic ids and spawn numbering."""
    previous = set_default_context(GenerationContext(id_factory=sequential_ids("default"), seed=0))
    yield
    set_default_context(previous)


@pytest.fixture
def context():
    return GenerationContext(id_factory=sequential_ids(), seed=1234)


@pytest.fixture
def settings(tmp_path):
    """Settings writing into a per-test tracks folder."""
    return Settings(tracks_dir=tmp_path / "tracks")
