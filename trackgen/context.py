"""
Generation context: the only state shared across blueprint factories.

Holds the unique-id source, the spawn point counter and the random number
generator used by presets. A process-wide default context is used when a
caller doesn't pass one; tests swap it out with `set_default_context`.
"""

import itertools
import random
import uuid
from typing import Callable


def _uuid_factory() -> str:
    return str(uuid.uuid4())


class GenerationContext:
    """
    Owns the monotonic counters for one generation session.

    Args:
        id_factory: Callable returning a fresh unique id per call (uuid4 by default)
        first_spawn_number: Number given to the first auto-numbered spawn point.
            Spawn 1 is the game's default spawn, so numbering starts at 2.
        seed: Seed for `rng`. None seeds from system entropy.
    """

    def __init__(
        self,
        id_factory: Callable[[], str] | None = None,
        first_spawn_number: int = 2,
        seed: int | None = None,
    ):
        self._id_factory = id_factory or _uuid_factory
        self._spawn_numbers = itertools.count(first_spawn_number)
        self.rng = random.Random(seed)

    def new_id(self) -> str:
        return self._id_factory()

    def next_spawn_number(self) -> int:
        return next(self._spawn_numbers)


def sequential_ids(prefix: str = "bp") -> Callable[[], str]:
    """Deterministic id factory: bp-0, bp-1, ... Handy for tests and diffs."""
    counter = itertools.count()
    return lambda: f"{prefix}-{next(counter)}"


_default_context = GenerationContext()


def get_default_context() -> GenerationContext:
    return _default_context


def set_default_context(context: GenerationContext) -> GenerationContext:
    """Replace the process-wide context. Returns the previous one."""
    global _default_context
    previous = _default_context
    _default_context = context
    return previous


def resolve_context(context: GenerationContext | None) -> GenerationContext:
    return context if context is not None else _default_context
