"""Named esper worlds, one per game engine instance."""
from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from typing import Iterator

import esper

_world_ids = itertools.count(1)
# esper keeps one process-wide current world, so switching is serialized.
_switch_lock = threading.RLock()


def create_world(name: str | None = None) -> str:
    """Register an empty esper world and return its name.

    The previously current world stays current; use ``use_world`` to operate
    on the new one.
    """
    world = name or f"memo-{next(_world_ids)}"
    with use_world(world):
        esper.clear_database()
    return world


@contextmanager
def use_world(world: str) -> Iterator[str]:
    """Make ``world`` current for the duration of the block.

    Holds a re-entrant lock for the whole block so that operations on
    different worlds never interleave across threads.
    """
    with _switch_lock:
        previous = esper.current_world
        esper.switch_world(world)
        try:
            yield world
        finally:
            esper.switch_world(previous)


def delete_world(world: str) -> None:
    """Drop a world created by ``create_world``. A current world cannot be deleted."""
    if world == esper.current_world:
        raise ValueError(f"World '{world}' is current and cannot be deleted")
    try:
        esper.delete_world(world)
    except KeyError:
        pass
