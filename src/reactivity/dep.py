"""Dependency sets and the registry that owns them.

A Dep is the set of effects subscribed to one (target, key) pair. The
DependencyRegistry maps target identity -> key -> Dep and creates entries
lazily on first track. Entries are never removed on read or stop; a Dep may
go empty but stays registered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Hashable, Iterator

if TYPE_CHECKING:
    from reactivity.effect import ReactiveEffect

logger = logging.getLogger("reactivity.dep")


class Dep:
    """Set of effects interested in one (target, key)."""

    __slots__ = ("key", "_effects")

    def __init__(self, key: Hashable = None) -> None:
        self.key = key
        self._effects: set[ReactiveEffect] = set()

    def add(self, effect: ReactiveEffect) -> None:
        self._effects.add(effect)

    def discard(self, effect: ReactiveEffect) -> None:
        self._effects.discard(effect)

    def __contains__(self, effect: object) -> bool:
        return effect in self._effects

    def __iter__(self) -> Iterator[ReactiveEffect]:
        return iter(self._effects)

    def __len__(self) -> int:
        return len(self._effects)

    def __repr__(self) -> str:
        return f"Dep({self.key!r}, {len(self._effects)} effects)"


class DependencyRegistry:
    """Two-level map from observed object identity to key to Dep.

    Targets are keyed by id() so unhashable objects (plain dicts, lists) can
    be observed. Each tracked target is pinned with a strong reference, which
    keeps its id stable for as long as the registry holds entries for it.
    """

    def __init__(self) -> None:
        self._targets: dict[int, object] = {}
        self._deps_maps: dict[int, dict[Hashable, Dep]] = {}

    def get_deps_map(self, target: object) -> dict[Hashable, Dep] | None:
        return self._deps_maps.get(id(target))

    def get_dep(self, target: object, key: Hashable) -> Dep | None:
        """Look up the Dep for (target, key) without creating anything."""
        deps_map = self._deps_maps.get(id(target))
        if deps_map is None:
            return None
        return deps_map.get(key)

    def get_or_create_dep(self, target: object, key: Hashable) -> Dep:
        """Resolve the Dep for (target, key), creating the key map and Dep on demand."""
        target_id = id(target)
        deps_map = self._deps_maps.get(target_id)
        if deps_map is None:
            deps_map = {}
            self._deps_maps[target_id] = deps_map
            self._targets[target_id] = target
        dep = deps_map.get(key)
        if dep is None:
            dep = Dep(key)
            deps_map[key] = dep
        return dep

    def clear(self) -> None:
        """Forget every target. Only meant for test sandboxes."""
        logger.debug("Clearing registry: %d targets", len(self._targets))
        self._targets.clear()
        self._deps_maps.clear()

    def __contains__(self, target: object) -> bool:
        return id(target) in self._deps_maps

    def __len__(self) -> int:
        return len(self._deps_maps)

    def __repr__(self) -> str:
        return f"DependencyRegistry({len(self._deps_maps)} targets)"
