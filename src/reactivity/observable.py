"""Observable containers — read/write interceptors built on track/trigger.

These are the reference collaborators for the core: every read calls
track(self, key) and every effective write calls trigger(self, key). They
keep no subscriber state of their own; the registry in _anchor holds it.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from reactivity.effect import track, trigger

T = TypeVar("T")
KT = TypeVar("KT")
VT = TypeVar("VT")

_MISSING = object()


class _IterateKey:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ITERATE_KEY"


# Key tracked by whole-collection reads (iteration, len, bool).
ITERATE_KEY = _IterateKey()


def _changed(old: object, new: object) -> bool:
    return old is not new and old != new


class Observable(Generic[T]):
    """A single observable value, tracked under the key "value"."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def get(self) -> T:
        """Read the value. Inside an effect run, subscribes the effect."""
        track(self, "value")
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Triggers only if it actually changed."""
        if _changed(self._value, value):
            self._value = value
            trigger(self, "value")

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"


class ObservableDict(Generic[KT, VT]):
    """An observable dict with per-key tracking.

    Reading d[k] subscribes to k only. Iteration and size queries subscribe
    to ITERATE_KEY, which fires whenever a key is added or removed.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[KT, VT] | None = None) -> None:
        self._data: dict[KT, VT] = dict(data) if data else {}

    def _trigger_iterate(self) -> None:
        trigger(self, ITERATE_KEY)

    # --- Read operations (track) ---

    def __getitem__(self, key: KT) -> VT:
        track(self, key)
        return self._data[key]

    def get(self, key: KT, default: VT | None = None) -> VT | None:
        track(self, key)
        return self._data.get(key, default)

    def __contains__(self, key: KT) -> bool:
        track(self, key)
        return key in self._data

    def __len__(self) -> int:
        track(self, ITERATE_KEY)
        return len(self._data)

    def __iter__(self) -> Iterator[KT]:
        track(self, ITERATE_KEY)
        return iter(list(self._data))

    def keys(self):
        track(self, ITERATE_KEY)
        return list(self._data.keys())

    def values(self):
        track(self, ITERATE_KEY)
        for key in self._data:
            track(self, key)
        return list(self._data.values())

    def items(self):
        track(self, ITERATE_KEY)
        for key in self._data:
            track(self, key)
        return list(self._data.items())

    def __bool__(self) -> bool:
        track(self, ITERATE_KEY)
        return bool(self._data)

    # --- Write operations (trigger) ---

    def __setitem__(self, key: KT, value: VT) -> None:
        old = self._data.get(key, _MISSING)
        self._data[key] = value
        if old is _MISSING:
            trigger(self, key)
            self._trigger_iterate()
        elif _changed(old, value):
            trigger(self, key)

    def __delitem__(self, key: KT) -> None:
        del self._data[key]
        trigger(self, key)
        self._trigger_iterate()

    def pop(self, key: KT, *args) -> VT:
        had_key = key in self._data
        result = self._data.pop(key, *args)
        if had_key:
            trigger(self, key)
            self._trigger_iterate()
        return result

    def update(self, other=None, **kwargs) -> None:
        if other:
            for key, value in dict(other).items():
                self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def clear(self) -> None:
        keys = list(self._data)
        self._data.clear()
        for key in keys:
            trigger(self, key)
        if keys:
            self._trigger_iterate()

    def setdefault(self, key: KT, default: VT | None = None) -> VT:
        if key not in self._data:
            self[key] = default
        return self[key]

    def __repr__(self) -> str:
        return f"ObservableDict({self._data!r})"
