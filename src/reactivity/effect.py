"""Effects — re-runnable computations that subscribe to what they read.

An effect runs its computation once on creation. Every track() call made
while it runs subscribes it to that (target, key). A later trigger() on the
same pair re-runs it, or hands off to its scheduler if it has one.

    state = {"count": 0}

    def read_count():
        track(state, "count")
        return state["count"]

    runner = effect(read_count)     # runs now, subscribes to (state, "count")
    state["count"] = 1
    trigger(state, "count")         # re-runs read_count
    stop(runner)                    # unsubscribes; runner() still works untracked

The registry lives in _anchor; this module only holds behavior.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Hashable, TypeVar

from reactivity import _anchor
from reactivity._tracking import active_effect, is_tracking, tracking_scope, untracked
from reactivity.dep import Dep

logger = logging.getLogger("reactivity.effect")

T = TypeVar("T")


class ReactiveEffect(Generic[T]):
    """A trackable computation with a stop lifecycle."""

    __slots__ = ("fn", "active", "deps", "scheduler", "on_stop", "meta")

    def __init__(
        self,
        fn: Callable[[], T],
        scheduler: Callable[[], Any] | None = None,
    ) -> None:
        self.fn = fn
        self.active = True
        self.deps: list[Dep] = []  # back-references, only used by stop()
        self.scheduler = scheduler
        self.on_stop: Callable[[], Any] | None = None
        self.meta: dict[str, Any] = {}

    def run(self) -> T:
        """Invoke the computation, tracking reads if the effect is active.

        A stopped effect still runs, but as a plain function: nothing it
        reads is recorded, not even for an enclosing effect.
        """
        if not self.active:
            with untracked():
                return self.fn()
        with tracking_scope(self):
            return self.fn()

    def stop(self) -> None:
        """Detach from every Dep, fire on_stop, then deactivate. Idempotent."""
        if not self.active:
            return
        released = self._detach()
        if self.on_stop is not None:
            self.on_stop()
        self.active = False
        logger.debug("Stopped %r, released %d deps", self, released)

    def _detach(self) -> int:
        """Remove self from every Dep it joined. Returns how many it left."""
        released = len(self.deps)
        for dep in self.deps:
            dep.discard(self)
        self.deps.clear()
        return released

    def __repr__(self) -> str:
        name = getattr(self.fn, "__name__", repr(self.fn))
        state = "active" if self.active else "stopped"
        return f"ReactiveEffect({name}, {state})"


class Runner(Generic[T]):
    """Callable handle returned by effect(). Calling it re-runs the effect."""

    __slots__ = ("effect",)

    def __init__(self, effect: ReactiveEffect[T]) -> None:
        self.effect = effect

    def __call__(self) -> T:
        return self.effect.run()

    def __repr__(self) -> str:
        return f"Runner({self.effect!r})"


# ─── Track / trigger ─────────────────────────────────────────────────────────


def track(target: object, key: Hashable) -> None:
    """Record that the running effect read key on target.

    Called by read interceptors. Outside of an effect run this does nothing.
    """
    if not is_tracking() or not active_effect.get().active:
        return
    track_effects(_anchor.registry.get_or_create_dep(target, key))


def track_effects(dep: Dep) -> None:
    """Subscribe the running effect to dep, once."""
    effect = active_effect.get()
    if effect is None or not effect.active or effect in dep:
        return
    dep.add(effect)
    effect.deps.append(dep)


def trigger(target: object, key: Hashable) -> None:
    """Notify every effect that read key on target.

    Called by write interceptors. Writes to pairs nobody has tracked are no-ops.
    """
    dep = _anchor.registry.get_dep(target, key)
    if dep is None:
        return
    trigger_effects(dep)


def trigger_effects(dep: Dep) -> None:
    """Re-run (or schedule) each subscriber of dep exactly once."""
    # Snapshot: subscribers may stop effects or track new reads while we dispatch.
    effects = list(dep)
    logger.debug("Triggering %r: %d effects", dep.key, len(effects))
    for effect in effects:
        if effect not in dep:
            continue  # stopped by an earlier subscriber during this dispatch
        if effect.scheduler is not None:
            effect.scheduler()
        else:
            effect.run()


# ─── Public façade ───────────────────────────────────────────────────────────


def effect(
    fn: Callable[[], T],
    *,
    scheduler: Callable[[], Any] | None = None,
    on_stop: Callable[[], Any] | None = None,
    **meta: Any,
) -> Runner[T]:
    """Wrap fn in a ReactiveEffect, run it once, and return its runner.

    Options:
        scheduler: called instead of re-running fn when a dependency changes.
            It decides whether and when to call the runner.
        on_stop: called once, when the effect is stopped.
        **meta: anything else is kept verbatim in runner.effect.meta for
            layers built on top (e.g. lazy=True). The core ignores it.

    Usage:
        pending = []
        runner = effect(render, scheduler=lambda: pending.append(runner))
        ...
        for r in pending:
            r()
    """
    if not callable(fn):
        raise TypeError(f"effect() expects a callable, got {type(fn).__name__}")
    _effect = ReactiveEffect(fn, scheduler)
    _effect.on_stop = on_stop
    _effect.meta.update(meta)
    try:
        _effect.run()  # establish initial dependencies
    except BaseException:
        # No runner escapes, so detach now. on_stop does not fire.
        released = _effect._detach()
        _effect.active = False
        logger.debug("First run of %r failed, released %d deps", _effect, released)
        raise
    return Runner(_effect)


def stop(runner: Runner) -> None:
    """Stop the effect behind runner. Further triggers no longer reach it."""
    runner.effect.stop()
