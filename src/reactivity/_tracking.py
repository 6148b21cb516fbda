"""Tracking context — which effect is running and whether reads are recorded.

Both slots are contextvars. Each effect run enters tracking_scope(), which
sets the slots for the duration of the run and restores the previous values
on exit, so a nested run hands tracking back to the outer effect when it
returns. Outside of any run, nothing is tracked.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from reactivity.effect import ReactiveEffect

# The effect whose computation is currently executing.
active_effect: contextvars.ContextVar[ReactiveEffect | None] = contextvars.ContextVar(
    "active_effect", default=None
)

# Gate for track(). Only true while an active effect is running.
should_track: contextvars.ContextVar[bool] = contextvars.ContextVar(
    "should_track", default=False
)


def is_tracking() -> bool:
    """True when a read right now would be recorded as a dependency."""
    return should_track.get() and active_effect.get() is not None


def get_active_effect() -> ReactiveEffect | None:
    return active_effect.get()


@contextmanager
def tracking_scope(effect: ReactiveEffect) -> Iterator[None]:
    """Make effect the implicit subscriber for the body of the block."""
    effect_token = active_effect.set(effect)
    track_token = should_track.set(True)
    try:
        yield
    finally:
        should_track.reset(track_token)
        active_effect.reset(effect_token)


@contextmanager
def untracked() -> Iterator[None]:
    """Suspend dependency recording for the body of the block.

    Usage:
        def render():
            title = page.get()          # tracked
            with untracked():
                hits = counter.get()    # read, but not a dependency
    """
    token = should_track.set(False)
    try:
        yield
    finally:
        should_track.reset(token)


def reset() -> None:
    """Drop back to the inactive state in the current context."""
    active_effect.set(None)
    should_track.set(False)
