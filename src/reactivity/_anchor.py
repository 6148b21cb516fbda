"""Data anchor — the process-wide dependency registry.

Behavior modules (effect, observable) read and write this state but never
own it, so they can be reloaded while the registry persists.
"""

from reactivity import _tracking
from reactivity.dep import DependencyRegistry

registry = DependencyRegistry()


def get_registry() -> DependencyRegistry:
    return registry


def reset() -> None:
    """Forget all tracked targets and clear the tracking context.

    Meant for test isolation. Existing effects keep their deps lists, but
    nothing will trigger them until they run again and re-track.
    """
    registry.clear()
    _tracking.reset()
