"""Reactivity: fine-grained effect tracking with track/trigger."""

from importlib.metadata import version as _version

__version__ = _version("reactivity")

from reactivity._anchor import get_registry, reset
from reactivity._tracking import get_active_effect, is_tracking, untracked
from reactivity.dep import Dep, DependencyRegistry
from reactivity.effect import (
    ReactiveEffect,
    Runner,
    effect,
    stop,
    track,
    track_effects,
    trigger,
    trigger_effects,
)
from reactivity.observable import ITERATE_KEY, Observable, ObservableDict

__all__ = [
    "ReactiveEffect",
    "Runner",
    "effect",
    "stop",
    "track",
    "trigger",
    "track_effects",
    "trigger_effects",
    "is_tracking",
    "get_active_effect",
    "untracked",
    "Dep",
    "DependencyRegistry",
    "get_registry",
    "reset",
    "Observable",
    "ObservableDict",
    "ITERATE_KEY",
]
