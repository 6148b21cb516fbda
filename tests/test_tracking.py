"""Tests for the tracking context and untracked()."""

from reactivity import (
    Observable,
    effect,
    get_active_effect,
    get_registry,
    is_tracking,
    untracked,
)


class TestTrackingContext:
    def test_inactive_by_default(self):
        assert is_tracking() is False
        assert get_active_effect() is None

    def test_untracked_outside_effect(self):
        with untracked():
            assert is_tracking() is False
        assert is_tracking() is False


class TestUntracked:
    def test_reads_not_recorded(self):
        o = Observable(1)
        log = []

        def fn():
            with untracked():
                log.append(o.get())

        runner = effect(fn)
        assert runner.effect.deps == []
        o.set(2)
        assert log == [1]

    def test_tracking_resumes_after_block(self):
        hidden = Observable(1)
        shown = Observable(2)
        log = []

        def fn():
            with untracked():
                hidden.get()
            log.append(shown.get())

        effect(fn)
        hidden.set(10)
        assert log == [2]
        shown.set(20)
        assert log == [2, 20]

    def test_nested_effect_inside_untracked_still_tracks(self):
        o = Observable(1)
        inner = []

        def outer():
            with untracked():
                inner.append(effect(lambda: o.get()))

        outer_runner = effect(outer)
        assert len(inner[0].effect.deps) == 1
        assert outer_runner.effect not in get_registry().get_dep(o, "value")

    def test_flag_restored_inside_run(self):
        states = []

        def fn():
            with untracked():
                states.append(is_tracking())
            states.append(is_tracking())

        effect(fn)
        assert states == [False, True]
