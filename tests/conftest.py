import pytest

import reactivity


@pytest.fixture(autouse=True)
def _fresh_registry():
    """Each test starts with an empty registry and no active effect."""
    reactivity.reset()
    yield
    reactivity.reset()
