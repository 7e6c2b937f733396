"""
Basic tests for pycadence - package surface.

Tests that the public names are importable from the package root.
"""

import pycadence


def test_import():
    """Test that the module exposes its public API."""
    for name in ("Scheduler", "Runtime", "CallbackList", "TaskHandle", "wait", "Ticker"):
        assert hasattr(pycadence, name)


def test_version():
    """Test that version is available."""
    assert isinstance(pycadence.__version__, str)


def test_all_names_resolve():
    for name in pycadence.__all__:
        assert getattr(pycadence, name) is not None


def test_quickstart():
    log = []

    def countdown(n):
        while n > 0:
            log.append(n)
            n -= 1
            yield pycadence.wait(1.0)
        log.append("liftoff")

    runtime = pycadence.Runtime()
    runtime.start(countdown(2))
    for _ in range(4):
        runtime.tick(1.0)

    assert log == [2, 1, "liftoff"]
