"""Tests for the Runtime façade."""

from pycadence.executor import CallbackList, Runtime, Scheduler

LOG: list[str] = []


def record_callback():
    LOG.append("callback")


def test_callbacks_run_before_routines(runtime):
    LOG.clear()

    def routine():
        while True:
            LOG.append("routine")
            yield

    runtime.register(record_callback)
    runtime.start(routine)
    runtime.tick(0.1)
    runtime.tick(0.1)

    assert LOG == ["routine", "callback", "routine", "callback", "routine"]


def test_pass_throughs_reach_owned_components(runtime):
    def routine():
        yield
        yield

    handle = runtime.start(routine)
    runtime.register(record_callback)

    assert runtime.scheduler.is_active(handle)
    assert record_callback in runtime.callbacks

    assert runtime.cancel(handle) is True
    assert runtime.unregister(record_callback) is True
    assert runtime.scheduler.active_count == 0
    assert len(runtime.callbacks) == 0


def test_uses_injected_components():
    scheduler, callbacks = Scheduler(), CallbackList()
    runtime = Runtime(scheduler=scheduler, callbacks=callbacks)

    assert runtime.scheduler is scheduler
    assert runtime.callbacks is callbacks


def test_shutdown_drops_everything(runtime):
    LOG.clear()

    def routine():
        while True:
            yield

    runtime.start(routine)
    runtime.register(record_callback)
    runtime.shutdown()
    runtime.tick(0.1)

    assert LOG == []
    assert runtime.scheduler.active_count == 0
