"""Tests for step results, GeneratorStep and as_step."""

import pytest

from pycadence.core import (
    CONTINUE,
    DONE,
    ChainTo,
    Continue,
    DelayFor,
    Done,
    GeneratorStep,
    StepExhaustedError,
    Unsupported,
    as_step,
    wait,
)
from conftest import ScriptedStep


def _empty():
    return
    yield  # makes this a generator function


# ==============================================================================
# Yield interpretation
# ==============================================================================


def test_bare_yield_continues():
    def routine():
        yield

    step = GeneratorStep(routine())
    assert step.advance(0.0) == CONTINUE
    assert step.advance(0.1) == DONE


def test_yielded_wait_becomes_delay():
    def routine():
        yield wait(1.5)

    result = GeneratorStep(routine()).advance(0.0)
    assert result == DelayFor(1.5)


def test_yielded_generator_chains():
    child = _empty()

    def routine():
        yield child

    result = GeneratorStep(routine()).advance(0.0)
    assert isinstance(result, ChainTo)
    assert result.child is child


def test_yielded_primitive_chains():
    child = ScriptedStep()

    def routine():
        yield child

    result = GeneratorStep(routine()).advance(0.0)
    assert result == ChainTo(child)


@pytest.mark.parametrize("request_value", [42, 1.0, "later", object()])
def test_unknown_yield_is_unsupported(request_value):
    def routine():
        yield request_value

    result = GeneratorStep(routine()).advance(0.0)
    assert isinstance(result, Unsupported)
    assert result.request is request_value


def test_step_result_passes_through():
    def routine():
        yield CONTINUE
        yield DelayFor(0.25)

    step = GeneratorStep(routine())
    assert isinstance(step.advance(0.0), Continue)
    assert step.advance(0.0) == DelayFor(0.25)


def test_elapsed_is_sent_into_generator():
    received = []

    def routine():
        while True:
            received.append((yield))

    step = GeneratorStep(routine())
    step.advance(0.0)  # primes, nothing received yet
    step.advance(0.1)
    step.advance(0.2)

    assert received == [0.1, 0.2]


# ==============================================================================
# Single-use contract
# ==============================================================================


def test_return_reports_done_and_exhausts():
    step = GeneratorStep(_empty())

    assert step.advance(0.0) == DONE
    assert step.finished
    with pytest.raises(StepExhaustedError):
        step.advance(0.0)


def test_yielding_done_closes_generator():
    cleaned_up = []

    def routine():
        try:
            yield DONE
            yield  # never reached
        finally:
            cleaned_up.append(True)

    step = GeneratorStep(routine())
    assert isinstance(step.advance(0.0), Done)
    assert step.finished
    assert cleaned_up == [True]


def test_exception_propagates_and_exhausts():
    def routine():
        yield
        raise RuntimeError("boom")

    step = GeneratorStep(routine())
    step.advance(0.0)

    with pytest.raises(RuntimeError, match="boom"):
        step.advance(0.0)
    assert step.finished
    with pytest.raises(StepExhaustedError):
        step.advance(0.0)


# ==============================================================================
# as_step coercion
# ==============================================================================


def test_as_step_returns_primitive_unchanged():
    primitive = ScriptedStep()
    assert as_step(primitive) is primitive


def test_as_step_wraps_generator():
    assert isinstance(as_step(_empty()), GeneratorStep)


def test_as_step_calls_generator_function():
    step = as_step(_empty)
    assert isinstance(step, GeneratorStep)
    assert step.advance(0.0) == DONE


@pytest.mark.parametrize("value", [None, 3, "routine", lambda: None, [1, 2]])
def test_as_step_rejects_non_routines(value):
    with pytest.raises(TypeError):
        as_step(value)


def test_generator_step_rejects_non_generator():
    with pytest.raises(TypeError):
        GeneratorStep([1, 2, 3])


# ==============================================================================
# Delay requests
# ==============================================================================


def test_wait_builds_float_delay():
    assert wait(2) == DelayFor(2.0)
    assert isinstance(wait(2).duration, float)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        wait(-0.1)
    with pytest.raises(ValueError):
        DelayFor(-1.0)
    with pytest.raises(ValueError):
        wait(float("nan"))


def test_results_have_readable_str():
    assert str(CONTINUE) == "Continue"
    assert str(DONE) == "Done"
    assert str(DelayFor(0.5)) == "DelayFor(0.5)"
    assert str(Unsupported(42)) == "Unsupported(int)"
