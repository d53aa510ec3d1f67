"""Reusable assertions on the call history of mocks.

Consumers can import these in their own tests:
    from builtin_mock.pytest_helpers import (
        assert_called,
        assert_called_with,
        assert_not_called,
    )
"""
from __future__ import annotations

from typing import Any, List

from builtin_mock.mock import Mock
from builtin_mock.models import RecordedCall


def _history(calls: List[RecordedCall]) -> str:
    if not calls:
        return "  (no calls)"
    return "\n".join(f"  {i}: {call!r}" for i, call in enumerate(calls))


def assert_called(mock: Mock) -> List[RecordedCall]:
    """Assert the mock was called at least once."""
    calls = mock.get_recorder().get_recorded_calls()
    if not calls:
        raise AssertionError(
            f"Expected {mock.get_canonical_function_name()} to be called."
        )
    return calls


def assert_not_called(mock: Mock) -> None:
    calls = mock.get_recorder().get_recorded_calls()
    if calls:
        raise AssertionError(
            f"Expected {mock.get_canonical_function_name()} not to be called; "
            f"recorded calls:\n" + _history(calls)
        )


def assert_called_times(mock: Mock, times: int) -> List[RecordedCall]:
    """Assert the mock was called exactly ``times`` times."""
    calls = mock.get_recorder().get_recorded_calls()
    if len(calls) != times:
        raise AssertionError(
            f"Expected {mock.get_canonical_function_name()} to be called "
            f"{times} time(s), got {len(calls)}:\n" + _history(calls)
        )
    return calls


def assert_called_with(mock: Mock, *args: Any, **kwargs: Any) -> RecordedCall:
    """Assert the most recent call used exactly these arguments."""
    calls = assert_called(mock)
    expected = RecordedCall(args=args, kwargs=kwargs)
    if calls[-1] != expected:
        raise AssertionError(
            f"Expected last call of {mock.get_canonical_function_name()} "
            f"to be {expected!r}; recorded calls:\n" + _history(calls)
        )
    return calls[-1]


def assert_any_call(mock: Mock, *args: Any, **kwargs: Any) -> RecordedCall:
    """Assert some recorded call used exactly these arguments."""
    calls = mock.get_recorder().get_recorded_calls()
    expected = RecordedCall(args=args, kwargs=kwargs)
    for call in calls:
        if call == expected:
            return call
    raise AssertionError(
        f"Expected {mock.get_canonical_function_name()} to have been called "
        f"as {expected!r}; recorded calls:\n" + _history(calls)
    )
