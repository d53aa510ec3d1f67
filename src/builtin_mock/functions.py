"""Ready-made replacement functions."""
from __future__ import annotations

import time
from typing import Any, Callable, Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Incrementable(Protocol):
    """A fixed value that can be moved forward, like a frozen clock."""

    def increment(self, increment: float) -> None:
        ...


class FixedValueFunction:
    """Replacement that ignores its arguments and returns one value."""

    def __init__(self, value: Any = None) -> None:
        self._value = value

    def set_value(self, value: Any) -> None:
        self._value = value

    def get_callable(self) -> Callable[..., Any]:
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._value


class FixedTimeFunction:
    """Frozen clock for ``time``, ``monotonic`` and ``perf_counter``.

    Defaults to the current time when no timestamp is given.
    """

    def __init__(self, timestamp: Optional[float] = None) -> None:
        self._timestamp = time.time() if timestamp is None else float(timestamp)

    def set_timestamp(self, timestamp: float) -> None:
        self._timestamp = float(timestamp)

    def get_timestamp(self) -> float:
        return self._timestamp

    def increment(self, increment: float) -> None:
        self._timestamp += increment

    def get_callable(self) -> Callable[..., float]:
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> float:
        return self._timestamp


class SleepFunction:
    """Replacement for ``sleep`` that returns at once.

    Instead of blocking, every incrementable clock is moved forward by the
    requested number of seconds.
    """

    def __init__(self, incrementables: Iterable[Incrementable] = ()) -> None:
        self._incrementables: List[Incrementable] = list(incrementables)

    def add_incrementable(self, incrementable: Incrementable) -> None:
        self._incrementables.append(incrementable)

    def get_callable(self) -> Callable[[float], None]:
        return self

    def __call__(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("sleep length must be non-negative")
        for incrementable in self._incrementables:
            incrementable.increment(seconds)
