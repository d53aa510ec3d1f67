"""Groups of mocks enabled and disabled together."""
from __future__ import annotations

import builtins
import logging
from types import ModuleType, TracebackType
from typing import Iterable, List, Optional, Protocol, Type, runtime_checkable

from builtin_mock.functions import FixedTimeFunction, SleepFunction
from builtin_mock.mock import Mock, resolve_namespace

logger = logging.getLogger("builtin_mock.environment")

_CLOCK_FUNCTIONS = ("time", "monotonic", "perf_counter")


def _is_defined(module: ModuleType, name: str) -> bool:
    return hasattr(module, name) or hasattr(builtins, name)


@runtime_checkable
class Deactivatable(Protocol):
    """Something that can be switched off after a test."""

    def disable(self) -> None:
        ...


class MockEnvironment:
    """A set of mocks handled as one unit."""

    def __init__(self, mocks: Iterable[Mock] = ()) -> None:
        self._mocks: List[Mock] = list(mocks)

    def add_mock(self, mock: Mock) -> None:
        self._mocks.append(mock)

    def get_mocks(self) -> List[Mock]:
        return list(self._mocks)

    def enable(self) -> None:
        """Enable all mocks.

        If one of them cannot be enabled, the ones enabled by this call are
        disabled again before the error propagates.
        """
        enabled: List[Mock] = []
        try:
            for mock in self._mocks:
                mock.enable()
                enabled.append(mock)
        except Exception:
            for mock in enabled:
                mock.disable()
            raise
        logger.debug("Enabled environment of %d mocks", len(enabled))

    def define(self) -> None:
        for mock in self._mocks:
            mock.define()

    def disable(self) -> None:
        for mock in self._mocks:
            mock.disable()

    def __enter__(self) -> "MockEnvironment":
        self.enable()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.disable()


class SleepEnvironmentBuilder:
    """Builds an environment where ``sleep`` advances a frozen clock.

    In every added namespace ``time``, ``monotonic`` and ``perf_counter``
    return the same fixed timestamp, and ``sleep(n)`` returns immediately
    after moving that timestamp forward by ``n`` seconds. Names the module
    does not define, and that are not builtins, are left alone.

    Example:
        >>> env = (
        ...     SleepEnvironmentBuilder()
        ...     .add_namespace("myapp.retry")
        ...     .set_timestamp(1417011228)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._namespaces: List[str] = []
        self._timestamp: Optional[float] = None

    def add_namespace(self, namespace: str) -> "SleepEnvironmentBuilder":
        self._namespaces.append(namespace)
        return self

    def set_timestamp(self, timestamp: float) -> "SleepEnvironmentBuilder":
        self._timestamp = timestamp
        return self

    def build(self) -> MockEnvironment:
        clock = FixedTimeFunction(self._timestamp)
        sleep = SleepFunction([clock])
        environment = MockEnvironment()
        for namespace in self._namespaces:
            module = resolve_namespace(namespace)
            for name in _CLOCK_FUNCTIONS:
                if _is_defined(module, name):
                    environment.add_mock(Mock(namespace, name, clock))
            if _is_defined(module, "sleep"):
                environment.add_mock(Mock(namespace, "sleep", sleep))
        return environment
