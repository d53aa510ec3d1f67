"""Fluent builder for mocks."""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from builtin_mock.mock import Mock, Spy
from builtin_mock.models import FunctionIdentity, MockBuilderError


class FunctionProvider(Protocol):
    """Anything that can hand out a replacement function."""

    def get_callable(self) -> Callable[..., Any]:
        ...


class MockBuilder:
    """Builds :class:`Mock` instances step by step.

    The builder keeps its settings after ``build()``, so it can be reused
    to build mocks for several names in the same namespace.

    Example:
        >>> builder = MockBuilder()
        >>> mock = (
        ...     builder.set_namespace("myapp.clock")
        ...     .set_name("time")
        ...     .set_function(lambda: 1417011228.0)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._namespace: Optional[str] = None
        self._name: Optional[str] = None
        self._function: Optional[Callable[..., Any]] = None

    def set_namespace(self, namespace: str) -> "MockBuilder":
        self._namespace = namespace
        return self

    def set_name(self, name: str) -> "MockBuilder":
        self._name = name
        return self

    def set_function(self, function: Callable[..., Any]) -> "MockBuilder":
        self._function = function
        return self

    def set_function_provider(self, provider: FunctionProvider) -> "MockBuilder":
        """Use the callable of ``provider`` as the replacement."""
        return self.set_function(provider.get_callable())

    def build(self) -> Mock:
        """Build a mock from the current settings.

        Raises:
            pydantic.ValidationError: If namespace or name is invalid.
            MockBuilderError: If no function was set.
        """
        identity = self._identity()
        if self._function is None:
            raise MockBuilderError(
                f"No function set for {identity.canonical}. "
                f"Call set_function() or set_function_provider()."
            )
        return Mock(identity.namespace, identity.name, self._function)

    def build_spy(self) -> Spy:
        """Build a spy; without a function set it keeps the original behaviour."""
        identity = self._identity()
        return Spy(identity.namespace, identity.name, self._function)

    def _identity(self) -> FunctionIdentity:
        return FunctionIdentity(
            namespace=self._namespace or "",
            name=self._name or "",
        )
