"""Core data models for builtin-mock library."""
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

_NAMESPACE_SEPARATOR = "."

_MODULE_PATH_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def canonical_function_name(namespace: str, name: str) -> str:
    """Build the case-insensitive identity of a function.

    The namespace is stripped of enclosing separators, so ``".myapp.io."``
    and ``"myapp.io"`` name the same module.

    Example:
        >>> canonical_function_name("MyApp.IO", "Open")
        'myapp.io.open'
    """
    trimmed = namespace.strip(_NAMESPACE_SEPARATOR)
    return f"{trimmed}{_NAMESPACE_SEPARATOR}{name}".lower()


class FunctionIdentity(BaseModel):
    """Validated (namespace, name) pair naming a mockable function."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(
        ...,
        min_length=1,
        description="Dotted path of the module in which the function is mocked",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Attribute name of the function inside the module",
    )

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, v: str) -> str:
        trimmed = v.strip(_NAMESPACE_SEPARATOR)
        if not _MODULE_PATH_RE.match(trimmed):
            raise ValueError(
                f"namespace must be a dotted module path; got {v!r}"
            )
        return v

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"name must be a Python identifier; got {v!r}")
        return v

    @property
    def canonical(self) -> str:
        """Registry key for this identity."""
        return canonical_function_name(self.namespace, self.name)

    def __repr__(self) -> str:
        return f"FunctionIdentity({self.canonical})"


@dataclass(frozen=True)
class RecordedCall:
    """Arguments of one call to a mocked function."""

    args: Tuple[Any, ...]
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"call({', '.join(parts)})"


@dataclass(frozen=True)
class Installation:
    """Ledger entry for a hook installed into a module namespace."""

    identity: str
    namespace: str
    name: str
    hook: Callable[..., Any]
    original: Optional[Callable[..., Any]]


@dataclass(frozen=True)
class Invocation:
    """One call observed by a spy, with its outcome."""

    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]
    return_value: Any = None
    exception: Optional[BaseException] = None

    @property
    def raised(self) -> bool:
        return self.exception is not None


# Custom Exceptions
class BuiltinMockError(Exception):
    """Base exception for all library errors."""
    pass


class MockEnabledError(BuiltinMockError):
    """A mock for the same function identity is already enabled."""

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(
            f"{identity} is already enabled. "
            f"Call disable() on the existing mock."
        )


class MockRegistryError(BuiltinMockError):
    """The registry was asked to register a duplicate identity."""
    pass


class MockNamespaceError(BuiltinMockError):
    """The namespace of a mock cannot be imported."""
    pass


class MockBuilderError(BuiltinMockError):
    """MockBuilder is missing a required part."""
    pass
