"""Mocks for built-in and other module-level functions.

A mock replaces a function inside one module namespace. Python resolves a
bare name through the module globals before the builtins, so once a hook is
installed as a module attribute, every unqualified call to that name in the
module goes through the hook. The hook looks up the enabled mock on each call
and falls back to the original function when there is none.

Example:
    >>> from builtin_mock import Mock
    >>> mock = Mock("myapp.clock", "time", lambda: 1234.0)
    >>> mock.enable()
    >>> # myapp.clock.now() now sees time() == 1234.0
    >>> mock.disable()
"""

from __future__ import annotations

import builtins
import functools
import importlib
import logging
from types import ModuleType, TracebackType
from typing import Any, Callable, List, Mapping, Optional, Sequence, Type

from builtin_mock.models import (
    Installation,
    Invocation,
    MockEnabledError,
    MockNamespaceError,
    canonical_function_name,
)
from builtin_mock.recorder import Recorder
from builtin_mock.registry import MockRegistry

logger = logging.getLogger("builtin_mock.mock")

# Attributes set on installed hooks: the identity they dispatch for and the
# function they fall back to.
HOOK_ATTRIBUTE = "__builtin_mock_identity__"
ORIGINAL_ATTRIBUTE = "__builtin_mock_original__"

_MISSING = object()


def _build_hook(
    identity: str,
    name: str,
    original: Optional[Callable[..., Any]],
) -> Callable[..., Any]:
    def hook(*args: Any, **kwargs: Any) -> Any:
        mock = MockRegistry.get_instance().get_mock(identity)
        if mock is None:
            if original is None:
                raise NameError(f"name {name!r} is not defined")
            return original(*args, **kwargs)
        return mock.call(args, kwargs)

    if original is not None:
        functools.update_wrapper(hook, original, updated=())
    else:
        hook.__name__ = name
        hook.__qualname__ = name
    setattr(hook, HOOK_ATTRIBUTE, identity)
    setattr(hook, ORIGINAL_ATTRIBUTE, original)
    return hook


def resolve_namespace(namespace: str) -> ModuleType:
    """Import the module a namespace names.

    Raises:
        MockNamespaceError: If the namespace is empty or cannot be imported.
    """
    trimmed = namespace.strip(".")
    if not trimmed:
        raise MockNamespaceError(f"Empty namespace: {namespace!r}")
    try:
        return importlib.import_module(trimmed)
    except (ImportError, ValueError) as e:
        raise MockNamespaceError(
            f"Cannot import namespace {trimmed!r}: {e}"
        ) from e


class Mock:
    """Replacement for one function identity, with its own call history.

    Args:
        namespace: Dotted path of the module the function is mocked in.
        name: Name of the mocked function.
        function: Replacement called with the intercepted arguments.
    """

    def __init__(
        self,
        namespace: str,
        name: str,
        function: Callable[..., Any],
    ) -> None:
        self._namespace = namespace
        self._name = name
        self._function = function
        self._recorder = Recorder()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.get_canonical_function_name()}, "
            f"calls={len(self._recorder)})"
        )

    def __enter__(self) -> "Mock":
        self.enable()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.disable()

    def get_recorder(self) -> Recorder:
        """Return the recorder every call to this mock is written to."""
        return self._recorder

    def get_namespace(self) -> str:
        """Return the namespace without enclosing separators."""
        return self._namespace.strip(".")

    def get_name(self) -> str:
        return self._name

    def get_canonical_function_name(self) -> str:
        """Return the case-insensitive identity used as the registry key."""
        return canonical_function_name(self._namespace, self._name)

    def is_enabled(self) -> bool:
        registry = MockRegistry.get_instance()
        return registry.get_mock(self.get_canonical_function_name()) is self

    def enable(self) -> None:
        """Enable this mock.

        Raises:
            MockEnabledError: If any mock for the same identity is enabled.
            MockNamespaceError: If the namespace cannot be imported.
        """
        registry = MockRegistry.get_instance()
        identity = self.get_canonical_function_name()
        with registry.lock:
            if registry.is_registered(self):
                raise MockEnabledError(identity)
            self.define()
            registry.register(self)
        logger.debug("Enabled mock for %s", identity)

    def disable(self) -> None:
        """Disable this mock. Does nothing if it is not enabled."""
        MockRegistry.get_instance().unregister(self)

    @classmethod
    def disable_all(cls) -> None:
        """Disable every enabled mock of the process."""
        MockRegistry.get_instance().unregister_all()

    def call(
        self,
        arguments: Sequence[Any],
        keywords: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Record a call and forward it to the replacement function.

        Called by the installed hook. The call is recorded before the
        replacement runs, so a failing replacement still leaves a record.
        """
        self._recorder.record(arguments, keywords)
        return self._function(*arguments, **(keywords or {}))

    def define(self) -> None:
        """Install the hook for this identity into its namespace.

        ``enable()`` does this for you. Defining has no effect on behaviour
        until a mock is enabled, and does nothing if the hook is already
        installed. Call it up front when code under test binds the name
        before the mock is enabled, e.g. ``from myapp.clock import time``.

        One identity is installed under one spelling per module: once
        ``foo`` has a hook, defining ``FOO`` in the same module fails.

        Raises:
            MockNamespaceError: If the namespace cannot be imported, or the
                identity is already installed under another spelling.
        """
        registry = MockRegistry.get_instance()
        identity = self.get_canonical_function_name()
        with registry.lock:
            module = self._import_namespace()
            current = getattr(module, self._name, _MISSING)
            if getattr(current, HOOK_ATTRIBUTE, None) == identity:
                return

            installed = registry.get_installation(identity)
            if (
                installed is not None
                and installed.namespace == module.__name__
                and installed.name != self._name
                and getattr(module, installed.name, None) is installed.hook
            ):
                raise MockNamespaceError(
                    f"{identity} is already installed as "
                    f"{module.__name__}.{installed.name}; "
                    f"use that spelling instead of {self._name!r}"
                )

            if current is _MISSING:
                original = getattr(builtins, self._name, None)
            else:
                original = current
            hook = _build_hook(identity, self._name, original)
            setattr(module, self._name, hook)
            registry.add_installation(
                Installation(
                    identity=identity,
                    namespace=module.__name__,
                    name=self._name,
                    hook=hook,
                    original=original,
                )
            )
        logger.info("Installed hook for %s", identity)

    def _import_namespace(self) -> ModuleType:
        return resolve_namespace(self._namespace)


class Spy(Mock):
    """Mock that keeps the original behaviour and records every outcome.

    Without a ``function`` the spy forwards to the original function. Each
    call is recorded in the recorder like any mock, and additionally as an
    :class:`Invocation` with its return value or exception.
    """

    def __init__(
        self,
        namespace: str,
        name: str,
        function: Optional[Callable[..., Any]] = None,
    ) -> None:
        if function is None:
            function = self._call_original
        super().__init__(namespace, name, function)
        self._invocations: List[Invocation] = []

    def get_invocations(self) -> List[Invocation]:
        return list(self._invocations)

    def call(
        self,
        arguments: Sequence[Any],
        keywords: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        args = tuple(arguments)
        kwargs = dict(keywords or {})
        try:
            result = super().call(args, kwargs)
        except Exception as e:
            self._invocations.append(Invocation(args, kwargs, exception=e))
            raise
        self._invocations.append(Invocation(args, kwargs, return_value=result))
        return result

    def _call_original(self, *args: Any, **kwargs: Any) -> Any:
        hook = getattr(self._import_namespace(), self._name, None)
        original = getattr(hook, ORIGINAL_ATTRIBUTE, None)
        if original is None:
            raise NameError(f"name {self._name!r} is not defined")
        return original(*args, **kwargs)
