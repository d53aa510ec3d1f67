"""Unit tests for Spy."""
import dataclasses
import types
from typing import Any

import pytest

from builtin_mock import Invocation, Mock, MockNamespaceError, MockRegistry, Spy


class TestSpy:
    """A spy keeps original behaviour while recording outcomes."""

    def test_forwards_to_original(self, namespace: types.ModuleType) -> None:
        spy = Spy(namespace.__name__, "foo")
        spy.enable()

        assert namespace.call_foo(1, 2) == ("original-foo", (1, 2))
        assert spy.get_recorder().get_calls() == [(1, 2)]
        assert spy.get_invocations() == [
            Invocation(args=(1, 2), kwargs={}, return_value=("original-foo", (1, 2)))
        ]

    def test_forwards_to_builtin(self, namespace: types.ModuleType) -> None:
        spy = Spy(namespace.__name__, "len")
        spy.enable()

        assert namespace.size("abcd") == 4
        assert spy.get_invocations()[0].return_value == 4

    def test_records_exception_and_reraises(self, namespace: types.ModuleType) -> None:
        spy = Spy(namespace.__name__, "len")
        spy.enable()

        with pytest.raises(TypeError):
            namespace.size(5)

        invocation = spy.get_invocations()[0]
        assert invocation.raised
        assert isinstance(invocation.exception, TypeError)
        assert invocation.return_value is None
        assert spy.get_recorder().get_calls() == [(5,)]

    def test_custom_function(self, namespace: types.ModuleType) -> None:
        def double(*args: Any) -> int:
            return 2 * sum(args)

        spy = Spy(namespace.__name__, "foo", double)
        spy.enable()
        assert namespace.call_foo(3) == 6
        assert spy.get_invocations()[0].return_value == 6

    def test_undefined_original_raises_name_error(
        self, namespace: types.ModuleType
    ) -> None:
        spy = Spy(namespace.__name__, "undefined_function")
        spy.enable()
        with pytest.raises(NameError):
            namespace.call_undefined()
        assert spy.get_invocations()[0].raised

    def test_not_recorded_after_disable(self, namespace: types.ModuleType) -> None:
        spy = Spy(namespace.__name__, "foo")
        spy.enable()
        namespace.call_foo(1)
        spy.disable()
        namespace.call_foo(2)
        assert len(spy.get_invocations()) == 1

    def test_original_survives_refused_second_spelling(
        self, namespace: types.ModuleType
    ) -> None:
        """A refused case variant does not change what the spy forwards to."""
        Mock(namespace.__name__, "foo", lambda *a: None).define()
        with pytest.raises(MockNamespaceError):
            Mock(namespace.__name__, "FOO", lambda *a: None).define()

        spy = Spy(namespace.__name__, "foo")
        spy.enable()
        assert namespace.call_foo(1) == ("original-foo", (1,))

    def test_forwards_to_original_held_by_hook(
        self, namespace: types.ModuleType
    ) -> None:
        """The spy reads the original from the installed hook, not the ledger."""
        spy = Spy(namespace.__name__, "foo")
        spy.define()
        registry = MockRegistry.get_instance()
        stale = registry.get_installation(spy.get_canonical_function_name())
        assert stale is not None
        registry.add_installation(dataclasses.replace(stale, original=None))

        spy.enable()
        assert namespace.call_foo(2) == ("original-foo", (2,))
