"""Shared pytest fixtures for all tests."""
import itertools
import sys
import types
from typing import Callable, Iterator, List

import pytest

from builtin_mock import Mock

pytest_plugins = ["pytester"]

_NAMESPACE_COUNTER = itertools.count()

# Module source for throwaway namespaces. ``foo`` and ``bar`` are module
# functions; ``sum`` and ``len`` resolve to the builtins.
SAMPLE_SOURCE = '''
def foo(*args):
    return ("original-foo", args)


def bar(*args):
    return ("original-bar", args)


def call_foo(*args):
    return foo(*args)


def call_bar(*args):
    return bar(*args)


def total(*values):
    return sum(values)


def size(value):
    return len(value)


def call_undefined():
    return undefined_function()
'''


@pytest.fixture
def make_namespace() -> Iterator[Callable[..., types.ModuleType]]:
    """Factory for importable modules with a unique name per call.

    Hooks stay installed for the life of a module, so each test gets fresh
    modules instead of sharing one.
    """
    created: List[str] = []

    def _make(source: str = SAMPLE_SOURCE) -> types.ModuleType:
        name = f"builtin_mock_test_ns_{next(_NAMESPACE_COUNTER)}"
        module = types.ModuleType(name)
        exec(compile(source, f"<{name}>", "exec"), module.__dict__)
        sys.modules[name] = module
        created.append(name)
        return module

    yield _make
    for name in created:
        sys.modules.pop(name, None)


@pytest.fixture
def namespace(make_namespace: Callable[..., types.ModuleType]) -> types.ModuleType:
    """A single throwaway namespace module."""
    return make_namespace()


@pytest.fixture(autouse=True)
def _disable_mocks() -> Iterator[None]:
    yield
    Mock.disable_all()
