"""pytest plugin for builtin-mock.

Registered through the ``pytest11`` entry point. After every test all
enabled mocks are disabled, so no mock leaks into the next test. Set
``builtin_mock_autodisable = false`` in the ini file to turn that off.
"""
from __future__ import annotations

from typing import Iterator

import pytest

from builtin_mock.builder import MockBuilder
from builtin_mock.mock import Mock

AUTODISABLE_INI = "builtin_mock_autodisable"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        AUTODISABLE_INI,
        type="bool",
        default=True,
        help="Disable all builtin-mock mocks after each test (default: true)",
    )


@pytest.fixture(autouse=True)
def _builtin_mock_autodisable(request: pytest.FixtureRequest) -> Iterator[None]:
    yield
    if request.config.getini(AUTODISABLE_INI):
        Mock.disable_all()


@pytest.fixture
def mock_builder() -> MockBuilder:
    """A fresh MockBuilder."""
    return MockBuilder()
