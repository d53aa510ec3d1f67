"""Validate the README quickstart flows end to end."""
import io
import types
from typing import Any, Callable

import pytest

from builtin_mock import (
    Mock,
    MockBuilder,
    MockEnabledError,
    SleepEnvironmentBuilder,
    Spy,
)
from builtin_mock.pytest_helpers import assert_called_times, assert_called_with

CONFIG_SOURCE = '''
def load_config(path):
    with open(path) as fh:
        result = {}
        for line in fh:
            key, _, value = line.partition("=")
            result[key.strip()] = value.strip()
        return result
'''

RETRY_SOURCE = '''
import time as _time

time = _time.time
sleep = _time.sleep


def wait_until(predicate, timeout):
    deadline = time() + timeout
    while not predicate():
        if time() >= deadline:
            return False
        sleep(1)
    return True
'''


class TestQuickstart:
    """Flows from README.md."""

    def test_open_is_mocked(self, make_namespace: Callable[..., types.ModuleType]) -> None:
        config = make_namespace(CONFIG_SOURCE)

        def fake_open(path: str, *args: Any, **kwargs: Any) -> io.StringIO:
            return io.StringIO("debug = true")

        mock = (
            MockBuilder()
            .set_namespace(config.__name__)
            .set_name("open")
            .set_function(fake_open)
            .build()
        )
        with mock:
            assert config.load_config("app.ini") == {"debug": "true"}

        assert mock.get_recorder().get_calls() == [("app.ini",)]
        assert_called_with(mock, "app.ini")

    def test_open_falls_back_when_disabled(
        self,
        make_namespace: Callable[..., types.ModuleType],
        tmp_path: Any,
    ) -> None:
        config = make_namespace(CONFIG_SOURCE)
        path = tmp_path / "app.ini"
        path.write_text("level = info\n", encoding="utf-8")

        mock = Mock(config.__name__, "open", lambda *a: io.StringIO("x = y"))
        mock.enable()
        mock.disable()

        assert config.load_config(str(path)) == {"level": "info"}
        assert_called_times(mock, 0)

    def test_wait_until_times_out_without_sleeping(
        self, make_namespace: Callable[..., types.ModuleType]
    ) -> None:
        retry = make_namespace(RETRY_SOURCE)
        env = SleepEnvironmentBuilder().add_namespace(retry.__name__).set_timestamp(0).build()

        with env:
            assert retry.wait_until(lambda: False, timeout=5) is False
            assert retry.time() == 5

        sleep_mock = next(m for m in env.get_mocks() if m.get_name() == "sleep")
        assert_called_times(sleep_mock, 5)

    def test_spy_observes_real_calls(
        self, make_namespace: Callable[..., types.ModuleType]
    ) -> None:
        retry = make_namespace(RETRY_SOURCE)
        answers = iter([False, True])
        spy = Spy(retry.__name__, "sleep", lambda seconds: None)

        with spy:
            assert retry.wait_until(lambda: next(answers), timeout=60) is True

        assert spy.get_recorder().get_calls() == [(1,)]

    def test_second_mock_requires_disable(
        self, make_namespace: Callable[..., types.ModuleType]
    ) -> None:
        config = make_namespace(CONFIG_SOURCE)
        first = Mock(config.__name__, "open", lambda *a: io.StringIO("a = 1"))
        second = Mock(config.__name__, "open", lambda *a: io.StringIO("b = 2"))

        first.enable()
        with pytest.raises(MockEnabledError):
            second.enable()

        first.disable()
        second.enable()
        assert config.load_config("any") == {"b": "2"}
