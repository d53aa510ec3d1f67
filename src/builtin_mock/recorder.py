"""Call history of a single mock."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from builtin_mock.models import RecordedCall


class Recorder:
    """Append-only log of the calls made to one mock.

    Calls are kept in call order, duplicates included. There is no way to
    remove or edit an entry; a new mock starts with a new recorder.
    """

    def __init__(self) -> None:
        self._calls: List[RecordedCall] = []

    def record(
        self,
        arguments: Sequence[Any],
        keywords: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Append a snapshot of one call's arguments."""
        self._calls.append(
            RecordedCall(args=tuple(arguments), kwargs=dict(keywords or {}))
        )

    def get_calls(self) -> List[Tuple[Any, ...]]:
        """Return the positional arguments of every call, oldest first."""
        return [call.args for call in self._calls]

    def get_recorded_calls(self) -> List[RecordedCall]:
        """Return every call including keyword arguments, oldest first."""
        return list(self._calls)

    def get_keyword_calls(self) -> List[Dict[str, Any]]:
        return [dict(call.kwargs) for call in self._calls]

    def __len__(self) -> int:
        return len(self._calls)

    def __iter__(self) -> Iterator[RecordedCall]:
        return iter(list(self._calls))

    def __repr__(self) -> str:
        return f"Recorder(calls={len(self._calls)})"
