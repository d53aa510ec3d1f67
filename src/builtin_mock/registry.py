"""Process-wide registry of enabled mocks and installed hooks.

Every installed hook asks the registry, on each call, which mock currently
owns its function identity. The registry enforces at most one enabled mock
per identity and keeps the ledger of hooks installed so far.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, ClassVar, Dict, List, Optional

from builtin_mock.models import Installation, MockRegistryError

if TYPE_CHECKING:
    from builtin_mock.mock import Mock

logger = logging.getLogger("builtin_mock.registry")


class MockRegistry:
    """Maps canonical function identities to the enabled mock.

    The registry does not own its mocks: callers keep their references and
    may enable the same instance again after disabling it.

    Example:
        >>> registry = MockRegistry.get_instance()
        >>> registry.get_mock("myapp.clock.time") is None
        True
    """

    _instance: ClassVar[Optional["MockRegistry"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._mocks: Dict[str, "Mock"] = {}
        self._installations: Dict[str, Installation] = {}
        self.lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "MockRegistry":
        """Return the process-wide registry, creating it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def is_registered(self, mock: "Mock") -> bool:
        """True if any mock is registered under ``mock``'s identity."""
        return mock.get_canonical_function_name() in self._mocks

    def register(self, mock: "Mock") -> None:
        """Register ``mock`` under its identity.

        Raises:
            MockRegistryError: If the identity is already registered.
                ``Mock.enable()`` checks :meth:`is_registered` first.
        """
        identity = mock.get_canonical_function_name()
        with self.lock:
            if identity in self._mocks:
                raise MockRegistryError(
                    f"A mock is already registered for {identity}"
                )
            self._mocks[identity] = mock
        logger.debug("Registered mock for %s", identity)

    def unregister(self, mock: "Mock") -> None:
        """Remove ``mock`` if it is the instance registered for its identity."""
        identity = mock.get_canonical_function_name()
        with self.lock:
            if self._mocks.get(identity) is not mock:
                return
            del self._mocks[identity]
        logger.debug("Unregistered mock for %s", identity)

    def unregister_all(self) -> None:
        """Remove every registered mock. Installed hooks stay in place."""
        with self.lock:
            count = len(self._mocks)
            self._mocks.clear()
        if count:
            logger.debug("Unregistered all %d mocks", count)

    def get_mock(self, identity: str) -> Optional["Mock"]:
        """Return the enabled mock for ``identity``, or None."""
        return self._mocks.get(identity)

    def registered_identities(self) -> List[str]:
        return sorted(self._mocks)

    def add_installation(self, installation: Installation) -> None:
        with self.lock:
            self._installations[installation.identity] = installation

    def get_installation(self, identity: str) -> Optional[Installation]:
        return self._installations.get(identity)

    def is_installed(self, identity: str) -> bool:
        return identity in self._installations
