"""Access controllers deciding who may append to a log."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol


class LogEntry(Protocol):
    """What an access controller may inspect on an entry."""

    payload: bytes
    identity: Any


class CanAppendContext(Protocol):
    """Extra context handed to an access controller."""

    def log_entries(self) -> list[Any]:
        """Return the entries currently in the log."""


class AccessController(ABC):
    """Decides whether an identity may append an entry."""

    @abstractmethod
    def can_append(self, entry: Any, identity_provider: Any, context: Any) -> bool:
        """Return True when appending is allowed; raise to deny it."""


class DefaultAccessController(AccessController):
    """Lets anyone append to the log."""

    allow_all: bool = True

    def can_append(self, entry: Any, identity_provider: Any, context: Any) -> bool:
        return self.allow_all