"""Option records and I/O interfaces shared across the log."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .access import AccessController
    from .clock import LamportClock
    from .ordered_entries import OrderedEntries

KEY_ENCRYPTED_LINKS = "encrypted_links"
KEY_ENCRYPTED_LINKS_NONCE = "encrypted_links_nonce"

ExcludeFunc = Callable[[Any], bool]
EntrySortFn = Callable[[Any, Any], int]
ProgressCallback = Callable[[Any], None]


@dataclass
class WriteOptions:
    """How an object is written to the content store."""

    pin: bool = False
    encrypted_links: str = ""
    encrypted_links_nonce: str = ""


@dataclass
class FetchOptions:
    """How entries are fetched from the content store.

    ``length`` of None means every reachable entry. ``timeout`` is in
    seconds; zero or less means no timeout. ``concurrency`` of zero or
    less lets the fetcher pick its default.
    """

    length: Optional[int] = None
    should_exclude: Optional[ExcludeFunc] = None
    exclude: list[Any] = field(default_factory=list)
    concurrency: int = 0
    timeout: float = 0.0
    on_progress: Optional[ProgressCallback] = None
    provider: Any = None
    io: Optional["EntryIO"] = None


@dataclass
class CreateEntryOptions:
    """How a new entry is stored."""

    pin: bool = False
    pre_signed: bool = False


@dataclass
class JSONLog:
    """A log described by its identifier and the hashes of its heads."""

    id: str = ""
    heads: list[Any] = field(default_factory=list)


@dataclass
class IteratorOptions:
    """Bounds of a log traversal."""

    gt: Any = None
    gte: Any = None
    lt: list[Any] = field(default_factory=list)
    lte: list[Any] = field(default_factory=list)
    amount: Optional[int] = None


@dataclass
class Snapshot:
    """A point-in-time view of a log."""

    id: str = ""
    heads: list[Any] = field(default_factory=list)
    values: list[Any] = field(default_factory=list)
    clock: Optional["LamportClock"] = None


@dataclass
class AppendOptions:
    """How an entry is appended to a log."""

    pointer_count: int = 0
    pin: bool = False


@dataclass
class LogOptions:
    """Settings used when opening or building a log."""

    id: str = ""
    access_controller: Optional["AccessController"] = None
    entries: Optional["OrderedEntries"] = None
    heads: list[Any] = field(default_factory=list)
    clock: Optional["LamportClock"] = None
    sort_fn: Optional[EntrySortFn] = None
    concurrency: int = 0
    io: Optional["EntryIO"] = None


@dataclass
class Hashable:
    """The signed part of an entry, with links rendered as strings."""

    hash: Any = None
    id: str = ""
    payload: bytes = b""
    next: list[str] = field(default_factory=list)
    refs: list[str] = field(default_factory=list)
    v: int = 0
    clock: Optional["LamportClock"] = None
    key: bytes = b""
    additional_data: dict[str, str] = field(default_factory=dict)


class EntryIO(ABC):
    """Reads and writes entries and logs in a content store."""

    @abstractmethod
    def write(self, ipfs: Any, obj: Any, options: Optional[WriteOptions] = None) -> Any:
        """Store ``obj`` and return its content identifier."""

    @abstractmethod
    def read(self, ipfs: Any, content_id: Any) -> Any:
        """Return the raw node stored under ``content_id``."""

    @abstractmethod
    def decode_raw_entry(self, node: Any, hash: Any, provider: Any) -> Any:
        """Turn a raw node into an entry."""

    @abstractmethod
    def decode_raw_json_log(self, node: Any) -> JSONLog:
        """Turn a raw node into a JSONLog."""


class PreSigningIO(EntryIO):
    """An EntryIO that transforms entries before they are signed."""

    @abstractmethod
    def pre_sign(self, entry: Any) -> Any:
        """Return the entry as it must be signed."""