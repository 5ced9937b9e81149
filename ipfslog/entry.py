"""Signed, content-addressed log entries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .clock import LamportClock, copy_lamport_clock
from .errors import ErrorCode, LogError
from .identity import Identity
from .types import CreateEntryOptions, EntryIO, Hashable, PreSigningIO, WriteOptions

ENTRY_VERSION = 2


@dataclass(eq=False)
class Entry:
    """One record of a log, linked to earlier records by their hashes."""

    payload: bytes = b""
    log_id: str = ""
    next: list[Any] = field(default_factory=list)
    refs: list[Any] = field(default_factory=list)
    v: int = 0
    key: bytes = b""
    sig: bytes = b""
    identity: Optional[Identity] = None
    hash: Any = None
    clock: Optional[LamportClock] = None
    additional_data: dict[str, str] = field(default_factory=dict)

    def copy(self) -> "Entry":
        """Return a copy with its own clock, data map and de-duplicated links."""
        return Entry(
            payload=self.payload,
            log_id=self.log_id,
            next=_unique(self.next),
            refs=_unique(self.refs),
            v=self.v,
            key=self.key,
            sig=self.sig,
            identity=self.identity,
            hash=self.hash,
            clock=copy_lamport_clock(self.clock) if self.clock is not None else None,
            additional_data=dict(self.additional_data or {}),
        )

    def set_additional_data_value(self, key: str, value: str) -> None:
        """Store an extra key/value pair on the entry."""
        if self.additional_data is None:
            self.additional_data = {}
        self.additional_data[key] = value

    def is_valid(self) -> bool:
        """True when the entry has a log id, a payload and a known version."""
        return self.log_id != "" and len(self.payload) > 0 and self.v <= ENTRY_VERSION

    def verify(self, provider: Any, io: Optional[EntryIO] = None) -> None:
        """Check the entry's signature; raise LogError when it does not hold."""
        if not self.key:
            raise LogError(ErrorCode.KEY_NOT_DEFINED)
        if not self.sig:
            raise LogError(ErrorCode.SIG_NOT_DEFINED)

        verified: Entry = self
        if isinstance(io, PreSigningIO):
            verified = io.pre_sign(self)

        try:
            hashable = to_hashable(verified)
            signed_bytes = _to_buffer(hashable)
        except LogError as exc:
            raise ErrorCode.ENTRY_NOT_HASHABLE.wrap(exc) from exc

        try:
            public_key = provider.unmarshal_public_key(self.key)
        except Exception as exc:
            raise ErrorCode.INVALID_PUB_KEY_FORMAT.wrap(exc) from exc

        try:
            if isinstance(public_key, ec.EllipticCurvePublicKey):
                public_key.verify(bytes(self.sig), signed_bytes, ec.ECDSA(hashes.SHA256()))
            else:
                public_key.verify(bytes(self.sig), signed_bytes)
        except InvalidSignature as exc:
            raise LogError(ErrorCode.SIG_NOT_VERIFIED) from exc
        except Exception as exc:
            raise ErrorCode.SIG_NOT_VERIFIED.wrap(exc) from exc

    def equals(self, other: "Entry") -> bool:
        """True when both entries have the same hash."""
        return str(self.hash) == str(other.hash)

    def is_parent(self, other: "Entry") -> bool:
        """True when ``other`` links to this entry through its next pointers."""
        own = str(self.hash)
        return any(str(n) == own for n in other.next)


def _unique(cids: Iterable[Any]) -> list[Any]:
    seen: set[str] = set()
    out = []
    for c in cids or []:
        key = str(c)
        if key in seen:
            continue
        seen.add(key)
        out.append(c)
    return out


def _cid_b58(c: Any) -> str:
    return str(c)


_GO_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _to_buffer(hashable: Optional[Hashable]) -> bytes:
    """Render the signed part of an entry as canonical JSON bytes."""
    if hashable is None:
        raise LogError(ErrorCode.ENTRY_NOT_DEFINED)
    clock = hashable.clock if hashable.clock is not None else LamportClock()
    data: dict[str, Any] = {
        "hash": None,
        "id": hashable.id,
        "payload": bytes(hashable.payload).decode("utf-8", errors="replace"),
        "next": list(hashable.next),
        "refs": list(hashable.refs),
        "v": hashable.v,
        "clock": {"id": bytes(clock.id).hex(), "time": clock.time},
    }
    if hashable.additional_data:
        data["additional_data"] = dict(hashable.additional_data)
    try:
        text = json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ErrorCode.JSON_SERIALIZATION_FAILED.wrap(exc) from exc
    for char, escape in _GO_JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def to_hashable(entry: Entry) -> Hashable:
    """Return the signed fields of ``entry`` with links rendered as strings."""
    try:
        nexts = [_cid_b58(n) for n in entry.next]
        refs = [_cid_b58(r) for r in entry.refs]
    except Exception as exc:
        raise ErrorCode.CID_SERIALIZATION_FAILED.wrap(exc) from exc
    return Hashable(
        hash=None,
        id=entry.log_id,
        payload=entry.payload,
        next=nexts,
        refs=refs,
        v=entry.v,
        clock=entry.clock,
        key=entry.key,
        additional_data=entry.additional_data,
    )


def _require_io(io: Optional[EntryIO]) -> EntryIO:
    if io is None:
        raise TypeError("an entry IO is required")
    return io


def create_entry(
    ipfs: Any,
    identity: Optional[Identity],
    data: Optional[Entry],
    options: Optional[CreateEntryOptions] = None,
    io: Optional[EntryIO] = None,
) -> Entry:
    """Sign a copy of ``data`` with ``identity``, store it and return it."""
    if ipfs is None:
        raise LogError(ErrorCode.IPFS_NOT_DEFINED)
    if identity is None:
        raise LogError(ErrorCode.IDENTITY_NOT_DEFINED)
    if data is None:
        raise LogError(ErrorCode.PAYLOAD_NOT_DEFINED)
    if data.log_id == "":
        raise LogError(ErrorCode.LOG_ID_NOT_DEFINED)
    io = _require_io(io)

    data = data.copy()
    if data.clock is not None and data.clock.defined:
        data.clock = copy_lamport_clock(data.clock)
    else:
        data.clock = LamportClock(identity.public_key, 0)
    data.v = ENTRY_VERSION

    if isinstance(io, PreSigningIO):
        data = io.pre_sign(data)

    try:
        signed_bytes = _to_buffer(to_hashable(data))
    except LogError as exc:
        raise ErrorCode.ENTRY_NOT_HASHABLE.wrap(exc) from exc

    try:
        signature = identity.provider.sign(identity, signed_bytes)
    except Exception as exc:
        raise ErrorCode.SIG_SIGN.wrap(exc) from exc

    data.key = identity.public_key
    data.sig = signature
    data.identity = identity.filtered()

    try:
        data.hash = to_multihash(data, ipfs, options, io)
    except Exception as exc:
        raise ErrorCode.IPFS_OPERATION_FAILED.wrap(exc) from exc
    return data


def to_multihash(
    entry: Optional[Entry],
    ipfs: Any,
    options: Optional[CreateEntryOptions] = None,
    io: Optional[EntryIO] = None,
) -> Any:
    """Store the normalized entry and return its content identifier."""
    if options is None:
        options = CreateEntryOptions()
    if entry is None:
        raise LogError(ErrorCode.ENTRY_NOT_DEFINED)
    if ipfs is None:
        raise LogError(ErrorCode.IPFS_NOT_DEFINED)
    io = _require_io(io)
    data = normalize(entry, pre_signed=options.pre_signed)
    return io.write(ipfs, data, WriteOptions(pin=options.pin))


def normalize(entry: Entry, pre_signed: bool = False, include_hash: bool = False) -> Entry:
    """Return the fields of ``entry`` that are stored."""
    data = Entry(
        log_id=entry.log_id,
        payload=entry.payload,
        next=entry.next,
        v=entry.v,
        clock=copy_lamport_clock(entry.clock) if entry.clock is not None else None,
        additional_data=entry.additional_data,
    )
    if include_hash:
        data.hash = entry.hash
    if entry.v > 1:
        data.refs = entry.refs
    data.key = entry.key
    data.identity = entry.identity
    if pre_signed:
        return data
    if entry.sig:
        data.sig = entry.sig
    return data


def from_multihash(ipfs: Any, hash: Any, provider: Any, io: Optional[EntryIO] = None) -> Entry:
    """Read the entry stored under ``hash``."""
    if ipfs is None:
        raise LogError(ErrorCode.IPFS_NOT_DEFINED)
    io = _require_io(io)
    try:
        node = io.read(ipfs, hash)
    except Exception as exc:
        raise ErrorCode.IPFS_READ_FAILED.wrap(exc) from exc
    try:
        return io.decode_raw_entry(node, hash, provider)
    except Exception as exc:
        raise ErrorCode.IPFS_READ_UNMARSHAL_FAILED.wrap(exc) from exc


def find_children(entry: Entry, values: list[Entry]) -> list[Entry]:
    """Return the chain of children of ``entry`` found in ``values``, by clock time."""
    stack: list[Entry] = []
    parent = next((e for e in values if entry.is_parent(e)), None)
    while parent is not None:
        stack.append(parent)
        prev = parent
        parent = next((e for e in values if prev.is_parent(e)), None)
    stack.sort(key=lambda e: e.clock.time)
    return stack