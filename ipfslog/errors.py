"""Error codes and the exception type raised throughout the log."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Stable error identifiers with their human readable messages."""

    CBOR_OPERATION_FAILED = "CBOR operation failed"
    CID_SERIALIZATION_FAILED = "CID deserialization failed"
    CLOCK_DESERIALIZATION = "unable to deserialize clock"
    EMPTY_LOG_SERIALIZATION = "can't serialize an empty log"
    ENTRIES_NOT_DEFINED = "entries not defined"
    ENTRY_DESERIALIZATION_FAILED = "entry deserialization failed"
    ENTRY_NOT_DEFINED = "entry is not defined"
    ENTRY_NOT_HASHABLE = "entry is hashable"
    FETCH_OPTIONS_NOT_DEFINED = "fetch options not defined"
    FILTER_LTE_NOT_FOUND = "entry specified at LTE not found"
    FILTER_LT_NOT_FOUND = "entry specified at LT not found"
    IPFS_NOT_DEFINED = "ipfs instance not defined"
    IPFS_OPERATION_FAILED = "IPFS operation failed"
    IDENTITY_CREATION_FAILED = "identity creation failed"
    IDENTITY_DESERIALIZATION = "unable to deserialize identity"
    IDENTITY_NOT_DEFINED = "identity not defined"
    IDENTITY_PROVIDER_NOT_DEFINED = (
        "an identity provider constructor needs to be given as an option"
    )
    IDENTITY_PROVIDER_NOT_SUPPORTED = "identity provider is not supported"
    IDENTITY_SIG_DESERIALIZATION = "identity signature deserialization failed"
    IDENTITY_UNKNOWN = "unknown identity used"
    INVALID_PRIV_KEY_FORMAT = "unable to unmarshal private key"
    INVALID_PUB_KEY_FORMAT = "unable to unmarshal public key"
    ITERATOR_OPTIONS_NOT_DEFINED = "no iterator options specified"
    JSON_SERIALIZATION_FAILED = "JSON serialization failed"
    KEY_DESERIALIZATION = "unable to deserialize key"
    KEY_GENERATION_FAILED = "key generation failed"
    KEY_NOT_DEFINED = "key is not defined"
    KEY_NOT_IN_KEYSTORE = "private signing key not found from Keystore"
    KEYSTORE_CREATE_ENTRY = "unable to create key store entry"
    KEYSTORE_INIT_FAILED = "keystore initialization failed"
    KEYSTORE_PUT_FAILED = "keystore put failed"
    KEYSTORE_NOT_DEFINED = "keystore not defined"
    LOG_APPEND_DENIED = "log append denied"
    LOG_APPEND_FAILED = "log append failed"
    LOG_FROM_ENTRY = "new from entry failed"
    LOG_FROM_ENTRY_HASH = "new from multi hash failed"
    LOG_FROM_JSON = "new from JSON failed"
    LOG_FROM_MULTI_HASH = "new from entry hash failed"
    LOG_ID_NOT_DEFINED = "log ID not defined"
    LOG_JOIN_FAILED = "log join failed"
    LOG_JOIN_NOT_DEFINED = "log to join not defined"
    LOG_OPTIONS_NOT_DEFINED = "log options not defined"
    LOG_TRAVERSE_FAILED = "log traverse failed"
    MULTIBASE_OPERATION_FAILED = "Multibase operation failed"
    NOT_SECP256K1_PUB_KEY = "supplied key is not a valid Secp256k1 public key"
    OUTPUT_CHANNEL_NOT_DEFINED = "no output channel specified"
    PAYLOAD_NOT_DEFINED = "payload not defined"
    PUB_KEY_DESERIALIZATION = "public key deserialization failed"
    PUB_KEY_SERIALIZATION = "unable to serialize public key"
    SIG_DESERIALIZATION = "unable to deserialize signature"
    SIG_NOT_DEFINED = "signature is not defined"
    SIG_NOT_VERIFIED = "signature could not verified"
    SIG_SIGN = "unable to sign value"
    TIEBREAKER_BOGUS = (
        "log's tiebreaker function has returned zero and therefore cannot be"
    )
    TIEBREAKER_FAILED = "tiebreaker failed"
    IPFS_WRITE_FAILED = "ipfs write failed"
    IPFS_READ_FAILED = "ipfs read failed"
    IPFS_READ_UNMARSHAL_FAILED = "ipfs unmarshal failed"
    PB_READ_UNMARSHAL_FAILED = "protobuf unmarshal failed"
    ENCRYPT = "encryption error"
    DECRYPT = "decryption error"

    def error(self) -> str:
        """Return the message of this code."""
        return self.value

    def wrap(self, inner: BaseException | str) -> "LogError":
        """Return a LogError of this code that wraps ``inner``."""
        return LogError(self, inner)

    def __str__(self) -> str:
        return self.value


class LogError(Exception):
    """An error carrying an ErrorCode and, optionally, the error it wraps."""

    def __init__(self, code: ErrorCode, inner: BaseException | str | None = None):
        self.code = code
        self.inner = inner
        message = code.value if inner is None else f"{code.value}: {inner}"
        super().__init__(message)
        if isinstance(inner, BaseException):
            self.__cause__ = inner

    def __str__(self) -> str:
        return self.args[0]