"""Symmetric authenticated encryption built on the NaCl secret box."""

from __future__ import annotations

import hashlib
import os
from abc import ABC, abstractmethod

import nacl.exceptions
import nacl.secret

SECRET_BOX_NONCE_SIZE = 24
SECRET_BOX_KEY_SIZE = 32
_OVERHEAD = nacl.secret.SecretBox.MACBYTES


class InvalidKeyError(ValueError):
    """The key does not have the required size."""

    def __init__(self) -> None:
        super().__init__("invalid key")


class InvalidNonceError(ValueError):
    """The nonce does not have the required size."""

    def __init__(self) -> None:
        super().__init__("invalid nonce")


class DecryptionError(ValueError):
    """The message could not be decrypted or authenticated."""

    def __init__(self) -> None:
        super().__init__("unable to decrypt message")


class EncryptionError(ValueError):
    """The message could not be encrypted."""

    def __init__(self) -> None:
        super().__init__("unable to encrypt message")


class SharedKey(ABC):
    """A key able to seal and open messages."""

    @abstractmethod
    def derive_nonce(self, data: bytes) -> bytes:
        """Derive a deterministic nonce from ``data``."""

    @abstractmethod
    def open(self, payload: bytes) -> bytes:
        """Decrypt a payload prefixed with its nonce."""

    @abstractmethod
    def seal(self, plaintext: bytes) -> bytes:
        """Encrypt with a random nonce, returned as a prefix."""

    @abstractmethod
    def open_with_nonce(self, payload: bytes, nonce: bytes) -> bytes:
        """Decrypt a payload with an explicit nonce."""

    @abstractmethod
    def seal_with_nonce(self, plaintext: bytes, nonce: bytes) -> bytes:
        """Encrypt with an explicit nonce."""


class SecretBox(SharedKey):
    """XSalsa20-Poly1305 secret box keyed with a 32-byte key."""

    def __init__(self, key: bytes) -> None:
        if key is None or len(key) != SECRET_BOX_KEY_SIZE:
            raise InvalidKeyError()
        self._box = nacl.secret.SecretBox(bytes(key))

    def derive_nonce(self, data: bytes) -> bytes:
        return hashlib.sha3_256(data).digest()[:SECRET_BOX_NONCE_SIZE]

    def open(self, payload: bytes) -> bytes:
        if len(payload) < _OVERHEAD + SECRET_BOX_NONCE_SIZE:
            raise DecryptionError()
        return self.open_with_nonce(
            payload[SECRET_BOX_NONCE_SIZE:], payload[:SECRET_BOX_NONCE_SIZE]
        )

    def seal(self, plaintext: bytes) -> bytes:
        nonce = os.urandom(SECRET_BOX_NONCE_SIZE)
        return nonce + self.seal_with_nonce(plaintext, nonce)

    def open_with_nonce(self, payload: bytes, nonce: bytes) -> bytes:
        if len(nonce) != SECRET_BOX_NONCE_SIZE:
            raise InvalidNonceError()
        try:
            decrypted = self._box.decrypt(bytes(payload), bytes(nonce))
        except (nacl.exceptions.CryptoError, ValueError, TypeError) as exc:
            raise DecryptionError() from exc
        if not decrypted:
            raise DecryptionError()
        return decrypted

    def seal_with_nonce(self, plaintext: bytes, nonce: bytes) -> bytes:
        if len(nonce) != SECRET_BOX_NONCE_SIZE:
            raise InvalidNonceError()
        try:
            return self._box.encrypt(bytes(plaintext), bytes(nonce)).ciphertext
        except (nacl.exceptions.CryptoError, ValueError, TypeError) as exc:
            raise EncryptionError() from exc


def new_secretbox(key: bytes) -> SharedKey:
    """Create a SecretBox, raising InvalidKeyError for a key of the wrong size."""
    return SecretBox(key)