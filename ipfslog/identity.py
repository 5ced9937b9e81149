"""Identities signing log entries and the interface of their providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from cryptography.hazmat.primitives.asymmetric import ec

from .errors import ErrorCode, LogError


@dataclass
class IdentitySignature:
    """Signatures proving an identity: over its id and over its public key."""

    id: bytes = b""
    public_key: bytes = b""


@dataclass
class Identity:
    """Who writes to a log, with the provider able to sign on its behalf."""

    id: str = ""
    public_key: bytes = b""
    signatures: Optional[IdentitySignature] = None
    type: str = ""
    provider: Any = field(default=None, compare=False, repr=False)

    def filtered(self) -> "Identity":
        """Return the fields that are stored with an entry, without the provider."""
        return Identity(
            id=self.id,
            public_key=self.public_key,
            signatures=self.signatures,
            type=self.type,
        )

    def get_public_key(self) -> ec.EllipticCurvePublicKey:
        """Decode the identity's secp256k1 public key."""
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256K1(), bytes(self.public_key)
            )
        except (ValueError, TypeError) as exc:
            raise ErrorCode.INVALID_PUB_KEY_FORMAT.wrap(exc) from exc


@dataclass
class CreateIdentityOptions:
    """Settings for creating an identity.

    ``keystore`` must offer ``get_key(key_id)``, ``create_key(key_id)``,
    ``sign(private_key, data)`` and ``verify(signature, public_key, data)``;
    ``get_key`` raises or returns None when the key is missing and
    ``verify`` raises when the signature does not match.
    """

    identity_keys_path: str = ""
    type: str = ""
    keystore: Any = None
    id: str = ""


class IdentityProvider(ABC):
    """Creates, signs for and checks identities of one type."""

    @abstractmethod
    def get_id(self, options: CreateIdentityOptions) -> str:
        """Return the id of the identity, to be signed by its public key."""

    @abstractmethod
    def sign_identity(self, data: bytes, identity_id: str) -> bytes:
        """Sign the public key and id signature of an identity."""

    @abstractmethod
    def get_type(self) -> str:
        """Return the type name of this provider."""

    @abstractmethod
    def verify_identity(self, identity: Identity) -> None:
        """Raise when ``identity`` is not valid for this provider."""

    @abstractmethod
    def sign(self, identity: Identity, data: bytes) -> bytes:
        """Sign ``data`` with the key of ``identity``."""

    @abstractmethod
    def unmarshal_public_key(self, data: bytes) -> Any:
        """Decode a public key from its bytes."""