"""Creation and verification of identities through registered providers."""

from __future__ import annotations

from typing import Any, Callable, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .errors import ErrorCode, LogError
from .identity import CreateIdentityOptions, Identity, IdentityProvider, IdentitySignature
from .orbitdb_provider import OrbitDBIdentityProvider

ProviderFactory = Callable[[Optional[CreateIdentityOptions]], IdentityProvider]

_supported_types: dict[str, ProviderFactory] = {
    "orbitdb": OrbitDBIdentityProvider,
}


def _handler_for(type_name: str) -> ProviderFactory:
    if not is_supported(type_name):
        raise LogError(ErrorCode.IDENTITY_PROVIDER_NOT_SUPPORTED)
    return _supported_types[type_name]


def _is_secp256k1(public_key: Any) -> bool:
    return isinstance(public_key, ec.EllipticCurvePublicKey) and isinstance(
        public_key.curve, ec.SECP256K1
    )


def _raw_public_bytes(public_key: Any) -> bytes:
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return public_key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint)
    return public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def compressed_to_uncompressed(public_key_bytes: bytes) -> bytes:
    """Return a secp256k1 public key in uncompressed form."""
    data = bytes(public_key_bytes)
    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), data)
    except (ValueError, TypeError) as exc:
        raise ErrorCode.NOT_SECP256K1_PUB_KEY.wrap(exc) from exc
    is_compressed = len(data) == 33 and data[0] in (0x02, 0x03)
    if not is_compressed:
        return public_key_bytes
    return key.public_bytes(Encoding.X962, PublicFormat.UncompressedPoint)


class Identities:
    """Signs and verifies with the keys held in a keystore."""

    def __init__(self, keystore: Any) -> None:
        self._keystore = keystore

    def sign(self, identity: Identity, data: bytes) -> bytes:
        """Sign ``data`` with the keystore key of ``identity``."""
        try:
            private_key = self._keystore.get_key(identity.id)
        except Exception as exc:
            raise ErrorCode.KEY_NOT_IN_KEYSTORE.wrap(exc) from exc
        if private_key is None:
            raise LogError(ErrorCode.KEY_NOT_IN_KEYSTORE)
        try:
            return self._keystore.sign(private_key, data)
        except Exception as exc:
            raise ErrorCode.SIG_SIGN.wrap(exc) from exc

    def verify(self, signature: bytes, public_key: Any, data: bytes) -> bool:
        """Return whether ``signature`` of ``data`` matches ``public_key``."""
        try:
            if isinstance(public_key, ec.EllipticCurvePublicKey):
                public_key.verify(signature, data, ec.ECDSA(hashes.SHA256()))
            else:
                public_key.verify(signature, data)
        except InvalidSignature:
            return False
        return True

    def create_identity(self, options: CreateIdentityOptions) -> Identity:
        """Create a signed identity with the provider named by ``options.type``."""
        try:
            factory = _handler_for(options.type)
        except LogError as exc:
            raise ErrorCode.IDENTITY_PROVIDER_NOT_SUPPORTED.wrap(exc) from exc

        provider = factory(options)
        try:
            identity_id = provider.get_id(options)
        except Exception as exc:
            raise ErrorCode.IDENTITY_UNKNOWN.wrap(exc) from exc

        try:
            public_key, id_signature = self._sign_id(identity_id)
        except Exception as exc:
            raise ErrorCode.SIG_SIGN.wrap(exc) from exc

        try:
            public_key_bytes = _raw_public_bytes(public_key)
        except Exception as exc:
            raise ErrorCode.NOT_SECP256K1_PUB_KEY.wrap(exc) from exc

        if _is_secp256k1(public_key):
            try:
                public_key_bytes = compressed_to_uncompressed(public_key_bytes)
            except LogError as exc:
                raise ErrorCode.NOT_SECP256K1_PUB_KEY.wrap(exc) from exc

        try:
            public_key_signature = provider.sign_identity(
                public_key_bytes + id_signature, options.id
            )
        except Exception as exc:
            raise ErrorCode.IDENTITY_CREATION_FAILED.wrap(exc) from exc

        return Identity(
            id=identity_id,
            public_key=public_key_bytes,
            signatures=IdentitySignature(id=id_signature, public_key=public_key_signature),
            type=provider.get_type(),
            provider=provider,
        )

    def _sign_id(self, identity_id: str) -> tuple[Any, bytes]:
        try:
            private_key = self._keystore.get_key(identity_id)
        except Exception:
            private_key = None
        if private_key is None:
            try:
                private_key = self._keystore.create_key(identity_id)
            except Exception as exc:
                raise ErrorCode.SIG_SIGN.wrap(exc) from exc
        try:
            id_signature = self._keystore.sign(private_key, identity_id.encode())
        except Exception as exc:
            raise ErrorCode.SIG_SIGN.wrap(exc) from exc
        return private_key.public_key(), id_signature

    def verify_identity(self, identity: Identity) -> None:
        """Raise LogError when the identity's id signature does not hold."""
        try:
            public_key = identity.get_public_key()
        except Exception as exc:
            raise ErrorCode.PUB_KEY_DESERIALIZATION.wrap(exc) from exc

        try:
            id_bytes = bytes.fromhex(identity.id)
        except ValueError as exc:
            raise ErrorCode.IDENTITY_DESERIALIZATION.wrap(exc) from exc

        signature = identity.signatures.id if identity.signatures else b""
        try:
            self._keystore.verify(signature, public_key, id_bytes)
        except Exception as exc:
            raise ErrorCode.SIG_NOT_VERIFIED.wrap(exc) from exc

        try:
            factory = _handler_for(identity.type)
        except LogError as exc:
            raise ErrorCode.SIG_NOT_VERIFIED.wrap(exc) from exc

        factory(None).verify_identity(identity)


def create_identity(options: CreateIdentityOptions) -> Identity:
    """Create an identity using the keystore given in ``options``."""
    if options.keystore is None:
        raise LogError(ErrorCode.KEYSTORE_NOT_DEFINED)
    return Identities(options.keystore).create_identity(options)


def is_supported(type_name: str) -> bool:
    """Return whether a provider is registered for ``type_name``."""
    return type_name in _supported_types


def add_identity_provider(factory: Optional[ProviderFactory]) -> None:
    """Register a provider factory under the type its provider reports."""
    if factory is None:
        raise LogError(ErrorCode.IDENTITY_PROVIDER_NOT_DEFINED)
    _supported_types[factory(None).get_type()] = factory


def remove_identity_provider(name: str) -> None:
    """Unregister the provider of type ``name``."""
    _supported_types.pop(name, None)