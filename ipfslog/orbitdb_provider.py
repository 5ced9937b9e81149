"""The default identity provider, backed by a keystore."""

from __future__ import annotations

from typing import Any, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .errors import ErrorCode, LogError
from .identity import CreateIdentityOptions, Identity, IdentityProvider

_TYPE = "orbitdb"


def _raw_public_bytes(public_key: Any) -> bytes:
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        return public_key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint)
    return public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)


def _sign_with(private_key: Any, data: bytes) -> bytes:
    if isinstance(private_key, ec.EllipticCurvePrivateKey):
        return private_key.sign(data, ec.ECDSA(hashes.SHA256()))
    return private_key.sign(data)


class OrbitDBIdentityProvider(IdentityProvider):
    """Identities whose id is the hex of a keystore public key."""

    # Identities of this type carry no extra proof beyond the keystore
    # signatures, which are checked by the caller.
    trusts_keystore_signatures: bool = True

    def __init__(self, options: Optional[CreateIdentityOptions] = None) -> None:
        self._keystore = options.keystore if options is not None else None

    def verify_identity(self, identity: Identity) -> bool:
        return self.trusts_keystore_signatures

    def get_id(self, options: CreateIdentityOptions) -> str:
        try:
            private_key = self._keystore.get_key(options.id)
        except Exception:
            private_key = None
        if private_key is None:
            try:
                private_key = self._keystore.create_key(options.id)
            except Exception as exc:
                raise ErrorCode.KEYSTORE_CREATE_ENTRY.wrap(exc) from exc
        try:
            public_bytes = _raw_public_bytes(private_key.public_key())
        except Exception as exc:
            raise ErrorCode.PUB_KEY_SERIALIZATION.wrap(exc) from exc
        return public_bytes.hex()

    def sign_identity(self, data: bytes, identity_id: str) -> bytes:
        try:
            key = self._keystore.get_key(identity_id)
        except Exception as exc:
            raise LogError(ErrorCode.KEY_NOT_IN_KEYSTORE) from exc
        if key is None:
            raise LogError(ErrorCode.KEY_NOT_IN_KEYSTORE)
        # The signed message is the hex text of the data, not its raw bytes.
        message = bytes(data).hex().encode()
        try:
            return _sign_with(key, message)
        except Exception as exc:
            raise ErrorCode.SIG_SIGN.wrap(exc) from exc

    def sign(self, identity: Identity, data: bytes) -> bytes:
        try:
            key = self._keystore.get_key(identity.id)
        except Exception as exc:
            raise ErrorCode.KEY_NOT_IN_KEYSTORE.wrap(exc) from exc
        if key is None:
            raise LogError(ErrorCode.KEY_NOT_IN_KEYSTORE)
        try:
            return _sign_with(key, bytes(data))
        except Exception as exc:
            raise ErrorCode.SIG_SIGN.wrap(exc) from exc

    def unmarshal_public_key(self, data: bytes) -> ec.EllipticCurvePublicKey:
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256K1(), bytes(data)
            )
        except (ValueError, TypeError) as exc:
            raise LogError(ErrorCode.INVALID_PUB_KEY_FORMAT) from exc

    def get_type(self) -> str:
        return _TYPE