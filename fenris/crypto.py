"""AES-GCM encryption and ECDH (P-256) key agreement with HKDF derivation."""

from __future__ import annotations

import enum
import os

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

__all__ = [
    "AES_GCM_KEY_SIZE",
    "AES_GCM_IV_SIZE",
    "AES_GCM_TAG_SIZE",
    "EncryptionResult",
    "ECDHResult",
    "EncryptionError",
    "ECDHError",
    "encrypt_data",
    "decrypt_data",
    "generate_ecdh_keypair",
    "compute_ecdh_shared_secret",
    "derive_key_from_shared_secret",
    "generate_random_iv",
]

AES_GCM_KEY_SIZE = 32
AES_GCM_IV_SIZE = 12
AES_GCM_TAG_SIZE = 16

_VALID_KEY_SIZES = frozenset({16, 24, 32})
_PRIVATE_KEY_SIZE = 32
_CURVE = ec.SECP256R1()
_HKDF_SALT = b"fenris-salt"
_HKDF_INFO = b"AES-Key"


class EncryptionResult(enum.Enum):
    """Outcome of a symmetric encryption operation."""

    SUCCESS = "success"
    INVALID_KEY_SIZE = "invalid key size"
    INVALID_IV_SIZE = "invalid initialization vector size"
    INVALID_DATA = "invalid data"
    ENCRYPTION_FAILED = "encryption operation failed"
    DECRYPTION_FAILED = "decryption operation failed"
    IV_GENERATION_FAILED = "IV generation failed"

    def __str__(self) -> str:
        return self.value


class ECDHResult(enum.Enum):
    """Outcome of a key agreement operation."""

    SUCCESS = "success"
    KEY_GENERATION_FAILED = "key generation failed"
    SHARED_SECRET_FAILED = "shared secret computation failed"
    KEY_DERIVATION_FAILED = "key derivation failed"
    INVALID_KEY_SIZE = "invalid key size"

    def __str__(self) -> str:
        return self.value


class EncryptionError(Exception):
    """Raised when encryption, decryption or IV generation fails."""

    def __init__(self, result: EncryptionResult) -> None:
        super().__init__(result.value)
        self.result = result


class ECDHError(Exception):
    """Raised when key generation, agreement or derivation fails."""

    def __init__(self, result: ECDHResult) -> None:
        super().__init__(result.value)
        self.result = result


def _check_key_and_iv(key: bytes, iv: bytes) -> None:
    if len(key) not in _VALID_KEY_SIZES:
        raise EncryptionError(EncryptionResult.INVALID_KEY_SIZE)
    if len(iv) != AES_GCM_IV_SIZE:
        raise EncryptionError(EncryptionResult.INVALID_IV_SIZE)


def encrypt_data(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt with AES-GCM; the result is the ciphertext followed by the tag."""
    _check_key_and_iv(key, iv)
    try:
        return AESGCM(bytes(key)).encrypt(bytes(iv), bytes(plaintext), None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError(EncryptionResult.ENCRYPTION_FAILED) from exc


def decrypt_data(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt and authenticate AES-GCM ciphertext with its trailing tag."""
    _check_key_and_iv(key, iv)
    if len(ciphertext) < AES_GCM_TAG_SIZE:
        raise EncryptionError(EncryptionResult.INVALID_DATA)
    try:
        return AESGCM(bytes(key)).decrypt(bytes(iv), bytes(ciphertext), None)
    except (InvalidTag, ValueError, OverflowError) as exc:
        raise EncryptionError(EncryptionResult.DECRYPTION_FAILED) from exc


def generate_ecdh_keypair() -> tuple[bytes, bytes]:
    """Return a fresh P-256 (private key, uncompressed public point) pair."""
    try:
        private = ec.generate_private_key(_CURVE)
        private_bytes = private.private_numbers().private_value.to_bytes(
            _PRIVATE_KEY_SIZE, "big"
        )
        public_bytes = private.public_key().public_bytes(
            Encoding.X962, PublicFormat.UncompressedPoint
        )
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise ECDHError(ECDHResult.KEY_GENERATION_FAILED) from exc
    return private_bytes, public_bytes


def compute_ecdh_shared_secret(private_key: bytes, peer_public_key: bytes) -> bytes:
    """Compute the P-256 shared secret (the x coordinate of the agreed point)."""
    if len(private_key) != _PRIVATE_KEY_SIZE:
        raise ECDHError(ECDHResult.SHARED_SECRET_FAILED)
    try:
        private = ec.derive_private_key(int.from_bytes(bytes(private_key), "big"), _CURVE)
        peer = ec.EllipticCurvePublicKey.from_encoded_point(_CURVE, bytes(peer_public_key))
        return private.exchange(ec.ECDH(), peer)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise ECDHError(ECDHResult.SHARED_SECRET_FAILED) from exc


def derive_key_from_shared_secret(
    shared_secret: bytes, key_size: int, context: bytes = b""
) -> bytes:
    """Derive an AES key of ``key_size`` bytes from a shared secret with HKDF-SHA256."""
    if key_size not in _VALID_KEY_SIZES:
        raise ECDHError(ECDHResult.INVALID_KEY_SIZE)
    try:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=key_size,
            salt=_HKDF_SALT,
            info=_HKDF_INFO + bytes(context),
        )
        return hkdf.derive(bytes(shared_secret))
    except (ValueError, TypeError) as exc:
        raise ECDHError(ECDHResult.KEY_DERIVATION_FAILED) from exc


def generate_random_iv() -> bytes:
    """Return a random initialization vector suitable for AES-GCM."""
    try:
        return os.urandom(AES_GCM_IV_SIZE)
    except (NotImplementedError, OSError) as exc:
        raise EncryptionError(EncryptionResult.IV_GENERATION_FAILED) from exc