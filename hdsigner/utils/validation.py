"""Validation utilities for hdsigner."""

from typing import Optional

from ..constants import (
    COMPRESSED_PUBKEY_LENGTH,
    MAX_MESSAGE_HASH_LENGTH,
    PRIVATE_KEY_LENGTH,
    SECP256K1_N,
    UNCOMPRESSED_PUBKEY_LENGTH,
)
from ..exceptions import InvalidKeyError, ValidationError
from ..types.common import BytesLike
from ..utils.encoding import from_bech32

__all__ = [
    "to_bytes",
    "is_valid_address",
    "validate_address",
    "is_valid_private_key",
    "validate_private_key",
    "is_valid_public_key",
    "validate_public_key",
    "validate_message_hash",
]


def to_bytes(data: BytesLike, name: str = "data") -> bytes:
    """
    Coerce a bytes-like value or a sequence of byte values to bytes.

    Raises:
        ValidationError: If data is a str or contains values outside 0..255
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        raise ValidationError(f"{name} must be bytes, not str")
    try:
        return bytes(data)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {name}: {e}") from e


def is_valid_address(address: str, prefix: Optional[str] = None) -> bool:
    """
    Check if a bech32 account address is valid.

    Args:
        address: Address to validate
        prefix: Optional expected human-readable prefix

    Returns:
        True if valid, False otherwise
    """
    try:
        validate_address(address, prefix)
        return True
    except ValidationError:
        return False


def validate_address(address: str, prefix: Optional[str] = None) -> str:
    """
    Validate a bech32 account address and return its normalized form.

    Args:
        address: Address to validate
        prefix: Optional expected human-readable prefix

    Returns:
        Lowercase address

    Raises:
        ValidationError: If address is invalid
    """
    if not address:
        raise ValidationError("Address cannot be empty")

    hrp, data = from_bech32(address)

    if prefix is not None and hrp != prefix.lower():
        raise ValidationError(f"Wrong prefix: expected {prefix}, got {hrp}")
    if len(data) != 20:
        raise ValidationError(f"Address payload must be 20 bytes, got {len(data)}")

    return address.lower()


def is_valid_private_key(key: BytesLike) -> bool:
    """Check if key is a valid secp256k1 private key."""
    try:
        validate_private_key(key)
        return True
    except (ValidationError, InvalidKeyError):
        return False


def validate_private_key(key: BytesLike) -> bytes:
    """
    Validate private key and return as bytes.

    Args:
        key: 32 private key bytes

    Returns:
        Private key as 32 bytes

    Raises:
        ValidationError: If the length is wrong
        InvalidKeyError: If the scalar is zero or not below the curve order
    """
    key = to_bytes(key, "private key")
    if len(key) != PRIVATE_KEY_LENGTH:
        raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")

    # Check range
    key_int = int.from_bytes(key, "big")
    if key_int == 0:
        raise InvalidKeyError("Private key cannot be zero")
    if key_int >= SECP256K1_N:
        raise InvalidKeyError("Private key exceeds curve order")

    return key


def is_valid_public_key(key: BytesLike) -> bool:
    """
    Check if public key format is valid.

    Only the length and prefix byte are checked, not that the point is on the curve.
    """
    try:
        validate_public_key(key)
        return True
    except ValidationError:
        return False


def validate_public_key(key: BytesLike) -> bytes:
    """
    Validate public key format and return as bytes.

    Args:
        key: Public key bytes

    Returns:
        Public key bytes (33 or 65 bytes)

    Raises:
        ValidationError: If public key is invalid
    """
    key = to_bytes(key, "public key")

    if len(key) == COMPRESSED_PUBKEY_LENGTH:
        if key[0] not in (0x02, 0x03):
            raise ValidationError("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == UNCOMPRESSED_PUBKEY_LENGTH:
        if key[0] != 0x04:
            raise ValidationError("Uncompressed public key must start with 0x04")
    else:
        raise ValidationError(f"Public key must be 33 or 65 bytes, got {len(key)}")

    return key


def validate_message_hash(message_hash: BytesLike) -> bytes:
    """
    Validate a message hash handed to the signer.

    Raises:
        ValidationError: If the hash is empty or longer than 32 bytes
    """
    message_hash = to_bytes(message_hash, "message hash")
    if len(message_hash) == 0:
        raise ValidationError("Message hash must not be empty")
    if len(message_hash) > MAX_MESSAGE_HASH_LENGTH:
        raise ValidationError("Message hash length must not exceed 32 bytes")
    return message_hash
