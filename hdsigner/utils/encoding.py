"""Encoding, hashing and MAC primitives for hdsigner."""

import base64
import binascii
import hashlib
import hmac
import re
from typing import List, Sequence, Tuple, Union

from Crypto.Hash import RIPEMD160

from ..constants import (
    BECH32_MAX_LENGTH,
    COMPRESSED_PUBKEY_LENGTH,
    PBKDF2_DIGEST,
    PBKDF2_ITERATIONS,
    PBKDF2_KEY_LENGTH,
)
from ..exceptions import ValidationError
from ..types.common import Address, Base64Str, HexStr

__all__ = [
    "to_hex",
    "from_hex",
    "to_base64",
    "from_base64",
    "sha256",
    "ripemd160",
    "hash160",
    "hmac_sha512",
    "hmac_sha256",
    "pbkdf2",
    "convert_bits",
    "to_bech32",
    "from_bech32",
    "raw_secp256k1_pubkey_to_raw_address",
    "encode_varint",
    "decode_varint",
    "encode_protobuf_field",
]

# Constants
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_CONST = 1
HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")

# Protobuf wire types
WIRE_TYPE_VARINT = 0
WIRE_TYPE_LENGTH_DELIMITED = 2


def to_hex(data: bytes) -> HexStr:
    """Encode bytes as a lowercase hex string."""
    return HexStr(bytes(data).hex())


def from_hex(hex_str: str) -> bytes:
    """
    Decode a hex string.

    Args:
        hex_str: Hex string without prefix, any case

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If the length is odd or a character is not hex
    """
    if not isinstance(hex_str, str):
        raise ValidationError("hex string must be a str")
    if len(hex_str) % 2 != 0:
        raise ValidationError("hex string length must be a multiple of 2")
    if not HEX_PATTERN.fullmatch(hex_str):
        raise ValidationError("hex string contains invalid characters")
    try:
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {e}") from e


def to_base64(data: bytes) -> Base64Str:
    """Encode bytes as standard padded base64."""
    return Base64Str(base64.b64encode(bytes(data)).decode("ascii"))


def from_base64(data: str) -> bytes:
    """
    Decode a standard base64 string.

    Raises:
        ValidationError: If the alphabet or padding is invalid
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 string: {e}") from e


def sha256(data: bytes) -> bytes:
    """Single SHA-256 hash."""
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    """RIPEMD-160 hash."""
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def _key_bytes(key: Union[str, bytes]) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def hmac_sha512(key: Union[str, bytes], data: bytes) -> bytes:
    """HMAC-SHA512 of data; a str key is UTF-8 encoded."""
    return hmac.new(_key_bytes(key), data, hashlib.sha512).digest()


def hmac_sha256(key: Union[str, bytes], data: bytes) -> bytes:
    """HMAC-SHA256 of data; a str key is UTF-8 encoded."""
    return hmac.new(_key_bytes(key), data, hashlib.sha256).digest()


def pbkdf2(
    password: Union[str, bytes],
    salt: bytes,
    iterations: int = PBKDF2_ITERATIONS,
    key_length: int = PBKDF2_KEY_LENGTH,
    digest: str = PBKDF2_DIGEST
) -> bytes:
    """
    Stretch a password with PBKDF2-HMAC.

    Args:
        password: Password, str is UTF-8 encoded
        salt: Salt bytes
        iterations: Round count
        key_length: Output length in bytes
        digest: Hash name understood by hashlib ("sha256", "SHA-256", ...)

    Returns:
        Derived key
    """
    name = digest.lower().replace("-", "")
    if iterations < 1:
        raise ValidationError("PBKDF2 iterations must be positive")
    try:
        return hashlib.pbkdf2_hmac(name, _key_bytes(password), salt, iterations, dklen=key_length)
    except ValueError as e:
        raise ValidationError(f"Unsupported PBKDF2 digest: {digest}") from e


def convert_bits(
    data: Sequence[int],
    from_bits: int,
    to_bits: int,
    pad: bool = True
) -> List[int]:
    """
    Regroup a sequence of from_bits-wide values into to_bits-wide values.

    Raises:
        ValidationError: If a value is out of range, or on invalid padding when pad is False
    """
    acc = 0
    bits = 0
    result = []
    maxv = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1

    for value in data:
        if value < 0 or value >> from_bits:
            raise ValidationError(f"Invalid value for {from_bits}-bit group: {value}")
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & maxv)

    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & maxv)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & maxv):
        raise ValidationError("Invalid padding in bit conversion")

    return result


def _bech32_polymod(values: List[int]) -> int:
    """Compute Bech32 checksum polymod."""
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def _bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand human-readable part for Bech32."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _validate_prefix(prefix: str) -> str:
    if not prefix:
        raise ValidationError("Bech32 prefix cannot be empty")
    if any(ord(x) < 33 or ord(x) > 126 for x in prefix):
        raise ValidationError(f"Invalid Bech32 prefix: {prefix!r}")
    return prefix.lower()


def to_bech32(prefix: str, data: bytes, limit: int = BECH32_MAX_LENGTH) -> Address:
    """
    Encode bytes as a Bech32 string.

    Args:
        prefix: Human-readable part
        data: Payload bytes (converted to 5-bit words)
        limit: Maximum length of the encoded string

    Returns:
        Bech32 encoded address

    Raises:
        ValidationError: If the prefix is invalid or the result exceeds limit
    """
    hrp = _validate_prefix(prefix)
    words = convert_bits(bytes(data), 8, 5, pad=True)

    if len(hrp) + 7 + len(words) > limit:
        raise ValidationError("Exceeds length limit")

    # Calculate checksum
    polymod = _bech32_polymod(_bech32_hrp_expand(hrp) + words + [0, 0, 0, 0, 0, 0]) ^ BECH32_CONST
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]

    return Address(hrp + "1" + "".join(BECH32_CHARSET[v] for v in words + checksum))


def from_bech32(address: str, limit: int = BECH32_MAX_LENGTH) -> Tuple[str, bytes]:
    """
    Decode a Bech32 string.

    Args:
        address: Bech32 string
        limit: Maximum accepted length

    Returns:
        Tuple of (prefix, payload bytes)

    Raises:
        ValidationError: If the string is invalid
    """
    if len(address) < 8:
        raise ValidationError(f"{address} too short")
    if len(address) > limit:
        raise ValidationError("Exceeds length limit")
    if address.lower() != address and address.upper() != address:
        raise ValidationError(f"Mixed-case string {address}")
    address = address.lower()

    # Find separator
    pos = address.rfind("1")
    if pos < 1:
        raise ValidationError(f"No separator character for {address}")
    if pos + 7 > len(address):
        raise ValidationError(f"Data too short for {address}")

    hrp = _validate_prefix(address[:pos])
    values = []
    for char in address[pos + 1:]:
        index = BECH32_CHARSET.find(char)
        if index == -1:
            raise ValidationError(f"Invalid Bech32 character: {char}")
        values.append(index)

    # Verify checksum
    if _bech32_polymod(_bech32_hrp_expand(hrp) + values) != BECH32_CONST:
        raise ValidationError(f"Invalid checksum for {address}")

    return hrp, bytes(convert_bits(values[:-6], 5, 8, pad=False))


def raw_secp256k1_pubkey_to_raw_address(pubkey: bytes) -> bytes:
    """
    Get the 20-byte account address of a compressed secp256k1 public key.

    Raises:
        ValidationError: If the key is not 33 bytes long
    """
    if len(pubkey) != COMPRESSED_PUBKEY_LENGTH:
        raise ValidationError(
            f"Invalid Secp256k1 pubkey length (compressed): {len(pubkey)}"
        )
    return hash160(pubkey)


def encode_varint(n: int) -> bytes:
    """
    Encode an unsigned integer as a protobuf base-128 varint.

    Args:
        n: Integer to encode (0 <= n < 2**64)

    Returns:
        Encoded varint bytes
    """
    if n < 0 or n >= 1 << 64:
        raise ValidationError(f"Varint out of uint64 range: {n}")
    result = bytearray()
    while True:
        byte = n & 0x7f
        n >>= 7
        if n:
            result.append(byte | 0x80)
        else:
            result.append(byte)
            return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a protobuf base-128 varint.

    Args:
        data: Bytes containing varint
        offset: Starting position

    Returns:
        Tuple of (value, new_offset)
    """
    value = 0
    shift = 0
    while True:
        if offset >= len(data):
            raise ValidationError("Truncated varint")
        if shift >= 64:
            raise ValidationError("Varint too long")
        byte = data[offset]
        offset += 1
        value |= (byte & 0x7f) << shift
        shift += 7
        if not byte & 0x80:
            return value, offset


def encode_protobuf_field(field_number: int, value: Union[int, bytes, str]) -> bytes:
    """
    Encode one proto3 field, omitting it when it holds the default value.

    Integers use the varint wire type, bytes and str the length-delimited one.
    """
    if isinstance(value, bool) or not isinstance(value, (int, bytes, bytearray, str)):
        raise ValidationError(f"Unsupported protobuf field type: {type(value).__name__}")

    if isinstance(value, int):
        if value == 0:
            return b""
        return encode_varint(field_number << 3 | WIRE_TYPE_VARINT) + encode_varint(value)

    if isinstance(value, str):
        value = value.encode("utf-8")
    if not value:
        return b""
    key = encode_varint(field_number << 3 | WIRE_TYPE_LENGTH_DELIMITED)
    return key + encode_varint(len(value)) + bytes(value)
