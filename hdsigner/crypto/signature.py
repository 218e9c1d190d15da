"""secp256k1 ECDSA signature values and their DER / fixed-length encodings."""

from typing import Optional, Tuple

from ..exceptions import SignatureError
from ..types.common import BytesLike
from ..utils.validation import to_bytes

__all__ = [
    "Secp256k1Signature",
    "ExtendedSecp256k1Signature",
    "trim_leading_null_bytes",
    "parse_der_signature",
    "encode_der_signature",
]

DER_TAG_SEQUENCE = 0x30
DER_TAG_INTEGER = 0x02


def trim_leading_null_bytes(data: bytes) -> bytes:
    """Strip leading zero bytes."""
    return bytes(data).lstrip(b"\x00")


def _check_component(name: str, value: bytes) -> bytes:
    if len(value) == 0 or len(value) > 32 or value[0] == 0x00:
        raise SignatureError(
            f"Unsigned integer {name} must be encoded as unpadded big endian."
        )
    return value


def _pad(name: str, value: bytes, length: Optional[int]) -> bytes:
    if length is None:
        return value
    if length < len(value):
        raise SignatureError(f"Length too small to hold parameter {name}")
    return value.rjust(length, b"\x00")


class Secp256k1Signature:
    """
    ECDSA signature (r, s).

    Both integers are kept as unpadded, non-negative big-endian byte strings.
    """

    def __init__(self, r: BytesLike, s: BytesLike) -> None:
        """
        Initialize signature.

        Args:
            r: r as 1..32 bytes without leading zero
            s: s as 1..32 bytes without leading zero

        Raises:
            SignatureError: If r or s is empty, too long or zero-padded
        """
        self._r = _check_component("r", to_bytes(r, "r"))
        self._s = _check_component("s", to_bytes(s, "s"))

    @classmethod
    def from_fixed_length(cls, data: BytesLike) -> "Secp256k1Signature":
        """Decode 64 bytes r(32) || s(32)."""
        data = to_bytes(data, "signature")
        if len(data) != 64:
            raise SignatureError(
                f"Got invalid data length: {len(data)}. Expected 2x 32 bytes for the pair (r, s)"
            )
        return cls(trim_leading_null_bytes(data[:32]), trim_leading_null_bytes(data[32:64]))

    @classmethod
    def from_der(cls, data: BytesLike) -> "Secp256k1Signature":
        """Decode a DER SEQUENCE of two INTEGERs."""
        r, s = parse_der_signature(to_bytes(data, "signature"))
        return cls(r, s)

    def r(self, length: Optional[int] = None) -> bytes:
        """Get r, optionally left-padded with zeros to length."""
        return _pad("r", self._r, length)

    def s(self, length: Optional[int] = None) -> bytes:
        """Get s, optionally left-padded with zeros to length."""
        return _pad("s", self._s, length)

    @property
    def r_int(self) -> int:
        return int.from_bytes(self._r, "big")

    @property
    def s_int(self) -> int:
        return int.from_bytes(self._s, "big")

    def to_fixed_length(self) -> bytes:
        """Encode as r(32) || s(32)."""
        return self.r(32) + self.s(32)

    def to_der(self) -> bytes:
        """Encode as DER."""
        return encode_der_signature(self._r, self._s)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Secp256k1Signature):
            return NotImplemented
        return self.to_fixed_length() == other.to_fixed_length()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(r={self._r.hex()}, s={self._s.hex()})"


class ExtendedSecp256k1Signature(Secp256k1Signature):
    """Signature with a recovery id, which lets the public key be recovered."""

    def __init__(self, r: BytesLike, s: BytesLike, recovery: int) -> None:
        super().__init__(r, s)
        if isinstance(recovery, bool) or not isinstance(recovery, int):
            raise SignatureError("The recovery parameter must be an integer.")
        if recovery < 0 or recovery > 3:
            raise SignatureError("The recovery parameter must be one of 0, 1, 2, 3.")
        self.recovery = recovery

    @classmethod
    def from_fixed_length(cls, data: BytesLike) -> "ExtendedSecp256k1Signature":
        """Decode 65 bytes r(32) || s(32) || recovery(1)."""
        data = to_bytes(data, "signature")
        if len(data) != 65:
            raise SignatureError(
                f"Got invalid data length {len(data)}. Expected 32 + 32 + 1"
            )
        return cls(
            trim_leading_null_bytes(data[:32]),
            trim_leading_null_bytes(data[32:64]),
            data[64],
        )

    def to_fixed_length(self) -> bytes:
        """Encode as r(32) || s(32) || recovery(1)."""
        return self.r(32) + self.s(32) + bytes([self.recovery])

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, ExtendedSecp256k1Signature):
            return NotImplemented
        return self.to_fixed_length() == other.to_fixed_length()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(r={self.r().hex()}, s={self.s().hex()}, "
            f"recovery={self.recovery})"
        )


def parse_der_signature(signature: bytes) -> Tuple[bytes, bytes]:
    """
    Parse DER-encoded signature.

    Args:
        signature: DER-encoded signature

    Returns:
        Tuple of (r, s) as unpadded big-endian bytes

    Raises:
        SignatureError: If signature format is invalid
    """
    try:
        pos = 0
        if signature[pos] != DER_TAG_SEQUENCE:
            raise SignatureError("Prefix 0x30 expected")
        pos += 1

        body_length = signature[pos]
        pos += 1
        if len(signature) - pos != body_length:
            raise SignatureError("Data length mismatch detected")

        components = []
        for name in ("r", "s"):
            if signature[pos] != DER_TAG_INTEGER:
                raise SignatureError("INTEGER tag expected")
            length = signature[pos + 1]
            if length >= 0x80:
                raise SignatureError("Decoding length values above 127 not supported")
            pos += 2
            value = signature[pos:pos + length]
            if len(value) != length:
                raise SignatureError(f"Truncated DER integer {name}")
            pos += length
            # DER integers carry a leading zero when the high bit is set
            components.append(trim_leading_null_bytes(value))

        if pos != len(signature):
            raise SignatureError("Unexpected trailing data in DER signature")

        return components[0], components[1]

    except IndexError as e:
        raise SignatureError(f"Invalid DER signature: {e}") from e


def encode_der_signature(r: bytes, s: bytes) -> bytes:
    """
    Encode signature as DER.

    Args:
        r: Signature r value, unpadded big-endian
        s: Signature s value, unpadded big-endian

    Returns:
        DER-encoded signature
    """
    # Encode r
    if r[0] & 0x80:
        r = b"\x00" + r
    r_encoded = bytes([DER_TAG_INTEGER, len(r)]) + r

    # Encode s
    if s[0] & 0x80:
        s = b"\x00" + s
    s_encoded = bytes([DER_TAG_INTEGER, len(s)]) + s

    # Combine into sequence
    sequence = r_encoded + s_encoded
    return bytes([DER_TAG_SEQUENCE, len(sequence)]) + sequence
