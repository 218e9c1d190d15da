"""Strict 32-bit unsigned integers."""

import re
import warnings
from typing import Sequence

from ..constants import UINT32_MAX
from ..exceptions import ValidationError

__all__ = ["Uint32"]

DECIMAL_PATTERN = re.compile(r"[0-9]+")


class Uint32:
    """
    Immutable unsigned 32-bit integer.

    Used for derivation indices, where the byte layout must be exact.
    """

    __slots__ = ("_data",)

    def __init__(self, value: int) -> None:
        """
        Initialize from an integer.

        Args:
            value: Integer in 0..2**32-1

        Raises:
            ValidationError: If value is not an integer or out of range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Input is not an integer: {value!r}")
        if value < 0 or value > UINT32_MAX:
            raise ValidationError(f"Input not in uint32 range: {value}")
        self._data = value

    @classmethod
    def from_bytes(cls, data: Sequence[int], endianness: str = "be") -> "Uint32":
        """
        Create from exactly 4 bytes.

        Args:
            data: 4 byte values
            endianness: "be" (default) or "le"

        Raises:
            ValidationError: On wrong length, byte values outside 0..255 or unknown endianness
        """
        if len(data) != 4:
            raise ValidationError("Invalid input length. Expected 4 bytes.")
        for byte in data:
            if isinstance(byte, bool) or not isinstance(byte, int) or byte < 0 or byte > 255:
                raise ValidationError(f"Invalid value in byte. Found: {byte!r}")
        if endianness == "be":
            byteorder = "big"
        elif endianness == "le":
            byteorder = "little"
        else:
            raise ValidationError(f"Unknown endianness: {endianness!r}")
        return cls(int.from_bytes(bytes(data), byteorder))

    @classmethod
    def from_big_endian_bytes(cls, data: Sequence[int]) -> "Uint32":
        """Deprecated, use Uint32.from_bytes."""
        warnings.warn(
            "Uint32.from_big_endian_bytes is deprecated, use Uint32.from_bytes",
            DeprecationWarning,
            stacklevel=2,
        )
        return cls.from_bytes(data)

    @classmethod
    def from_string(cls, text: str) -> "Uint32":
        """Create from a decimal numeral string."""
        if not isinstance(text, str) or not DECIMAL_PATTERN.fullmatch(text):
            raise ValidationError("Invalid string format")
        return cls(int(text, 10))

    @property
    def data(self) -> int:
        return self._data

    def to_bytes_big_endian(self) -> bytes:
        return self._data.to_bytes(4, "big")

    def to_bytes_little_endian(self) -> bytes:
        return self._data.to_bytes(4, "little")

    def to_number(self) -> int:
        return self._data

    def __int__(self) -> int:
        return self._data

    def __index__(self) -> int:
        return self._data

    def __str__(self) -> str:
        return str(self._data)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._data})"

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Uint32):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)
