"""Common type definitions for hdsigner."""

from typing import Callable, NewType, Sequence, Union

__all__ = [
    "HexStr",
    "Base64Str",
    "Address",
    "Mnemonic",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "ChainCode",
    "Seed",
    "RandomSource",
    "BytesLike",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Lowercase hexadecimal string without prefix."""

Base64Str = NewType("Base64Str", str)
"""Standard (padded) base64 string."""

Address = NewType("Address", str)
"""Bech32 account address."""

Mnemonic = NewType("Mnemonic", str)
"""Space separated BIP-39 word sequence."""

# Crypto types
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33 or 65 byte public key."""

ChainCode = NewType("ChainCode", bytes)
"""32-byte chain code."""

Seed = NewType("Seed", bytes)
"""64-byte BIP-39 seed."""

# Type aliases
RandomSource = Callable[[int], bytes]
"""Returns the requested number of cryptographically secure random bytes."""

BytesLike = Union[bytes, bytearray, memoryview, Sequence[int]]
"""Anything that can be turned into bytes."""
