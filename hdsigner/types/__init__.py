"""Type definitions for hdsigner."""

# Common types
from ..types.common import (
    HexStr,
    Base64Str,
    Address,
    Mnemonic,
    PrivateKeyBytes,
    PublicKeyBytes,
    ChainCode,
    Seed,
    RandomSource,
    BytesLike,
)

# Signing types
from ..types.sign_doc import (
    Algo,
    SignDoc,
    PubKey,
    StdSignature,
    AccountData,
    AccountDataWithPrivkey,
    DirectSignResponse,
)

__all__ = [
    # Common
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

    # Signing
    "Algo",
    "SignDoc",
    "PubKey",
    "StdSignature",
    "AccountData",
    "AccountDataWithPrivkey",
    "DirectSignResponse",
]
