"""
hdsigner

Deterministic key management and transaction signing for Cosmos SDK
wallets: BIP39 mnemonics, SLIP-10 derivation, secp256k1 signing,
bech32 addresses and encrypted mnemonic backups.
"""

from .exceptions import (
    HDSignerError,
    ValidationError,
    CryptoError,
    InvalidKeyError,
    SignatureError,
    DerivationError,
    AuthenticationError,
    WalletError,
    InvalidMnemonicError,
    AddressNotFoundError,
    SerializationError,
)
from .crypto import (
    Uint32,
    Secp256k1,
    Secp256k1Keypair,
    Secp256k1Signature,
    ExtendedSecp256k1Signature,
    Slip10,
    Slip10Curve,
    Slip10RawIndex,
    make_cosmoshub_path,
    EncryptedSecret,
    make_sign_bytes,
)
from .modules import Account, AccountOptions, Word
from .types import SignDoc, StdSignature, AccountData, DirectSignResponse

__version__ = "1.0.0"

__all__ = [
    # Account
    "Account",
    "AccountOptions",
    "Word",

    # Exceptions
    "HDSignerError",
    "ValidationError",
    "CryptoError",
    "InvalidKeyError",
    "SignatureError",
    "DerivationError",
    "AuthenticationError",
    "WalletError",
    "InvalidMnemonicError",
    "AddressNotFoundError",
    "SerializationError",

    # Crypto
    "Uint32",
    "Secp256k1",
    "Secp256k1Keypair",
    "Secp256k1Signature",
    "ExtendedSecp256k1Signature",
    "Slip10",
    "Slip10Curve",
    "Slip10RawIndex",
    "make_cosmoshub_path",
    "EncryptedSecret",
    "make_sign_bytes",

    # Types
    "SignDoc",
    "StdSignature",
    "AccountData",
    "DirectSignResponse",
]
