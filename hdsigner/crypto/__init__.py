"""Cryptographic primitives for hdsigner."""

from ..crypto.uint32 import Uint32
from ..crypto.signature import (
    Secp256k1Signature,
    ExtendedSecp256k1Signature,
    parse_der_signature,
    encode_der_signature,
)
from ..crypto.secp256k1 import Secp256k1, Secp256k1Keypair
from ..crypto.slip10 import (
    Slip10,
    Slip10Curve,
    Slip10RawIndex,
    Slip10Result,
    make_cosmoshub_path,
    string_to_path,
    path_to_string,
)
from ..crypto.bip39 import (
    entropy_to_mnemonic,
    generate_mnemonic,
    validate_mnemonic,
    mnemonic_to_seed,
)
from ..crypto.encryption import EncryptedSecret, encrypt_secret, decrypt_secret
from ..crypto.transaction_signing import (
    make_sign_bytes,
    encode_secp256k1_pubkey,
    encode_secp256k1_signature,
)

__all__ = [
    # Integers
    "Uint32",

    # Signatures
    "Secp256k1Signature",
    "ExtendedSecp256k1Signature",
    "parse_der_signature",
    "encode_der_signature",

    # secp256k1
    "Secp256k1",
    "Secp256k1Keypair",

    # Derivation
    "Slip10",
    "Slip10Curve",
    "Slip10RawIndex",
    "Slip10Result",
    "make_cosmoshub_path",
    "string_to_path",
    "path_to_string",

    # Mnemonics
    "entropy_to_mnemonic",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",

    # Backup encryption
    "EncryptedSecret",
    "encrypt_secret",
    "decrypt_secret",

    # Transaction signing
    "make_sign_bytes",
    "encode_secp256k1_pubkey",
    "encode_secp256k1_signature",
]
