"""Constants for hdsigner."""

from typing import Final

# secp256k1 group order
SECP256K1_N: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N: Final[int] = SECP256K1_N // 2

PRIVATE_KEY_LENGTH: Final[int] = 32
COMPRESSED_PUBKEY_LENGTH: Final[int] = 33
UNCOMPRESSED_PUBKEY_LENGTH: Final[int] = 65
CHAIN_CODE_LENGTH: Final[int] = 32
MAX_MESSAGE_HASH_LENGTH: Final[int] = 32

# Derivation
HARDENED_OFFSET: Final[int] = 0x80000000
UINT32_MAX: Final[int] = 0xFFFFFFFF
COSMOS_COIN_TYPE: Final[int] = 118
MAX_DERIVATION_ATTEMPTS: Final[int] = 256

# Accounts
DEFAULT_PREFIX: Final[str] = "noble"
DEFAULT_BIP39_PASSWORD: Final[str] = ""
BECH32_MAX_LENGTH: Final[int] = 90

# BIP-39
BIP39_LANGUAGE: Final[str] = "english"
ENTROPY_LENGTHS: Final[tuple[int, ...]] = (16, 20, 24, 28, 32)

# Backup encryption
PBKDF2_ITERATIONS: Final[int] = 10000
PBKDF2_KEY_LENGTH: Final[int] = 32
PBKDF2_DIGEST: Final[str] = "sha256"
SALT_LENGTH: Final[int] = 16
IV_LENGTH: Final[int] = 16
AUTH_TAG_LENGTH: Final[int] = 16
SECRET_ENCODING: Final[str] = "base64"

# Amino JSON pubkey type
PUBKEY_TYPE_SECP256K1: Final[str] = "tendermint/PubKeySecp256k1"
