"""BIP39 mnemonic implementation for hdsigner."""

import secrets
import unicodedata
from functools import lru_cache

from mnemonic import Mnemonic as _Bip39

from ..constants import BIP39_LANGUAGE, ENTROPY_LENGTHS
from ..exceptions import InvalidMnemonicError, ValidationError
from ..types.common import Mnemonic, RandomSource, Seed

__all__ = [
    "entropy_to_mnemonic",
    "generate_mnemonic",
    "validate_mnemonic",
    "mnemonic_to_seed",
    "normalize_mnemonic",
]


@lru_cache(maxsize=None)
def _bip39(language: str = BIP39_LANGUAGE) -> _Bip39:
    return _Bip39(language)


def normalize_mnemonic(mnemonic: str) -> str:
    """Collapse whitespace and apply NFKD normalization."""
    return unicodedata.normalize("NFKD", " ".join(mnemonic.split()))


def entropy_to_mnemonic(entropy: bytes) -> Mnemonic:
    """
    Encode entropy as a BIP39 mnemonic phrase.

    Args:
        entropy: 16, 20, 24, 28 or 32 bytes

    Returns:
        Space separated words

    Raises:
        ValidationError: If the entropy length is not supported
    """
    if len(entropy) not in ENTROPY_LENGTHS:
        raise ValidationError(f"Entropy must be 16, 20, 24, 28 or 32 bytes, got {len(entropy)}")

    return Mnemonic(_bip39().to_mnemonic(bytes(entropy)))


def generate_mnemonic(
    strength: int = 128,
    randbytes: RandomSource = secrets.token_bytes
) -> Mnemonic:
    """Generate BIP39 mnemonic phrase."""
    if strength not in (128, 160, 192, 224, 256):
        raise ValidationError("Strength must be 128, 160, 192, 224, or 256")

    return entropy_to_mnemonic(randbytes(strength // 8))


def validate_mnemonic(mnemonic: str) -> bool:
    """Check word count, wordlist membership and checksum."""
    words = normalize_mnemonic(mnemonic).split(" ")
    if len(words) not in (12, 15, 18, 21, 24):
        return False
    try:
        return bool(_bip39().check(" ".join(words)))
    except (ValueError, LookupError):
        return False


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> Seed:
    """
    Convert mnemonic to the 64-byte seed (PBKDF2-HMAC-SHA512, 2048 rounds).

    Raises:
        InvalidMnemonicError: If the phrase is empty
    """
    mnemonic = normalize_mnemonic(mnemonic)
    if not mnemonic:
        raise InvalidMnemonicError("Mnemonic cannot be empty")
    return Seed(_Bip39.to_seed(mnemonic, passphrase))
