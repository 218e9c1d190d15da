"""hdsigner exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
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
]


class HDSignerError(Exception):
    """Base exception for all hdsigner errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(HDSignerError):
    """Raised when input is malformed (lengths, encodings, ranges)."""
    pass


class CryptoError(HDSignerError):
    """Raised when cryptographic operation fails."""
    pass


class InvalidKeyError(CryptoError):
    """Raised when a private or public key is not valid for the curve."""
    pass


class SignatureError(CryptoError):
    """Raised when a signature is non-canonical or cannot be decoded."""
    pass


class DerivationError(CryptoError):
    """Raised when hierarchical key derivation fails."""
    pass


class AuthenticationError(CryptoError):
    """Raised when authenticated decryption fails (wrong password or tampered data)."""
    pass


class WalletError(HDSignerError):
    """Raised when wallet operation fails."""
    pass


class InvalidMnemonicError(WalletError):
    """Raised when a mnemonic phrase fails word count or checksum checks."""
    pass


class AddressNotFoundError(WalletError):
    """Raised when a signer address is not tracked by the wallet."""

    def __init__(
        self,
        address: str,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"Address {address} not found in wallet"
        super().__init__(message)
        self.address = address


class SerializationError(HDSignerError):
    """Raised when serialization/deserialization fails."""
    pass
