"""Password based authenticated encryption of wallet secrets."""

import json
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, Union

from Crypto.Cipher import AES

from ..constants import (
    AUTH_TAG_LENGTH,
    IV_LENGTH,
    PBKDF2_DIGEST,
    PBKDF2_ITERATIONS,
    PBKDF2_KEY_LENGTH,
    SALT_LENGTH,
    SECRET_ENCODING,
)
from ..exceptions import AuthenticationError, SerializationError, ValidationError
from ..types.common import RandomSource
from ..utils.encoding import from_base64, pbkdf2, to_base64

__all__ = [
    "EncryptedSecret",
    "derive_session_key",
    "encrypt_secret",
    "decrypt_secret",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncryptedSecret:
    """
    AES-256-GCM ciphertext with everything needed to decrypt it.

    The JSON form is {"encoding", "salt", "iv", "payload", "authTag"},
    all binary fields base64 encoded.
    """

    salt: bytes
    iv: bytes
    payload: bytes
    auth_tag: bytes
    encoding: str = SECRET_ENCODING

    def to_dict(self) -> Dict[str, str]:
        return {
            "encoding": self.encoding,
            "salt": to_base64(self.salt),
            "iv": to_base64(self.iv),
            "payload": to_base64(self.payload),
            "authTag": to_base64(self.auth_tag),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedSecret":
        """
        Parse the dict form.

        Raises:
            SerializationError: On missing fields, unsupported encoding or invalid base64
        """
        missing = [key for key in ("salt", "iv", "payload", "authTag") if key not in data]
        if missing:
            raise SerializationError(f"Encrypted secret is missing fields: {', '.join(missing)}")

        encoding = data.get("encoding", SECRET_ENCODING)
        if encoding != SECRET_ENCODING:
            raise SerializationError(f"Unsupported encoding: {encoding}")

        try:
            return cls(
                salt=from_base64(data["salt"]),
                iv=from_base64(data["iv"]),
                payload=from_base64(data["payload"]),
                auth_tag=from_base64(data["authTag"]),
                encoding=encoding,
            )
        except (ValidationError, TypeError) as e:
            raise SerializationError(f"Invalid encrypted secret: {e}") from e

    @classmethod
    def from_json(cls, text: str) -> "EncryptedSecret":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Invalid encrypted secret JSON: {e}") from e
        if not isinstance(data, dict):
            raise SerializationError("Encrypted secret JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def coerce(cls, data: Union["EncryptedSecret", Dict[str, Any], str]) -> "EncryptedSecret":
        """Accept an EncryptedSecret, its dict form or its JSON form."""
        if isinstance(data, EncryptedSecret):
            return data
        if isinstance(data, str):
            return cls.from_json(data)
        if isinstance(data, dict):
            return cls.from_dict(data)
        raise SerializationError(f"Unsupported encrypted secret type: {type(data).__name__}")


def derive_session_key(password: str, salt: bytes) -> bytes:
    """PBKDF2-HMAC-SHA256(password, salt, 10000 rounds) -> 32-byte AES key."""
    return pbkdf2(password, salt, PBKDF2_ITERATIONS, PBKDF2_KEY_LENGTH, PBKDF2_DIGEST)


def encrypt_secret(
    plaintext: str,
    password: str,
    randbytes: RandomSource = secrets.token_bytes
) -> EncryptedSecret:
    """
    Encrypt a secret with a password.

    A fresh 16-byte salt and 16-byte IV are drawn for every call.

    Args:
        plaintext: Secret to protect
        password: User password
        randbytes: Source of random bytes

    Returns:
        Encrypted secret
    """
    salt = randbytes(SALT_LENGTH)
    iv = randbytes(IV_LENGTH)
    if len(salt) != SALT_LENGTH or len(iv) != IV_LENGTH:
        raise ValidationError("Random source returned the wrong number of bytes")

    session_key = derive_session_key(password, salt)
    cipher = AES.new(session_key, AES.MODE_GCM, nonce=iv, mac_len=AUTH_TAG_LENGTH)
    payload, auth_tag = cipher.encrypt_and_digest(plaintext.encode("utf-8"))

    logger.debug("Encrypted secret with AES-256-GCM")
    return EncryptedSecret(salt=salt, iv=iv, payload=payload, auth_tag=auth_tag)


def decrypt_secret(secret: EncryptedSecret, password: str) -> str:
    """
    Decrypt a secret produced by encrypt_secret.

    Raises:
        AuthenticationError: If the password is wrong or the data was tampered with
        SerializationError: If the plaintext is not UTF-8
    """
    session_key = derive_session_key(password, secret.salt)
    try:
        cipher = AES.new(session_key, AES.MODE_GCM, nonce=secret.iv, mac_len=AUTH_TAG_LENGTH)
        plaintext = cipher.decrypt_and_verify(secret.payload, secret.auth_tag)
    except ValueError as e:
        raise AuthenticationError("Unable to decrypt secret: authentication failed") from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SerializationError("Decrypted secret is not valid UTF-8") from e
