"""secp256k1 keypairs, ECDSA signing and public key handling."""

import logging
from dataclasses import dataclass
from typing import Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..constants import (
    COMPRESSED_PUBKEY_LENGTH,
    MAX_MESSAGE_HASH_LENGTH,
    SECP256K1_HALF_N,
    SECP256K1_N,
    UNCOMPRESSED_PUBKEY_LENGTH,
)
from ..crypto.signature import ExtendedSecp256k1Signature, Secp256k1Signature
from ..exceptions import HDSignerError, InvalidKeyError, SignatureError, ValidationError
from ..types.common import BytesLike, PrivateKeyBytes, PublicKeyBytes
from ..utils.validation import (
    to_bytes,
    validate_message_hash,
    validate_private_key,
)

__all__ = ["Secp256k1", "Secp256k1Keypair"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Secp256k1Keypair:
    """Private key with its public key (compressed or uncompressed)."""

    privkey: PrivateKeyBytes
    pubkey: PublicKeyBytes

    def __repr__(self) -> str:
        # Never print the secret
        return f"Secp256k1Keypair(pubkey={self.pubkey.hex()})"


def _hash_to_digest(message_hash: bytes) -> bytes:
    # Shorter hashes are the same big-endian integer once left-padded
    return message_hash.rjust(MAX_MESSAGE_HASH_LENGTH, b"\x00")


class Secp256k1:
    """
    secp256k1 engine backed by libsecp256k1 (coincurve).

    All methods are stateless; the curve parameters are module constants.
    """

    @staticmethod
    def make_keypair(privkey: BytesLike) -> Secp256k1Keypair:
        """
        Create keypair from a private key.

        Args:
            privkey: 32-byte private key

        Returns:
            Keypair with the 65-byte uncompressed public key

        Raises:
            ValidationError: If privkey is not 32 bytes
            InvalidKeyError: If privkey is zero or not below the curve order
        """
        privkey = validate_private_key(privkey)
        try:
            key = SecpPrivateKey(privkey)
        except ValueError as e:
            raise InvalidKeyError("input data is not a valid secp256k1 private key") from e

        return Secp256k1Keypair(
            privkey=PrivateKeyBytes(privkey),
            pubkey=PublicKeyBytes(key.public_key.format(compressed=False)),
        )

    @staticmethod
    def create_signature(
        message_hash: BytesLike,
        privkey: BytesLike
    ) -> ExtendedSecp256k1Signature:
        """
        Sign a message hash with RFC 6979 deterministic ECDSA.

        The result is always in low-S form.

        Args:
            message_hash: 1 to 32 byte hash
            privkey: 32-byte private key

        Returns:
            Signature with recovery id

        Raises:
            ValidationError: If the hash is empty or longer than 32 bytes
            InvalidKeyError: If privkey is not a valid private key
        """
        message_hash = validate_message_hash(message_hash)
        privkey = validate_private_key(privkey)

        try:
            compact = SecpPrivateKey(privkey).sign_recoverable(
                _hash_to_digest(message_hash), hasher=None
            )
        except ValueError as e:
            raise SignatureError(f"Signing failed: {e}") from e

        r = int.from_bytes(compact[:32], "big")
        s = int.from_bytes(compact[32:64], "big")
        recovery = compact[64]

        # Canonical low-S; negating s flips the parity of R used for recovery
        if s > SECP256K1_HALF_N:
            s = SECP256K1_N - s
            recovery ^= 1

        return ExtendedSecp256k1Signature(
            r.to_bytes((r.bit_length() + 7) // 8, "big"),
            s.to_bytes((s.bit_length() + 7) // 8, "big"),
            recovery,
        )

    @staticmethod
    def verify_signature(
        signature: Union[Secp256k1Signature, bytes],
        message_hash: BytesLike,
        pubkey: BytesLike
    ) -> bool:
        """
        Verify signature.

        Args:
            signature: Signature object or DER-encoded signature
            message_hash: 1 to 32 byte hash that was signed
            pubkey: 33 or 65 byte public key

        Returns:
            True if signature is valid; never raises for malformed input
        """
        try:
            message_hash = validate_message_hash(message_hash)
            if isinstance(signature, Secp256k1Signature):
                der = signature.to_der()
            else:
                der = Secp256k1Signature.from_der(signature).to_der()
            key = SecpPublicKey(to_bytes(pubkey, "public key"))
            return bool(key.verify(der, _hash_to_digest(message_hash), hasher=None))
        except (HDSignerError, ValueError, TypeError) as e:
            logger.debug(f"Signature verification failed: {e}")
            return False

    @staticmethod
    def recover_pubkey(
        signature: ExtendedSecp256k1Signature,
        message_hash: BytesLike
    ) -> PublicKeyBytes:
        """
        Recover the signer's public key.

        Args:
            signature: Signature with recovery id
            message_hash: 1 to 32 byte hash that was signed

        Returns:
            65-byte uncompressed public key

        Raises:
            SignatureError: If no public key can be recovered
        """
        message_hash = validate_message_hash(message_hash)
        compact = signature.r(32) + signature.s(32) + bytes([signature.recovery])
        try:
            key = SecpPublicKey.from_signature_and_message(
                compact, _hash_to_digest(message_hash), hasher=None
            )
        except ValueError as e:
            raise SignatureError(f"Public key recovery failed: {e}") from e
        return PublicKeyBytes(key.format(compressed=False))

    @staticmethod
    def compress_pubkey(pubkey: BytesLike) -> PublicKeyBytes:
        """
        Convert a public key to its 33-byte compressed form.

        Raises:
            InvalidKeyError: If the length is not 33 or 65, or the point is invalid
        """
        return PublicKeyBytes(Secp256k1._reformat(pubkey, compressed=True))

    @staticmethod
    def uncompress_pubkey(pubkey: BytesLike) -> PublicKeyBytes:
        """
        Convert a public key to its 65-byte uncompressed form.

        Raises:
            InvalidKeyError: If the length is not 33 or 65, or the point is invalid
        """
        return PublicKeyBytes(Secp256k1._reformat(pubkey, compressed=False))

    @staticmethod
    def _reformat(pubkey: BytesLike, compressed: bool) -> bytes:
        pubkey = to_bytes(pubkey, "public key")
        if len(pubkey) not in (COMPRESSED_PUBKEY_LENGTH, UNCOMPRESSED_PUBKEY_LENGTH):
            raise InvalidKeyError("Invalid pubkey length")
        try:
            return SecpPublicKey(pubkey).format(compressed=compressed)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid secp256k1 public key: {e}") from e

    @staticmethod
    def trim_recovery_byte(signature: BytesLike) -> bytes:
        """
        Drop the recovery byte of a fixed-length signature.

        Args:
            signature: 64 or 65 bytes

        Returns:
            64-byte r || s

        Raises:
            ValidationError: On any other length
        """
        signature = to_bytes(signature, "signature")
        if len(signature) == 64:
            return signature
        if len(signature) == 65:
            return signature[:64]
        raise ValidationError("Invalid signature length")
