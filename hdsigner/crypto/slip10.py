"""SLIP-10 hierarchical deterministic key derivation (secp256k1 and ed25519)."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from coincurve import PrivateKey as SecpPrivateKey

from ..constants import (
    CHAIN_CODE_LENGTH,
    COSMOS_COIN_TYPE,
    HARDENED_OFFSET,
    MAX_DERIVATION_ATTEMPTS,
    PRIVATE_KEY_LENGTH,
    SECP256K1_N,
)
from ..crypto.uint32 import Uint32
from ..exceptions import DerivationError, ValidationError
from ..types.common import BytesLike, ChainCode, PrivateKeyBytes
from ..utils.encoding import hmac_sha512
from ..utils.validation import to_bytes

__all__ = [
    "Slip10",
    "Slip10Curve",
    "Slip10RawIndex",
    "Slip10Result",
    "HDPath",
    "make_cosmoshub_path",
    "string_to_path",
    "path_to_string",
]

logger = logging.getLogger(__name__)


class Slip10Curve(str, Enum):
    """Supported curves; the value is the HMAC key of the master derivation."""

    SECP256K1 = "Bitcoin seed"
    ED25519 = "ed25519 seed"


class Slip10RawIndex(Uint32):
    """Derivation index; values from 2**31 up are hardened."""

    @classmethod
    def hardened(cls, hardened_index: int) -> "Slip10RawIndex":
        return cls(hardened_index + HARDENED_OFFSET)

    @classmethod
    def normal(cls, normal_index: int) -> "Slip10RawIndex":
        return cls(normal_index)

    def is_hardened(self) -> bool:
        return self.data >= HARDENED_OFFSET


HDPath = List[Slip10RawIndex]


@dataclass(frozen=True)
class Slip10Result:
    """Private key and chain code at one derivation depth."""

    chain_code: ChainCode
    privkey: PrivateKeyBytes

    def __repr__(self) -> str:
        return "Slip10Result(...)"


def _coerce_curve(curve: str) -> Slip10Curve:
    try:
        return Slip10Curve(curve)
    except ValueError as e:
        raise DerivationError("curve not supported") from e


def make_cosmoshub_path(index: int) -> HDPath:
    """Path m/44'/118'/0'/0/index used by Cosmos SDK chains."""
    return [
        Slip10RawIndex.hardened(44),
        Slip10RawIndex.hardened(COSMOS_COIN_TYPE),
        Slip10RawIndex.hardened(0),
        Slip10RawIndex.normal(0),
        Slip10RawIndex.normal(index),
    ]


def string_to_path(path: str) -> HDPath:
    """
    Parse a BIP-32 path like m/44'/118'/0'/0/0.

    Hardened components are marked with ' or h.

    Raises:
        ValidationError: If the path is malformed
    """
    if not path.startswith("m"):
        raise ValidationError("Path string must start with 'm'")
    rest = path[1:]
    if rest and not rest.startswith("/"):
        raise ValidationError(f"Invalid path: {path}")

    result = []
    for component in rest.split("/")[1:]:
        hardened = component.endswith("'") or component.endswith("h")
        number = component[:-1] if hardened else component
        if not number.isdigit() or not number.isascii():
            raise ValidationError(f"Invalid path component: {component!r}")
        value = int(number)
        if value >= HARDENED_OFFSET:
            raise ValidationError(f"Path component out of range: {component!r}")
        if hardened:
            result.append(Slip10RawIndex.hardened(value))
        else:
            result.append(Slip10RawIndex.normal(value))
    return result


def path_to_string(path: Sequence[Slip10RawIndex]) -> str:
    """Render a path in BIP-32 notation, e.g. m/44'/118'/0'/0/0."""
    components = ["m"]
    for index in path:
        if index.is_hardened():
            components.append(f"{index.data - HARDENED_OFFSET}'")
        else:
            components.append(str(index.data))
    return "/".join(components)


class Slip10:
    """SLIP-10 derivation; every method is a pure function of its arguments."""

    @classmethod
    def derive_path(
        cls,
        curve: Slip10Curve,
        seed: BytesLike,
        path: Sequence[Slip10RawIndex]
    ) -> Slip10Result:
        """
        Derive the key at path from a seed.

        Args:
            curve: Target curve
            seed: BIP-39 seed
            path: Ordered derivation indices

        Returns:
            Private key and chain code of the last path element
        """
        curve = _coerce_curve(curve)
        if curve is Slip10Curve.ED25519 and not all(index.is_hardened() for index in path):
            raise DerivationError("Normal keys are not allowed with ed25519")

        result = cls.master(curve, seed)
        for raw_index in path:
            result = cls.child(curve, result.privkey, result.chain_code, raw_index)
        logger.debug(f"Derived {curve.name} key at depth {len(path)}")
        return result

    @classmethod
    def master(cls, curve: Slip10Curve, seed: BytesLike) -> Slip10Result:
        """
        Create the master key from a seed.

        For secp256k1 an all-zero or out of range key is fixed by hashing
        the whole 64-byte HMAC output again as the new seed.

        Raises:
            DerivationError: If no valid key is found within the attempt cap
        """
        curve = _coerce_curve(curve)
        data = to_bytes(seed, "seed")
        for _ in range(MAX_DERIVATION_ATTEMPTS):
            i = hmac_sha512(curve.value, data)
            privkey, chain_code = i[:32], i[32:]
            if curve is Slip10Curve.ED25519 or not (
                cls.is_zero(privkey) or cls.is_gte_n(curve, privkey)
            ):
                return Slip10Result(ChainCode(chain_code), PrivateKeyBytes(privkey))
            logger.debug("Master key out of range, re-hashing")
            data = i
        raise DerivationError("Master key derivation did not converge")

    @classmethod
    def child(
        cls,
        curve: Slip10Curve,
        parent_privkey: BytesLike,
        parent_chain_code: BytesLike,
        raw_index: Slip10RawIndex
    ) -> Slip10Result:
        """
        Derive a child private key.

        Args:
            curve: Target curve
            parent_privkey: 32-byte parent private key
            parent_chain_code: 32-byte parent chain code
            raw_index: Child index

        Returns:
            Child private key and chain code

        Raises:
            DerivationError: For a normal index on ed25519, or if no valid key is found
            ValidationError: If the key or chain code length is wrong
        """
        curve = _coerce_curve(curve)
        if not raw_index.is_hardened() and curve is Slip10Curve.ED25519:
            raise DerivationError("Normal keys are not allowed with ed25519")

        parent_privkey = to_bytes(parent_privkey, "parent private key")
        parent_chain_code = to_bytes(parent_chain_code, "parent chain code")
        if len(parent_privkey) != PRIVATE_KEY_LENGTH:
            raise ValidationError(f"Parent private key must be 32 bytes, got {len(parent_privkey)}")
        if len(parent_chain_code) != CHAIN_CODE_LENGTH:
            raise ValidationError(f"Parent chain code must be 32 bytes, got {len(parent_chain_code)}")

        index_bytes = raw_index.to_bytes_big_endian()
        if raw_index.is_hardened():
            data = b"\x00" + parent_privkey + index_bytes
        else:
            point = cls.serialized_point(curve, int.from_bytes(parent_privkey, "big"))
            data = point + index_bytes

        i = hmac_sha512(parent_chain_code, data)
        return cls._child_from_hmac(curve, parent_privkey, parent_chain_code, raw_index, i)

    @classmethod
    def _child_from_hmac(
        cls,
        curve: Slip10Curve,
        parent_privkey: bytes,
        parent_chain_code: bytes,
        raw_index: Slip10RawIndex,
        i: bytes
    ) -> Slip10Result:
        index_bytes = raw_index.to_bytes_big_endian()
        for _ in range(MAX_DERIVATION_ATTEMPTS):
            il, ir = i[:32], i[32:]

            if curve is Slip10Curve.ED25519:
                return Slip10Result(ChainCode(ir), PrivateKeyBytes(il))

            n = cls.n(curve)
            child_int = (int.from_bytes(il, "big") + int.from_bytes(parent_privkey, "big")) % n
            if not cls.is_gte_n(curve, il) and child_int != 0:
                return Slip10Result(
                    ChainCode(ir), PrivateKeyBytes(child_int.to_bytes(32, "big"))
                )

            logger.debug(f"Child key {raw_index} out of range, retrying")
            i = hmac_sha512(parent_chain_code, b"\x01" + ir + index_bytes)
        raise DerivationError(f"Child key derivation for index {raw_index} did not converge")

    @staticmethod
    def serialized_point(curve: Slip10Curve, scalar: int) -> bytes:
        """
        Multiply the base point by scalar and return the compressed point.

        Raises:
            DerivationError: For curves other than secp256k1 or an invalid scalar
        """
        if curve is not Slip10Curve.SECP256K1:
            raise DerivationError("curve not supported")
        if scalar <= 0 or scalar >= SECP256K1_N:
            raise DerivationError("Scalar out of range for point multiplication")
        return SecpPrivateKey(scalar.to_bytes(32, "big")).public_key.format(compressed=True)

    @staticmethod
    def is_zero(privkey: bytes) -> bool:
        return all(byte == 0 for byte in privkey)

    @classmethod
    def is_gte_n(cls, curve: Slip10Curve, privkey: bytes) -> bool:
        return int.from_bytes(privkey, "big") >= cls.n(curve)

    @staticmethod
    def n(curve: Slip10Curve) -> int:
        """Curve order."""
        if curve is Slip10Curve.SECP256K1:
            return SECP256K1_N
        raise DerivationError("curve not supported")
