"""Signing related type definitions for hdsigner."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypedDict, Union

from ..exceptions import ValidationError
from ..types.common import Address, Base64Str, PrivateKeyBytes, PublicKeyBytes

__all__ = [
    "Algo",
    "SignDoc",
    "PubKey",
    "StdSignature",
    "AccountData",
    "AccountDataWithPrivkey",
    "DirectSignResponse",
]


class Algo(str, Enum):
    """Signing algorithms."""

    SECP256K1 = "secp256k1"
    ED25519 = "ed25519"
    SR25519 = "sr25519"


@dataclass(frozen=True)
class SignDoc:
    """
    cosmos.tx.v1beta1.SignDoc.

    Supplied by the transaction service; every field is optional and
    defaults to its proto3 zero value.
    """

    body_bytes: bytes = b""
    auth_info_bytes: bytes = b""
    chain_id: str = ""
    account_number: int = 0

    def __post_init__(self) -> None:
        for name in ("body_bytes", "auth_info_bytes"):
            if not isinstance(getattr(self, name), bytes):
                raise ValidationError(f"{name} must be bytes")
        if not isinstance(self.chain_id, str):
            raise ValidationError("chain_id must be a str")
        if isinstance(self.account_number, bool) or not isinstance(self.account_number, int):
            raise ValidationError("account_number must be an int")
        if self.account_number < 0 or self.account_number >= 1 << 64:
            raise ValidationError(f"Account number out of uint64 range: {self.account_number}")

    @classmethod
    def from_partial(cls, data: Union["SignDoc", Mapping[str, Any]]) -> "SignDoc":
        """
        Build from a mapping with camelCase or snake_case keys.

        Missing or None values fall back to defaults; account_number may be
        given as a decimal string.

        Raises:
            ValidationError: If a field has the wrong type or account_number is negative
        """
        if isinstance(data, SignDoc):
            return data
        if not isinstance(data, Mapping):
            raise ValidationError(f"Sign doc must be a mapping, got {type(data).__name__}")

        def pick(snake: str, camel: str) -> Any:
            value = data.get(snake)
            if value is None:
                value = data.get(camel)
            return value

        def as_bytes(name: str, value: Any) -> bytes:
            if value is None:
                return b""
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise ValidationError(f"{name} must be bytes, got {type(value).__name__}")
            return bytes(value)

        chain_id = pick("chain_id", "chainId")
        if chain_id is None:
            chain_id = ""
        elif not isinstance(chain_id, str):
            raise ValidationError(f"chain_id must be a str, got {type(chain_id).__name__}")

        account_number = pick("account_number", "accountNumber")
        if account_number is None:
            number = 0
        elif isinstance(account_number, bool) or not isinstance(account_number, (int, str)):
            raise ValidationError(f"Invalid account number: {account_number!r}")
        else:
            try:
                number = int(account_number)
            except ValueError as e:
                raise ValidationError(f"Invalid account number: {account_number!r}") from e

        return cls(
            body_bytes=as_bytes("body_bytes", pick("body_bytes", "bodyBytes")),
            auth_info_bytes=as_bytes("auth_info_bytes", pick("auth_info_bytes", "authInfoBytes")),
            chain_id=chain_id,
            account_number=number,
        )


class PubKey(TypedDict):
    """Amino JSON public key."""

    type: str
    value: Base64Str


class StdSignature(TypedDict):
    """Amino JSON signature envelope."""

    pub_key: PubKey
    signature: Base64Str


@dataclass(frozen=True)
class AccountData:
    """Public view of a derived account."""

    algo: Algo
    pubkey: PublicKeyBytes
    address: Address


@dataclass(frozen=True)
class AccountDataWithPrivkey(AccountData):
    """Derived account including its private key."""

    privkey: PrivateKeyBytes = field(default=PrivateKeyBytes(b""), repr=False)

    def to_account_data(self) -> AccountData:
        return AccountData(algo=self.algo, pubkey=self.pubkey, address=self.address)


@dataclass(frozen=True)
class DirectSignResponse:
    """Result of signing in direct mode."""

    signed: SignDoc
    signature: StdSignature
