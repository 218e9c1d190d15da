"""Account module for hdsigner."""

import logging
import secrets
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Sequence, Union

from ..constants import DEFAULT_BIP39_PASSWORD, DEFAULT_PREFIX
from ..crypto.bip39 import entropy_to_mnemonic, mnemonic_to_seed, normalize_mnemonic, validate_mnemonic
from ..crypto.encryption import EncryptedSecret, decrypt_secret, encrypt_secret
from ..crypto.secp256k1 import Secp256k1, Secp256k1Keypair
from ..crypto.slip10 import HDPath, Slip10, Slip10Curve, Slip10RawIndex, make_cosmoshub_path
from ..crypto.transaction_signing import encode_secp256k1_signature, make_sign_bytes
from ..exceptions import AddressNotFoundError, InvalidMnemonicError, ValidationError
from ..types.common import Address, RandomSource
from ..types.sign_doc import (
    AccountData,
    AccountDataWithPrivkey,
    Algo,
    DirectSignResponse,
    SignDoc,
)
from ..utils.encoding import raw_secp256k1_pubkey_to_raw_address, sha256, to_bech32

__all__ = [
    "Account",
    "AccountOptions",
    "TrackedPath",
    "Word",
    "make_sign_bytes",
]

logger = logging.getLogger(__name__)


class Word(IntEnum):
    """Supported mnemonic lengths."""

    WORD12 = 12
    WORD24 = 24


def _default_hd_paths() -> List[HDPath]:
    return [make_cosmoshub_path(0)]


@dataclass
class AccountOptions:
    """
    Account configuration.

    Attributes:
        bip39_password: Optional BIP39 passphrase
        prefix: Bech32 address prefix
        hd_paths: One derivation path per tracked sub-account
        seed: Precomputed seed; derived from the mnemonic when None
    """

    bip39_password: str = DEFAULT_BIP39_PASSWORD
    prefix: str = DEFAULT_PREFIX
    hd_paths: List[HDPath] = field(default_factory=_default_hd_paths)
    seed: Optional[bytes] = field(default=None, repr=False)


@dataclass(frozen=True)
class TrackedPath:
    """Derivation path with the address prefix used for it."""

    hd_path: HDPath
    prefix: str


class Account:
    """
    HD account holding a mnemonic.

    Derives one secp256k1 keypair and bech32 address per tracked path,
    encrypts the mnemonic for backup and signs direct-mode sign docs.
    """

    def __init__(
        self,
        mnemonic: str,
        options: Optional[AccountOptions] = None
    ) -> None:
        """
        Initialize account.

        Args:
            mnemonic: BIP39 mnemonic phrase
            options: Account configuration; defaults apply when None
        """
        options = options or AccountOptions()
        if not options.hd_paths:
            raise ValidationError("At least one HD path is required")

        self._secret = mnemonic
        self._seed = options.seed if options.seed is not None else mnemonic_to_seed(
            mnemonic, options.bip39_password
        )
        self._accounts = [
            TrackedPath(hd_path=list(hd_path), prefix=options.prefix)
            for hd_path in options.hd_paths
        ]
        self._logger = logging.getLogger(f"{__name__}.Account")
        self._logger.debug(f"Account created with {len(self._accounts)} tracked path(s)")

    @classmethod
    def generate(
        cls,
        options: Optional[AccountOptions] = None,
        length: Word = Word.WORD12,
        randbytes: RandomSource = secrets.token_bytes
    ) -> "Account":
        """
        Create account from fresh entropy.

        Args:
            options: Account configuration
            length: Number of mnemonic words (12 or 24)
            randbytes: Source of random bytes

        Returns:
            New Account instance
        """
        try:
            length = Word(length)
        except ValueError as e:
            raise ValidationError(f"Unsupported mnemonic length: {length}") from e
        entropy_length = 4 * ((11 * length) // 33)
        mnemonic = entropy_to_mnemonic(randbytes(entropy_length))
        logger.info(f"Generated {int(length)}-word mnemonic")
        return cls.from_mnemonic(mnemonic, options)

    @classmethod
    def from_mnemonic(
        cls,
        mnemonic: str,
        options: Optional[AccountOptions] = None
    ) -> "Account":
        """
        Restore account from a mnemonic.

        Raises:
            InvalidMnemonicError: If the word count or checksum is wrong
        """
        if not validate_mnemonic(mnemonic):
            raise InvalidMnemonicError("Invalid mnemonic phrase")

        options = options or AccountOptions()
        seed = options.seed
        if seed is None:
            seed = mnemonic_to_seed(mnemonic, options.bip39_password)

        return cls(
            normalize_mnemonic(mnemonic),
            AccountOptions(
                bip39_password=options.bip39_password,
                prefix=options.prefix,
                hd_paths=list(options.hd_paths),
                seed=seed,
            ),
        )

    @property
    def mnemonic(self) -> str:
        """Get mnemonic phrase."""
        return self._secret

    @property
    def accounts(self) -> List[TrackedPath]:
        """Get tracked paths."""
        return list(self._accounts)

    def add_path(self, hd_path: Sequence[Slip10RawIndex], prefix: Optional[str] = None) -> None:
        """
        Track an additional derivation path.

        Args:
            hd_path: Derivation path
            prefix: Address prefix, defaults to the prefix of the first tracked path
        """
        prefix = prefix or self._accounts[0].prefix
        self._accounts.append(TrackedPath(hd_path=list(hd_path), prefix=prefix))
        self._logger.debug(f"Now tracking {len(self._accounts)} path(s)")

    def serialize(
        self,
        password: str,
        randbytes: RandomSource = secrets.token_bytes
    ) -> EncryptedSecret:
        """
        Encrypt the mnemonic for backup.

        Args:
            password: Backup password
            randbytes: Source of random bytes for salt and IV

        Returns:
            Encrypted secret; use to_dict() for the JSON shape
        """
        return encrypt_secret(self._secret, password, randbytes)

    @classmethod
    def deserialize(
        cls,
        data: Union[EncryptedSecret, Dict[str, Any], str],
        password: str,
        options: Optional[AccountOptions] = None
    ) -> "Account":
        """
        Restore account from an encrypted backup.

        Args:
            data: EncryptedSecret, its dict form or its JSON form
            password: Backup password
            options: Account configuration for the restored account

        Raises:
            AuthenticationError: If the password is wrong or the data was tampered with
        """
        mnemonic = decrypt_secret(EncryptedSecret.coerce(data), password)
        return cls.from_mnemonic(mnemonic, options)

    def get_key_pair(self, hd_path: Sequence[Slip10RawIndex]) -> Secp256k1Keypair:
        """
        Derive the keypair for a path.

        Returns:
            Keypair with the 33-byte compressed public key
        """
        result = Slip10.derive_path(Slip10Curve.SECP256K1, self._seed, hd_path)
        keypair = Secp256k1.make_keypair(result.privkey)
        return Secp256k1Keypair(
            privkey=keypair.privkey,
            pubkey=Secp256k1.compress_pubkey(keypair.pubkey),
        )

    def get_accounts_with_privkeys(self) -> List[AccountDataWithPrivkey]:
        """Derive every tracked account including private keys."""
        accounts = []
        for tracked in self._accounts:
            keypair = self.get_key_pair(tracked.hd_path)
            raw_address = raw_secp256k1_pubkey_to_raw_address(keypair.pubkey)
            accounts.append(AccountDataWithPrivkey(
                algo=Algo.SECP256K1,
                pubkey=keypair.pubkey,
                address=to_bech32(tracked.prefix, raw_address),
                privkey=keypair.privkey,
            ))
        return accounts

    def get_accounts(self) -> List[AccountData]:
        """Derive every tracked account without private keys."""
        return [account.to_account_data() for account in self.get_accounts_with_privkeys()]

    def sign_direct(
        self,
        signer_address: Union[Address, str],
        sign_doc: Union[SignDoc, Dict[str, Any]]
    ) -> DirectSignResponse:
        """
        Sign a sign doc in direct mode.

        Args:
            signer_address: Address of a tracked account
            sign_doc: SignDoc or mapping with its fields

        Returns:
            The sign doc and the Amino JSON signature envelope

        Raises:
            AddressNotFoundError: If no tracked account has signer_address
        """
        account = next(
            (a for a in self.get_accounts_with_privkeys() if a.address == signer_address),
            None,
        )
        if account is None:
            raise AddressNotFoundError(str(signer_address))

        doc = SignDoc.from_partial(sign_doc)
        message_hash = sha256(make_sign_bytes(doc))
        signature = Secp256k1.create_signature(message_hash, account.privkey)
        std_signature = encode_secp256k1_signature(account.pubkey, signature.r(32) + signature.s(32))

        self._logger.info(f"Signed sign doc for {account.address} on chain {doc.chain_id!r}")
        return DirectSignResponse(signed=doc, signature=std_signature)

    def __repr__(self) -> str:
        """String representation."""
        return f"Account(paths={len(self._accounts)})"
