import pytest

from hdsigner import Account, AccountOptions, Word
from hdsigner.crypto.secp256k1 import Secp256k1
from hdsigner.crypto.signature import Secp256k1Signature
from hdsigner.crypto.slip10 import make_cosmoshub_path
from hdsigner.exceptions import (
    AddressNotFoundError, AuthenticationError, InvalidMnemonicError, ValidationError,
)
from hdsigner.modules.account import make_sign_bytes
from hdsigner.types.sign_doc import Algo, SignDoc
from hdsigner.utils.encoding import from_base64, sha256, to_base64

MNEMONIC = "test test test test test test test test test test test junk"
PUBKEY_HEX = "0223aa679d6d5344e201e0df9f02ab15a84726eee0dfb4e953c46a9e2cb52349dc"
NOBLE_ADDRESS = "noble15yk64u7zc9g9k2yr2wmzeva5qgwxps6yw368ps"
NOBLE_ADDRESS_1 = "noble1erxf3sa9q2j4vgseu7jq4a258ckmk7cy8a0rlv"
COSMOS_ADDRESS = "cosmos15yk64u7zc9g9k2yr2wmzeva5qgwxps6yxj00e7"


def test_default_account():
    account = Account.from_mnemonic(MNEMONIC)
    accounts = account.get_accounts()
    assert len(accounts) == 1
    assert accounts[0].algo == Algo.SECP256K1
    assert accounts[0].address == NOBLE_ADDRESS
    assert accounts[0].pubkey.hex() == PUBKEY_HEX
    assert not hasattr(accounts[0], "privkey")


def test_privkey_and_keypair():
    account = Account.from_mnemonic(MNEMONIC)
    with_privkey = account.get_accounts_with_privkeys()[0]
    assert with_privkey.privkey.hex() == (
        "e64e7928d4f6c06f01fefd31f760c51f59a16426e792761cd00529b76501c8a0"
    )
    assert "privkey" not in repr(with_privkey)

    keypair = account.get_key_pair(make_cosmoshub_path(0))
    assert keypair.pubkey.hex() == PUBKEY_HEX
    assert keypair.privkey == with_privkey.privkey


def test_prefix_and_multiple_paths():
    account = Account.from_mnemonic(
        MNEMONIC, AccountOptions(prefix="cosmos", hd_paths=[make_cosmoshub_path(0)])
    )
    assert account.get_accounts()[0].address == COSMOS_ADDRESS

    account = Account.from_mnemonic(
        MNEMONIC, AccountOptions(hd_paths=[make_cosmoshub_path(0), make_cosmoshub_path(1)])
    )
    assert [a.address for a in account.get_accounts()] == [NOBLE_ADDRESS, NOBLE_ADDRESS_1]


def test_add_path():
    account = Account.from_mnemonic(MNEMONIC)
    account.add_path(make_cosmoshub_path(1))
    account.add_path(make_cosmoshub_path(0), prefix="cosmos")
    assert [a.address for a in account.get_accounts()] == [
        NOBLE_ADDRESS, NOBLE_ADDRESS_1, COSMOS_ADDRESS,
    ]
    assert len(account.accounts) == 3


def test_bip39_password_changes_keys():
    account = Account.from_mnemonic(MNEMONIC, AccountOptions(bip39_password="secret"))
    assert account.get_accounts()[0].address != NOBLE_ADDRESS


def test_seed_option_is_used():
    seed = bytes(64)
    account = Account.from_mnemonic(MNEMONIC, AccountOptions(seed=seed))
    assert account.get_accounts()[0].address != NOBLE_ADDRESS


def test_from_mnemonic_normalizes_and_validates():
    account = Account.from_mnemonic("  " + MNEMONIC.replace(" ", "  ") + "\n")
    assert account.mnemonic == MNEMONIC
    assert account.get_accounts()[0].address == NOBLE_ADDRESS

    with pytest.raises(InvalidMnemonicError):
        Account.from_mnemonic(" ".join(["test"] * 11))
    with pytest.raises(ValidationError):
        Account(MNEMONIC, AccountOptions(hd_paths=[]))


def test_generate():
    account = Account.generate(randbytes=lambda n: b"\x00" * n)
    assert account.mnemonic == " ".join(["abandon"] * 11 + ["about"])

    account = Account.generate(length=Word.WORD24, randbytes=lambda n: b"\x00" * n)
    assert account.mnemonic == " ".join(["abandon"] * 23 + ["art"])

    assert len(Account.generate().mnemonic.split(" ")) == 12
    assert Account.generate().mnemonic != Account.generate().mnemonic

    with pytest.raises(ValidationError):
        Account.generate(length=18)


def test_serialize_roundtrip():
    account = Account.from_mnemonic(MNEMONIC)
    backup = account.serialize("password")

    restored = Account.deserialize(backup.to_dict(), "password")
    assert restored.mnemonic == MNEMONIC
    assert restored.get_accounts() == account.get_accounts()

    assert Account.deserialize(backup.to_json(), "password").mnemonic == MNEMONIC
    assert Account.deserialize(backup, "password").mnemonic == MNEMONIC


def test_deserialize_wrong_password():
    backup = Account.from_mnemonic(MNEMONIC).serialize("password")
    with pytest.raises(AuthenticationError):
        Account.deserialize(backup, "wrong")


def test_sign_direct():
    account = Account.from_mnemonic(MNEMONIC)
    doc = SignDoc(body_bytes=b"\x0a\x00", auth_info_bytes=b"\x12\x00", chain_id="noble-1", account_number=7)

    response = account.sign_direct(NOBLE_ADDRESS, doc)
    assert response.signed == doc
    assert response.signature["pub_key"] == {
        "type": "tendermint/PubKeySecp256k1",
        "value": to_base64(bytes.fromhex(PUBKEY_HEX)),
    }

    raw = from_base64(response.signature["signature"])
    assert len(raw) == 64
    signature = Secp256k1Signature.from_fixed_length(raw)
    assert Secp256k1.verify_signature(
        signature, sha256(make_sign_bytes(doc)), bytes.fromhex(PUBKEY_HEX)
    )
    # RFC 6979 signing is deterministic
    assert account.sign_direct(NOBLE_ADDRESS, doc) == response


def test_sign_direct_accepts_mapping():
    account = Account.from_mnemonic(MNEMONIC)
    response = account.sign_direct(NOBLE_ADDRESS, {"chainId": "noble-1", "accountNumber": "7"})
    assert response.signed == SignDoc(chain_id="noble-1", account_number=7)


def test_sign_direct_second_path():
    account = Account.from_mnemonic(
        MNEMONIC, AccountOptions(hd_paths=[make_cosmoshub_path(0), make_cosmoshub_path(1)])
    )
    doc = SignDoc(chain_id="noble-1")
    response = account.sign_direct(NOBLE_ADDRESS_1, doc)
    pubkey = account.get_accounts()[1].pubkey
    assert response.signature["pub_key"]["value"] == to_base64(pubkey)


def test_sign_direct_unknown_address():
    account = Account.from_mnemonic(MNEMONIC)
    with pytest.raises(AddressNotFoundError) as exc_info:
        account.sign_direct(COSMOS_ADDRESS, SignDoc())
    assert COSMOS_ADDRESS in str(exc_info.value)
