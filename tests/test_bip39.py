import pytest

from hdsigner.crypto.bip39 import (
    entropy_to_mnemonic, generate_mnemonic, validate_mnemonic, mnemonic_to_seed,
)
from hdsigner.exceptions import InvalidMnemonicError, ValidationError

TEST_MNEMONIC = "test test test test test test test test test test test junk"
ZERO_MNEMONIC = " ".join(["abandon"] * 11 + ["about"])


def test_entropy_to_mnemonic():
    assert entropy_to_mnemonic(b"\x00" * 16) == ZERO_MNEMONIC
    assert entropy_to_mnemonic(b"\x00" * 32) == " ".join(["abandon"] * 23 + ["art"])
    assert entropy_to_mnemonic(b"\xff" * 16) == " ".join(["zoo"] * 11 + ["wrong"])
    with pytest.raises(ValidationError):
        entropy_to_mnemonic(b"\x00" * 15)


def test_generate_mnemonic():
    assert generate_mnemonic(128, lambda n: b"\x00" * n) == ZERO_MNEMONIC
    assert len(generate_mnemonic(256).split(" ")) == 24
    with pytest.raises(ValidationError):
        generate_mnemonic(100)


def test_validate_mnemonic():
    assert validate_mnemonic(TEST_MNEMONIC)
    assert validate_mnemonic(ZERO_MNEMONIC)
    assert validate_mnemonic("  " + ZERO_MNEMONIC.replace(" ", "\n") + " ")
    assert not validate_mnemonic(" ".join(["abandon"] * 12))
    assert not validate_mnemonic(" ".join(["abandon"] * 11))
    assert not validate_mnemonic(" ".join(["notaword"] * 11 + ["about"]))
    assert not validate_mnemonic("")


def test_mnemonic_to_seed():
    assert mnemonic_to_seed(TEST_MNEMONIC).hex() == (
        "9dfc3c64c2f8bede1533b6a79f8570e5943e0b8fd1cf77107adf7b72cef42185"
        "d564a3aee24cab43f80e3c4538087d70fc824eabbad596a23c97b6ee8322ccc0"
    )
    assert mnemonic_to_seed(ZERO_MNEMONIC, "TREZOR").hex() == (
        "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
        "1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04"
    )
    with pytest.raises(InvalidMnemonicError):
        mnemonic_to_seed("   ")
