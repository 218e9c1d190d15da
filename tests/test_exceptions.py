from hdsigner.exceptions import (
    HDSignerError, ValidationError, CryptoError, InvalidKeyError,
    AuthenticationError, WalletError, AddressNotFoundError,
)


def test_hierarchy():
    assert issubclass(ValidationError, HDSignerError)
    assert issubclass(InvalidKeyError, CryptoError)
    assert issubclass(AuthenticationError, CryptoError)
    assert issubclass(AddressNotFoundError, WalletError)


def test_message_and_code():
    assert str(HDSignerError("boom")) == "boom"
    assert str(HDSignerError("boom", code=3)) == "[3] boom"
    error = AddressNotFoundError("noble1xyz")
    assert error.address == "noble1xyz"
    assert str(error) == "Address noble1xyz not found in wallet"
