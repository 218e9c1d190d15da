"""Direct-mode sign bytes and Amino JSON signature envelopes."""

from typing import Any, Mapping, Union

from ..constants import COMPRESSED_PUBKEY_LENGTH, PUBKEY_TYPE_SECP256K1
from ..exceptions import ValidationError
from ..types.common import BytesLike
from ..types.sign_doc import PubKey, SignDoc, StdSignature
from ..utils.encoding import encode_protobuf_field, to_base64
from ..utils.validation import to_bytes

__all__ = [
    "make_sign_bytes",
    "encode_secp256k1_pubkey",
    "encode_secp256k1_signature",
]

# cosmos.tx.v1beta1.SignDoc field numbers
BODY_BYTES_FIELD = 1
AUTH_INFO_BYTES_FIELD = 2
CHAIN_ID_FIELD = 3
ACCOUNT_NUMBER_FIELD = 4


def make_sign_bytes(sign_doc: Union[SignDoc, Mapping[str, Any]]) -> bytes:
    """
    Serialize a SignDoc to its canonical protobuf bytes.

    Fields are written in field-number order and zero values are omitted,
    matching the proto3 encoding every Cosmos SDK node recomputes.
    """
    doc = SignDoc.from_partial(sign_doc)

    s = bytearray()
    s.extend(encode_protobuf_field(BODY_BYTES_FIELD, doc.body_bytes))
    s.extend(encode_protobuf_field(AUTH_INFO_BYTES_FIELD, doc.auth_info_bytes))
    s.extend(encode_protobuf_field(CHAIN_ID_FIELD, doc.chain_id))
    s.extend(encode_protobuf_field(ACCOUNT_NUMBER_FIELD, doc.account_number))

    return bytes(s)


def encode_secp256k1_pubkey(pubkey: BytesLike) -> PubKey:
    """
    Wrap a compressed secp256k1 public key as Amino JSON.

    Raises:
        ValidationError: If the key is not 33 bytes starting with 0x02 or 0x03
    """
    pubkey = to_bytes(pubkey, "public key")
    if len(pubkey) != COMPRESSED_PUBKEY_LENGTH or pubkey[0] not in (0x02, 0x03):
        raise ValidationError(
            "Public key must be compressed secp256k1, i.e. 33 bytes starting with 0x02 or 0x03"
        )
    return {
        "type": PUBKEY_TYPE_SECP256K1,
        "value": to_base64(pubkey),
    }


def encode_secp256k1_signature(pubkey: BytesLike, signature: BytesLike) -> StdSignature:
    """
    Build the signature envelope expected by Cosmos SDK clients.

    Args:
        pubkey: 33-byte compressed public key
        signature: 64-byte r || s

    Raises:
        ValidationError: If the signature is not 64 bytes or the key is not compressed
    """
    signature = to_bytes(signature, "signature")
    if len(signature) != 64:
        raise ValidationError(
            "Signature must be 64 bytes long. Cosmos SDK uses a 2x32 byte fixed length "
            "encoding for the secp256k1 signature integers r and s."
        )
    return {
        "pub_key": encode_secp256k1_pubkey(pubkey),
        "signature": to_base64(signature),
    }
