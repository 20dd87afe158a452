"""Tests for attribute lookup and authenticator payload decoding."""

import base64
import binascii
import json

import pytest

from indexer.schemas.event import ChainEvent, EventAttribute
from indexer.services.attributes import get_attribute
from indexer.services.authenticator_decoder import (
    AuthenticatorDecodeError,
    AuthenticatorType,
    decode_authenticator,
    extract_authenticator,
    iter_decode_attempts,
    parse_authenticator_payload,
)

from conftest import passkey_credential


# ---------------------------------------------------------------------------
# 1. Attribute lookup
# ---------------------------------------------------------------------------

def test_get_attribute_first_match_wins():
    event = ChainEvent(type="wasm-x", attributes=[
        EventAttribute(key="_contract_address", value="addr1"),
        EventAttribute(key="_contract_address", value="addr2"),
    ])
    assert get_attribute(event, "_contract_address") == "addr1"


def test_get_attribute_missing_returns_none():
    event = ChainEvent(type="wasm-x", attributes=[EventAttribute(key="a", value="1")])
    assert get_attribute(event, "b") is None


# ---------------------------------------------------------------------------
# 2. Per-type extraction
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("tag,value,expected", [
    ("Secp256K1", {"pubkey": "A08EGB"}, "A08EGB"),
    ("Ed25519", {"pubkey": "ed-key"}, "ed-key"),
    ("EthWallet", {"address": "0xABC"}, "0xABC"),
    ("Jwt", {"aud": "svc", "sub": "user1"}, "svc.user1"),
    ("Passkey", {"credential": passkey_credential("abc123")}, "abc123"),
])
def test_extract_known_types(tag, value, expected):
    auth_type, authenticator = extract_authenticator(tag, value)
    assert auth_type == AuthenticatorType(tag)
    assert authenticator == expected


def test_extract_unknown_type_raises():
    with pytest.raises(AuthenticatorDecodeError, match="Unknown authenticator type - Sr25519"):
        extract_authenticator("Sr25519", {"pubkey": "x"})


def test_extract_empty_value_raises():
    with pytest.raises(AuthenticatorDecodeError, match="No authenticator found"):
        extract_authenticator("Secp256K1", {"pubkey": ""})


def test_extract_null_value_raises():
    with pytest.raises(AuthenticatorDecodeError, match="No authenticator found"):
        extract_authenticator("EthWallet", None)


def test_extract_jwt_missing_claim_raises():
    with pytest.raises(AuthenticatorDecodeError):
        extract_authenticator("Jwt", {"aud": "svc"})


def test_passkey_without_credential_raises():
    with pytest.raises(AuthenticatorDecodeError, match="No credential found"):
        extract_authenticator("Passkey", {"id": 3})


def test_passkey_credential_without_id_raises():
    cred = base64.b64encode(json.dumps({"id": "lowercase"}).encode()).decode()
    with pytest.raises(AuthenticatorDecodeError, match="No authenticator found"):
        extract_authenticator("Passkey", {"credential": cred})


def test_passkey_url_safe_unpadded_credential():
    raw = json.dumps({"ID": "k?>", "type": "public-key"}).encode()
    cred = base64.urlsafe_b64encode(raw).decode().rstrip("=")
    _, authenticator = extract_authenticator("Passkey", {"credential": cred})
    assert authenticator == "k?>"


def test_passkey_credential_with_line_breaks():
    cred = passkey_credential("abc123")
    wrapped = "\n".join(cred[i:i + 8] for i in range(0, len(cred), 8))
    _, authenticator = extract_authenticator("Passkey", {"credential": f" {wrapped}\r\n"})
    assert authenticator == "abc123"


def test_passkey_invalid_base64_propagates():
    with pytest.raises(binascii.Error):
        extract_authenticator("Passkey", {"credential": "not*base64"})


def test_passkey_credential_not_json_propagates():
    cred = base64.b64encode(b"plain text").decode()
    with pytest.raises(json.JSONDecodeError):
        extract_authenticator("Passkey", {"credential": cred})


# ---------------------------------------------------------------------------
# 3. Index handling
# ---------------------------------------------------------------------------

def test_decode_uses_shared_index():
    decoded = decode_authenticator("EthWallet", {"address": "0xABC", "id": 9}, index=2)
    assert decoded.index == 2
    assert decoded.type is AuthenticatorType.ETH_WALLET


def test_decode_uses_declared_index():
    decoded = decode_authenticator("Jwt", {"aud": "svc", "sub": "user1", "id": 5})
    assert decoded.index == 5
    assert decoded.authenticator == "svc.user1"


def test_decode_accepts_numeric_string_index():
    decoded = decode_authenticator("Ed25519", {"pubkey": "k", "id": "7"})
    assert decoded.index == 7


def test_decode_accepts_whole_float_index():
    decoded = decode_authenticator("Ed25519", {"pubkey": "k", "id": 4.0})
    assert decoded.index == 4


@pytest.mark.parametrize("value", [
    {"pubkey": "k"},
    {"pubkey": "k", "id": 0},
    {"pubkey": "k", "id": None},
    {"pubkey": "k", "id": "abc"},
    {"pubkey": "k", "id": 2.7},
    {"pubkey": "k", "id": float("inf")},
    {"pubkey": "k", "id": float("nan")},
    {"pubkey": "k", "id": "2.7"},
    {"pubkey": "k", "id": "1_000"},
    {"pubkey": "k", "id": "\uff12"},
    {"pubkey": "k", "id": True},
])
def test_decode_missing_declared_index_raises(value):
    with pytest.raises(AuthenticatorDecodeError, match="No authenticator index"):
        decode_authenticator("Secp256K1", value)


def test_decode_checks_authenticator_before_index():
    with pytest.raises(AuthenticatorDecodeError, match="No authenticator found"):
        decode_authenticator("Secp256K1", {"pubkey": ""})


# ---------------------------------------------------------------------------
# 4. Payload parsing
# ---------------------------------------------------------------------------

def test_payload_attempts_keep_document_order():
    payload = parse_authenticator_payload(
        '{"Jwt": {"aud": "a", "sub": "b"}, "EthWallet": {"address": "0x1"}, "Ed25519": {"pubkey": "k"}}'
    )
    assert [tag for tag, _ in iter_decode_attempts(payload)] == ["Jwt", "EthWallet", "Ed25519"]


def test_payload_malformed_json_propagates():
    with pytest.raises(json.JSONDecodeError):
        parse_authenticator_payload("{not json")


def test_payload_not_an_object_raises_soft_error():
    with pytest.raises(AuthenticatorDecodeError):
        parse_authenticator_payload('["EthWallet"]')
