"""Authenticator payload decoding.

The ``authenticator`` attribute of smart account events is a JSON object keyed
by authenticator type, e.g.::

    {"EthWallet": {"address": "0xABC", "id": 3}}

Every key present is decoded independently, in document order. Each decode
attempt yields the normalized credential string for its type:

    Secp256K1, Ed25519  -> pubkey
    EthWallet           -> address
    Jwt                 -> "{aud}.{sub}"
    Passkey             -> ID of the base64-encoded JSON credential

Business-rule failures raise AuthenticatorDecodeError, which callers log and
treat as "skip the rest of this event". Malformed JSON and undecodable base64
are not caught here.
"""

import base64
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator


class AuthenticatorType(str, Enum):
    SECP256K1 = "Secp256K1"
    ED25519 = "Ed25519"
    ETH_WALLET = "EthWallet"
    JWT = "Jwt"
    PASSKEY = "Passkey"


class AuthenticatorDecodeError(ValueError):
    """Recoverable decode failure; the event is skipped, not failed."""


@dataclass
class DecodedAuthenticator:
    type: AuthenticatorType
    authenticator: str
    index: int


def parse_authenticator_payload(raw: str) -> dict[str, Any]:
    """Parse the raw ``authenticator`` attribute into a tag -> value mapping."""
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise AuthenticatorDecodeError(
            f"Authenticator payload is not an object - {type(payload).__name__}"
        )
    return payload


def iter_decode_attempts(payload: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield (tag, value) pairs in document order."""
    yield from payload.items()


def _field(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return None


def _pubkey(value: Any) -> str | None:
    return _field(value, "pubkey")


def _eth_address(value: Any) -> str | None:
    return _field(value, "address")


def _jwt_claims(value: Any) -> str | None:
    aud = _field(value, "aud")
    sub = _field(value, "sub")
    if aud is None or sub is None:
        return None
    return f"{aud}.{sub}"


def _b64decode(data: str) -> bytes:
    # Accept both alphabets, embedded whitespace and missing padding
    normalized = "".join(data.split()).replace("-", "+").replace("_", "/")
    padding = (-len(normalized)) % 4
    return base64.b64decode(normalized + "=" * padding, validate=True)


def _passkey_credential_id(value: Any) -> str | None:
    credential = _field(value, "credential")
    if not credential:
        raise AuthenticatorDecodeError("No credential found for the passkey authenticator")
    parsed = json.loads(_b64decode(credential).decode("utf-8"))
    return _field(parsed, "ID")


_EXTRACTORS: dict[AuthenticatorType, Callable[[Any], str | None]] = {
    AuthenticatorType.SECP256K1: _pubkey,
    AuthenticatorType.ED25519: _pubkey,
    AuthenticatorType.ETH_WALLET: _eth_address,
    AuthenticatorType.JWT: _jwt_claims,
    AuthenticatorType.PASSKEY: _passkey_credential_id,
}


def extract_authenticator(tag: str, value: Any) -> tuple[AuthenticatorType, str]:
    """Resolve ``tag`` to a known type and pull its credential string out of ``value``."""
    try:
        auth_type = AuthenticatorType(tag)
    except ValueError:
        raise AuthenticatorDecodeError(f"Unknown authenticator type - {tag}") from None

    authenticator = _EXTRACTORS[auth_type](value)
    if not authenticator:
        raise AuthenticatorDecodeError(f"No authenticator found for the type - {tag}")
    return auth_type, str(authenticator)


def _parse_declared_index(raw: Any) -> int | None:
    """Whole-number ids only; anything else would land on another slot."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        index = raw
    elif isinstance(raw, float) and raw.is_integer():
        index = int(raw)
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        index = int(raw)
    else:
        return None
    return index or None


def decode_authenticator(tag: str, value: Any, index: int | None = None) -> DecodedAuthenticator:
    """Decode one (tag, value) entry of an authenticator payload.

    With ``index`` given (instantiate events) every entry shares that index.
    Without it (add events) the entry must declare its own non-zero ``id``.
    """
    auth_type, authenticator = extract_authenticator(tag, value)
    if index is None:
        index = _parse_declared_index(_field(value, "id"))
        if index is None:
            raise AuthenticatorDecodeError(f"No authenticator index found for the type - {tag}")
    return DecodedAuthenticator(type=auth_type, authenticator=authenticator, index=index)
