"""Smart account event handlers.

Reconcile the three smart account lifecycle events into SmartAccount and
SmartAccountAuthenticator records:

1. Instantiate: create the account and its initial authenticators
2. AddAuthenticator: add authenticators, ratchet latest_authenticator_id
3. RemoveAuthenticator: delete one authenticator by index

Business-rule problems (missing attributes, unknown authenticator types,
missing records) are logged at info and end the handler early. Records saved
before such a problem stay saved; nothing is rolled back.
"""

import logging

from indexer.config import settings
from indexer.models.smart_account import SmartAccount
from indexer.models.smart_account_authenticator import (
    SmartAccountAuthenticator,
    authenticator_record_id,
)
from indexer.schemas.event import ChainEvent
from indexer.services.attributes import get_attribute
from indexer.services.authenticator_decoder import (
    AuthenticatorDecodeError,
    DecodedAuthenticator,
    decode_authenticator,
    iter_decode_attempts,
    parse_authenticator_payload,
)
from indexer.services.store import RecordStore
from indexer.utils.constants import (
    AUTHENTICATOR_ID_KEY,
    AUTHENTICATOR_KEY,
    AUTHENTICATOR_VERSION,
    CONTRACT_ADDRESS_KEY,
)

logger = logging.getLogger(__name__)


def ratchet_authenticator_id(current: int, candidate: int) -> int:
    """Return the new latest authenticator id; it only ever goes up."""
    return max(current, candidate)


def _parse_event_index(raw: str | None) -> int:
    """Whole-number attribute value, else 0. "2.0" reads as 2, "1_000" does not."""
    text = (raw or "0").strip()
    if not text.isascii() or "_" in text:
        return 0
    try:
        value = float(text)
    except ValueError:
        return 0
    return int(value) if value.is_integer() else 0


def _authenticator_record(contract_address: str, decoded: DecodedAuthenticator) -> SmartAccountAuthenticator:
    return SmartAccountAuthenticator(
        id=authenticator_record_id(contract_address, decoded.index),
        account_id=contract_address,
        type=decoded.type.value,
        authenticator=decoded.authenticator,
        authenticator_index=decoded.index,
        version=AUTHENTICATOR_VERSION,
    )


async def handle_smart_account_instantiate(event: ChainEvent, store: RecordStore):
    """Create a smart account and the authenticators it was instantiated with.

    Every authenticator in the payload is written with the event-level
    ``authenticator_id``, so two types in one payload land on the same record
    id and the later one overwrites the earlier.
    """
    logger.info(f"Smart Account Data Instantiate event detected - {event.type}")
    contract_address = get_attribute(event, CONTRACT_ADDRESS_KEY)
    if not contract_address:
        logger.debug("Instantiate event without contract address, ignoring")
        return

    authenticator_index = _parse_event_index(get_attribute(event, AUTHENTICATOR_ID_KEY))

    await store.save(SmartAccount(
        id=contract_address,
        latest_authenticator_id=authenticator_index,
    ))

    authenticator_data = get_attribute(event, AUTHENTICATOR_KEY)
    if not authenticator_data:
        return

    try:
        payload = parse_authenticator_payload(authenticator_data)
        for auth_type, value in iter_decode_attempts(payload):
            decoded = decode_authenticator(auth_type, value, index=authenticator_index)
            await store.save(_authenticator_record(contract_address, decoded))
    except AuthenticatorDecodeError as e:
        logger.info(f"[{contract_address}] {e}")
        return


async def handle_smart_account_add_authenticator(event: ChainEvent, store: RecordStore):
    """Add authenticators to an existing smart account.

    Each payload entry carries its own ``id``. The account is saved once at the
    end with latest_authenticator_id raised to the highest id seen; if an entry
    fails to decode, the entries before it are kept but the account is not saved.
    """
    logger.info("Smart Account Add Auth event detected")
    contract_address = get_attribute(event, CONTRACT_ADDRESS_KEY)
    if not contract_address:
        return

    smart_account = await store.get(SmartAccount, contract_address)
    if not smart_account:
        logger.info(f"No smart account found for the contract {contract_address}")
        return

    authenticator_data = get_attribute(event, AUTHENTICATOR_KEY)
    if not authenticator_data:
        return

    try:
        payload = parse_authenticator_payload(authenticator_data)
        for auth_type, value in iter_decode_attempts(payload):
            decoded = decode_authenticator(auth_type, value)
            smart_account.latest_authenticator_id = ratchet_authenticator_id(
                smart_account.latest_authenticator_id, decoded.index
            )
            await store.save(_authenticator_record(contract_address, decoded))
    except AuthenticatorDecodeError as e:
        logger.info(f"[{contract_address}] {e}")
        return

    await store.save(smart_account)


async def handle_smart_account_remove_authenticator(event: ChainEvent, store: RecordStore):
    """Delete one authenticator of a smart account.

    Only acts on the configured remove event type. latest_authenticator_id is
    left untouched.
    """
    if event.type != settings.remove_event_type:
        return

    logger.info("Smart Account Remove Auth event detected")
    contract_address = get_attribute(event, CONTRACT_ADDRESS_KEY)
    if not contract_address:
        return

    smart_account = await store.get(SmartAccount, contract_address)
    if not smart_account:
        logger.info(f"No smart account found for the contract {contract_address}")
        return

    authenticator_index = _parse_event_index(get_attribute(event, AUTHENTICATOR_ID_KEY))
    if not authenticator_index:
        logger.info(f"[{contract_address}] Remove event without a usable authenticator id")
        return

    auth_id = authenticator_record_id(contract_address, authenticator_index)
    record = await store.get(SmartAccountAuthenticator, auth_id)
    if not record:
        logger.info(f"No smart wallet found for the authenticator id {auth_id}")
        return

    await store.remove(SmartAccountAuthenticator, record.id)
    logger.info(f"[{contract_address}] Removed authenticator {auth_id}")
