"""Route chain events to the smart account handlers.

Events are processed strictly one after another; each handler runs to
completion before the next event starts. Handler errors that are not
business-rule skips propagate and stop the batch.
"""

import logging
from typing import Awaitable, Callable, Iterable

from indexer.config import settings
from indexer.engine.smart_account_handlers import (
    handle_smart_account_add_authenticator,
    handle_smart_account_instantiate,
    handle_smart_account_remove_authenticator,
)
from indexer.schemas.event import ChainEvent
from indexer.services.store import RecordStore

logger = logging.getLogger(__name__)

EventHandler = Callable[[ChainEvent, RecordStore], Awaitable[None]]


def _handlers() -> dict[str, EventHandler]:
    return {
        settings.instantiate_event_type: handle_smart_account_instantiate,
        settings.add_event_type: handle_smart_account_add_authenticator,
        settings.remove_event_type: handle_smart_account_remove_authenticator,
    }


async def process_event(event: ChainEvent, store: RecordStore) -> bool:
    """Run the handler for ``event``. Returns False if no handler applies."""
    handler = _handlers().get(event.type)
    if handler is None:
        logger.debug(f"No handler for event type {event.type}, skipping")
        return False
    await handler(event, store)
    return True


async def process_events(events: Iterable[ChainEvent], store: RecordStore) -> int:
    """Process events in order and return how many were routed to a handler."""
    processed = 0
    for event in events:
        if await process_event(event, store):
            processed += 1
    return processed
