"""Event ingestion API — feed chain events to the smart account handlers."""

import logging

from fastapi import APIRouter, Depends

from indexer.api.deps import get_store
from indexer.engine.event_router import process_events
from indexer.schemas.event import ChainEvent
from indexer.schemas.smart_account import EventBatchResult
from indexer.services.store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", response_model=EventBatchResult)
async def ingest_events(events: list[ChainEvent], store: RecordStore = Depends(get_store)):
    """Process a batch of events in the order given."""
    processed = await process_events(events, store)
    logger.info(f"Ingested {len(events)} events, {processed} handled")
    return EventBatchResult(received=len(events), processed=processed)
