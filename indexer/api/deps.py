"""Shared API dependencies."""

from fastapi import Depends
from sqlmodel import Session

from indexer.database import get_session
from indexer.services.store import RecordStore


def get_store(session: Session = Depends(get_session)) -> RecordStore:
    """Record store bound to the request's database session."""
    return RecordStore(session)
