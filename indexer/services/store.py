"""Record store used by the event handlers.

Thin async facade over a SQLModel session with last-write-wins semantics:
``save`` inserts or overwrites by primary key and commits immediately, so
there is no transaction spanning several records. Database errors propagate.
"""

import logging
from typing import TypeVar

from sqlmodel import Session, SQLModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)


class RecordStore:
    def __init__(self, session: Session):
        self.session = session

    async def get(self, model: type[RecordT], record_id: str) -> RecordT | None:
        """Load a record detached from the session.

        Changes made to the returned object are only written by ``save``.
        """
        record = self.session.get(model, record_id)
        if record is not None:
            self.session.expunge(record)
        return record

    async def save(self, record: SQLModel) -> None:
        self.session.merge(record)
        self.session.commit()

    async def remove(self, model: type[SQLModel], record_id: str) -> bool:
        record = self.session.get(model, record_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True
