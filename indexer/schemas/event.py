"""Pydantic schemas for incoming chain events."""

from pydantic import BaseModel, Field


class EventAttribute(BaseModel):
    key: str
    value: str = ""


class ChainEvent(BaseModel):
    type: str = Field(min_length=1)
    attributes: list[EventAttribute] = []
    block_height: int | None = Field(default=None, ge=0)
    tx_hash: str | None = None
