"""Shared fixtures: in-memory database and chain event builders."""

import base64
import json

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import indexer.models  # noqa: F401
from indexer.schemas.event import ChainEvent, EventAttribute
from indexer.services.store import RecordStore
from indexer.utils.constants import (
    ADD_AUTH_METHOD_EVENT,
    CREATE_ACCOUNT_EVENT,
    REMOVE_AUTH_METHOD_EVENT,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session) -> RecordStore:
    return RecordStore(session)


def make_event(event_type: str, **attrs) -> ChainEvent:
    """Build a ChainEvent; dict/list attribute values are JSON-encoded."""
    attributes = []
    for key, value in attrs.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value)
        attributes.append(EventAttribute(key=key, value=str(value)))
    return ChainEvent(type=event_type, attributes=attributes)


def instantiate_event(address: str | None, authenticator_id=None, authenticator=None) -> ChainEvent:
    attrs = {}
    if address is not None:
        attrs["_contract_address"] = address
    if authenticator_id is not None:
        attrs["authenticator_id"] = authenticator_id
    if authenticator is not None:
        attrs["authenticator"] = authenticator
    return make_event(CREATE_ACCOUNT_EVENT, **attrs)


def add_event(address: str, authenticator) -> ChainEvent:
    return make_event(ADD_AUTH_METHOD_EVENT, _contract_address=address, authenticator=authenticator)


def remove_event(address: str, authenticator_id, event_type: str = REMOVE_AUTH_METHOD_EVENT) -> ChainEvent:
    return make_event(event_type, _contract_address=address, authenticator_id=authenticator_id)


def passkey_credential(credential_id: str) -> str:
    return base64.b64encode(json.dumps({"ID": credential_id}).encode("utf-8")).decode("ascii")
