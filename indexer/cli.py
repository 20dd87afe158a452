"""CLI tool for admin operations.

Usage:
    python -m indexer.cli replay <events.jsonl>
    python -m indexer.cli show-account <address>
"""

import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError
from sqlmodel import Session, select

from indexer.database import engine, create_db_and_tables
from indexer.engine.event_router import process_events
from indexer.models.smart_account import SmartAccount
from indexer.models.smart_account_authenticator import SmartAccountAuthenticator
from indexer.schemas.event import ChainEvent
from indexer.services.store import RecordStore
from indexer.utils.logging import setup_logging


def load_events(path: Path) -> list[ChainEvent]:
    """Read one JSON-encoded event per line; blank lines are skipped."""
    events = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                events.append(ChainEvent.model_validate_json(line))
            except ValidationError as e:
                raise ValueError(f"{path}:{lineno}: invalid event: {e}") from e
    return events


def replay(path_arg: str):
    """Replay an event file through the smart account handlers."""
    path = Path(path_arg)
    if not path.is_file():
        print(f"Event file not found: {path}")
        sys.exit(1)

    setup_logging()
    create_db_and_tables()

    try:
        events = load_events(path)
    except ValueError as e:
        print(str(e))
        sys.exit(1)

    with Session(engine) as session:
        processed = asyncio.run(process_events(events, RecordStore(session)))

    print(f"Replayed {len(events)} events ({processed} handled).")


def show_account(address: str):
    """Print a smart account and its authenticators as JSON."""
    create_db_and_tables()

    with Session(engine) as session:
        account = session.get(SmartAccount, address)
        if not account:
            print(f"Smart account '{address}' not found.")
            sys.exit(1)
        authenticators = session.exec(
            select(SmartAccountAuthenticator)
            .where(SmartAccountAuthenticator.account_id == address)
            .order_by(SmartAccountAuthenticator.authenticator_index)
        ).all()
        out = account.model_dump()
        out["authenticators"] = [a.model_dump() for a in authenticators]

    print(json.dumps(out, indent=2))


def main():
    if len(sys.argv) < 3:
        print("Usage: python -m indexer.cli <command> <argument>")
        print("Commands: replay <events.jsonl>, show-account <address>")
        sys.exit(1)

    command = sys.argv[1]
    if command == "replay":
        replay(sys.argv[2])
    elif command == "show-account":
        show_account(sys.argv[2])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
