"""Attribute lookup on chain events."""

from indexer.schemas.event import ChainEvent


def get_attribute(event: ChainEvent, key: str) -> str | None:
    """Return the value of the first attribute named ``key``, or None.

    Event attribute keys are not guaranteed unique; the first match wins.
    """
    for attr in event.attributes:
        if attr.key == key:
            return attr.value
    return None
