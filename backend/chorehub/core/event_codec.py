"""Event Codec — (event_type, JSON payload) <-> DomainEvent.

Invariants:
    - encode_event output is JSON-safe (UUIDs and datetimes as strings)
    - decode_event(*encode_event(e)) == e for every catalog fact
    - Unknown event types or malformed payloads raise EventDecodeError

Design Decisions:
    - pydantic TypeAdapter over hand-written field mapping: the dataclasses stay
      the single source of truth for payload shape and coercion
"""

from pydantic import TypeAdapter, ValidationError

from chorehub.core.errors import EventDecodeError
from chorehub.core.events import EVENT_TYPES, DomainEvent

_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(cls) for name, cls in EVENT_TYPES.items()
}


def encode_event(event: DomainEvent) -> tuple[str, dict]:
    """Serialize a fact to its catalog name and JSON payload. Pure, no IO."""
    name = type(event).__name__
    adapter = _ADAPTERS.get(name)
    if adapter is None:
        raise TypeError(f"{name} is not part of the event catalog")
    return name, adapter.dump_python(event, mode="json")


def decode_event(event_type: str, payload: dict) -> DomainEvent:
    """Rebuild a fact from a stored payload. Pure, no IO."""
    adapter = _ADAPTERS.get(event_type)
    if adapter is None:
        raise EventDecodeError(event_type)
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise EventDecodeError(event_type, str(e)) from e
