from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
import secrets
import time

from app.core.exceptions import EventNotFoundError, InvalidInputError
from app.schemas.event import EVENT_FIELDS, Event, EventMutationRequest
from app.services.timeutil import validate_date, validate_interval

EVENT_ACTIONS = ("create", "update", "delete")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_MAX_ID_ATTEMPTS = 8


@dataclass(frozen=True)
class EventMutationResult:
    events: list[Event]
    event: Event | None = None


def _to_base36(number: int) -> str:
    if number <= 0:
        return "0"
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_event_id() -> str:
    """Millisecond timestamp in base 36 plus a random suffix, e.g. ``lx3k9a2b-4f1c09``."""
    return f"{_to_base36(time.time_ns() // 1_000_000)}-{secrets.token_hex(3)}"


def _fresh_id(existing: set[str], id_factory: Callable[[], str]) -> str:
    for _ in range(_MAX_ID_ATTEMPTS):
        candidate = id_factory()
        if candidate not in existing:
            return candidate
    raise RuntimeError(f"Could not generate a unique event id after {_MAX_ID_ATTEMPTS} attempts")


def _check_formats(fields: dict[str, str], fallback: Event | None = None) -> None:
    if "date" in fields:
        validate_date(fields["date"])
    if "startTime" in fields or "endTime" in fields:
        start = fields.get("startTime") or (fallback.startTime if fallback else "")
        end = fields.get("endTime") or (fallback.endTime if fallback else "")
        validate_interval(start, end)


def _require_id(request: EventMutationRequest) -> str:
    if not request.id:
        raise InvalidInputError("id is required", details={"action": request.action})
    return request.id


def _create(
    current: list[Event],
    request: EventMutationRequest,
    *,
    actor: str | None,
    id_factory: Callable[[], str],
    strict: bool,
) -> EventMutationResult:
    fields = request.supplied_fields()
    missing = [name for name in EVENT_FIELDS if name not in fields]
    if missing:
        raise InvalidInputError("Missing fields", details={"missing": missing})
    if strict:
        _check_formats(fields)

    event = Event(id=_fresh_id({item.id for item in current}, id_factory), createdBy=actor, **fields)
    return EventMutationResult(events=[*current, event], event=event)


def _update(current: list[Event], request: EventMutationRequest, *, strict: bool) -> EventMutationResult:
    event_id = _require_id(request)
    target = next((item for item in current if item.id == event_id), None)
    if target is None:
        raise EventNotFoundError(event_id)

    changes = request.supplied_fields()
    if strict:
        _check_formats(changes, fallback=target)
    updated = target.model_copy(update=changes)
    events = [updated if item.id == event_id else item for item in current]
    return EventMutationResult(events=events, event=updated)


def _delete(current: list[Event], request: EventMutationRequest) -> EventMutationResult:
    event_id = _require_id(request)
    remaining = [item for item in current if item.id != event_id]
    if len(remaining) == len(current):
        raise EventNotFoundError(event_id)
    removed = next(item for item in current if item.id == event_id)
    return EventMutationResult(events=remaining, event=removed)


def apply_event_operation(
    current: Iterable[Event],
    request: EventMutationRequest,
    *,
    actor: str | None,
    id_factory: Callable[[], str] = generate_event_id,
    strict: bool = False,
) -> EventMutationResult:
    """Apply one create/update/delete request to an event collection.

    ``current`` is never modified; the result holds a new list and the event
    that was created, updated or removed. Updates are partial: only fields
    supplied with a non-empty value replace the stored ones, while ``id`` and
    ``createdBy`` never change.

    Raises :class:`InvalidInputError` for an unknown action or missing field and
    :class:`EventNotFoundError` when an update or delete names an id that is
    not in the collection.
    """
    events = list(current)
    action = request.action or ""
    if not action:
        raise InvalidInputError("action is required")
    if action == "create":
        return _create(events, request, actor=actor, id_factory=id_factory, strict=strict)
    if action == "update":
        return _update(events, request, strict=strict)
    if action == "delete":
        return _delete(events, request)
    raise InvalidInputError("Unknown action", details={"action": request.action, "allowed": list(EVENT_ACTIONS)})
