from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging

from app.core.config import Settings, get_settings
from app.core.exceptions import InvalidInputError
from app.models.aggregate import AggregateKind
from app.schemas.event import Event, EventMutationRequest
from app.schemas.schedule import SlotProposal, WeeklySlot
from app.services.broadcast_hub import BroadcastHub, publish_snapshot
from app.services.event_mutator import apply_event_operation, generate_event_id
from app.services.slot_resolver import resolve_slot
from app.services.store import AggregateStore, Snapshot
from app.services.timeutil import validate_interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventsOutcome:
    snapshot: Snapshot
    event: Event | None


def load_schedule(store: AggregateStore) -> list[WeeklySlot]:
    return [WeeklySlot.model_validate(item) for item in store.load(AggregateKind.schedule).items]


def load_events(store: AggregateStore, *, date: str | None = None) -> list[Event]:
    events = [Event.model_validate(item) for item in store.load(AggregateKind.events).items]
    if date:
        return [item for item in events if item.date == date]
    return events


def validate_proposal(proposal: SlotProposal, settings: Settings) -> None:
    if settings.allowed_days and proposal.day not in settings.allowed_days:
        raise InvalidInputError(
            "Invalid day value",
            details={"day": proposal.day, "allowed": list(settings.allowed_days)},
        )
    if settings.strict_time_parsing:
        validate_interval(proposal.startTime, proposal.endTime)


def place_slot(
    store: AggregateStore,
    proposal: SlotProposal,
    *,
    actor: str | None = None,
    settings: Settings | None = None,
    hub: BroadcastHub | None = None,
) -> Snapshot:
    """Resolve ``proposal`` against the stored schedule, save it and broadcast it.

    The returned snapshot is built from the committed items and revision, so a
    failed read after the commit cannot report a saved change as lost.
    """
    settings = settings or get_settings()
    validate_proposal(proposal, settings)

    with store.locked(AggregateKind.schedule):
        current = load_schedule(store)
        resolved = resolve_slot(current, proposal)
        items = [slot.model_dump() for slot in resolved]
        revision = store.save(AggregateKind.schedule, items)

    logger.info(
        "Schedule revision %d by %s: %s %s %s-%s -> %r (%d slot(s) removed)",
        revision,
        actor,
        proposal.day,
        proposal.room,
        proposal.startTime,
        proposal.endTime,
        proposal.className,
        len(current) - len(resolved) + (1 if proposal.className else 0),
    )
    latest = Snapshot(kind=AggregateKind.schedule, items=items, revision=revision)
    publish_snapshot(latest, hub)
    return latest


def mutate_events(
    store: AggregateStore,
    request: EventMutationRequest,
    *,
    actor: str | None,
    settings: Settings | None = None,
    hub: BroadcastHub | None = None,
    id_factory: Callable[[], str] = generate_event_id,
) -> EventsOutcome:
    """Apply an event request, save the collection and broadcast it.

    Invalid input and unknown ids raise before anything is saved, so nothing
    is broadcast for them.
    """
    settings = settings or get_settings()

    with store.locked(AggregateKind.events):
        current = load_events(store)
        result = apply_event_operation(
            current,
            request,
            actor=actor,
            id_factory=id_factory,
            strict=settings.strict_time_parsing,
        )
        items = [item.model_dump() for item in result.events]
        revision = store.save(AggregateKind.events, items)

    logger.info(
        "Events revision %d by %s: %s %s",
        revision,
        actor,
        request.action,
        result.event.id if result.event else "-",
    )
    latest = Snapshot(kind=AggregateKind.events, items=items, revision=revision)
    publish_snapshot(latest, hub)
    return EventsOutcome(snapshot=latest, event=result.event)
