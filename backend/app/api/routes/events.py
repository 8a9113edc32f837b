from fastapi import APIRouter, Depends, Query

from app.api.deps import get_app_settings, get_current_admin, get_hub, get_store
from app.core.config import Settings
from app.schemas.event import Event, EventMutationRequest, EventsUpdateOut
from app.services.broadcast_hub import BroadcastHub
from app.services.store import AggregateStore
from app.services.timetable import load_events, mutate_events

router = APIRouter()


@router.get("", response_model=list[Event])
def list_events(
    date: str | None = Query(default=None, max_length=10),
    store: AggregateStore = Depends(get_store),
) -> list[Event]:
    return load_events(store, date=(date or "").strip() or None)


@router.post("", response_model=EventsUpdateOut)
def post_event_mutation(
    payload: EventMutationRequest,
    admin_id: str = Depends(get_current_admin),
    store: AggregateStore = Depends(get_store),
    hub: BroadcastHub = Depends(get_hub),
    settings: Settings = Depends(get_app_settings),
) -> EventsUpdateOut:
    outcome = mutate_events(store, payload, actor=admin_id, settings=settings, hub=hub)
    return EventsUpdateOut(
        revision=outcome.snapshot.revision,
        events=outcome.snapshot.items,
        event=outcome.event,
    )
