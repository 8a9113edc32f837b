from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings, get_current_admin, get_hub, get_store
from app.core.config import Settings
from app.schemas.schedule import ScheduleUpdateOut, SlotProposal, WeeklySlot
from app.services.broadcast_hub import BroadcastHub
from app.services.store import AggregateStore
from app.services.timetable import load_schedule, place_slot

router = APIRouter()


@router.get("", response_model=list[WeeklySlot])
def get_schedule(store: AggregateStore = Depends(get_store)) -> list[WeeklySlot]:
    return load_schedule(store)


@router.post("/slot", response_model=ScheduleUpdateOut)
def post_slot(
    payload: SlotProposal,
    admin_id: str = Depends(get_current_admin),
    store: AggregateStore = Depends(get_store),
    hub: BroadcastHub = Depends(get_hub),
    settings: Settings = Depends(get_app_settings),
) -> ScheduleUpdateOut:
    snapshot = place_slot(store, payload, actor=admin_id, settings=settings, hub=hub)
    return ScheduleUpdateOut(revision=snapshot.revision, schedule=snapshot.items)
