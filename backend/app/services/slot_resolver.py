from __future__ import annotations

from collections.abc import Iterable

from app.schemas.schedule import SlotProposal, WeeklySlot
from app.services.timeutil import intervals_overlap, to_minutes


def clashes_with(slot: WeeklySlot, proposal: SlotProposal, start_min: int, end_min: int) -> bool:
    if slot.day != proposal.day or slot.room != proposal.room:
        return False
    # Zero-length and inverted intervals never overlap themselves.
    if slot.startTime == proposal.startTime and slot.endTime == proposal.endTime:
        return True
    return intervals_overlap(start_min, end_min, to_minutes(slot.startTime), to_minutes(slot.endTime))


def resolve_slot(current: Iterable[WeeklySlot], proposal: SlotProposal) -> list[WeeklySlot]:
    """Return the schedule that results from placing ``proposal``.

    Every slot in the same ``(day, room)`` whose interval overlaps the
    proposal's is removed; the proposal is then appended unless its class
    name is blank, which makes the call a pure deletion. Applying the same
    proposal twice gives the same schedule as applying it once.
    """
    start_min = to_minutes(proposal.startTime)
    end_min = to_minutes(proposal.endTime)

    resolved = [slot for slot in current if not clashes_with(slot, proposal, start_min, end_min)]

    class_name = (proposal.className or "").strip()
    if class_name:
        resolved.append(
            WeeklySlot(
                day=proposal.day,
                room=proposal.room,
                startTime=proposal.startTime,
                endTime=proposal.endTime,
                className=class_name,
            )
        )
    return resolved
