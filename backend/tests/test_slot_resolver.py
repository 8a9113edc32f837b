import pytest

from app.schemas.schedule import SlotProposal, WeeklySlot
from app.services.slot_resolver import resolve_slot
from app.services.timeutil import intervals_overlap, to_minutes


def slot(day, room, start, end, name):
    return WeeklySlot(day=day, room=room, startTime=start, endTime=end, className=name)


def proposal(day, room, start, end, name=""):
    return SlotProposal(day=day, room=room, startTime=start, endTime=end, className=name)


@pytest.fixture
def schedule():
    return [
        slot("Mon", "Room1", "09:00", "10:00", "Math"),
        slot("Mon", "Room1", "11:00", "12:00", "Chemistry"),
        slot("Mon", "Room2", "09:00", "10:00", "Biology"),
        slot("Tue", "Room1", "09:00", "10:00", "History"),
    ]


def overlapping(result, p):
    start, end = to_minutes(p.startTime), to_minutes(p.endTime)
    return [
        item
        for item in result
        if item.day == p.day
        and item.room == p.room
        and intervals_overlap(start, end, to_minutes(item.startTime), to_minutes(item.endTime))
    ]


def test_overlapping_proposal_replaces_existing_slot():
    result = resolve_slot(
        [slot("Mon", "Room1", "09:00", "10:00", "Math")],
        proposal("Mon", "Room1", "09:30", "10:30", "Physics"),
    )
    assert result == [slot("Mon", "Room1", "09:30", "10:30", "Physics")]


def test_adjacent_proposal_keeps_both_slots():
    result = resolve_slot(
        [slot("Mon", "Room1", "09:00", "10:00", "Math")],
        proposal("Mon", "Room1", "10:00", "11:00", "Physics"),
    )
    assert result == [
        slot("Mon", "Room1", "09:00", "10:00", "Math"),
        slot("Mon", "Room1", "10:00", "11:00", "Physics"),
    ]


def test_wide_proposal_removes_every_overlapping_slot(schedule):
    p = proposal("Mon", "Room1", "08:00", "13:00", "Exam")
    result = resolve_slot(schedule, p)

    assert overlapping(result, p) == [slot("Mon", "Room1", "08:00", "13:00", "Exam")]
    # Other rooms and days are untouched.
    assert slot("Mon", "Room2", "09:00", "10:00", "Biology") in result
    assert slot("Tue", "Room1", "09:00", "10:00", "History") in result
    assert len(result) == 3


def test_blank_label_is_a_pure_deletion(schedule):
    p = proposal("Mon", "Room1", "09:15", "09:45", "   ")
    result = resolve_slot(schedule, p)

    assert overlapping(result, p) == []
    assert len(result) == len(schedule) - 1
    assert all(item.className != "" for item in result)


def test_blank_label_on_free_interval_changes_nothing(schedule):
    result = resolve_slot(schedule, proposal("Mon", "Room1", "10:00", "11:00"))
    assert result == schedule


def test_label_is_trimmed():
    result = resolve_slot([], proposal("Wed", "Lab", "14:00", "15:00", "  Physics Lab  "))
    assert result[0].className == "Physics Lab"


def test_input_schedule_is_not_mutated(schedule):
    before = [item.model_copy() for item in schedule]
    resolve_slot(schedule, proposal("Mon", "Room1", "09:00", "12:00", "Exam"))
    assert schedule == before


@pytest.mark.parametrize(
    "p",
    [
        proposal("Mon", "Room1", "09:30", "10:30", "Physics"),
        proposal("Mon", "Room1", "09:30", "10:30", ""),
        proposal("Mon", "Room1", "10:00", "11:00", "Physics"),
        proposal("Fri", "Room9", "13:00", "14:00", "Art"),
        proposal("Mon", "Room1", "10:00", "10:00", "Zero length"),
        proposal("Mon", "Room1", "12:00", "09:30", "Inverted"),
    ],
)
def test_resolve_is_idempotent(schedule, p):
    once = resolve_slot(schedule, p)
    assert resolve_slot(once, p) == once


def test_at_most_one_slot_per_instant_after_many_placements():
    result = []
    placements = [
        ("09:00", "10:00", "A"),
        ("09:30", "11:00", "B"),
        ("08:00", "09:45", "C"),
        ("10:30", "12:00", "D"),
        ("11:59", "12:30", "E"),
    ]
    for start, end, name in placements:
        result = resolve_slot(result, proposal("Mon", "Room1", start, end, name))

    ordered = sorted(result, key=lambda item: to_minutes(item.startTime))
    for first, second in zip(ordered, ordered[1:]):
        assert to_minutes(first.endTime) <= to_minutes(second.startTime)
