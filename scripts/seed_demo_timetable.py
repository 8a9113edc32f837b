"""Seed a small demo week and a couple of room events.

Run:
  PYTHONPATH=backend python scripts/seed_demo_timetable.py
"""

from __future__ import annotations

import logging
import os

from app.db.bootstrap import ensure_storage
from app.schemas.event import EventMutationRequest
from app.schemas.schedule import SlotProposal
from app.services.store import get_default_store
from app.services.timetable import mutate_events, place_slot

logger = logging.getLogger("seed")

SEED_ADMIN = os.getenv("SEED_ADMIN", "admin1")

DEMO_SLOTS = [
    ("Mon", "Room1", "09:00", "10:00", "Mathematics"),
    ("Mon", "Room1", "10:00", "11:00", "Physics"),
    ("Mon", "Room2", "09:00", "10:30", "Chemistry Lab"),
    ("Tue", "Room1", "11:00", "12:00", "History"),
    ("Wed", "Room3", "14:00", "16:00", "Computer Science"),
    ("Thu", "Room2", "09:00", "10:00", "Biology"),
    ("Fri", "Room1", "13:00", "14:00", "English"),
]

DEMO_EVENTS = [
    {"date": "2026-11-02", "room": "Room1", "startTime": "15:00", "endTime": "16:00", "eventName": "Guest Lecture"},
    {"date": "2026-11-05", "room": "Room3", "startTime": "10:00", "endTime": "12:00", "eventName": "Exam Review"},
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ensure_storage()
    store = get_default_store()

    for day, room, start, end, name in DEMO_SLOTS:
        place_slot(
            store,
            SlotProposal(day=day, room=room, startTime=start, endTime=end, className=name),
            actor=SEED_ADMIN,
        )

    for fields in DEMO_EVENTS:
        mutate_events(store, EventMutationRequest(action="create", **fields), actor=SEED_ADMIN)

    logger.info("Seeded %d slot(s) and %d event(s)", len(DEMO_SLOTS), len(DEMO_EVENTS))


if __name__ == "__main__":
    main()
