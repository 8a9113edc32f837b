from __future__ import annotations

import re

from app.core.exceptions import InvalidInputError

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _component(raw: str) -> int:
    # Leading digits win, as in "9am" -> 9; anything else is 0.
    match = LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def to_minutes(value: str | None, *, strict: bool = False) -> int:
    """Convert an ``HH:MM`` wall-clock string to minutes past midnight.

    In lenient mode a missing or non-numeric component counts as 0, so
    ``"9"`` is 540 and ``"xx:15"`` is 15. Strict mode rejects anything that is
    not a valid 24-hour ``HH:MM`` with :class:`InvalidInputError`.
    """
    text = "" if value is None else str(value)
    if strict:
        if not TIME_PATTERN.match(text):
            raise InvalidInputError("Time must be in HH:MM 24-hour format", details={"value": text})
        hours, minutes = text.split(":")
        return int(hours) * 60 + int(minutes)

    parts = text.split(":")
    hours = _component(parts[0])
    minutes = _component(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    # Half-open [start, end): touching endpoints do not overlap.
    return not (end_a <= start_b or start_a >= end_b)


def validate_interval(start: str, end: str) -> tuple[int, int]:
    """Strictly parse both ends and require ``start < end``."""
    start_min = to_minutes(start, strict=True)
    end_min = to_minutes(end, strict=True)
    if end_min <= start_min:
        raise InvalidInputError(
            "endTime must be after startTime",
            details={"startTime": start, "endTime": end},
        )
    return start_min, end_min


def validate_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise InvalidInputError("Date must be in YYYY-MM-DD format", details={"value": value})
    return value
