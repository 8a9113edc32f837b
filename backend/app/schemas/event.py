from pydantic import BaseModel, Field, field_validator

EVENT_FIELDS = ("date", "room", "startTime", "endTime", "eventName")


class Event(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    date: str
    room: str
    startTime: str
    endTime: str
    eventName: str
    createdBy: str | None = None


class EventMutationRequest(BaseModel):
    """Body of ``POST /events``.

    ``action`` is validated by the mutator rather than here so an unknown
    action is reported the same way as a missing field.
    """

    action: str | None = None
    id: str | None = Field(default=None, max_length=64)
    date: str | None = Field(default=None, max_length=10)
    room: str | None = Field(default=None, max_length=100)
    startTime: str | None = Field(default=None, max_length=16)
    endTime: str | None = Field(default=None, max_length=16)
    eventName: str | None = Field(default=None, max_length=200)

    @field_validator("action", "id")
    @classmethod
    def strip_identifiers(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    @field_validator(*EVENT_FIELDS)
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        # Whitespace-only means "not supplied"; anything else is kept verbatim.
        if value is None or not value.strip():
            return None
        return value

    def supplied_fields(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in EVENT_FIELDS if getattr(self, name)}


class EventsUpdateOut(BaseModel):
    success: bool = True
    revision: int
    events: list[Event]
    event: Event | None = None
