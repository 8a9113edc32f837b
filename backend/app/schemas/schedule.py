from pydantic import BaseModel, Field, field_validator


class WeeklySlot(BaseModel):
    day: str = Field(min_length=1, max_length=50)
    room: str = Field(min_length=1, max_length=100)
    startTime: str = Field(min_length=1, max_length=16)
    endTime: str = Field(min_length=1, max_length=16)
    className: str = Field(min_length=1, max_length=200)


class SlotProposal(BaseModel):
    """Place, replace or clear a weekly slot.

    An empty or whitespace ``className`` clears every slot overlapping the
    interval in ``(day, room)`` without inserting a new one.
    """

    day: str = Field(min_length=1, max_length=50)
    room: str = Field(min_length=1, max_length=100)
    startTime: str = Field(min_length=1, max_length=16)
    endTime: str = Field(min_length=1, max_length=16)
    className: str | None = Field(default="", max_length=200)

    @field_validator("day", "room", "startTime", "endTime", mode="before")
    @classmethod
    def strip_required(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("className")
    @classmethod
    def normalize_class_name(cls, value: str | None) -> str:
        return (value or "").strip()


class ScheduleUpdateOut(BaseModel):
    success: bool = True
    revision: int
    schedule: list[WeeklySlot]
