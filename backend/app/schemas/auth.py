from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    userId: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("userId")
    @classmethod
    def normalize_user_id(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("userId cannot be empty")
        return trimmed


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    userId: str
