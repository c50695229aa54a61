"""Authentication schemas."""

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class User(BaseModel):
    """Public view of a user; the password hash is never serialized."""

    id: str
    username: str
    role: str

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str
