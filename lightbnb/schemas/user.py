"""
Pydantic schemas for user payloads and records.
"""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Payload for inserting a new user. Values are stored as supplied."""

    name: str = Field(..., description="User's display name")
    email: str = Field(..., description="User's email address, unique across users")
    password: str = Field(..., description="Password as it should be stored")


class UserRecord(UserCreate):
    """A users row as returned by the store."""

    id: int = Field(..., description="Generated user ID")

    model_config = {"from_attributes": True}
