"""User models for mentors and mentees."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    """User role."""

    MENTOR = "MENTOR"
    MENTEE = "MENTEE"


class User(BaseModel):
    """User model."""

    user_id: str
    name: str
    role: UserRole = UserRole.MENTEE
    timezone: Optional[str] = Field(None, description="IANA timezone name")
    email: Optional[EmailStr] = None
    title: Optional[str] = None

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "user_id": "mentor_01",
                "name": "Ada Lovelace",
                "role": "MENTOR",
                "timezone": "America/New_York",
                "title": "Computer Science",
            }
        }
