"""Account model and auth request bodies."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Plan(StrEnum):
    FREE = "free"
    PREMIUM = "premium"


class Account(BaseModel):
    id: str
    full_name: str
    email: str
    pw_hash: str
    pw_salt: str
    plan: Plan = Plan.FREE
    created_at: datetime = Field(default_factory=datetime.now)

    def public(self) -> dict:
        """Account fields safe to return to the client."""
        return {
            "id": self.id,
            "fullName": self.full_name,
            "email": self.email,
            "plan": self.plan.value,
            "createdAt": self.created_at.isoformat(),
        }


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: str | None = Field(default=None, alias="fullName")
    email: str | None = None
    password: str | None = None
    plan: Plan | None = None


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class ReminderRequest(BaseModel):
    time: str = Field(pattern=r"^\d{1,2}:\d{2}$")
