"""Schemas describing users and their preferences."""

from pydantic import BaseModel, ConfigDict, Field


class UserSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    role: str


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(extra="allow")

    assignment_notifications: bool = True


class NotificationPreferencesUpdate(BaseModel):
    assignment_notifications: bool = Field(
        ..., description="Whether lead assignment notifications are delivered"
    )
