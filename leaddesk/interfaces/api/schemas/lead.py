"""Pydantic models for lead endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class LeadRead(BaseModel):
    """Representation of a lead returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    phone: str
    email: str | None = None
    company: str | None = None
    status: str
    priority: str | None = None
    source: str | None = None
    notes: str | None = None
    assigned_to: str | None = None
    assigned_by: str | None = None
    assigned_at: datetime | None = None
    loan_amount: Decimal | None = None
    loan_type: str | None = None
    last_contacted: datetime | None = None
    next_follow_up: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LeadNoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    note: str
    user_id: str | None = None
    author_name: str | None = None
    created_at: datetime | None = None


class CallLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    call_type: str
    duration: int
    notes: str | None = None
    user_id: str | None = None
    caller_name: str | None = None
    created_at: datetime | None = None


class LeadDetailRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lead: LeadRead
    notes: list[LeadNoteRead]
    call_logs: list[CallLogRead]


class LeadUpdateRequest(BaseModel):
    """Fields submitted by the admin lead form; omitted fields are left as-is."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    status: str | None = None
    priority: str | None = None
    assigned_to: str | None = Field(
        default=None, description="User id, or an empty string to unassign"
    )
    source: str | None = None
    notes: str | None = None


class LeadStatusUpdateRequest(BaseModel):
    status: str
    remarks: str | None = Field(default=None, description="General remarks replacing the notes")
    note: str | None = Field(default=None, description="Reason when marking a lead not eligible")
    callback_at: datetime | None = Field(default=None, description="Callback time for follow ups")


class BulkAssignRequest(BaseModel):
    lead_ids: list[str] = Field(..., min_length=1)
    assigned_to: str = Field(..., min_length=1)


class BulkAssignResponse(BaseModel):
    assigned_to: str
    count: int
    leads: list[LeadRead]
