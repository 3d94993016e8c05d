"""Persistence layer for leads, notes and call logs."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from leaddesk.domain.entities import CallLog, Lead, LeadDetail, LeadNote
from leaddesk.infrastructure.models import CallLogModel, LeadModel, LeadNoteModel
from leaddesk.utils import ensure_app_naive_datetime, ensure_app_timezone

_LEAD_COLUMNS = (
    "name",
    "email",
    "phone",
    "company",
    "status",
    "priority",
    "source",
    "notes",
    "assigned_to",
    "assigned_by",
    "assigned_at",
    "loan_amount",
    "loan_type",
    "last_contacted",
    "next_follow_up",
)
_DATETIME_COLUMNS = {"assigned_at", "last_contacted", "next_follow_up"}


def _optional_columns(**values: Any) -> dict[str, Any]:
    """Drop unset values so column defaults apply on insert."""

    columns: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        columns[key] = ensure_app_naive_datetime(value) if isinstance(value, datetime) else value
    return columns


class LeadRepository:
    """Provide CRUD operations for :class:`Lead` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, lead_id: str) -> Lead | None:
        model = self.session.get(LeadModel, lead_id)
        return self._to_entity(model) if model else None

    def list_by_ids(self, lead_ids: Sequence[str]) -> list[Lead]:
        if not lead_ids:
            return []
        models = (
            self.session.query(LeadModel).filter(LeadModel.id.in_(set(lead_ids))).all()
        )
        by_id = {model.id: self._to_entity(model) for model in models}
        return [by_id[lead_id] for lead_id in lead_ids if lead_id in by_id]

    def create(self, lead: Lead) -> Lead:
        """Insert ``lead``; used by imports and seed data rather than the API."""

        model = LeadModel(**_optional_columns(id=lead.id))
        self._apply_entity_to_model(model, lead)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, lead: Lead) -> Lead:
        model = self.session.get(LeadModel, lead.id)
        if model is None:
            msg = f"Lead with id {lead.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, lead)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_many(self, leads: Sequence[Lead]) -> list[Lead]:
        """Persist several leads in a single transaction."""

        models: list[LeadModel] = []
        for lead in leads:
            model = self.session.get(LeadModel, lead.id)
            if model is None:
                self.session.rollback()
                msg = f"Lead with id {lead.id} not found"
                raise ValueError(msg)
            self._apply_entity_to_model(model, lead)
            self.session.add(model)
            models.append(model)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def get_detail(self, lead_id: str) -> LeadDetail | None:
        lead = self.get(lead_id)
        if lead is None:
            return None

        note_models = (
            self.session.query(LeadNoteModel)
            .filter(LeadNoteModel.lead_id == lead_id)
            .order_by(LeadNoteModel.created_at.desc())
            .all()
        )
        call_models = (
            self.session.query(CallLogModel)
            .filter(CallLogModel.lead_id == lead_id)
            .order_by(CallLogModel.created_at.desc())
            .all()
        )
        return LeadDetail(
            lead=lead,
            notes=[self._note_to_entity(model) for model in note_models],
            call_logs=[self._call_to_entity(model) for model in call_models],
        )

    def add_note(self, note: LeadNote) -> LeadNote:
        """Attach ``note`` to its lead; seed helper, the API only reads notes."""

        model = LeadNoteModel(
            lead_id=note.lead_id,
            user_id=note.user_id,
            note=note.note,
            **_optional_columns(id=note.id, created_at=note.created_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._note_to_entity(model)

    def add_call_log(self, call_log: CallLog) -> CallLog:
        """Store ``call_log``; seed helper, the API only reads call history."""

        model = CallLogModel(
            lead_id=call_log.lead_id,
            user_id=call_log.user_id,
            call_type=call_log.call_type,
            duration=call_log.duration,
            notes=call_log.notes,
            **_optional_columns(id=call_log.id, created_at=call_log.created_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._call_to_entity(model)

    @staticmethod
    def to_row(lead: Lead) -> dict[str, Any]:
        """Return a JSON-friendly snapshot of ``lead`` keyed by column name."""

        row: dict[str, Any] = {"id": lead.id}
        for column in _LEAD_COLUMNS:
            value = getattr(lead, column)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = int(value) if value == value.to_integral_value() else float(value)
            row[column] = value
        return row

    @staticmethod
    def _apply_entity_to_model(model: LeadModel, lead: Lead) -> None:
        for column in _LEAD_COLUMNS:
            value = getattr(lead, column)
            if column in _DATETIME_COLUMNS:
                value = ensure_app_naive_datetime(value)
            setattr(model, column, value)

    @staticmethod
    def _to_entity(model: LeadModel) -> Lead:
        return Lead(
            id=model.id,
            name=model.name,
            phone=model.phone,
            email=model.email,
            company=model.company,
            status=model.status,
            priority=model.priority,
            source=model.source,
            notes=model.notes,
            assigned_to=model.assigned_to,
            assigned_by=model.assigned_by,
            assigned_at=ensure_app_timezone(model.assigned_at),
            loan_amount=model.loan_amount,
            loan_type=model.loan_type,
            last_contacted=ensure_app_timezone(model.last_contacted),
            next_follow_up=ensure_app_timezone(model.next_follow_up),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _note_to_entity(model: LeadNoteModel) -> LeadNote:
        return LeadNote(
            id=model.id,
            lead_id=model.lead_id,
            user_id=model.user_id,
            note=model.note,
            author_name=model.user.full_name if model.user else None,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _call_to_entity(model: CallLogModel) -> CallLog:
        return CallLog(
            id=model.id,
            lead_id=model.lead_id,
            user_id=model.user_id,
            call_type=model.call_type,
            duration=model.duration or 0,
            notes=model.notes,
            caller_name=model.user.full_name if model.user else None,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["LeadRepository"]
