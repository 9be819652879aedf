"""Contact persistence on top of a SQLAlchemy session."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.errors import NotFoundError, StoreUnavailable, ValidationError
from backend.models import Contact

REQUIRED_FIELDS = ("name", "email", "phone")
MUTABLE_FIELDS = REQUIRED_FIELDS + ("message",)


def _check_required(fields: Mapping[str, Any]) -> None:
    missing = []
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or not str(value).strip():
            missing.append(name)
    if missing:
        raise ValidationError(missing)


class ContactStore:
    """CRUD access to the ``contacts`` table.

    Every database error is rolled back and re-raised as StoreUnavailable so
    callers only deal with the errors from ``backend.errors``.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _fail(self, exc: SQLAlchemyError) -> StoreUnavailable:
        self.db.rollback()
        logging.error("contact store failure: %s", exc)
        return StoreUnavailable(str(exc))

    def insert(self, fields: Mapping[str, Any]) -> Contact:
        _check_required(fields)
        try:
            seq = (self.db.query(func.max(Contact.seq)).scalar() or 0) + 1
            obj = Contact(seq=seq, **{k: fields.get(k) for k in MUTABLE_FIELDS})
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
        except SQLAlchemyError as exc:
            raise self._fail(exc) from exc
        logging.info("contact created id=%s", obj.id)
        return obj

    def list_all(self) -> list[Contact]:
        try:
            return (
                self.db.query(Contact)
                .order_by(Contact.created_at.desc(), Contact.seq.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail(exc) from exc

    def get(self, contact_id: str) -> Contact:
        try:
            obj = self.db.get(Contact, contact_id)
        except SQLAlchemyError as exc:
            raise self._fail(exc) from exc
        if obj is None:
            raise NotFoundError(contact_id)
        return obj

    def update_by_id(self, contact_id: str, fields: Mapping[str, Any]) -> Contact | None:
        """Replace every mutable field; returns None for an unknown id."""
        _check_required(fields)
        try:
            obj = self.db.get(Contact, contact_id)
            if obj is None:
                logging.warning("update for unknown contact id=%s ignored", contact_id)
                return None
            for name in MUTABLE_FIELDS:
                setattr(obj, name, fields.get(name))
            self.db.commit()
            self.db.refresh(obj)
        except SQLAlchemyError as exc:
            raise self._fail(exc) from exc
        logging.info("contact updated id=%s", contact_id)
        return obj

    def delete_by_id(self, contact_id: str) -> None:
        try:
            deleted = self.db.query(Contact).filter(Contact.id == contact_id).delete()
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail(exc) from exc
        logging.info("contact deleted id=%s (%d row)", contact_id, deleted)
