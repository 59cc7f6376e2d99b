# app/engine/store.py
from __future__ import annotations

from typing import List, Optional, Protocol

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session

from app import models
from app.errors import MalformedApplicantError, StoreUnavailableError

from .records import ApplicantRecord, CriteriaRule, RelationEdge, SchemeEntry


class RecordStore(Protocol):
    """Read-only view of the records eligibility evaluation needs."""

    def get_applicant(self, applicant_id: str) -> Optional[ApplicantRecord]: ...

    def get_relations_from(self, applicant_id: str, kind: Optional[str] = None) -> List[RelationEdge]: ...

    def get_scheme_catalog(self) -> List[SchemeEntry]: ...


def _value(v):
    return v.value if hasattr(v, "value") else v


class SqlRecordStore:
    """RecordStore over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _run(self, fn):
        try:
            return fn()
        except (OperationalError, DBAPIError) as e:
            raise StoreUnavailableError(f"Record store unavailable: {e.orig}") from e

    def get_applicant(self, applicant_id: str) -> Optional[ApplicantRecord]:
        try:
            row = self._run(lambda: self.db.get(models.Applicant, applicant_id))
        except LookupError as e:
            # stored enum value the column type does not know
            raise MalformedApplicantError(applicant_id, str(e)) from e
        if row is None:
            return None
        return ApplicantRecord(
            id=row.id,
            name=row.name,
            employment_status=_value(row.employment_status),
            sex=row.sex,
            date_of_birth=row.date_of_birth,
        )

    def get_relations_from(self, applicant_id: str, kind: Optional[str] = None) -> List[RelationEdge]:
        q = self.db.query(models.Relation).filter(models.Relation.id1 == applicant_id)
        if kind is not None:
            q = q.filter(models.Relation.relation == kind)
        rows = self._run(lambda: q.order_by(models.Relation.id2).all())
        return [RelationEdge(target_id=r.id2, kind=r.relation) for r in rows]

    def get_scheme_catalog(self) -> List[SchemeEntry]:
        rows = self._run(
            lambda: self.db.query(models.Scheme).order_by(models.Scheme.name, models.Scheme.id).all()
        )
        return [
            SchemeEntry(
                id=s.id,
                name=s.name,
                criteria=tuple(
                    CriteriaRule.parse(c.id, c.marital_status, c.employment_status, c.education_levels)
                    for c in s.criteria
                ),
            )
            for s in rows
        ]
