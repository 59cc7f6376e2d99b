# app/routes/applicants.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..engine import FactDeriver, SqlRecordStore
from ..logging_config import log_event
from .common import apply_patch, require_id

router = APIRouter(prefix="/api/applicants", tags=["applicants"])


def _get_or_404(db: Session, applicant_id: str) -> models.Applicant:
    obj = db.get(models.Applicant, applicant_id)
    if not obj:
        raise HTTPException(404, "Applicant not found")
    return obj


@router.get("", response_model=list[schemas.ApplicantResponse])
def list_applicants(db: Session = Depends(get_db)):
    return db.query(models.Applicant).order_by(models.Applicant.name, models.Applicant.id).all()


@router.post("", response_model=schemas.ApplicantResponse, status_code=201)
def create_applicant(body: schemas.ApplicantCreate, db: Session = Depends(get_db)):
    obj = models.Applicant(
        name=body.name,
        employment_status=body.employment_status,
        sex=body.sex,
        date_of_birth=body.date_of_birth.isoformat(),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)

    log_event("CREATE_APPLICANT", "applicant created", {"applicant_id": obj.id})
    return obj


@router.put("", response_model=schemas.ApplicantResponse)
def update_applicant(
    body: schemas.ApplicantUpdate,
    applicant: str | None = Query(None),
    db: Session = Depends(get_db),
):
    applicant_id = require_id(applicant, "applicant")
    obj = _get_or_404(db, applicant_id)

    changed = apply_patch(obj, body)
    if changed:
        db.commit()
        db.refresh(obj)
        log_event("UPDATE_APPLICANT", "applicant updated", {"applicant_id": applicant_id, "fields": changed})
    return obj


@router.delete("")
def delete_applicant(applicant: str | None = Query(None), db: Session = Depends(get_db)):
    applicant_id = require_id(applicant, "applicant")
    obj = _get_or_404(db, applicant_id)

    # Relations and applications are left in place.
    try:
        db.delete(obj)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "Applicant is still referenced by applications")

    log_event("DELETE_APPLICANT", "applicant deleted", {"applicant_id": applicant_id})
    return {"status": "deleted", "id": applicant_id}


@router.get("/facts", response_model=schemas.ApplicantFactsResponse)
def applicant_facts(applicant: str | None = Query(None), db: Session = Depends(get_db)):
    """Derived marital status, employment status and children's education levels."""
    applicant_id = require_id(applicant, "applicant")
    facts = FactDeriver(SqlRecordStore(db)).derive(applicant_id)
    return schemas.ApplicantFactsResponse(
        id=applicant_id,
        marital_status=facts.marital_status,
        employment_status=facts.employment_status,
        children_level=[l for l in models.EducationLevelEnum if l in facts.children_education_levels],
    )
