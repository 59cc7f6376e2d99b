# app/routes/applications.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..logging_config import log_event
from .common import apply_patch, require_id

router = APIRouter(prefix="/api/applications", tags=["applications"])


def _check_refs(db: Session, applicant_id: str | None, scheme_id: str | None) -> None:
    if applicant_id is not None and not db.get(models.Applicant, applicant_id):
        raise HTTPException(404, "Applicant not found")
    if scheme_id is not None and not db.get(models.Scheme, scheme_id):
        raise HTTPException(404, "Scheme not found")


def _get_or_404(db: Session, application_id: str) -> models.Application:
    obj = db.get(models.Application, application_id)
    if not obj:
        raise HTTPException(404, "Application not found")
    return obj


@router.get("", response_model=list[schemas.ApplicationResponse])
def list_applications(db: Session = Depends(get_db)):
    return db.query(models.Application).order_by(models.Application.created_at, models.Application.id).all()


@router.post("", response_model=schemas.ApplicationResponse, status_code=201)
def create_application(body: schemas.ApplicationCreate, db: Session = Depends(get_db)):
    _check_refs(db, body.applicant_id, body.scheme_id)

    obj = models.Application(applicant_id=body.applicant_id, scheme_id=body.scheme_id, status=body.status)
    db.add(obj)
    db.commit()
    db.refresh(obj)

    log_event("CREATE_APPLICATION", "application created", {
        "application_id": obj.id,
        "applicant_id": obj.applicant_id,
        "scheme_id": obj.scheme_id,
    })
    return obj


@router.put("", response_model=schemas.ApplicationResponse)
def update_application(
    body: schemas.ApplicationUpdate,
    application: str | None = Query(None),
    db: Session = Depends(get_db),
):
    application_id = require_id(application, "application")
    obj = _get_or_404(db, application_id)
    _check_refs(db, body.applicant_id, body.scheme_id)

    changed = apply_patch(obj, body)
    if changed:
        db.commit()
        db.refresh(obj)
        log_event("UPDATE_APPLICATION", "application updated", {"application_id": application_id, "fields": changed})
    return obj


@router.delete("")
def delete_application(application: str | None = Query(None), db: Session = Depends(get_db)):
    application_id = require_id(application, "application")
    obj = _get_or_404(db, application_id)

    db.delete(obj)
    db.commit()
    log_event("DELETE_APPLICATION", "application deleted", {"application_id": application_id})
    return {"status": "deleted", "id": application_id}
