# app/routes/schemes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..engine import SqlRecordStore, evaluate_eligibility
from ..logging_config import log_event
from .common import apply_patch, require_id

router = APIRouter(prefix="/api/schemes", tags=["schemes"])


def _scheme_response(s: models.Scheme) -> schemas.SchemeResponse:
    return schemas.SchemeResponse(
        id=s.id,
        name=s.name,
        criteria_ids=sorted(c.id for c in s.criteria),
        benefit_ids=sorted(b.id for b in s.benefits),
    )


def _get_or_404(db: Session, scheme_id: str) -> models.Scheme:
    obj = db.get(models.Scheme, scheme_id)
    if not obj:
        raise HTTPException(404, "Scheme not found")
    return obj


@router.get("", response_model=list[schemas.SchemeResponse])
def list_schemes(db: Session = Depends(get_db)):
    rows = db.query(models.Scheme).order_by(models.Scheme.name, models.Scheme.id).all()
    return [_scheme_response(s) for s in rows]


@router.post("", response_model=list[schemas.SchemeResponse], status_code=201)
def create_schemes(body: schemas.SchemesRequest, db: Session = Depends(get_db)):
    """
    Create one or more schemes. Each gets its own criteria row (even when the
    content matches another scheme's) plus its benefits, all in one commit.
    """
    created = []
    for item in body.schemes:
        scheme = models.Scheme(id=item.id or models._uuid(), name=item.name)

        if item.criteria is not None:
            c = item.criteria
            scheme.criteria.append(
                models.Criteria(
                    marital_status=c.marital_status.value if c.marital_status else None,
                    employment_status=c.employment_status.value if c.employment_status else None,
                    education_levels=[l.value for l in c.education_levels] if c.education_levels is not None else None,
                )
            )

        for b in item.benefits:
            scheme.benefits.append(models.Benefit(id=b.id or models._uuid(), name=b.name, amount=b.amount))

        db.add(scheme)
        created.append(scheme)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "Scheme or benefit id already exists")

    for s in created:
        db.refresh(s)
    log_event("CREATE_SCHEMES", f"{len(created)} scheme(s) created", {"scheme_ids": [s.id for s in created]})
    return [_scheme_response(s) for s in created]


@router.put("", response_model=schemas.SchemeResponse)
def update_scheme(
    body: schemas.SchemeUpdate,
    scheme: str | None = Query(None),
    db: Session = Depends(get_db),
):
    scheme_id = require_id(scheme, "scheme")
    obj = _get_or_404(db, scheme_id)

    changed = apply_patch(obj, body)
    if changed:
        db.commit()
        db.refresh(obj)
        log_event("UPDATE_SCHEME", "scheme updated", {"scheme_id": scheme_id, "fields": changed})
    return _scheme_response(obj)


@router.delete("")
def delete_scheme(scheme: str | None = Query(None), db: Session = Depends(get_db)):
    scheme_id = require_id(scheme, "scheme")
    obj = _get_or_404(db, scheme_id)

    # Link rows go with the scheme; criteria and benefit rows stay addressable.
    obj.criteria.clear()
    obj.benefits.clear()
    db.delete(obj)
    db.commit()

    log_event("DELETE_SCHEME", "scheme deleted", {"scheme_id": scheme_id})
    return {"status": "deleted", "id": scheme_id}


@router.get("/eligible", response_model=list[schemas.EligibleSchemeResponse])
def eligible_schemes(applicant: str | None = Query(None), db: Session = Depends(get_db)):
    applicant_id = require_id(applicant, "applicant")
    out = evaluate_eligibility(SqlRecordStore(db), applicant_id)
    return [schemas.EligibleSchemeResponse(id=s.id, name=s.name) for s in out.schemes]
