# app/routes/relations.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..db import get_db
from ..logging_config import log_event
from .common import require_id

router = APIRouter(prefix="/api/relations", tags=["relations"])


@router.get("", response_model=list[schemas.RelationResponse])
def list_relations(applicant: str | None = Query(None), db: Session = Depends(get_db)):
    q = db.query(models.Relation)
    if applicant:
        q = q.filter(models.Relation.id1 == applicant)
    return q.order_by(models.Relation.id1, models.Relation.id2).all()


@router.post("", response_model=schemas.RelationResponse, status_code=201)
def create_relation(body: schemas.RelationCreate, db: Session = Depends(get_db)):
    if body.id1 == body.id2:
        raise HTTPException(400, "An applicant cannot be related to themselves")
    for applicant_id in (body.id1, body.id2):
        if not db.get(models.Applicant, applicant_id):
            raise HTTPException(404, f"Applicant not found: {applicant_id}")

    if db.get(models.Relation, (body.id1, body.id2)):
        raise HTTPException(409, "Relation already exists")

    obj = models.Relation(id1=body.id1, id2=body.id2, relation=body.relation)
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
    except IntegrityError:
        db.rollback()
        raise HTTPException(409, "Relation already exists")

    log_event("CREATE_RELATION", "relation created", {"id1": obj.id1, "id2": obj.id2, "relation": obj.relation})
    return obj


@router.delete("")
def delete_relation(
    id1: str | None = Query(None),
    id2: str | None = Query(None),
    db: Session = Depends(get_db),
):
    key = (require_id(id1, "id1"), require_id(id2, "id2"))
    obj = db.get(models.Relation, key)
    if not obj:
        raise HTTPException(404, "Relation not found")

    db.delete(obj)
    db.commit()
    log_event("DELETE_RELATION", "relation deleted", {"id1": key[0], "id2": key[1]})
    return {"status": "deleted", "id1": key[0], "id2": key[1]}
