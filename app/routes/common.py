# app/routes/common.py
from __future__ import annotations

from datetime import date

from fastapi import HTTPException
from pydantic import BaseModel


def require_id(value: str | None, name: str) -> str:
    if not value or not value.strip():
        raise HTTPException(400, f"{name} ID is required")
    return value.strip()


def apply_patch(obj, patch: BaseModel) -> list[str]:
    """
    Copy the fields the client actually sent onto an ORM row.
    Explicit nulls are ignored; returns the names of the fields changed.
    """
    changed = []
    for key, value in patch.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        if isinstance(value, date):
            value = value.isoformat()
        setattr(obj, key, value)
        changed.append(key)
    return changed
