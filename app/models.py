# app/models.py
from __future__ import annotations

import enum
import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Enum as SAEnum,
    ForeignKey,
    DateTime,
    Numeric,
    Table,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator, TEXT

from .db import Base


# -------------------------
# SQLite-safe nullable JSON list
# -------------------------
class JsonList(TypeDecorator):
    """
    Text column holding a JSON array. NULL stays NULL: for criteria an absent
    list means "no constraint", which is not the same as an empty list.

    Undecodable text is returned as-is so the reader can reject it.
    """

    impl = TEXT
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (list, tuple, set, frozenset)):
            return json.dumps(sorted(getattr(v, "value", v) for v in value), ensure_ascii=False)
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError:
            return value


class EmploymentStatusEnum(str, enum.Enum):
    EMPLOYED = "employed"
    UNEMPLOYED = "unemployed"


class MaritalStatusEnum(str, enum.Enum):
    SINGLE = "single"
    MARRIED = "married"
    WIDOWED = "widowed"
    DIVORCED = "divorced"


class EducationLevelEnum(str, enum.Enum):
    KINDERGARTEN = "kindergarten"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    HIGHER = "higher"


class RelationKindEnum(str, enum.Enum):
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"


class ApplicationStatusEnum(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


def _uuid() -> str:
    return str(uuid.uuid4())


def _enum_values(e) -> list[str]:
    return [x.value for x in e]


scheme_criteria = Table(
    "scheme_criteria",
    Base.metadata,
    Column("scheme_id", String, ForeignKey("schemes.id", ondelete="CASCADE"), primary_key=True),
    Column("criteria_id", String, ForeignKey("criteria.id", ondelete="CASCADE"), primary_key=True),
)

scheme_benefits = Table(
    "scheme_benefits",
    Base.metadata,
    Column("scheme_id", String, ForeignKey("schemes.id", ondelete="CASCADE"), primary_key=True),
    Column("benefit_id", String, ForeignKey("benefits.id", ondelete="CASCADE"), primary_key=True),
)


class Applicant(Base):
    __tablename__ = "applicants"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String(100), nullable=False)
    employment_status = Column(
        SAEnum(EmploymentStatusEnum, values_callable=_enum_values, native_enum=False),
        nullable=False,
    )
    sex = Column(String(10), nullable=False)
    # ISO text (YYYY-MM-DD); parsed by the fact deriver
    date_of_birth = Column(String(32), nullable=False)


class Relation(Base):
    """Directed edge: id2 is related to id1 via `relation`."""

    __tablename__ = "relations"

    id1 = Column(String, primary_key=True, index=True)
    id2 = Column(String, primary_key=True)
    relation = Column(String, nullable=False)


class Criteria(Base):
    __tablename__ = "criteria"

    id = Column(String, primary_key=True, default=_uuid)
    # NULL in any column means "no constraint"
    marital_status = Column(String(50), nullable=True)
    employment_status = Column(String(50), nullable=True)
    education_levels = Column(JsonList, nullable=True)


class Benefit(Base):
    __tablename__ = "benefits"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)


class Scheme(Base):
    __tablename__ = "schemes"

    id = Column(String, primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)

    criteria = relationship("Criteria", secondary=scheme_criteria, lazy="selectin")
    benefits = relationship("Benefit", secondary=scheme_benefits, lazy="selectin")


class Application(Base):
    __tablename__ = "applications"

    id = Column(String, primary_key=True, default=_uuid)
    applicant_id = Column(String, ForeignKey("applicants.id"), nullable=False, index=True)
    scheme_id = Column(String, ForeignKey("schemes.id"), nullable=False, index=True)
    status = Column(
        SAEnum(ApplicationStatusEnum, values_callable=_enum_values, native_enum=False),
        nullable=False,
        default=ApplicationStatusEnum.PENDING,
    )

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
