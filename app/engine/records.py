# app/engine/records.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from app.errors import MalformedCriteriaError
from app.models import EducationLevelEnum, EmploymentStatusEnum, MaritalStatusEnum


@dataclass(frozen=True)
class ApplicantRecord:
    id: str
    name: str
    employment_status: str
    sex: str
    date_of_birth: object  # str or date; parsed by the deriver


@dataclass(frozen=True)
class RelationEdge:
    target_id: str
    kind: str


def _enum_or_none(enum_cls, value, criteria_id, field_name):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise MalformedCriteriaError(criteria_id, f"invalid {field_name} {value!r}")


@dataclass(frozen=True)
class CriteriaRule:
    """
    One eligibility constraint. A None field is "no constraint".
    education_levels, when set, needs at least one child at any listed level.
    """

    id: Optional[str] = None
    marital_status: Optional[MaritalStatusEnum] = None
    employment_status: Optional[EmploymentStatusEnum] = None
    education_levels: Optional[FrozenSet[EducationLevelEnum]] = None

    @classmethod
    def parse(cls, criteria_id, marital_status=None, employment_status=None, education_levels=None) -> "CriteriaRule":
        """Build a rule from raw stored values, rejecting anything malformed."""
        levels = None
        if education_levels is not None:
            if isinstance(education_levels, (str, bytes)) or not hasattr(education_levels, "__iter__"):
                raise MalformedCriteriaError(criteria_id, f"education_levels is not a list: {education_levels!r}")
            levels = frozenset(
                _enum_or_none(EducationLevelEnum, v, criteria_id, "education level") for v in education_levels
            )
            if None in levels:
                raise MalformedCriteriaError(criteria_id, "education_levels contains null")

        return cls(
            id=criteria_id,
            marital_status=_enum_or_none(MaritalStatusEnum, marital_status, criteria_id, "marital_status"),
            employment_status=_enum_or_none(EmploymentStatusEnum, employment_status, criteria_id, "employment_status"),
            education_levels=levels,
        )


@dataclass(frozen=True)
class SchemeEntry:
    id: str
    name: str
    criteria: Tuple[CriteriaRule, ...] = field(default_factory=tuple)
