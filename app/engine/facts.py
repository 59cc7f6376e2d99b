# app/engine/facts.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, FrozenSet

from app.errors import ApplicantNotFoundError, MalformedApplicantError, MalformedDateError
from app.logging_config import logger
from app.models import EducationLevelEnum, EmploymentStatusEnum, MaritalStatusEnum, RelationKindEnum

# (inclusive upper bound in completed years, level); anything older is HIGHER
EDUCATION_BANDS = (
    (6, EducationLevelEnum.KINDERGARTEN),
    (12, EducationLevelEnum.PRIMARY),
    (16, EducationLevelEnum.SECONDARY),
    (18, EducationLevelEnum.TERTIARY),
)


@dataclass(frozen=True)
class ApplicantFacts:
    marital_status: MaritalStatusEnum
    employment_status: EmploymentStatusEnum
    children_education_levels: FrozenSet[EducationLevelEnum] = field(default_factory=frozenset)


def education_level(age: int) -> EducationLevelEnum:
    if age < 0:
        raise ValueError(f"age must be non-negative, got {age}")
    for upper, level in EDUCATION_BANDS:
        if age <= upper:
            return level
    return EducationLevelEnum.HIGHER


def parse_date_of_birth(value, applicant_id: str = "") -> date:
    """
    Accepts a date, an ISO date string, or an ISO/RFC3339 timestamp
    (what a DATE column looks like when read back as text).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateError(applicant_id, value)

    s = value.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        raise MalformedDateError(applicant_id, value)


def calculate_age(dob: date, today: date) -> int:
    """Completed years between dob and today."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


class FactDeriver:
    """
    Turns stored applicant data into ApplicantFacts.

    `store` is any RecordStore; `today` is a zero-arg callable so tests can pin
    the evaluation date.
    """

    def __init__(self, store, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def derive_marital_status(self, applicant_id: str) -> MaritalStatusEnum:
        # Only spouse edges are recorded, so widowed/divorced are never inferred.
        if self.store.get_relations_from(applicant_id, RelationKindEnum.SPOUSE.value):
            return MaritalStatusEnum.MARRIED
        return MaritalStatusEnum.SINGLE

    def derive_children_levels(self, applicant_id: str) -> FrozenSet[EducationLevelEnum]:
        today = self.today()
        levels = set()
        for edge in self.store.get_relations_from(applicant_id, RelationKindEnum.CHILD.value):
            child = self.store.get_applicant(edge.target_id)
            if child is None:
                logger.warning(f"Skipping dangling child edge {applicant_id} -> {edge.target_id}")
                continue

            dob = parse_date_of_birth(child.date_of_birth, child.id)
            age = calculate_age(dob, today)
            if age < 0:
                # born after the evaluation date
                raise MalformedDateError(child.id, child.date_of_birth)
            levels.add(education_level(age))
        return frozenset(levels)

    def derive(self, applicant_id: str) -> ApplicantFacts:
        applicant = self.store.get_applicant(applicant_id)
        if applicant is None:
            raise ApplicantNotFoundError(applicant_id)

        try:
            employment_status = EmploymentStatusEnum(applicant.employment_status)
        except ValueError:
            raise MalformedApplicantError(applicant_id, f"invalid employment_status {applicant.employment_status!r}")

        return ApplicantFacts(
            marital_status=self.derive_marital_status(applicant_id),
            employment_status=employment_status,
            children_education_levels=self.derive_children_levels(applicant_id),
        )
