# app/schemas.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, List, Annotated, Any

from pydantic import BaseModel, Field, StringConstraints, ConfigDict, field_validator

from .models import (
    ApplicationStatusEnum,
    EducationLevelEnum,
    EmploymentStatusEnum,
    MaritalStatusEnum,
)


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


# -------------------------
# APPLICANTS
# -------------------------
def _birth_date_not_in_future(v: Optional[date]) -> Optional[date]:
    # the fact deriver treats a future birth date as malformed
    if v is not None and v > date.today():
        raise ValueError("date_of_birth cannot be in the future")
    return v


class ApplicantCreate(BaseModel):
    name: Name
    employment_status: EmploymentStatusEnum
    sex: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10)]
    date_of_birth: date

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, v: date):
        return _birth_date_not_in_future(v)


class ApplicantUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    name: Optional[Name] = None
    employment_status: Optional[EmploymentStatusEnum] = None
    sex: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10)]] = None
    date_of_birth: Optional[date] = None

    @field_validator("date_of_birth")
    @classmethod
    def _not_in_future(cls, v: Optional[date]):
        return _birth_date_not_in_future(v)


class ApplicantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    employment_status: str
    sex: str
    date_of_birth: str

    @field_validator("employment_status", mode="before")
    @classmethod
    def _enum_value(cls, v: Any):
        return v.value if hasattr(v, "value") else v


class ApplicantFactsResponse(BaseModel):
    id: str
    marital_status: MaritalStatusEnum
    employment_status: EmploymentStatusEnum
    children_level: List[EducationLevelEnum] = Field(default_factory=list)


# -------------------------
# RELATIONS
# -------------------------
class RelationCreate(BaseModel):
    id1: str
    id2: str
    relation: Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=32)]


class RelationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id1: str
    id2: str
    relation: str


# -------------------------
# SCHEMES
# -------------------------
class CriteriaIn(BaseModel):
    marital_status: Optional[MaritalStatusEnum] = None
    employment_status: Optional[EmploymentStatusEnum] = None
    education_levels: Optional[List[EducationLevelEnum]] = None

    @field_validator("marital_status", "employment_status", mode="before")
    @classmethod
    def _blank_is_none(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class BenefitIn(BaseModel):
    id: Optional[str] = None
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class SchemeCreate(BaseModel):
    id: Optional[str] = None
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    criteria: Optional[CriteriaIn] = None
    benefits: List[BenefitIn] = Field(default_factory=list)


class SchemesRequest(BaseModel):
    schemes: List[SchemeCreate] = Field(..., min_length=1)


class SchemeUpdate(BaseModel):
    name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]] = None


class SchemeResponse(BaseModel):
    id: str
    name: str
    criteria_ids: List[str] = Field(default_factory=list)
    benefit_ids: List[str] = Field(default_factory=list)


class EligibleSchemeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


# -------------------------
# APPLICATIONS
# -------------------------
class ApplicationCreate(BaseModel):
    applicant_id: str
    scheme_id: str
    status: ApplicationStatusEnum = ApplicationStatusEnum.PENDING


class ApplicationUpdate(BaseModel):
    applicant_id: Optional[str] = None
    scheme_id: Optional[str] = None
    status: Optional[ApplicationStatusEnum] = None


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    applicant_id: str
    scheme_id: str
    status: ApplicationStatusEnum
