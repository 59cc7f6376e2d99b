# app/engine/eligibility.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, List

from app.logging_config import log_event

from .facts import ApplicantFacts, FactDeriver
from .matcher import EligibilityMatcher
from .records import SchemeEntry


@dataclass
class EligibilityOut:
    applicant_id: str
    facts: ApplicantFacts
    schemes: List[SchemeEntry]


def evaluate_eligibility(store, applicant_id: str, today: Callable[[], date] = date.today) -> EligibilityOut:
    """
    Derive facts for one applicant and match them against the whole catalog.
    Any failure aborts the evaluation; nothing partial is returned.
    """
    facts = FactDeriver(store, today=today).derive(applicant_id)
    schemes = EligibilityMatcher(store).find_eligible_schemes(facts)

    log_event(
        "ELIGIBILITY_EVALUATED",
        f"{len(schemes)} eligible scheme(s)",
        {
            "applicant_id": applicant_id,
            "marital_status": facts.marital_status.value,
            "employment_status": facts.employment_status.value,
            "children_education_levels": sorted(l.value for l in facts.children_education_levels),
            "scheme_ids": [s.id for s in schemes],
        },
    )
    return EligibilityOut(applicant_id=applicant_id, facts=facts, schemes=schemes)
