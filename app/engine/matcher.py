# app/engine/matcher.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .facts import ApplicantFacts
from .records import CriteriaRule, SchemeEntry


def criterion_satisfied(rule: CriteriaRule, facts: ApplicantFacts) -> bool:
    if rule.marital_status is not None and rule.marital_status != facts.marital_status:
        return False
    if rule.employment_status is not None and rule.employment_status != facts.employment_status:
        return False
    if rule.education_levels is not None and not (rule.education_levels & facts.children_education_levels):
        return False
    return True


def scheme_eligible(scheme: SchemeEntry, facts: ApplicantFacts) -> bool:
    # all() over no criteria is True: an unconstrained scheme is open to everyone
    return all(criterion_satisfied(rule, facts) for rule in scheme.criteria)


def find_eligible_schemes(facts: ApplicantFacts, catalog: Iterable[SchemeEntry]) -> List[SchemeEntry]:
    """Eligible schemes in catalog order. No scoring, no re-sorting."""
    return [scheme for scheme in catalog if scheme_eligible(scheme, facts)]


class EligibilityMatcher:
    def __init__(self, store):
        self.store = store

    def find_eligible_schemes(
        self, facts: ApplicantFacts, catalog: Optional[Sequence[SchemeEntry]] = None
    ) -> List[SchemeEntry]:
        if catalog is None:
            # materialized up front: a malformed row fails before any matching
            catalog = list(self.store.get_scheme_catalog())
        return find_eligible_schemes(facts, catalog)
