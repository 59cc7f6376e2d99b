# app/engine/__init__.py
from .facts import ApplicantFacts, FactDeriver, calculate_age, education_level, parse_date_of_birth
from .matcher import EligibilityMatcher, criterion_satisfied, find_eligible_schemes, scheme_eligible
from .records import ApplicantRecord, CriteriaRule, RelationEdge, SchemeEntry
from .store import RecordStore, SqlRecordStore
from .eligibility import EligibilityOut, evaluate_eligibility
