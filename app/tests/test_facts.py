from datetime import date

import pytest

from app.engine import FactDeriver, calculate_age, education_level, parse_date_of_birth
from app.errors import ApplicantNotFoundError, MalformedApplicantError, MalformedDateError
from app.models import EducationLevelEnum as L, EmploymentStatusEnum, MaritalStatusEnum


# -------------------------
# AGE -> EDUCATION LEVEL
# -------------------------
@pytest.mark.parametrize(
    "age,level",
    [
        (0, L.KINDERGARTEN),
        (6, L.KINDERGARTEN),
        (7, L.PRIMARY),
        (12, L.PRIMARY),
        (13, L.SECONDARY),
        (16, L.SECONDARY),
        (17, L.TERTIARY),
        (18, L.TERTIARY),
        (19, L.HIGHER),
        (64, L.HIGHER),
    ],
)
def test_education_level_bands(age, level):
    assert education_level(age) == level


def test_education_level_is_total_over_ages():
    for age in range(0, 120):
        assert education_level(age) in set(L)


def test_education_level_rejects_negative_age():
    with pytest.raises(ValueError):
        education_level(-1)


# -------------------------
# AGE / DATE PARSING
# -------------------------
def test_age_counts_completed_years_only():
    dob = date(2017, 6, 16)
    assert calculate_age(dob, date(2024, 6, 15)) == 6
    assert calculate_age(dob, date(2024, 6, 16)) == 7


def test_age_for_leap_day_birthday():
    dob = date(2016, 2, 29)
    assert calculate_age(dob, date(2023, 2, 28)) == 6
    assert calculate_age(dob, date(2023, 3, 1)) == 7


def test_parse_date_accepts_iso_and_timestamps():
    assert parse_date_of_birth("2016-02-01") == date(2016, 2, 1)
    assert parse_date_of_birth("2016-02-01T00:00:00Z") == date(2016, 2, 1)
    assert parse_date_of_birth(date(2016, 2, 1)) == date(2016, 2, 1)


@pytest.mark.parametrize("bad", ["", "not-a-date", "2016-13-40", None, 20160201])
def test_parse_date_rejects_garbage(bad):
    with pytest.raises(MalformedDateError):
        parse_date_of_birth(bad, "child-x")


# -------------------------
# MARITAL STATUS
# -------------------------
def test_no_spouse_edge_is_single(store, today):
    store.add_applicant("a")
    store.add_applicant("b")
    store.relate("a", "b", "sibling")
    assert FactDeriver(store, today).derive_marital_status("a") == MaritalStatusEnum.SINGLE


def test_spouse_edge_is_married(store, today):
    store.add_applicant("a")
    store.add_applicant("b")
    store.relate("a", "b", "spouse")
    deriver = FactDeriver(store, today)
    assert deriver.derive_marital_status("a") == MaritalStatusEnum.MARRIED
    # edges are directed
    assert deriver.derive_marital_status("b") == MaritalStatusEnum.SINGLE


# -------------------------
# CHILDREN LEVELS
# -------------------------
def test_no_children_gives_empty_set(store, today):
    store.add_applicant("a")
    assert FactDeriver(store, today).derive_children_levels("a") == frozenset()


def test_children_levels_collapse_duplicates(store, today):
    store.add_applicant("p")
    store.add_child("p", "c1", "2016-02-01")  # 8 -> primary
    store.add_child("p", "c2", "2014-01-01")  # 10 -> primary
    store.add_child("p", "c3", "2010-01-01")  # 14 -> secondary
    levels = FactDeriver(store, today).derive_children_levels("p")
    assert levels == frozenset({L.PRIMARY, L.SECONDARY})


def test_children_level_uses_exact_birthday(store, today):
    store.add_applicant("p")
    # turns 7 the day after TODAY
    store.add_child("p", "c1", "2017-06-16")
    assert FactDeriver(store, today).derive_children_levels("p") == frozenset({L.KINDERGARTEN})


def test_malformed_child_birth_date_aborts(store, today):
    store.add_applicant("p")
    store.add_child("p", "good", "2016-02-01")
    store.add_child("p", "bad", "31/12/2015")
    with pytest.raises(MalformedDateError) as exc:
        FactDeriver(store, today).derive_children_levels("p")
    assert exc.value.applicant_id == "bad"


def test_future_birth_date_is_malformed(store, today):
    store.add_applicant("p")
    store.add_child("p", "unborn", "2030-01-01")
    with pytest.raises(MalformedDateError):
        FactDeriver(store, today).derive_children_levels("p")


def test_dangling_child_edge_is_skipped(store, today):
    store.add_applicant("p")
    store.relate("p", "ghost", "child")
    assert FactDeriver(store, today).derive_children_levels("p") == frozenset()


# -------------------------
# FULL DERIVATION
# -------------------------
def test_derive_full_facts(store, today):
    store.add_applicant("p", employment_status="unemployed")
    store.add_applicant("s")
    store.relate("p", "s", "spouse")
    store.add_child("p", "c", "2005-01-01")  # 19 -> higher

    facts = FactDeriver(store, today).derive("p")
    assert facts.marital_status == MaritalStatusEnum.MARRIED
    assert facts.employment_status == EmploymentStatusEnum.UNEMPLOYED
    assert facts.children_education_levels == frozenset({L.HIGHER})


def test_derive_unknown_applicant(store, today):
    with pytest.raises(ApplicantNotFoundError):
        FactDeriver(store, today).derive("nobody")


def test_default_clock_is_today(store):
    store.add_applicant("p")
    store.add_child("p", "c", date.today().isoformat())
    assert FactDeriver(store).derive_children_levels("p") == frozenset({L.KINDERGARTEN})




def test_derive_unknown_employment_status(store, today):
    store.add_applicant("p", employment_status="retired")
    with pytest.raises(MalformedApplicantError) as exc:
        FactDeriver(store, today).derive("p")
    assert exc.value.applicant_id == "p"
