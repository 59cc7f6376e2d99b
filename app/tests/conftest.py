# app/tests/conftest.py
import os

# Must be set before app.settings / app.db are imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.db import Base, engine, SessionLocal
from app.engine import ApplicantRecord, CriteriaRule, RelationEdge, SchemeEntry
from app.main import app

TODAY = date(2024, 6, 15)


class InMemoryRecordStore:
    """Dict-backed RecordStore for engine tests."""

    def __init__(self):
        self.applicants = {}
        self.relations = []  # (id1, id2, kind)
        self.catalog = []

    def add_applicant(self, applicant_id, employment_status="employed", date_of_birth="1980-01-01", name=None, sex="female"):
        self.applicants[applicant_id] = ApplicantRecord(
            id=applicant_id,
            name=name or applicant_id,
            employment_status=employment_status,
            sex=sex,
            date_of_birth=date_of_birth,
        )
        return applicant_id

    def relate(self, id1, id2, kind):
        self.relations.append((id1, id2, kind))

    def add_child(self, parent_id, child_id, date_of_birth):
        self.add_applicant(child_id, employment_status="unemployed", date_of_birth=date_of_birth)
        self.relate(parent_id, child_id, "child")

    def add_scheme(self, scheme_id, *criteria, name=None):
        entry = SchemeEntry(id=scheme_id, name=name or scheme_id, criteria=tuple(criteria))
        self.catalog.append(entry)
        return entry

    def get_applicant(self, applicant_id):
        return self.applicants.get(applicant_id)

    def get_relations_from(self, applicant_id, kind=None):
        return [
            RelationEdge(target_id=id2, kind=k)
            for id1, id2, k in self.relations
            if id1 == applicant_id and (kind is None or k == kind)
        ]

    def get_scheme_catalog(self):
        return list(self.catalog)


def rule(marital_status=None, employment_status=None, education_levels=None, criteria_id=None):
    return CriteriaRule.parse(criteria_id, marital_status, employment_status, education_levels)


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def today():
    return lambda: TODAY


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
