# app/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from . import models
from .logging_config import log_event

JAMES = "01913b7a-4493-74b2-93f8-e684c4ca935c"
MARY = "01913b80-2c04-7f9d-86a4-497ef68cb3a0"
GWEN = "01913b88-1d4d-7152-a7ce-75796a2e8ecf"
JAYDEN = "01913b88-65c6-7255-820f-9c4dd1e5ce79"

RETRENCHMENT = "01913b89-9a43-7163-8757-01cc254783f3"
RETRENCHMENT_FAMILIES = "01913b89-befc-7ae3-bb37-3079aa7f1be0"
SKILLSFUTURE = "01913b8b-9b12-7d2c-a1fa-ea613b802ebc"


def seed_demo_data(db: Session) -> bool:
    """Insert the demo household and schemes. No-op once any applicant exists."""
    if db.query(models.Applicant).first():
        log_event("SEED_SKIPPED", "database already populated")
        return False

    db.add_all(
        [
            models.Applicant(id=JAMES, name="James", employment_status=models.EmploymentStatusEnum.UNEMPLOYED,
                             sex="male", date_of_birth="1990-07-01"),
            models.Applicant(id=MARY, name="Mary", employment_status=models.EmploymentStatusEnum.UNEMPLOYED,
                             sex="female", date_of_birth="1984-10-06"),
            models.Applicant(id=GWEN, name="Gwen", employment_status=models.EmploymentStatusEnum.UNEMPLOYED,
                             sex="female", date_of_birth="2016-02-01"),
            models.Applicant(id=JAYDEN, name="Jayden", employment_status=models.EmploymentStatusEnum.UNEMPLOYED,
                             sex="male", date_of_birth="2018-03-15"),
            models.Relation(id1=MARY, id2=GWEN, relation=models.RelationKindEnum.CHILD.value),
            models.Relation(id1=MARY, id2=JAYDEN, relation=models.RelationKindEnum.CHILD.value),
        ]
    )

    retrenchment = models.Scheme(id=RETRENCHMENT, name="Retrenchment Assistance Scheme")
    retrenchment.criteria.append(models.Criteria(id=RETRENCHMENT, employment_status="unemployed"))
    retrenchment.benefits.append(models.Benefit(id=SKILLSFUTURE, name="SkillsFuture Credits", amount=Decimal("500.00")))

    families = models.Scheme(id=RETRENCHMENT_FAMILIES, name="Retrenchment Assistance Scheme (families)")
    families.criteria.append(
        models.Criteria(id=RETRENCHMENT_FAMILIES, employment_status="unemployed", education_levels=["primary"])
    )

    db.add_all([retrenchment, families])
    db.commit()

    log_event("SEED_DONE", "seeded demo applicants and schemes")
    return True
