from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from research_requirements.domain.models import (
    Department, RecruitmentSession, Remark, RequirementPayload, ResearchField, SessionStatus, SubArea, User,
    UserType,
)
from research_requirements.infrastructure.db.models import Base
from research_requirements.infrastructure.db.repositories.department_repository import DepartmentRepository
from research_requirements.infrastructure.db.repositories.requirement_repository import RequirementRepository
from research_requirements.infrastructure.db.repositories.session_repository import SessionRepository
from research_requirements.infrastructure.db.repositories.user_repository import UserRepository
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine

TODAY = date(2025, 3, 5)


def _user(uid: str, user_type: UserType, *depts: str) -> User:
    return User(
        id=uid,
        username=uid,
        first_name=uid.upper(),
        last_name="Tester",
        email=f"{uid}@iitpkd.ac.in",
        user_type=user_type,
        erp_id=f"ERP-{uid}",
        dept_short_codes=list(depts),
    )


def seed_directory(session) -> None:
    sessions = SessionRepository(session)
    sessions.add_session(RecruitmentSession(
        id="S0", name="2024 Jan", status=SessionStatus.CLOSED, description="closed", end_date=date(2024, 6, 30),
    ))
    sessions.add_session(RecruitmentSession(
        id="S-old", name="2024 Jul", status=SessionStatus.OPEN, description="stale open",
        end_date=date(2024, 12, 31),
    ))
    sessions.add_session(RecruitmentSession(
        id="S1", name="2025 Jan", status=SessionStatus.OPEN, description="current", end_date=date(2025, 6, 30),
    ))

    departments = DepartmentRepository(session)
    departments.add_department(Department(id="D-CSE", short_code="CSE", name="Computer Science and Engineering"))
    departments.add_department(Department(id="D-EE", short_code="EE", name="Electrical Engineering"))
    session.flush()

    users = UserRepository(session)
    users.add_user(_user("f1", UserType.FACULTY, "CSE"))
    users.add_user(_user("f2", UserType.FACULTY, "CSE", "EE"))
    users.add_user(_user("f3", UserType.FACULTY, "EE"))
    users.add_user(_user("staff1", UserType.STAFF, "CSE"))
    users.add_user(_user("stud1", UserType.STUDENT, "CSE"))
    session.commit()


def make_payload(dept="CSE", requirement_id=None, remarks=1, guides=("f1",), vacancies=(2,)):
    return RequirementPayload(
        dept_short_code=dept,
        requirement_id=requirement_id,
        requested_vacancy=[
            SubArea(
                sub_area="Systems",
                research_fields=[
                    ResearchField(research_field=f"Field {i}", vacancy=v, possible_guides=list(guides))
                    for i, v in enumerate(vacancies, start=1)
                ],
            )
        ],
        remarks=[Remark(who="HoD", what=f"note {i}", date=date(1999, 1, 1)) for i in range(remarks)],
    )


@pytest.fixture
def db_session():
    engine = create_engine("sqlite://", future=True)
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, future=True)()
    seed_directory(session)
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def requirements(db_session) -> RequirementRepository:
    return RequirementRepository(db_session)


@pytest.fixture
def lifecycle(db_session, requirements) -> RequirementLifecycleEngine:
    return RequirementLifecycleEngine(
        sessions=SessionRepository(db_session),
        departments=DepartmentRepository(db_session),
        identities=UserRepository(db_session),
        requirements=requirements,
        today=lambda: TODAY,
        faculty_wildcard="*",
    )
