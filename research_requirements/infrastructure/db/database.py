# research_requirements/infrastructure/db/database.py
from typing import Optional, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from research_requirements.config.config import settings
from research_requirements.infrastructure.db.models import Base
from research_requirements.infrastructure.db.repositories.department_repository import DepartmentRepository
from research_requirements.infrastructure.db.repositories.requirement_repository import RequirementRepository
from research_requirements.infrastructure.db.repositories.session_repository import SessionRepository
from research_requirements.infrastructure.db.repositories.user_repository import UserRepository
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine


def make_session_factory(url: Optional[str] = None, echo: Optional[bool] = None) -> sessionmaker:
    engine = create_engine(
        url or settings.database_url,
        echo=settings.db_echo if echo is None else echo,
        future=True,
    )
    Base.metadata.create_all(engine)  # just in case; схема в проде — через alembic
    return sessionmaker(bind=engine, future=True)


def build_lifecycle(session: Session) -> Tuple[RequirementLifecycleEngine, RequirementRepository]:
    """
    Движок поверх репозиториев одной SQLAlchemy-сессии.
    Репозиторий заявок возвращаем отдельно — через него use case коммитит/откатывает.
    """
    requirements = RequirementRepository(session)
    engine = RequirementLifecycleEngine(
        sessions=SessionRepository(session),
        departments=DepartmentRepository(session),
        identities=UserRepository(session),
        requirements=requirements,
    )
    return engine, requirements
