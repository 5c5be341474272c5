"""
Контракты внешних справочников, которые читает движок заявок.
Реализации на SQLAlchemy лежат в infrastructure/db/repositories.
"""
from typing import Iterable, List, Optional, Protocol

from research_requirements.domain.models import Department, RecruitmentSession, Requirement, User


class SessionDirectory(Protocol):
    def latest_open_session(self) -> Optional[RecruitmentSession]: ...

    def all_closed_sessions(self) -> List[RecruitmentSession]: ...


class DepartmentDirectory(Protocol):
    def by_short_code(self, code: str) -> Optional[Department]: ...


class IdentityDirectory(Protocol):
    def faculty_in_department(self, code: str) -> List[User]: ...

    def all_faculty(self) -> List[User]: ...


class RequirementStore(Protocol):
    def by_id(self, requirement_id: str) -> Optional[Requirement]: ...

    def all_active_for(self, session_id: str, dept_short_code: str) -> List[Requirement]: ...

    def all_for(self, dept_short_code: str, session_ids: Iterable[str]) -> List[Requirement]: ...

    def save(self, requirement: Requirement) -> Requirement: ...
