# repositories/department_repository.py
from typing import Optional

from research_requirements.domain.models import Department
from research_requirements.infrastructure.db.models import DepartmentModel
from research_requirements.infrastructure.db.repositories.base import SqlRepository


class DepartmentRepository(SqlRepository):

    @staticmethod
    def _to_department_model(dept: Department) -> DepartmentModel:
        return DepartmentModel(id=dept.id, short_code=dept.short_code, name=dept.name)

    @staticmethod
    def _to_department_domain(m: DepartmentModel) -> Department:
        return Department(id=m.id, short_code=m.short_code, name=m.name)

    def add_department(self, dept: Department) -> None:
        self._session.merge(self._to_department_model(dept))

    def by_short_code(self, code: str) -> Optional[Department]:
        m = (
            self._session.query(DepartmentModel)
            .filter_by(short_code=code)
            .one_or_none()
        )
        return self._to_department_domain(m) if m else None
