# repositories/user_repository.py
from typing import List

from research_requirements.domain.models import User, UserType
from research_requirements.infrastructure.db.models import UserDepartmentModel, UserModel
from research_requirements.infrastructure.db.repositories.base import SqlRepository


class UserRepository(SqlRepository):

    # ——— МАППЕРЫ ——————————————————————————————————————————————
    @staticmethod
    def _to_user_model(u: User) -> UserModel:
        return UserModel(
            id=u.id,
            username=u.username,
            first_name=u.first_name,
            last_name=u.last_name,
            email=u.email,
            user_type=u.user_type.value,
            erp_id=u.erp_id,
            memberships=[
                UserDepartmentModel(user_id=u.id, dept_short_code=code)
                for code in dict.fromkeys(u.dept_short_codes)
            ],
        )

    @staticmethod
    def _to_user_domain(m: UserModel) -> User:
        return User(
            id=m.id,
            username=m.username,
            first_name=m.first_name,
            last_name=m.last_name,
            email=m.email,
            user_type=UserType(m.user_type),
            erp_id=m.erp_id,
            dept_short_codes=sorted(ms.dept_short_code for ms in m.memberships),
        )

    # ——— CRUD МЕТОДЫ ——————————————————————————————————————————————

    def add_user(self, user: User) -> None:
        # кафедры должны уже существовать (add_department)
        self._session.merge(self._to_user_model(user))

    def all_faculty(self) -> List[User]:
        models = (
            self._session.query(UserModel)
            .filter_by(user_type=UserType.FACULTY.value)
            .order_by(UserModel.last_name, UserModel.first_name)
            .all()
        )
        return [self._to_user_domain(m) for m in models]

    def faculty_in_department(self, code: str) -> List[User]:
        models = (
            self._session.query(UserModel)
            .join(UserDepartmentModel, UserDepartmentModel.user_id == UserModel.id)
            .filter(
                UserModel.user_type == UserType.FACULTY.value,
                UserDepartmentModel.dept_short_code == code,
            )
            .order_by(UserModel.last_name, UserModel.first_name)
            .all()
        )
        return [self._to_user_domain(m) for m in models]
