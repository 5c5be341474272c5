# repositories/session_repository.py
from typing import List, Optional

from research_requirements.domain.models import RecruitmentSession, SessionStatus
from research_requirements.infrastructure.db.models import RecruitmentSessionModel
from research_requirements.infrastructure.db.repositories.base import SqlRepository


class SessionRepository(SqlRepository):

    # ——— МАППЕРЫ ——————————————————————————————————————————————
    @staticmethod
    def _to_session_model(s: RecruitmentSession) -> RecruitmentSessionModel:
        return RecruitmentSessionModel(
            id=s.id,
            name=s.name,
            status=s.status.value,
            description=s.description,
            end_date=s.end_date,
        )

    @staticmethod
    def _to_session_domain(m: RecruitmentSessionModel) -> RecruitmentSession:
        return RecruitmentSession(
            id=m.id,
            name=m.name,
            status=SessionStatus(m.status),
            description=m.description,
            end_date=m.end_date,
        )

    # ——— CRUD МЕТОДЫ ——————————————————————————————————————————————

    def add_session(self, session: RecruitmentSession) -> None:
        self._session.merge(self._to_session_model(session))

    def latest_open_session(self) -> Optional[RecruitmentSession]:
        """
        Текущая сессия: из всех OPEN — с самой поздней датой окончания.
        """
        m = (
            self._session.query(RecruitmentSessionModel)
            .filter_by(status=SessionStatus.OPEN.value)
            .order_by(RecruitmentSessionModel.end_date.desc(), RecruitmentSessionModel.id.desc())
            .first()
        )
        return self._to_session_domain(m) if m else None

    def all_closed_sessions(self) -> List[RecruitmentSession]:
        models = (
            self._session.query(RecruitmentSessionModel)
            .filter_by(status=SessionStatus.CLOSED.value)
            .order_by(RecruitmentSessionModel.end_date.asc())
            .all()
        )
        return [self._to_session_domain(m) for m in models]
