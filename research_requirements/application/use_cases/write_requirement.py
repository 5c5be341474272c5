from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from research_requirements.config.logger import logger
from research_requirements.domain.models import Requirement, RequirementPayload
from research_requirements.domain.results import OpResult
from research_requirements.infrastructure.db.repositories.requirement_repository import RequirementRepository
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine


class WriteRequirementUseCase:
    """
    Транзакция записи новой версии заявки.

    Архивирование старой версии и запись новой — одна транзакция:
    коммит только при успешном результате, иначе rollback.
    Ошибки БД (в т.ч. IntegrityError от уникального индекса активной версии
    при гонке двух запросов) логируются и пробрасываются как есть.
    """

    operation = "write"

    def __init__(self, engine: RequirementLifecycleEngine, repo: RequirementRepository):
        self._engine = engine
        self._repo = repo

    def _run(self, payload: RequirementPayload) -> OpResult[Requirement]:
        raise NotImplementedError

    def execute(self, payload: RequirementPayload) -> OpResult[Requirement]:
        logger.info("→ %s: кафедра %s, id=%s", self.operation, payload.dept_short_code,
                    payload.requirement_id or "—")
        try:
            result = self._run(payload)
            if result.success:
                self._repo.commit()
            else:
                self._repo.rollback()
            return result
        except SQLAlchemyError as db_err:
            logger.exception("Ошибка транзакции, выполняем rollback: %s", db_err)
            self._repo.rollback()
            raise
