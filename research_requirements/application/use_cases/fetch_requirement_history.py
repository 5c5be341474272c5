from typing import List

from research_requirements.config.logger import logger
from research_requirements.domain.models import Requirement
from research_requirements.domain.results import OpResult
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine


class FetchRequirementHistoryUseCase:
    """
    Все версии заявок кафедры по закрытым (CLOSED) сессиям.
    """

    def __init__(self, engine: RequirementLifecycleEngine):
        self._engine = engine

    def execute(self, dept_short_code: str) -> OpResult[List[Requirement]]:
        code = dept_short_code.strip()
        result = self._engine.fetch_history(code)
        if result.success:
            logger.info("История заявок %s: %d версий", code, len(result.data))
        return result
