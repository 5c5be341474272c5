from research_requirements.config.logger import logger
from research_requirements.domain.models import Requirement
from research_requirements.domain.results import OpResult
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine


class FetchCurrentRequirementUseCase:
    """
    Активная (последняя неархивная) версия заявки кафедры в текущей OPEN-сессии.
    """

    def __init__(self, engine: RequirementLifecycleEngine):
        self._engine = engine

    def execute(self, dept_short_code: str) -> OpResult[Requirement]:
        code = dept_short_code.strip()
        result = self._engine.fetch_current(code)
        if result.success:
            logger.info("Текущая заявка %s: версия %d", code, result.data.version)
        return result
