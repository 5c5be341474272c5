from research_requirements.application.use_cases.write_requirement import WriteRequirementUseCase
from research_requirements.domain.models import Requirement, RequirementPayload
from research_requirements.domain.results import OpResult


class SaveRequirementUseCase(WriteRequirementUseCase):
    """
    Сохранение черновика: ремарка необязательна, руководители и лимит мест не проверяются.
    """

    operation = "save"

    def _run(self, payload: RequirementPayload) -> OpResult[Requirement]:
        return self._engine.save(payload)
