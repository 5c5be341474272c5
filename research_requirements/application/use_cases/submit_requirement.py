from research_requirements.application.use_cases.write_requirement import WriteRequirementUseCase
from research_requirements.domain.models import Requirement, RequirementPayload
from research_requirements.domain.results import OpResult


class SubmitRequirementUseCase(WriteRequirementUseCase):
    """
    Подача заявки: ровно одна ремарка, проверка руководителей и лимита утверждённых мест.
    """

    operation = "submit"

    def _run(self, payload: RequirementPayload) -> OpResult[Requirement]:
        return self._engine.submit(payload)
