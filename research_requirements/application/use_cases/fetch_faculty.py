from typing import List

from research_requirements.domain.models import FacultyView
from research_requirements.domain.results import OpResult
from research_requirements.services.requirement_lifecycle import RequirementLifecycleEngine


class FetchFacultyUseCase:
    def __init__(self, engine: RequirementLifecycleEngine):
        self._engine = engine

    def execute(self, dept_short_code: str) -> OpResult[List[FacultyView]]:
        return self._engine.fetch_faculty(dept_short_code.strip())
