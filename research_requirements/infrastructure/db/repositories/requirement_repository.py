# repositories/requirement_repository.py
from datetime import date
from typing import Iterable, List, Optional

from research_requirements.domain.models import (
    ApprovedSeat, Remark, Requirement, RequirementStatus, ResearchField, SubArea, VacancyStatus,
)
from research_requirements.infrastructure.db.models import ResearchRequirementModel
from research_requirements.infrastructure.db.repositories.base import SqlRepository


class RequirementRepository(SqlRepository):
    """
    Хранилище версий заявок. Версии не удаляются: старые только архивируются.
    """

    # ——— JSON-ДОКУМЕНТЫ ——————————————————————————————————————————
    @staticmethod
    def _sub_areas_to_json(areas: List[SubArea]) -> list:
        return [
            {
                "subArea": a.sub_area,
                "researchFields": [
                    {
                        "researchField": f.research_field,
                        "vacancy": f.vacancy,
                        "possibleGuides": list(f.possible_guides),
                    }
                    for f in a.research_fields
                ],
            }
            for a in areas
        ]

    @staticmethod
    def _sub_areas_from_json(raw: list) -> List[SubArea]:
        return [
            SubArea(
                sub_area=a["subArea"],
                research_fields=[
                    ResearchField(
                        research_field=f["researchField"],
                        vacancy=int(f["vacancy"]),
                        possible_guides=list(f.get("possibleGuides", [])),
                    )
                    for f in a.get("researchFields", [])
                ],
            )
            for a in raw or []
        ]

    @staticmethod
    def _remarks_to_json(remarks: List[Remark]) -> list:
        return [
            {"who": r.who, "what": r.what, "date": r.date.isoformat() if r.date else None}
            for r in remarks
        ]

    @staticmethod
    def _remarks_from_json(raw: list) -> List[Remark]:
        return [
            Remark(
                who=r["who"],
                what=r["what"],
                date=date.fromisoformat(r["date"]) if r.get("date") else None,
            )
            for r in raw or []
        ]

    # ——— МАППЕРЫ ——————————————————————————————————————————————
    def _to_requirement_model(self, r: Requirement) -> ResearchRequirementModel:
        return ResearchRequirementModel(
            id=r.id,
            session_id=r.session_id,
            dept_short_code=r.dept_short_code,
            requested_vacancy=self._sub_areas_to_json(r.requested_vacancy),
            approved_vacancy=[{"categoryID": s.category_id, "vacancy": s.vacancy} for s in r.approved_vacancy],
            vacancy_status=r.vacancy_status.value,
            requirement_status=r.requirement_status.value,
            remarks=self._remarks_to_json(r.remarks),
            version=r.version,
            is_archived=r.is_archived,
            submitted_on=r.submitted_on,
            latest_updated_on=r.latest_updated_on,
        )

    def _to_requirement_domain(self, m: ResearchRequirementModel) -> Requirement:
        return Requirement(
            id=m.id,
            session_id=m.session_id,
            dept_short_code=m.dept_short_code,
            requested_vacancy=self._sub_areas_from_json(m.requested_vacancy),
            approved_vacancy=[
                ApprovedSeat(category_id=s["categoryID"], vacancy=int(s["vacancy"]))
                for s in m.approved_vacancy or []
            ],
            vacancy_status=VacancyStatus(m.vacancy_status),
            requirement_status=RequirementStatus(m.requirement_status),
            remarks=self._remarks_from_json(m.remarks),
            version=m.version,
            is_archived=m.is_archived,
            submitted_on=m.submitted_on,
            latest_updated_on=m.latest_updated_on,
        )

    # ——— CRUD МЕТОДЫ ——————————————————————————————————————————————

    def by_id(self, requirement_id: str) -> Optional[Requirement]:
        m = self._session.get(ResearchRequirementModel, requirement_id)
        return self._to_requirement_domain(m) if m else None

    def all_active_for(self, session_id: str, dept_short_code: str) -> List[Requirement]:
        models = (
            self._session.query(ResearchRequirementModel)
            .filter_by(session_id=session_id, dept_short_code=dept_short_code, is_archived=False)
            .order_by(ResearchRequirementModel.version.asc())
            .all()
        )
        return [self._to_requirement_domain(m) for m in models]

    def all_for(self, dept_short_code: str, session_ids: Iterable[str]) -> List[Requirement]:
        """
        Все версии (включая архивные) кафедры в заданных сессиях.
        """
        ids = list(session_ids)
        if not ids:
            return []
        models = (
            self._session.query(ResearchRequirementModel)
            .filter(
                ResearchRequirementModel.dept_short_code == dept_short_code,
                ResearchRequirementModel.session_id.in_(ids),
            )
            .order_by(ResearchRequirementModel.session_id, ResearchRequirementModel.version)
            .all()
        )
        return [self._to_requirement_domain(m) for m in models]

    def save(self, requirement: Requirement) -> Requirement:
        """
        Upsert по id. flush сразу: архивирование старой версии должно
        попасть в БД раньше вставки новой (частичный уникальный индекс).
        """
        orm = self._session.merge(self._to_requirement_model(requirement))
        self._session.flush()
        return self._to_requirement_domain(orm)
