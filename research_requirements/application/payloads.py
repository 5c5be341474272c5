"""
Разбор тела запроса (JSON) в RequirementPayload.

Ожидаемый формат:
    {
      "deptShortCode": "CSE",
      "requirementId": "...",             # или "id"; необязательно
      "requestedVacancy": [
        {"subArea": "...", "researchFields": [
            {"researchField": "...", "vacancy": 2, "possibleGuides": ["u1", "u2"]}
        ]}
      ],
      "remarks": [{"who": "...", "what": "...", "date": "..."}]
    }

Дата ремарки и approvedVacancy из запроса игнорируются.
"""
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from research_requirements.domain.models import Remark, RequirementPayload, ResearchField, SubArea


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")


class ResearchFieldIn(_Body):
    research_field: str = Field("", alias="researchField")
    vacancy: int = Field(0, ge=0)
    possible_guides: List[str] = Field(default_factory=list, alias="possibleGuides")

    @field_validator("vacancy", mode="before")
    @classmethod
    def _no_bool(cls, v: Any) -> Any:
        # True/False не считаем числом мест
        if isinstance(v, bool):
            raise ValueError("must be an integer, not a boolean")
        return v


class SubAreaIn(_Body):
    sub_area: str = Field("", alias="subArea")
    research_fields: List[ResearchFieldIn] = Field(default_factory=list, alias="researchFields")


class RemarkIn(_Body):
    who: str = ""
    what: str = ""


class RequirementRequest(_Body):
    dept_short_code: str = Field(alias="deptShortCode", min_length=1)
    requirement_id: Optional[str] = Field(None, alias="requirementId")
    id: Optional[str] = None
    requested_vacancy: List[SubAreaIn] = Field(default_factory=list, alias="requestedVacancy")
    remarks: List[RemarkIn] = Field(default_factory=list)

    def to_payload(self) -> RequirementPayload:
        return RequirementPayload(
            dept_short_code=self.dept_short_code,
            requested_vacancy=[
                SubArea(
                    sub_area=a.sub_area,
                    research_fields=[
                        ResearchField(
                            research_field=f.research_field,
                            vacancy=f.vacancy,
                            possible_guides=list(f.possible_guides),
                        )
                        for f in a.research_fields
                    ],
                )
                for a in self.requested_vacancy
            ],
            requirement_id=self.requirement_id or self.id or None,
            remarks=[Remark(who=r.who, what=r.what) for r in self.remarks],
        )


def payload_from_dict(body: Mapping[str, Any]) -> RequirementPayload:
    try:
        request = RequirementRequest.model_validate(body)
    except ValidationError as err:
        details = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in err.errors()
        )
        raise ValueError(f"invalid requirement payload: {details}") from None
    return request.to_payload()
