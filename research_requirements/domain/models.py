import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_ui_date(d: datetime.date) -> str:
    """'05-Mar-2025' — формат дат во всех пользовательских выводах."""
    return f"{d.day:02d}-{_MONTH_NAMES[d.month - 1]}-{d.year:04d}"


class SessionStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    APPROVED = "APPROVED"


class VacancyStatus(str, Enum):
    """
    Прогресс согласования цифр заявки.
    Порядок строго SAVED < SUBMITTED < APPROVED, назад не откатывается.
    """
    SAVED = "SAVED"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"


class RequirementStatus(str, Enum):
    SAVED = "SAVED"
    SUBMITTED = "SUBMITTED"


class UserType(str, Enum):
    STUDENT = "STUDENT"
    RESEARCHSCHOLAR = "RESEARCHSCHOLAR"
    FACULTY = "FACULTY"
    STAFF = "STAFF"
    SYSTEMCREATED = "SYSTEMCREATED"
    EXTERNAL = "EXTERNAL"


@dataclass
class RecruitmentSession:
    """
    Набор (recruitment session). Создаётся и администрируется снаружи,
    движок его только читает.
    """
    id: str
    name: str
    status: SessionStatus
    description: str
    end_date: datetime.date


@dataclass
class Department:
    id: str
    short_code: str  # 'CSE'
    name: str  # 'Computer Science and Engineering'


@dataclass
class User:
    """
    Пользователь ERP. Нас интересуют только FACULTY и их кафедры.
    """
    id: str
    username: str
    first_name: str
    last_name: str
    email: str
    user_type: UserType
    erp_id: str
    dept_short_codes: List[str] = field(default_factory=list)


@dataclass
class FacultyView:
    """
    Сокращённое представление преподавателя для ответа API.
    """
    id: str
    name: str  # first_name + ' ' + last_name
    email: str
    dept_short_codes: List[str]
    erp_id: str


@dataclass
class ResearchField:
    research_field: str
    vacancy: int
    possible_guides: List[str] = field(default_factory=list)  # FK → User.id


@dataclass
class SubArea:
    sub_area: str
    research_fields: List[ResearchField] = field(default_factory=list)


@dataclass
class ApprovedSeat:
    """
    Утверждённое число мест по категории. Заполняется только утверждающей стороной.
    """
    category_id: str
    vacancy: int


@dataclass
class Remark:
    who: str
    what: str
    date: Optional[datetime.date] = None  # движок всегда ставит текущую дату


@dataclass
class Requirement:
    """
    Одна версия заявки кафедры на набор.
    Линия версий определяется парой (session_id, dept_short_code);
    активна ровно одна неархивная версия.
    """
    id: str
    session_id: str  # FK → RecruitmentSession.id
    dept_short_code: str  # FK → Department.short_code
    requested_vacancy: List[SubArea]
    approved_vacancy: List[ApprovedSeat]
    vacancy_status: VacancyStatus
    requirement_status: RequirementStatus
    remarks: List[Remark]
    version: int
    is_archived: bool
    submitted_on: datetime.date  # дата создания линии, копируется вперёд
    latest_updated_on: datetime.date  # дата записи этой версии

    def requested_total(self) -> int:
        return total_requested(self.requested_vacancy)

    def approved_total(self) -> int:
        return sum(seat.vacancy for seat in self.approved_vacancy)


@dataclass
class RequirementPayload:
    """
    Входной запрос на save/submit.
    approved_vacancy здесь нет намеренно: запрос не может его менять.
    """
    dept_short_code: str
    requested_vacancy: List[SubArea] = field(default_factory=list)
    requirement_id: Optional[str] = None
    remarks: List[Remark] = field(default_factory=list)


def total_requested(sub_areas: List[SubArea]) -> int:
    return sum(f.vacancy for area in sub_areas for f in area.research_fields)
