# research_requirements/services/requirement_lifecycle.py
from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, List, Optional

from research_requirements.application.ports import (
    DepartmentDirectory, IdentityDirectory, RequirementStore, SessionDirectory,
)
from research_requirements.config.config import settings
from research_requirements.config.logger import logger
from research_requirements.domain.models import (
    Department, FacultyView, RecruitmentSession, Remark, Requirement, RequirementPayload,
    RequirementStatus, User, UserType, VacancyStatus, total_requested,
)
from research_requirements.domain.results import FailureKind, OpResult
from research_requirements.domain.status import forward_status


def _today_in_settings_tz() -> date:
    return datetime.now(settings.timezone).date()


def _to_faculty_view(user: User) -> FacultyView:
    return FacultyView(
        id=user.id,
        name=f"{user.first_name} {user.last_name}",
        email=user.email,
        dept_short_codes=list(user.dept_short_codes),
        erp_id=user.erp_id,
    )


@dataclass
class _Context:
    department: Department
    session: RecruitmentSession


class RequirementLifecycleEngine:
    """
    Движок жизненного цикла заявки кафедры на исследовательские позиции.

    Каждое принятое изменение — новая версия: предыдущая активная версия
    помечается is_archived=True и больше не меняется, новая получает version+1.
    Все отказы возвращаются как OpResult(success=False), исключения бросает
    только инфраструктура (недоступное хранилище и т.п.).

    Собственного изменяемого состояния у движка нет, всё лежит в справочниках.
    """

    def __init__(
            self,
            sessions: SessionDirectory,
            departments: DepartmentDirectory,
            identities: IdentityDirectory,
            requirements: RequirementStore,
            today: Optional[Callable[[], date]] = None,
            faculty_wildcard: Optional[str] = None,
    ):
        self._sessions = sessions
        self._departments = departments
        self._identities = identities
        self._requirements = requirements
        self._today = today or _today_in_settings_tz
        self._wildcard = faculty_wildcard if faculty_wildcard is not None else settings.faculty_wildcard

    # ——— ЧТЕНИЕ ——————————————————————————————————————————————————

    def fetch_current(self, dept_short_code: str) -> OpResult[Requirement]:
        ctx = self._resolve_context(dept_short_code)
        if isinstance(ctx, OpResult):
            return ctx

        active = self._requirements.all_active_for(ctx.session.id, dept_short_code)
        if not active:
            return self._reject(
                "fetch_current", FailureKind.NO_REQUIREMENT_FOUND,
                f"No research requirements found for department {dept_short_code}.",
            )
        current = max(active, key=lambda r: r.version)
        return OpResult.ok(current, "Research requirements fetched successfully.")

    def fetch_history(self, dept_short_code: str) -> OpResult[List[Requirement]]:
        if self._departments.by_short_code(dept_short_code) is None:
            return self._invalid_department("fetch_history", dept_short_code)

        closed = self._sessions.all_closed_sessions()
        if not closed:
            return self._reject(
                "fetch_history", FailureKind.NO_CLOSED_SESSIONS,
                "No closed research recruitment sessions.",
            )

        history = self._requirements.all_for(dept_short_code, [s.id for s in closed])
        if not history:
            return self._reject(
                "fetch_history", FailureKind.NO_HISTORICAL_REQUIREMENTS,
                f"No historical research requirements found for department {dept_short_code}.",
            )
        return OpResult.ok(history, "Historical research requirements fetched successfully.")

    def fetch_faculty(self, dept_short_code: str) -> OpResult[List[FacultyView]]:
        if dept_short_code == self._wildcard:
            faculty = self._identities.all_faculty()
        else:
            if self._departments.by_short_code(dept_short_code) is None:
                return self._invalid_department("fetch_faculty", dept_short_code)
            faculty = self._identities.faculty_in_department(dept_short_code)
        return OpResult.ok([_to_faculty_view(u) for u in faculty], "Faculty fetched successfully.")

    # ——— ЗАПИСЬ ——————————————————————————————————————————————————

    def save(self, payload: RequirementPayload) -> OpResult[Requirement]:
        """
        Черновик: ремарка необязательна (но не больше одной),
        руководители не проверяются, лимит утверждённых мест не проверяется.
        """
        if len(payload.remarks) > 1:
            return self._reject(
                "save", FailureKind.INVALID_REMARK_COUNT,
                f"At most one remark may accompany a save, got {len(payload.remarks)}.",
            )

        ctx = self._resolve_context(payload.dept_short_code)
        if isinstance(ctx, OpResult):
            return ctx

        prior = self._resolve_prior("save", payload, ctx.session)
        if isinstance(prior, OpResult):
            return prior

        saved = self._write_version(payload, ctx.session, prior, VacancyStatus.SAVED, RequirementStatus.SAVED)
        msg = ("Research vacancies updated successfully" if prior is not None
               else "Research vacancies saved successfully")
        return OpResult.ok(saved, msg)

    def submit(self, payload: RequirementPayload) -> OpResult[Requirement]:
        if len(payload.remarks) != 1:
            return self._reject(
                "submit", FailureKind.INVALID_REMARK_COUNT,
                f"Exactly one remark is required to submit, got {len(payload.remarks)}.",
            )

        ctx = self._resolve_context(payload.dept_short_code)
        if isinstance(ctx, OpResult):
            return ctx

        invalid = self._validate_guides(payload)
        if invalid is not None:
            return invalid

        prior = self._resolve_prior("submit", payload, ctx.session)
        if isinstance(prior, OpResult):
            return prior

        # лимит действует только после утверждения и только если цифры утверждены
        if prior is not None and prior.vacancy_status is VacancyStatus.APPROVED and prior.approved_vacancy:
            requested = total_requested(payload.requested_vacancy)
            approved = prior.approved_total()
            if requested > approved:
                return self._reject(
                    "submit", FailureKind.CAPACITY_EXCEEDED,
                    f"Requested vacancies ({requested}) exceed approved vacancies ({approved}).",
                    requested=requested, approved=approved,
                )

        saved = self._write_version(
            payload, ctx.session, prior, VacancyStatus.SUBMITTED, RequirementStatus.SUBMITTED,
        )
        return OpResult.ok(saved, "Research vacancies submitted successfully")

    # ——— ВНУТРЕННЕЕ ——————————————————————————————————————————————

    def _resolve_context(self, dept_short_code: str) -> _Context | OpResult:
        department = self._departments.by_short_code(dept_short_code)
        if department is None:
            return self._invalid_department("resolve", dept_short_code)

        session = self._sessions.latest_open_session()
        if session is None:
            return self._reject(
                "resolve", FailureKind.NO_ACTIVE_SESSION,
                "No active session. Submission/update allowed only in OPEN session.",
            )
        return _Context(department=department, session=session)

    def _resolve_prior(
            self, op: str, payload: RequirementPayload, session: RecruitmentSession,
    ) -> Optional[Requirement] | OpResult:
        """
        Предыдущая версия: по requirement_id, а если id нет или он не найден —
        активная версия (сессия, кафедра). None только для первой версии линии.
        """
        existing = self._requirements.by_id(payload.requirement_id) if payload.requirement_id else None
        if existing is None:
            if payload.requirement_id:
                logger.debug("%s: заявка %s не найдена — берём активную версию", op, payload.requirement_id)
            active = self._requirements.all_active_for(session.id, payload.dept_short_code)
            return max(active, key=lambda r: r.version) if active else None

        if existing.dept_short_code != payload.dept_short_code or existing.session_id != session.id:
            return self._reject(
                op, FailureKind.OWNERSHIP_MISMATCH,
                f"Requirement {existing.id} does not belong to department "
                f"{payload.dept_short_code} in the current session.",
            )
        if existing.is_archived:
            return self._reject(
                op, FailureKind.ARCHIVED_REQUIREMENT,
                f"Requirement {existing.id} (version {existing.version}) is archived and cannot be updated.",
            )
        return existing

    def _validate_guides(self, payload: RequirementPayload) -> Optional[OpResult]:
        faculty_ids = {
            u.id for u in self._identities.faculty_in_department(payload.dept_short_code)
            if u.user_type is UserType.FACULTY
        }
        for area in payload.requested_vacancy:
            for rf in area.research_fields:
                invalid = [g for g in rf.possible_guides if g not in faculty_ids]
                if invalid:
                    return self._reject(
                        "submit", FailureKind.INVALID_GUIDE,
                        f"Invalid guide(s) {', '.join(invalid)} for research field "
                        f"'{rf.research_field}' (sub-area '{area.sub_area}'): "
                        f"not faculty of department {payload.dept_short_code}.",
                        field=rf.research_field,
                    )
        return None

    def _write_version(
            self,
            payload: RequirementPayload,
            session: RecruitmentSession,
            prior: Optional[Requirement],
            target: VacancyStatus,
            requirement_status: RequirementStatus,
    ) -> Requirement:
        today = self._today()

        # 1) архивируем всё активное по (сессия, кафедра) — включая prior
        archived_ids = []
        for active in self._requirements.all_active_for(session.id, payload.dept_short_code):
            self._requirements.save(replace(active, is_archived=True))
            archived_ids.append(active.id)

        # 2) новая версия; дата ремарки клиента отбрасывается
        stamped = [Remark(who=r.who, what=r.what, date=today) for r in payload.remarks]
        if prior is not None:
            new = Requirement(
                id=str(uuid.uuid4()),
                session_id=prior.session_id,
                dept_short_code=prior.dept_short_code,
                requested_vacancy=copy.deepcopy(payload.requested_vacancy),
                approved_vacancy=copy.deepcopy(prior.approved_vacancy),
                vacancy_status=forward_status(prior.vacancy_status, target),
                requirement_status=requirement_status,
                remarks=copy.deepcopy(prior.remarks) + stamped,
                version=prior.version + 1,
                is_archived=False,
                submitted_on=prior.submitted_on,
                latest_updated_on=today,
            )
        else:
            new = Requirement(
                id=str(uuid.uuid4()),
                session_id=session.id,
                dept_short_code=payload.dept_short_code,
                requested_vacancy=copy.deepcopy(payload.requested_vacancy),
                approved_vacancy=[],
                vacancy_status=forward_status(VacancyStatus.SAVED, target),
                requirement_status=requirement_status,
                remarks=stamped,
                version=1,
                is_archived=False,
                submitted_on=today,
                latest_updated_on=today,
            )

        saved = self._requirements.save(new)
        logger.info(
            "Кафедра %s, сессия %s: версия %d (%s/%s) записана, в архив: %s",
            saved.dept_short_code, saved.session_id, saved.version,
            saved.vacancy_status.value, saved.requirement_status.value,
            ", ".join(archived_ids) or "—",
        )
        return saved

    def _invalid_department(self, op: str, code: str) -> OpResult:
        return self._reject(op, FailureKind.INVALID_DEPARTMENT, f"Invalid department short code: {code}")

    @staticmethod
    def _reject(op: str, kind: FailureKind, message: str, **details) -> OpResult:
        logger.warning("✕ %s отклонён [%s]: %s", op, kind.value, message)
        return OpResult.fail(kind, message, **details)
