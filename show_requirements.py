#!/usr/bin/env python3
import sys

from research_requirements.application.use_cases.fetch_current_requirement import FetchCurrentRequirementUseCase
from research_requirements.application.use_cases.fetch_faculty import FetchFacultyUseCase
from research_requirements.application.use_cases.fetch_requirement_history import FetchRequirementHistoryUseCase
from research_requirements.config.logger import logger
from research_requirements.domain.models import Requirement, format_ui_date
from research_requirements.infrastructure.db.database import build_lifecycle, make_session_factory


def _print_requirement(r: Requirement) -> None:
    print(
        f"  v{r.version} [{r.vacancy_status.value}/{r.requirement_status.value}]"
        f"{' (архив)' if r.is_archived else ''}"
        f"  сессия {r.session_id}, обновлено {format_ui_date(r.latest_updated_on)}"
    )
    for area in r.requested_vacancy:
        print(f"    • {area.sub_area}")
        for f in area.research_fields:
            guides = ", ".join(f.possible_guides) or "—"
            print(f"        ↳ {f.research_field}: {f.vacancy} (руководители: {guides})")
    if r.approved_vacancy:
        approved = "; ".join(f"{s.category_id}={s.vacancy}" for s in r.approved_vacancy)
        print(f"    утверждено: {approved} (всего {r.approved_total()})")
    for rm in r.remarks:
        print(f"    ✎ {rm.who}: {rm.what} ({format_ui_date(rm.date) if rm.date else '—'})")


def main():
    if len(sys.argv) != 2:
        print("usage: show_requirements.py <DEPT_SHORT_CODE>", file=sys.stderr)
        sys.exit(2)
    dept = sys.argv[1]

    Session = make_session_factory()
    session = Session()
    try:
        engine, _ = build_lifecycle(session)

        current = FetchCurrentRequirementUseCase(engine).execute(dept)
        print(f"📝 Текущая заявка {dept}:")
        if current.success:
            _print_requirement(current.data)
        else:
            print(f"  {current.message}")

        history = FetchRequirementHistoryUseCase(engine).execute(dept)
        print(f"📚 История {dept}:")
        if history.success:
            for r in history.data:
                _print_requirement(r)
        else:
            print(f"  {history.message}")

        faculty = FetchFacultyUseCase(engine).execute(dept)
        print(f"👩‍🏫 Преподаватели {dept}:")
        if faculty.success:
            for fv in faculty.data:
                print(f"  {fv.id}  {fv.name} <{fv.email}>")
        else:
            print(f"  {faculty.message}")
    except Exception:
        logger.exception("Ошибка при чтении заявок")
        sys.exit(1)
    finally:
        session.close()


if __name__ == "__main__":
    main()
