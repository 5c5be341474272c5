#!/usr/bin/env python3
"""
Импорт справочников (сессии, кафедры, пользователи) из JSON:

    {
      "sessions":    [{"id", "name", "status", "description", "endDate": "2025-06-30"}],
      "departments": [{"id", "deptShortCode", "deptName"}],
      "users":       [{"id", "username", "firstname", "lastname", "email",
                       "userType", "erpID", "deptShortCodes": ["CSE"]}]
    }
"""
import json
import sys
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from research_requirements.config.logger import logger
from research_requirements.domain.models import (
    Department, RecruitmentSession, SessionStatus, User, UserType,
)
from research_requirements.infrastructure.db.database import make_session_factory
from research_requirements.infrastructure.db.repositories.department_repository import DepartmentRepository
from research_requirements.infrastructure.db.repositories.session_repository import SessionRepository
from research_requirements.infrastructure.db.repositories.user_repository import UserRepository


def main():
    if len(sys.argv) != 2:
        print("usage: seed_directory.py <directory.json>", file=sys.stderr)
        sys.exit(2)

    # 1) Настройка БД
    Session = make_session_factory()
    session = Session()
    sessions = SessionRepository(session)
    departments = DepartmentRepository(session)
    users = UserRepository(session)

    # 2) Загрузка JSON
    with open(sys.argv[1], encoding="utf-8") as json_file:
        payload = json.load(json_file)

    # 3) Преобразование в доменные модели (кафедры раньше пользователей — FK)
    try:
        for item in payload.get("sessions", []):
            sessions.add_session(RecruitmentSession(
                id=item["id"],
                name=item["name"],
                status=SessionStatus(item["status"]),
                description=item.get("description", ""),
                end_date=date.fromisoformat(item["endDate"]),
            ))
        for item in payload.get("departments", []):
            departments.add_department(Department(
                id=item["id"],
                short_code=item["deptShortCode"],
                name=item["deptName"],
            ))
        session.flush()
        for item in payload.get("users", []):
            users.add_user(User(
                id=item["id"],
                username=item["username"],
                first_name=item["firstname"],
                last_name=item["lastname"],
                email=item["email"],
                user_type=UserType(item["userType"]),
                erp_id=item.get("erpID", item["id"]),
                dept_short_codes=list(item.get("deptShortCodes", [])),
            ))

        # 4) Сохраняем всё в БД
        users.commit()
    except SQLAlchemyError:
        logger.exception("Ошибка импорта справочников, rollback")
        session.rollback()
        sys.exit(1)
    finally:
        session.close()

    print(
        f"Импортировано: сессий {len(payload.get('sessions', []))}, "
        f"кафедр {len(payload.get('departments', []))}, "
        f"пользователей {len(payload.get('users', []))}."
    )


if __name__ == "__main__":
    main()
