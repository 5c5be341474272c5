#!/usr/bin/env python3
import json
import sys

from research_requirements.application.payloads import payload_from_dict
from research_requirements.application.use_cases.save_requirement import SaveRequirementUseCase
from research_requirements.application.use_cases.submit_requirement import SubmitRequirementUseCase
from research_requirements.config.logger import logger
from research_requirements.infrastructure.db.database import build_lifecycle, make_session_factory

_USE_CASES = {
    "save": SaveRequirementUseCase,
    "submit": SubmitRequirementUseCase,
}


def main():
    if len(sys.argv) != 3 or sys.argv[1] not in _USE_CASES:
        print("usage: submit_requirement.py <save|submit> <payload.json>", file=sys.stderr)
        sys.exit(2)

    with open(sys.argv[2], encoding="utf-8") as f:
        payload = payload_from_dict(json.load(f))

    logger.info("=== %s старт ===", sys.argv[1])
    Session = make_session_factory()
    session = Session()
    try:
        engine, repo = build_lifecycle(session)
        result = _USE_CASES[sys.argv[1]](engine, repo).execute(payload)
        if not result.success:
            print(f"❌ {result.kind.value}: {result.message}", file=sys.stderr)
            sys.exit(1)
        print(f"✅ {result.message}: id={result.data.id}, версия {result.data.version}")
    except Exception as e:
        logger.exception("Ошибка при записи заявки")
        print("❌ Ошибка при записи заявки:", e, file=sys.stderr)
        sys.exit(1)
    finally:
        session.close()
        logger.info("=== %s завершён ===", sys.argv[1])


if __name__ == "__main__":
    main()
