from unittest import mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from conftest import make_payload
from research_requirements.application.use_cases.fetch_current_requirement import FetchCurrentRequirementUseCase
from research_requirements.application.use_cases.fetch_faculty import FetchFacultyUseCase
from research_requirements.application.use_cases.fetch_requirement_history import FetchRequirementHistoryUseCase
from research_requirements.application.use_cases.save_requirement import SaveRequirementUseCase
from research_requirements.application.use_cases.submit_requirement import SubmitRequirementUseCase
from research_requirements.application.use_cases.write_requirement import WriteRequirementUseCase
from research_requirements.domain.results import FailureKind
from research_requirements.infrastructure.db.database import build_lifecycle
from research_requirements.infrastructure.db.repositories.requirement_repository import RequirementRepository


@pytest.fixture
def wired(db_session):
    return build_lifecycle(db_session)


def test_save_use_case_commits_new_version(wired, db_session):
    engine, repo = wired

    result = SaveRequirementUseCase(engine, repo).execute(make_payload())

    assert result.success
    # отдельная сессия видит только закоммиченное
    with Session(bind=db_session.get_bind()) as other:
        assert RequirementRepository(other).by_id(result.data.id).version == 1


def test_submit_use_case_returns_failure_without_writing(wired):
    engine, repo = wired

    result = SubmitRequirementUseCase(engine, repo).execute(make_payload(remarks=0))

    assert result.kind is FailureKind.INVALID_REMARK_COUNT
    assert repo.all_active_for("S1", "CSE") == []


@pytest.mark.parametrize("use_case_cls", [SaveRequirementUseCase, SubmitRequirementUseCase])
def test_write_use_case_rolls_back_and_reraises_db_errors(wired, use_case_cls):
    engine, repo = wired
    use_case = use_case_cls(engine, repo)

    with mock.patch.object(repo, "save", side_effect=OperationalError("INSERT", {}, Exception("db is gone"))), \
            mock.patch.object(repo, "rollback", wraps=repo.rollback) as rollback:
        with pytest.raises(OperationalError):
            use_case.execute(make_payload())

    rollback.assert_called_once()


def test_read_use_cases_strip_department_code(wired):
    engine, repo = wired
    SubmitRequirementUseCase(engine, repo).execute(make_payload())

    assert FetchCurrentRequirementUseCase(engine).execute(" CSE ").success
    assert FetchRequirementHistoryUseCase(engine).execute("CSE ").kind is FailureKind.NO_HISTORICAL_REQUIREMENTS
    assert [f.id for f in FetchFacultyUseCase(engine).execute(" * ").data] == ["f1", "f2", "f3"]


def test_save_and_submit_share_transaction_base_only():
    assert issubclass(SaveRequirementUseCase, WriteRequirementUseCase)
    assert issubclass(SubmitRequirementUseCase, WriteRequirementUseCase)
    assert not issubclass(SubmitRequirementUseCase, SaveRequirementUseCase)


def test_submit_use_case_does_not_call_save(wired):
    engine, repo = wired

    with mock.patch.object(engine, "save", wraps=engine.save) as save:
        result = SubmitRequirementUseCase(engine, repo).execute(make_payload())

    assert result.success
    save.assert_not_called()
