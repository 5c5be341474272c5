from sqlalchemy.orm import Session


class SqlRepository:
    """
    Общая часть репозиториев: одна SQLAlchemy-сессия на юнит работы,
    коммитит и откатывает вызывающий use case.
    """

    def __init__(self, session: Session):
        self._session = session

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
