# research_requirements/config/config.py
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_DATA_DIR = _PROJECT_ROOT / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    # окружение
    env: str = Field("dev", alias="ENV")
    # явный уровень логов (DEBUG, INFO, ...); пусто — по ENV
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    data_dir: Path = Field(_DEFAULT_DATA_DIR, alias="DATA_DIR")

    # таймзона, в которой считаем «сегодня» для дат ремарок и версий
    timezone_name: str = Field("UTC", alias="TIMEZONE")

    # БД
    db_url: str | None = Field(None, alias="DATABASE_URL")
    db_filename: str = Field("research_requirements.db", alias="DB_FILENAME")
    db_echo: bool = Field(False, alias="DB_ECHO")

    # код кафедры, означающий «все кафедры» в запросе преподавателей
    faculty_wildcard: str = Field("*", alias="FACULTY_WILDCARD")

    @model_validator(mode="before")
    def _preprocess(cls, values: dict[str, Any]) -> dict[str, Any]:
        raw = values.get("data_dir", values.get("DATA_DIR", _DEFAULT_DATA_DIR))
        values["data_dir"] = Path(raw).expanduser().resolve()
        values.pop("DATA_DIR", None)
        return values

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)

    @property
    def database_url(self) -> str:
        return self.db_url or f"sqlite:///{self.data_dir / self.db_filename}"


settings = Settings()
