# research_requirements/config/logger.py
import logging
import sys

from research_requirements.config.config import settings

LOGGER_NAME = "research_requirements"


def _resolve_level() -> int:
    # LOG_LEVEL из окружения важнее ENV
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.env == "dev" else logging.INFO


LOG_LEVEL = _resolve_level()

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(LOG_LEVEL)
# записи не дублируются в корневой логгер
logger.propagate = False

# повторный импорт модуля (скрипты, pytest) не должен плодить хендлеры
if not any(getattr(h, "_research_requirements", False) for h in logger.handlers):
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(logging.Formatter(
        f"%(asctime)s %(levelname)-5s [{LOGGER_NAME}] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    handler._research_requirements = True
    logger.addHandler(handler)
