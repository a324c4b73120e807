import json
import logging
from datetime import datetime, timezone
from typing import Optional

from catalog.config import get_settings

_SQL_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")

# Passed through ``extra=`` by the HTTP error handlers.
REQUEST_FIELDS = ("method", "path", "status_code")


class JsonFormatter(logging.Formatter):
    def __init__(self, app_name: str):
        super().__init__()
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "app": self.app_name,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in REQUEST_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def request_context(method: str, path: str, status_code: int) -> dict:
    return {"method": method, "path": path, "status_code": status_code}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root handler; SQLAlchemy stays quiet unless LOG_SQL is set."""
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter(settings.APP_NAME))
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    sql_level = logging.INFO if settings.LOG_SQL else logging.WARNING
    for name in _SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)


__all__ = ["JsonFormatter", "request_context", "setup_logging"]
