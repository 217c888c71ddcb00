from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Mapping, Optional

# Keys whose values must never reach a log line.
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "oldPassword",
        "newPassword",
        "currentPassword",
        "accessToken",
        "refreshToken",
        "token",
        "Authorization",
    }
)

# Request context attached via `extra=` and copied into JSON output.
_CONTEXT_FIELDS = ("method", "path", "status")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.levelno <= logging.DEBUG:
            payload["file"] = f"{os.path.basename(record.pathname)}:{record.lineno}"
            payload["func"] = record.funcName
        return json.dumps(payload, ensure_ascii=False, default=str)


logger = logging.getLogger("cell_admin_client")
# No handlers at import time; configure_logging() installs one.
logger.propagate = False


def redact(data: Any) -> Any:
    """Copy of `data` with credential values masked (dicts/lists walked recursively)."""
    if isinstance(data, Mapping):
        return {
            k: ("***" if k in SENSITIVE_KEYS and v else redact(v)) for k, v in data.items()
        }
    if isinstance(data, (list, tuple)):
        return [redact(v) for v in data]
    return data


def _dest_to_handler(destination: Optional[str]) -> logging.Handler:
    """
    - None or "stderr" -> StreamHandler(sys.stderr)
    - "stdout" -> StreamHandler(sys.stdout)
    - anything else -> FileHandler(path)
    """
    if destination in (None, "stderr"):
        return logging.StreamHandler(stream=sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(stream=sys.stdout)
    return logging.FileHandler(destination, encoding="utf-8")


def configure_logging(
    *,
    level: str = "WARNING",
    fmt: str = "json",
    destination: Optional[str] = None,
) -> None:
    """
    Configure the library logger. Safe to call multiple times; handlers are replaced.
    """
    lvl = getattr(logging, str(level).upper(), logging.WARNING)
    logger.setLevel(lvl)

    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    handler = _dest_to_handler(destination)
    if fmt == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    else:
        handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
