"""
Root-logger setup for the ``governance-advisor`` CLI.

Only the CLI calls ``configure_logging``; library modules log through
``logging.getLogger(__name__)``. Engine messages use a ``label | key=value``
layout, e.g.::

    Recommendations generated | assessment_id=acme score=8/19 level=basic

Log lines go to stderr because ``score --json`` and ``recommend --json`` write
their payload to stdout. With ``json_format = true`` each line is an object
whose ``ts`` matches the ``generated_at`` format of recommendation results::

    {"ts": "2026-10-19T12:00:00.000Z", "level": "INFO", "logger": "governance_advisor.engine", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from governance_advisor.utils.time_utils import utc_isoformat

if TYPE_CHECKING:
    from governance_advisor.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TEXT_DATE_FORMAT = "%H:%M:%S"

# Third-party clients used by the HTTP rule evaluator log every request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore")

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` fields land at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": utc_isoformat(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(
            (key, val) for key, val in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _build_handlers(config: "LoggingConfig", formatter: logging.Formatter) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``."""
    level = logging.getLevelName(config.level)
    formatter = (
        JsonLineFormatter()
        if config.json_format
        else logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)
    )
    logging.basicConfig(level=level, handlers=_build_handlers(config, formatter), force=True)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
