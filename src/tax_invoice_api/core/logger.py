"""Structured JSON logging.

Every record is written as one JSON object per line to stdout, and also to
``$LOG_DIR/tax_invoice_<date>_<run>.log`` when ``LOG_DIR`` is set.
Timestamps are Bangkok time.
"""

import json
import logging
import os
import sys
import traceback
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

TH_TZ = timezone(timedelta(hours=7))

# Record attributes copied into the JSON line when passed via ``extra=``
EXTRA_FIELDS = ("request_id", "client_key", "status_code", "path")

RUN_ID = uuid.uuid4().hex[:8]

_configured = False


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, TH_TZ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        # Thai messages stay readable in the log files
        return json.dumps(entry, default=str, ensure_ascii=False)


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    """Attach JSON handlers to the root logger. Runs once per process."""
    global _configured
    if _configured:
        return
    _configured = True

    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_dir = log_dir or os.getenv("LOG_DIR")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    formatter = JSONFormatter()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(getattr(logging, level, logging.INFO))
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        date = datetime.now(TH_TZ).strftime("%Y-%m-%d")
        file_handler = logging.FileHandler(path / f"tax_invoice_{date}_{RUN_ID}.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_logger(name: str) -> logging.Logger:
    """Get logger for a module."""
    configure_logging()
    return logging.getLogger(name)
