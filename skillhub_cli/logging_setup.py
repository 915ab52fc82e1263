"""
CLI logging bootstrap.
Installs a JSONL file sink and a stderr sink early in CLI startup.
"""

import json
import logging
import os
import sys
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .paths import get_log_path

DEFAULT_LEVEL = "INFO"

STDERR_FORMAT = "%(levelname)s: %(message)s"

# Attributes every LogRecord carries; anything else came in via ``extra``
_RECORD_ATTRS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "name",
    }
)


class JsonlHandler(logging.Handler):
    """Appends one JSON object per record to a file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            base = {
                "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "skillhub.log", "ver": "1.0.0"},
                "logger": record.name,
                "thread": record.threadName,
                "message": record.getMessage(),
            }
            for k, v in record.__dict__.items():
                if k in _RECORD_ATTRS:
                    continue
                base.setdefault(k, v)
            if record.exc_info:
                base["exc"] = logging.Formatter().formatException(record.exc_info)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(base, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


class StderrHandler(logging.StreamHandler):
    """Human-readable warnings on stderr."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(logging.Formatter(STDERR_FORMAT))


def init_logging(verbose: bool = False, path: str | Path | None = None, level: str | None = None) -> None:
    """Configure the root logger for the CLI.

    Args:
        verbose: Show DEBUG records on stderr (default: WARNING and above)
        path: JSONL log file (default: ``$SKILLHUB_LOG_PATH`` or the cache-home log)
        level: File log level (default: ``$SKILLHUB_LOG_LEVEL`` or INFO)
    """
    path = path or os.environ.get("SKILLHUB_LOG_PATH") or get_log_path()
    level = (level or os.environ.get("SKILLHUB_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    file_level = getattr(logging, level, logging.INFO)
    stderr_level = logging.DEBUG if verbose else logging.WARNING

    root = logging.getLogger()
    root.setLevel(min(file_level, stderr_level))
    # Replace handlers from an earlier init instead of stacking duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler | StderrHandler):
            root.removeHandler(h)
            h.close()

    try:
        file_handler = JsonlHandler(path)
    except OSError as e:
        # Unwritable log location must not block the CLI; stderr still works
        print(f"warning: cannot open log file {path}: {e}", file=sys.stderr)
    else:
        file_handler.setLevel(file_level)
        root.addHandler(file_handler)

    stderr_handler = StderrHandler()
    stderr_handler.setLevel(stderr_level)
    root.addHandler(stderr_handler)
