"""Logging setup for curation runs.

Every handler on the root logger gets a SecretRedactingFilter, so the API
token never reaches the terminal or a CI job log, whether it appears as a
known token shape, inside an Authorization header, or verbatim.
"""

import json
import logging
import re
from typing import ClassVar

LIBRARY_LOGGERS = ("httpx", "httpcore")

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SecretRedactingFilter(logging.Filter):
    """Redact GitHub credentials from log messages and their arguments."""

    SECRET_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        (re.compile(r"gh[pous]_[a-zA-Z0-9]{20,}"), "[REDACTED_GH_TOKEN]"),
        (re.compile(r"github_pat_[a-zA-Z0-9_]+"), "[REDACTED_GH_PAT]"),
        (re.compile(r"Bearer\s+[a-zA-Z0-9_\-\.]+"), "Bearer [REDACTED]"),
        (re.compile(r"(Authorization:\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(token[=:]\s*)[^\s,\]]+", re.IGNORECASE), r"\1[REDACTED]"),
    ]

    def __init__(self, secrets: tuple[str, ...] = ()) -> None:
        super().__init__()
        self._secrets: set[str] = {s for s in secrets if s}

    def add_secret(self, value: str) -> None:
        """Redact this exact value wherever it appears, whatever its shape."""
        if value:
            self._secrets.add(value)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._redact(str(record.msg))
        if record.args:
            record.args = tuple(
                self._redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True

    def _redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, "[REDACTED]")
        for pattern, replacement in self.SECRET_PATTERNS:
            text = pattern.sub(replacement, text)
        return text


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


_redaction_filter = SecretRedactingFilter()


def register_secret(value: str) -> None:
    """Add a literal secret to the process-wide redaction filter."""
    _redaction_filter.add_secret(value)


def setup_logging(verbose: bool = False, json_format: bool = False) -> None:
    """Configure the root logger.

    Args:
        verbose: Log at DEBUG instead of INFO (per-request and pacing detail).
        json_format: Emit JSON lines instead of the pipe-separated text format.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=TEXT_FORMAT,
        datefmt=DATE_FORMAT,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in root_logger.handlers:
        handler.setFormatter(
            JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT, DATE_FORMAT)
        )
        if _redaction_filter not in handler.filters:
            handler.addFilter(_redaction_filter)

    # Request URLs and headers are logged by these at INFO
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
