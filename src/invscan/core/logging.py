# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with credential redaction.

Secret and weak-credential detectors surface sensitive strings, so
every record is redacted before it is formatted.
"""

import json
import logging
import re
import sys
from typing import Any

REDACT_PATTERNS = [
    re.compile(r"(AIza[0-9A-Za-z\-_]{4})[0-9A-Za-z\-_]{31}"),
    re.compile(r"(AKIA[A-Z0-9]{4})[A-Z0-9]{12}"),
    re.compile(r"(ghp_[A-Za-z0-9]{4})[A-Za-z0-9_]{32,}"),
    re.compile(r"(sk-[a-zA-Z0-9]{10})[a-zA-Z0-9\-]*"),
    re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]{10})[a-zA-Z0-9\-._~+/]*"),
    re.compile(r"(-----BEGIN [A-Z ]*PRIVATE KEY-----)[^-]+"),
]

# Scan context a record may carry via ``extra=``.
CONTEXT_FIELDS = ("plugin", "plugin_kind", "path")


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


def scan_context(record: logging.LogRecord) -> dict[str, str]:
    """Return the plugin and path fields attached to *record*, redacted."""
    return {
        name: redact_sensitive(str(getattr(record, name)))
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record; scan context fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
            **scan_context(record),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = redact_sensitive(str(record.exc_info[1]))
        return json.dumps(entry)


class TextFormatter(logging.Formatter):
    """Plain lines with scan context appended as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        context = scan_context(record)
        if context:
            msg += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return redact_sensitive(msg)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Route ``invscan.*`` loggers to stderr so scan output keeps stdout."""
    logger = logging.getLogger("invscan")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s"))
    logger.addHandler(handler)
