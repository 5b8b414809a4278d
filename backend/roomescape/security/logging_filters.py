"""Keep credentials and tokens out of application logs."""

from __future__ import annotations

import logging
import re

REDACTED = "**REDACTED**"

_SENSITIVE_PATTERNS = (
    re.compile(r"(Bearer\s+)[\w\.-]+", re.IGNORECASE),
    re.compile(
        r"(\"(?:access_token|password|hashed_password)\"\s*:\s*\")[^\"]+",
        re.IGNORECASE,
    ),
    re.compile(r"((?:^|[?&\s])password=)[^&\s]+", re.IGNORECASE),
)


def redact(text: str) -> str:
    for pattern in _SENSITIVE_PATTERNS:
        text = pattern.sub(lambda match: match.group(1) + REDACTED, text)
    return text


class SensitiveFilter(logging.Filter):
    """Redact bearer tokens and passwords from log messages and their args."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["REDACTED", "SensitiveFilter", "redact"]
