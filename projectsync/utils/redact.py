"""Secret redaction utility: strip tokens/PII from log messages."""

from __future__ import annotations

import re
from typing import Iterable


_DEFAULT_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # GitHub app installation, OAuth, user-to-server and personal tokens
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9_]{20,}\b"), "gh_[REDACTED]"),
    (re.compile(r"github_pat_[A-Za-z0-9_]+"), "github_pat_[REDACTED]"),
    # Bearer tokens
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-\.=]+", re.IGNORECASE), "Bearer [REDACTED]"),
    # Emails
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[REDACTED_EMAIL]"),
]


def redact_text(text: str, extra_patterns: Iterable[tuple[re.Pattern[str], str]] | None = None) -> str:
    """Redact secrets/PII before text reaches a log sink or the audit table."""
    patterns = list(_DEFAULT_PATTERNS)
    if extra_patterns:
        patterns.extend(list(extra_patterns))

    redacted = text
    for pattern, repl in patterns:
        redacted = pattern.sub(repl, redacted)
    return redacted
