"""Scrub the Open-Meteo API key (and similar credentials) out of diagnostics.

The key travels as the ``apikey`` query parameter, so it can surface in
request URLs, httpx error strings and provider error bodies. Everything that
goes to the log stream or the journal passes through here first.
"""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_CREDENTIAL_NAMES = r"api[_-]?key|authorization|token|secret|password|bearer"

_CREDENTIAL_KEY_RE = re.compile(rf"({_CREDENTIAL_NAMES})", re.IGNORECASE)
_BEARER_RE = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*")
# `apikey=abc&hourly=...` in URLs as well as `api_key: abc` in prose.
_ASSIGNED_CREDENTIAL_RE = re.compile(
    rf"(?i)\b({_CREDENTIAL_NAMES})\s*[:=]\s*([^\s,;&\"']+)"
)


def sanitize_text(text: str) -> str:
    """Return ``text`` with credential values replaced by a marker."""
    text = _BEARER_RE.sub(rf"\1 {REDACTED}", text)
    return _ASSIGNED_CREDENTIAL_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def sanitize_for_logging(value: Any) -> Any:
    """Walk dicts, lists and tuples, masking credential-named keys and strings."""
    if isinstance(value, dict):
        return {
            key: REDACTED if _CREDENTIAL_KEY_RE.search(str(key)) else sanitize_for_logging(child)
            for key, child in value.items()
        }
    if isinstance(value, (list, tuple)):
        cleaned = [sanitize_for_logging(item) for item in value]
        return cleaned if isinstance(value, list) else tuple(cleaned)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
