"""Utility helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import quote, quote_plus

REDACTED = "***"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def json_dumps(data: Any, indent: Optional[int] = None) -> str:
    return json.dumps(data, ensure_ascii=False, indent=indent)


def redact(text: str, secret: Optional[str]) -> str:
    """Hides a credential, raw or URL-encoded, inside a URL or error message."""
    if not text or not secret:
        return text
    for form in sorted({secret, quote(secret, safe=""), quote_plus(secret)}, key=len, reverse=True):
        text = text.replace(form, REDACTED)
    return text


def excerpt(text: str, limit: int = 200) -> str:
    cleaned = " ".join((text or "").split())
    if len(cleaned) <= limit:
        return cleaned
    return cleaned[: limit - 3] + "..."
