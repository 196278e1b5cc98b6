"""Output rendering for invocation results."""

from __future__ import annotations

from .llm.types import InvocationResult
from .utils import json_dumps

RAW = "raw"
SUMMARY = "summary"
JSON = "json"
OUTPUT_MODES = (RAW, SUMMARY, JSON)


def format_raw(result: InvocationResult) -> str:
    return result.response or ""


def format_summary(result: InvocationResult) -> str:
    lines = [
        f"Provider : {result.provider}",
        f"Model    : {result.model}",
        f"Time     : {result.timestamp}",
    ]
    if result.tokens_used is not None:
        lines.append(f"Tokens   : {result.tokens_used}")
    if result.ok:
        lines.append("")
        lines.append(result.response or "")
    else:
        lines.append(f"Error    : [{result.error_type}] {result.error}")
    return "\n".join(lines)


def format_json(result: InvocationResult) -> str:
    return json_dumps(result.to_dict(), indent=2)


def render(result: InvocationResult, mode: str = SUMMARY) -> str:
    if mode == RAW:
        return format_raw(result)
    if mode == JSON:
        return format_json(result)
    if mode == SUMMARY:
        return format_summary(result)
    raise ValueError(f"Unknown output mode: {mode}")
