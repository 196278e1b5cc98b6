"""Single-shot request dispatch: resolve, build, POST, extract."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import requests

from ..config import ProviderConfig, resolve_request
from ..utils import excerpt, redact, utc_now_iso
from .providers import build_call, get_profile
from .types import (
    DispatchRequest,
    HttpCall,
    InvocationResult,
    NetworkFailureError,
    UnexpectedResponseShapeError,
)

logger = logging.getLogger(__name__)


def execute(call: HttpCall, timeout_seconds: int, secret: str | None = None) -> Any:
    """Sends one POST and returns the parsed JSON body."""
    try:
        res = requests.post(call.url, headers=call.headers, json=call.payload, timeout=timeout_seconds)
    except requests.Timeout:
        raise NetworkFailureError(f"Request timed out after {timeout_seconds}s") from None
    except requests.RequestException as exc:
        raise NetworkFailureError(redact(str(exc), secret)) from None
    except UnicodeError as exc:
        # http.client encodes header values as latin-1.
        raise NetworkFailureError(redact(f"Request could not be encoded: {exc}", secret)) from None

    if not 200 <= res.status_code < 300:
        body = redact(excerpt(getattr(res, "text", "")), secret)
        raise NetworkFailureError(f"HTTP {res.status_code}: {body}", status_code=res.status_code)

    try:
        return res.json()
    except ValueError:
        raise NetworkFailureError(
            f"HTTP {res.status_code}: response body is not JSON", status_code=res.status_code
        ) from None


def dispatch(
    request: DispatchRequest,
    env: Mapping[str, str] | None = None,
    file_config: ProviderConfig | None = None,
) -> InvocationResult:
    """Runs one invocation.

    Parameter, credential and endpoint errors are raised before any network
    I/O. Once the request is sent, failures come back as a result with
    ``response=None``.
    """
    resolved = resolve_request(request, env or {}, file_config)
    profile = get_profile(resolved.provider)
    call = build_call(profile, resolved)
    logger.info("POST %s (%s, model=%s)", redact(call.url, resolved.api_key), resolved.provider, resolved.model)

    start = time.perf_counter()
    try:
        data = execute(call, resolved.timeout_seconds, secret=resolved.api_key)
        text = profile.extract_text(data)
    except (NetworkFailureError, UnexpectedResponseShapeError) as exc:
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.warning("%s call failed (%s): %s", resolved.provider, exc.error_type, exc)
        return InvocationResult(
            provider=resolved.provider,
            model=resolved.model,
            prompt=resolved.prompt,
            response=None,
            timestamp=utc_now_iso(),
            latency_ms=latency_ms,
            error=str(exc),
            error_type=exc.error_type,
            http_status=getattr(exc, "status_code", None),
        )

    latency_ms = int((time.perf_counter() - start) * 1000)
    logger.debug("%s responded in %d ms", resolved.provider, latency_ms)
    return InvocationResult(
        provider=resolved.provider,
        model=resolved.model,
        prompt=resolved.prompt,
        response=text,
        timestamp=utc_now_iso(),
        tokens_used=profile.extract_usage(data),
        latency_ms=latency_ms,
    )
