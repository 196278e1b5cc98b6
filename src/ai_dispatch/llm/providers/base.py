"""Provider profile interface and shared helpers."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence, Union

from ..types import HttpCall, ResolvedRequest, UnexpectedResponseShapeError

PathStep = Union[str, int]


class ProviderProfile(Protocol):
    name: str
    env_var: str
    default_model: str
    default_endpoint: Optional[str]

    def endpoint_for(self, request: ResolvedRequest) -> str:
        ...

    def headers(self, api_key: str) -> Dict[str, str]:
        ...

    def build_payload(self, request: ResolvedRequest) -> Any:
        ...

    def extract_text(self, data: Any) -> str:
        ...

    def extract_usage(self, data: Any) -> Optional[int]:
        ...


def build_call(profile: ProviderProfile, request: ResolvedRequest) -> HttpCall:
    """Builds the full HTTP call for a resolved request. No I/O."""
    return HttpCall(
        url=profile.endpoint_for(request),
        headers=profile.headers(request.api_key),
        payload=profile.build_payload(request),
    )


def expand_endpoint(endpoint: str, model: str) -> str:
    return endpoint.replace("{model}", model)


def bearer_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def flat_prompt(request: ResolvedRequest) -> str:
    """Folds the system prompt into the prompt for schemas without a system slot."""
    if request.system_prompt:
        return f"{request.system_prompt}\n\n{request.prompt}"
    return request.prompt


def format_path(path: Sequence[PathStep]) -> str:
    out = ""
    for step in path:
        if isinstance(step, int):
            out += f"[{step}]"
        else:
            out += f".{step}" if out else step
    return out


def dig(data: Any, path: Sequence[PathStep]) -> Any:
    """Walks dict keys / list indexes. Raises LookupError when a step is missing."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or len(current) <= step:
                raise LookupError(step)
        elif not isinstance(current, dict) or step not in current:
            raise LookupError(step)
        current = current[step]
    return current


def extract_text_at(provider: str, data: Any, path: Sequence[PathStep]) -> str:
    try:
        value = dig(data, path)
    except LookupError:
        raise UnexpectedResponseShapeError(provider, format_path(path)) from None
    if not isinstance(value, str):
        raise UnexpectedResponseShapeError(provider, format_path(path))
    return value.strip()


def usage_sum(data: Any, *paths: Sequence[PathStep]) -> Optional[int]:
    """Adds up integer usage counters; None when none of them is reported."""
    total = None
    for path in paths:
        try:
            value = dig(data, path)
        except LookupError:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        total = (total or 0) + int(value)
    return total
