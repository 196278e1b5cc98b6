"""Shared dispatch data structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT_SECONDS = 30
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


@dataclass
class DispatchRequest:
    provider: str
    prompt: str
    api_key: Optional[str] = None
    model: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    system_prompt: Optional[str] = None
    endpoint: Optional[str] = None
    config_file: Optional[str] = None


@dataclass(frozen=True)
class ResolvedRequest:
    provider: str
    api_key: str
    model: str
    endpoint: str
    prompt: str
    system_prompt: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class HttpCall:
    url: str
    headers: Dict[str, str]
    payload: Any


@dataclass
class InvocationResult:
    provider: str
    model: str
    prompt: str
    response: Optional[str]
    timestamp: str
    tokens_used: Optional[int] = None
    latency_ms: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.response is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DispatchError(RuntimeError):
    """Base class for every dispatch failure."""

    error_type = "dispatch_error"


class InvalidParameterError(DispatchError):
    error_type = "invalid_parameter"


class MissingCredentialError(DispatchError):
    error_type = "missing_credential"

    def __init__(self, provider: str, env_var: str | None = None) -> None:
        self.provider = provider
        self.env_var = env_var
        hint = f" (set {env_var}, pass --api-key, or add ApiKey to the config file)" if env_var else ""
        super().__init__(f"No API key found for provider '{provider}'{hint}")


class MissingEndpointError(DispatchError):
    error_type = "missing_endpoint"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Provider '{provider}' requires an explicit endpoint")


class NetworkFailureError(DispatchError):
    """Connection error, timeout, non-2xx status or unreadable body."""

    error_type = "network_failure"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class UnexpectedResponseShapeError(DispatchError):
    """Response parsed as JSON but the text path was not there."""

    error_type = "unexpected_response_shape"

    def __init__(self, provider: str, path: str) -> None:
        self.provider = provider
        self.path = path
        super().__init__(f"{provider} response has no text at {path}")
