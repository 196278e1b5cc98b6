"""One parameter surface over six AI text-generation HTTP APIs."""

from .config import load_provider_config, resolve_request
from .formatting import render
from .llm.dispatcher import dispatch
from .llm.providers import PROFILES, build_call
from .llm.types import (
    DispatchError,
    DispatchRequest,
    InvalidParameterError,
    InvocationResult,
    MissingCredentialError,
    MissingEndpointError,
    NetworkFailureError,
    ResolvedRequest,
    UnexpectedResponseShapeError,
)

__all__ = [
    "PROFILES",
    "DispatchError",
    "DispatchRequest",
    "InvalidParameterError",
    "InvocationResult",
    "MissingCredentialError",
    "MissingEndpointError",
    "NetworkFailureError",
    "ResolvedRequest",
    "UnexpectedResponseShapeError",
    "build_call",
    "dispatch",
    "load_provider_config",
    "render",
    "resolve_request",
]
