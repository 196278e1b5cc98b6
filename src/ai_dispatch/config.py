"""Provider config file loading and request resolution."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .llm.providers import canonical_provider, get_profile
from .llm.types import (
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    DispatchRequest,
    InvalidParameterError,
    MissingCredentialError,
    MissingEndpointError,
    ResolvedRequest,
)

logger = logging.getLogger(__name__)

ProviderConfig = Dict[str, Dict[str, Any]]


def environment_snapshot() -> Dict[str, str]:
    """Read-only copy of the process environment for resolution."""
    return dict(os.environ)


def load_provider_config(path: str | Path | None) -> ProviderConfig:
    """Loads a JSON (or YAML) file keyed by provider name.

    A missing or unreadable file yields no overrides. Parse failures are
    logged as warnings so a broken file is never mistaken for an absent one.
    """
    if not path:
        return {}
    config_path = Path(path)
    if not config_path.exists():
        logger.debug("Config file %s not found, skipping", config_path)
        return {}

    try:
        with config_path.open("r", encoding="utf-8") as f:
            if config_path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("Ignoring config file %s: %s", config_path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not an object", config_path)
        return {}
    return data


def provider_section(config: Mapping[str, Any], provider: str) -> Dict[str, Any]:
    """Returns the entry for ``provider``; keys match case-insensitively."""
    for key, value in config.items():
        if isinstance(key, str) and key.lower() == provider.lower() and isinstance(value, dict):
            return value
    return {}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def validate_request(request: DispatchRequest) -> str:
    """Checks caller parameters and returns the canonical provider name."""
    provider = canonical_provider(request.provider)
    if provider is None:
        raise InvalidParameterError(f"Unknown provider: {request.provider!r}")

    try:
        temperature = float(request.temperature)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Temperature must be a number, got {request.temperature!r}") from None
    if not MIN_TEMPERATURE <= temperature <= MAX_TEMPERATURE:
        raise InvalidParameterError(
            f"Temperature {temperature} outside [{MIN_TEMPERATURE}, {MAX_TEMPERATURE}]"
        )

    if isinstance(request.max_tokens, bool) or not isinstance(request.max_tokens, int) or request.max_tokens < 1:
        raise InvalidParameterError(f"max_tokens must be a positive integer, got {request.max_tokens!r}")

    if not isinstance(request.prompt, str) or not request.prompt.strip():
        raise InvalidParameterError("Prompt must be a non-empty string")
    return provider


def resolve_request(
    request: DispatchRequest,
    env: Mapping[str, str],
    file_config: ProviderConfig | None = None,
) -> ResolvedRequest:
    """Resolves key, model and endpoint.

    Order per field: explicit value, config file entry, environment variable
    (key only), profile default (model and endpoint only).
    """
    provider = validate_request(request)
    profile = get_profile(provider)
    if file_config is None:
        file_config = load_provider_config(request.config_file)
    section = provider_section(file_config, provider)

    api_key = _text(request.api_key)
    key_source = "parameter"
    if api_key is None:
        api_key, key_source = _text(section.get("ApiKey")), "config file"
    if api_key is None:
        api_key, key_source = _text(env.get(profile.env_var)), profile.env_var
    if api_key is None:
        raise MissingCredentialError(provider, profile.env_var)
    logger.debug("%s API key resolved from %s", provider, key_source)

    model = _text(request.model) or _text(section.get("Model")) or profile.default_model
    endpoint = _text(request.endpoint) or _text(section.get("Endpoint")) or profile.default_endpoint
    if endpoint is None:
        raise MissingEndpointError(provider)

    return ResolvedRequest(
        provider=provider,
        api_key=api_key,
        model=model,
        endpoint=endpoint,
        prompt=request.prompt,
        system_prompt=request.system_prompt if _text(request.system_prompt) else None,
        max_tokens=request.max_tokens,
        temperature=float(request.temperature),
    )
