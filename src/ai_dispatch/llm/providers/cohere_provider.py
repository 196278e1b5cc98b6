"""Cohere Generate API profile."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..types import ResolvedRequest
from .base import bearer_headers, expand_endpoint, extract_text_at, flat_prompt, usage_sum


class CohereProfile:
    name = "Cohere"
    env_var = "COHERE_API_KEY"
    default_model = "command"
    default_endpoint: Optional[str] = "https://api.cohere.ai/v1/generate"

    def endpoint_for(self, request: ResolvedRequest) -> str:
        return expand_endpoint(request.endpoint, request.model)

    def headers(self, api_key: str) -> Dict[str, str]:
        return bearer_headers(api_key)

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "model": request.model,
            "prompt": flat_prompt(request),
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, ["generations", 0, "text"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return usage_sum(
            data,
            ["meta", "billed_units", "input_tokens"],
            ["meta", "billed_units", "output_tokens"],
        )
