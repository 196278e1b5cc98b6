"""Azure OpenAI profile.

Same chat schema as OpenAI, but the deployment is part of the endpoint URL,
the key travels in an ``api-key`` header and there is no usable default
endpoint.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..types import ResolvedRequest
from .base import expand_endpoint, extract_text_at, usage_sum
from .openai_provider import chat_messages


class AzureProfile:
    name = "Azure"
    env_var = "AZURE_OPENAI_API_KEY"
    default_model = "gpt-35-turbo"
    default_endpoint: Optional[str] = None

    def endpoint_for(self, request: ResolvedRequest) -> str:
        return expand_endpoint(request.endpoint, request.model)

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"api-key": api_key, "Content-Type": "application/json"}

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "messages": chat_messages(request),
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, ["choices", 0, "message", "content"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return usage_sum(data, ["usage", "total_tokens"])
