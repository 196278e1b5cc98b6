"""OpenAI Chat Completions profile."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..types import ResolvedRequest
from .base import bearer_headers, expand_endpoint, extract_text_at, usage_sum


def chat_messages(request: ResolvedRequest) -> List[Dict[str, str]]:
    messages = []
    if request.system_prompt:
        messages.append({"role": "system", "content": request.system_prompt})
    messages.append({"role": "user", "content": request.prompt})
    return messages


class OpenAIProfile:
    name = "OpenAI"
    env_var = "OPENAI_API_KEY"
    default_model = "gpt-3.5-turbo"
    default_endpoint: Optional[str] = "https://api.openai.com/v1/chat/completions"

    def endpoint_for(self, request: ResolvedRequest) -> str:
        return expand_endpoint(request.endpoint, request.model)

    def headers(self, api_key: str) -> Dict[str, str]:
        return bearer_headers(api_key)

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "model": request.model,
            "messages": chat_messages(request),
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, ["choices", 0, "message", "content"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return usage_sum(data, ["usage", "total_tokens"])
