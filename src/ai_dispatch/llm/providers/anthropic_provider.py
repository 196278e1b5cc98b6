"""Anthropic Messages API profile."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..types import ResolvedRequest
from .base import expand_endpoint, extract_text_at, usage_sum

ANTHROPIC_VERSION = "2023-06-01"
SYSTEM_ACK = "Understood. I will follow those instructions."


class AnthropicProfile:
    name = "Anthropic"
    env_var = "ANTHROPIC_API_KEY"
    default_model = "claude-3-sonnet-20240229"
    default_endpoint: Optional[str] = "https://api.anthropic.com/v1/messages"

    def endpoint_for(self, request: ResolvedRequest) -> str:
        return expand_endpoint(request.endpoint, request.model)

    def headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    def _messages(self, request: ResolvedRequest) -> List[Dict[str, str]]:
        # System instructions go in as a user turn plus an acknowledgment.
        messages = []
        if request.system_prompt:
            messages.append({"role": "user", "content": request.system_prompt})
            messages.append({"role": "assistant", "content": SYSTEM_ACK})
        messages.append({"role": "user", "content": request.prompt})
        return messages

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "messages": self._messages(request),
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, ["content", 0, "text"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return usage_sum(data, ["usage", "input_tokens"], ["usage", "output_tokens"])
