"""Google Gemini REST profile."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from ..types import ResolvedRequest
from .base import expand_endpoint, extract_text_at, usage_sum

SYSTEM_ACK = "Understood. I will follow those instructions."


def _turn(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


class GoogleProfile:
    name = "Google"
    env_var = "GOOGLE_AI_API_KEY"
    default_model = "gemini-pro"
    default_endpoint: Optional[str] = (
        "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    )

    def endpoint_for(self, request: ResolvedRequest) -> str:
        # The key is sent as a query parameter, not a header.
        url = expand_endpoint(request.endpoint, request.model)
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode({'key': request.api_key})}"

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _contents(self, request: ResolvedRequest) -> List[Dict[str, Any]]:
        contents = []
        if request.system_prompt:
            contents.append(_turn("user", request.system_prompt))
            contents.append(_turn("model", SYSTEM_ACK))
        contents.append(_turn("user", request.prompt))
        return contents

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "contents": self._contents(request),
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
            },
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, ["candidates", 0, "content", "parts", 0, "text"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return usage_sum(data, ["usageMetadata", "totalTokenCount"])
