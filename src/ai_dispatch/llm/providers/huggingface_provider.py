"""HuggingFace Inference API profile."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..types import ResolvedRequest
from .base import bearer_headers, expand_endpoint, extract_text_at, flat_prompt


class HuggingFaceProfile:
    name = "HuggingFace"
    env_var = "HUGGINGFACE_API_KEY"
    default_model = "microsoft/DialoGPT-medium"
    default_endpoint: Optional[str] = "https://api-inference.huggingface.co/models/{model}"

    def endpoint_for(self, request: ResolvedRequest) -> str:
        return expand_endpoint(request.endpoint, request.model)

    def headers(self, api_key: str) -> Dict[str, str]:
        return bearer_headers(api_key)

    def build_payload(self, request: ResolvedRequest) -> Dict[str, Any]:
        return {
            "inputs": flat_prompt(request),
            "parameters": {
                "max_new_tokens": request.max_tokens,
                "temperature": request.temperature,
                "return_full_text": False,
            },
        }

    def extract_text(self, data: Any) -> str:
        return extract_text_at(self.name, data, [0, "generated_text"])

    def extract_usage(self, data: Any) -> Optional[int]:
        return None
