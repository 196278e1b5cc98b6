"""Fixed provider registry."""

from __future__ import annotations

from typing import Dict, Optional

from .anthropic_provider import AnthropicProfile
from .azure_provider import AzureProfile
from .base import ProviderProfile, build_call
from .cohere_provider import CohereProfile
from .google_provider import GoogleProfile
from .huggingface_provider import HuggingFaceProfile
from .openai_provider import OpenAIProfile

PROFILES: Dict[str, ProviderProfile] = {
    profile.name: profile
    for profile in (
        OpenAIProfile(),
        AnthropicProfile(),
        GoogleProfile(),
        AzureProfile(),
        CohereProfile(),
        HuggingFaceProfile(),
    )
}


def canonical_provider(name: str) -> Optional[str]:
    """Maps a case-insensitive provider name to its registry key."""
    if not isinstance(name, str) or not name:
        return None
    wanted = name.strip().lower()
    for key in PROFILES:
        if key.lower() == wanted:
            return key
    return None


def get_profile(name: str) -> ProviderProfile:
    return PROFILES[name]


__all__ = ["PROFILES", "ProviderProfile", "build_call", "canonical_provider", "get_profile"]
