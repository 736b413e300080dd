# /promptforge/services/ai_providers/registry.py

"""
Maps the caller's `model` value onto a provider adapter.

The value is passed through untouched from the request: `minimax` and
`gemini`/`gemini-*` pick those providers, an OpenRouter slug (anything with a
`/`) is forwarded to OpenRouter, and everything else uses OpenRouter's
configured default model.
"""

from typing import List, Optional, Tuple

from ...core.config import get_provider_api_key
from ...models.generation_model import ModelOption
from .base import ProviderAdapter
from .openrouter_provider import OpenRouterProvider
from .minimax_provider import MiniMaxProvider
from .gemini_provider import GeminiProvider

AVAILABLE_MODELS: List[ModelOption] = [
    ModelOption(id="anthropic/claude-3.5-sonnet", name="Claude 3.5 Sonnet", provider="Anthropic"),
    ModelOption(id="openai/gpt-4-turbo", name="GPT-4 Turbo", provider="OpenAI"),
    ModelOption(id="openai/gpt-4o", name="GPT-4o", provider="OpenAI"),
    ModelOption(id="google/gemini-pro-1.5", name="Gemini Pro 1.5", provider="Google"),
    ModelOption(id="meta-llama/llama-3.1-70b-instruct", name="Llama 3.1 70B", provider="Meta"),
    ModelOption(id="minimax", name="MiniMax abab6.5s", provider="MiniMax"),
    ModelOption(id="gemini-2.5-flash", name="Gemini 2.5 Flash (direct)", provider="Google"),
]


def provider_name_for_model(model: Optional[str]) -> str:
    if model == "minimax":
        return "minimax"
    if model and (model == "gemini" or model.startswith("gemini-")):
        return "gemini"
    return "openrouter"


def resolve_provider(model: Optional[str]) -> Tuple[ProviderAdapter, Optional[str]]:
    """
    Returns the adapter and the model hint to pass to it.
    Raises ConfigurationError when the selected provider has no credential.
    """
    provider_name = provider_name_for_model(model)
    api_key = get_provider_api_key(provider_name)

    if provider_name == "minimax":
        return MiniMaxProvider(api_key), None
    if provider_name == "gemini":
        return GeminiProvider(api_key), model
    model_hint = model if model and "/" in model else None
    return OpenRouterProvider(api_key), model_hint
