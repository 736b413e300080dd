# /promptforge/services/ai_providers/openrouter_provider.py

from typing import Dict, Optional

from ...core.config import OPENROUTER_API_URL, OPENROUTER_DEFAULT_MODEL, APP_URL
from .http_chat_provider import HTTPChatProvider


class OpenRouterProvider(HTTPChatProvider):
    """OpenRouter fans out to many hosted models; `model_hint` is the OpenRouter slug."""
    name = "openrouter"
    api_url = OPENROUTER_API_URL

    def build_headers(self) -> Dict[str, str]:
        headers = super().build_headers()
        headers["HTTP-Referer"] = APP_URL
        headers["X-Title"] = "PromptForge"
        return headers

    def resolve_model(self, model_hint: Optional[str]) -> str:
        return model_hint or OPENROUTER_DEFAULT_MODEL
