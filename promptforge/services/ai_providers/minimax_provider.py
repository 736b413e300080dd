# /promptforge/services/ai_providers/minimax_provider.py

from typing import Dict, Optional

from ...core.config import MINIMAX_API_URL, MINIMAX_MODEL
from .http_chat_provider import HTTPChatProvider


class MiniMaxProvider(HTTPChatProvider):
    name = "minimax"
    api_url = MINIMAX_API_URL

    def resolve_model(self, model_hint: Optional[str]) -> str:
        # MiniMax serves a single chat model; the hint only selects the provider.
        return MINIMAX_MODEL

    def build_payload(self, prompt: str, system_prompt: str, model_hint: Optional[str]) -> Dict:
        payload = super().build_payload(prompt, system_prompt, model_hint)
        payload["stream"] = False
        return payload
