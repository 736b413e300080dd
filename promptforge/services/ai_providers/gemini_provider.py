# /promptforge/services/ai_providers/gemini_provider.py

import logging
from typing import Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from ...core.config import GEMINI_DEFAULT_MODEL, COMPLETION_TEMPERATURE, COMPLETION_MAX_TOKENS
from ...core.errors import ProviderError
from .base import ProviderAdapter, CompletionResult

logger = logging.getLogger(__name__)


class GeminiProvider(ProviderAdapter):
    """Google Gemini through the google-generativeai SDK."""
    name = "gemini"

    def __init__(self, api_key: str):
        genai.configure(api_key=api_key)

    @staticmethod
    def resolve_model(model_hint: Optional[str]) -> str:
        if model_hint and model_hint.startswith("gemini-"):
            return model_hint
        return GEMINI_DEFAULT_MODEL

    async def complete(self, prompt: str, system_prompt: str, model_hint: Optional[str] = None) -> CompletionResult:
        model_name = self.resolve_model(model_hint)
        logger.info(f"Calling gemini ({model_name})")
        try:
            model = genai.GenerativeModel(model_name, system_instruction=system_prompt)
            config = GenerationConfig(temperature=COMPLETION_TEMPERATURE, max_output_tokens=COMPLETION_MAX_TOKENS)
            response = await model.generate_content_async(prompt, generation_config=config)
        except Exception as e:
            logger.error(f"ERROR in Gemini completion: {e}")
            raise ProviderError(self.name, str(e)) from e

        if not response.parts:
            raise ProviderError(self.name, "AI model returned an empty response.")

        total_tokens = None
        usage = getattr(response, "usage_metadata", None)
        if usage:
            total_tokens = getattr(usage, "total_token_count", None)
        return CompletionResult(text=response.text, total_tokens=total_tokens)
