# /promptforge/services/ai_providers/http_chat_provider.py

"""
Shared transport for providers exposing an OpenAI-compatible
`/chat/completions` endpoint over plain HTTPS.
"""

import logging
from abc import abstractmethod
from typing import Dict, Optional

import httpx

from ...core.config import PROVIDER_TIMEOUT_SECONDS, COMPLETION_TEMPERATURE, COMPLETION_MAX_TOKENS
from ...core.errors import ProviderError
from .base import ProviderAdapter, CompletionResult, parse_chat_completion

logger = logging.getLogger(__name__)


class HTTPChatProvider(ProviderAdapter):
    api_url: str = ""

    def __init__(
        self,
        api_key: str,
        timeout: float = PROVIDER_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.timeout = timeout
        # Tests inject an httpx.MockTransport here.
        self.transport = transport

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def build_payload(self, prompt: str, system_prompt: str, model_hint: Optional[str]) -> Dict:
        return {
            "model": self.resolve_model(model_hint),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": COMPLETION_TEMPERATURE,
            "max_tokens": COMPLETION_MAX_TOKENS,
        }

    @abstractmethod
    def resolve_model(self, model_hint: Optional[str]) -> str: ...

    async def complete(self, prompt: str, system_prompt: str, model_hint: Optional[str] = None) -> CompletionResult:
        payload = self.build_payload(prompt, system_prompt, model_hint)
        logger.info(f"Calling {self.name} ({payload['model']}) with timeout {self.timeout}s")

        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=self.build_headers())
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e}")
            raise ProviderError(self.name, f"Request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"{self.name} returned {response.status_code}: {response.text[:500]}")
            raise ProviderError(
                self.name,
                f"{response.reason_phrase} - {response.text}".strip(" -"),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, "Response body is not valid JSON", status_code=response.status_code) from e

        return parse_chat_completion(self.name, data)
