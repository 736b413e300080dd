# /promptforge/services/ai_providers/base.py

"""
The single call contract every completion provider implements.

One call, no retries, no partial results: an adapter either returns the whole
completion text or raises ProviderError, which aborts the generation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...core.errors import ProviderError


@dataclass
class CompletionResult:
    text: str
    total_tokens: Optional[int] = None


class ProviderAdapter(ABC):
    name: str = "provider"

    @abstractmethod
    async def complete(self, prompt: str, system_prompt: str, model_hint: Optional[str] = None) -> CompletionResult:
        ...


def parse_chat_completion(provider: str, data: Any) -> CompletionResult:
    """Reads `choices[0].message.content` (and usage) from an OpenAI-style payload."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise ProviderError(provider, "Malformed completion payload: no choices[0].message.content")
    if not isinstance(content, str):
        raise ProviderError(provider, "Malformed completion payload: content is not text")

    usage: Dict = data.get("usage") or {}
    total_tokens = usage.get("total_tokens")
    return CompletionResult(text=content, total_tokens=int(total_tokens) if total_tokens is not None else None)
