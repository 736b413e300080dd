# /promptforge/core/config.py

"""
Central configuration for the PromptForge backend.

Values come from the environment (a local `.env` file is honoured through
python-dotenv). Provider credentials are read at call time rather than at
import time, so a missing key only fails the request that needs it.
"""

import os
from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./promptforge.db")

# --- Logging & HTTP ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]
APP_URL = os.getenv("APP_URL", "http://localhost:3000")

# --- Generation pipeline ---
THINKING_LONGER_THRESHOLD_MS = 3000
COMPLETION_TEMPERATURE = 0.7
COMPLETION_MAX_TOKENS = 8000
PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "300"))

# --- Providers ---
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_DEFAULT_MODEL = os.getenv("OPENROUTER_MODEL", "minimax/minimax-m2")
MINIMAX_API_URL = "https://api.minimax.chat/v1/text/chatcompletion_v2"
MINIMAX_MODEL = "abab6.5s-chat"
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"

PROVIDER_CREDENTIALS = {
    "openrouter": "OPENROUTER_API_KEY",
    "minimax": "MINIMAX_API_KEY",
    "gemini": "GOOGLE_API_KEY",
}


def get_provider_api_key(provider: str) -> str:
    """Returns the credential for a provider or raises ConfigurationError."""
    env_var = PROVIDER_CREDENTIALS[provider]
    api_key = os.getenv(env_var)
    if not api_key:
        raise ConfigurationError(f"{env_var} not configured")
    return api_key
