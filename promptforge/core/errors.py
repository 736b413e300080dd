# /promptforge/core/errors.py

"""
The exception taxonomy of the generation pipeline.

Only ProviderError and unexpected exceptions turn a running generation into a
`failed` one. ConfigurationError is raised before a generation exists, and
PersistenceError on plain status writes is logged by the state machine rather
than propagated.
"""

from typing import Optional


class ForgeError(Exception):
    """Base class for all PromptForge errors."""


class ConfigurationError(ForgeError):
    """A required setting (usually a provider credential) is missing."""


class ProviderError(ForgeError):
    """The upstream completion call failed or returned an unusable payload."""

    def __init__(self, provider: str, reason: str, status_code: Optional[int] = None):
        self.provider = provider
        self.reason = reason
        self.status_code = status_code
        status = f" {status_code}" if status_code is not None else ""
        super().__init__(f"{provider} API error{status}: {reason}")


class PersistenceError(ForgeError):
    """A write to the generation store could not be committed."""


class InvalidTransitionError(ForgeError):
    """A generation was asked to move to a state it cannot reach."""


class NothingToArchiveError(ForgeError):
    """The project has no files from a completed generation."""
