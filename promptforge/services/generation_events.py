# /promptforge/services/generation_events.py

"""
The event algebra produced by the generation pipeline.

Events are transport-agnostic Pydantic models; event_stream.py frames them for
Server-Sent Events. Field names are snake_case in Python and camelCase on the
wire (`to_wire()`).
"""

from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from ..models.generation_model import GeneratedFile


class _Event(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ThinkingEvent(_Event):
    type: Literal["thinking"] = "thinking"
    message: Optional[str] = None


class ThinkingLongerEvent(_Event):
    type: Literal["thinking_longer"] = "thinking_longer"
    thinking_duration: int = Field(..., alias="thinkingDuration")


class GeneratingEvent(_Event):
    type: Literal["generating"] = "generating"
    message: Optional[str] = None


class FileExtractedEvent(_Event):
    type: Literal["file"] = "file"
    file: GeneratedFile
    message: Optional[str] = None


class CompleteEvent(_Event):
    type: Literal["complete"] = "complete"
    total_files: int = Field(..., alias="totalFiles")
    thinking_duration: Optional[int] = Field(None, alias="thinkingDuration")


class FailedEvent(_Event):
    type: Literal["error"] = "error"
    message: str


GenerationEvent = Union[
    ThinkingEvent,
    ThinkingLongerEvent,
    GeneratingEvent,
    FileExtractedEvent,
    CompleteEvent,
    FailedEvent,
]

TERMINAL_EVENT_TYPES = ("complete", "error")
