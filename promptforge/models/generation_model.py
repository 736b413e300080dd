# /promptforge/models/generation_model.py

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
from enum import Enum


class GenerationStatus(str, Enum):
    PENDING = "pending"
    THINKING = "thinking"
    GENERATING = "generating"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationStatus.COMPLETE, GenerationStatus.FAILED)


class GenerateCodeRequest(BaseModel):
    """
    Body of POST /api/generate-code. Every field is optional at the schema level
    so the router can answer a missing projectId or prompt with a plain 400.
    """
    projectId: Optional[str] = None
    prompt: Optional[str] = None
    model: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "projectId": "proj_3f9c2a1b",
                "prompt": "A todo app with drag and drop reordering",
                "model": "anthropic/claude-3.5-sonnet"
            }
        }
    )


class GeneratedFile(BaseModel):
    """One file extracted from a completion: the unit streamed and persisted."""
    path: str
    content: str
    type: Optional[str] = None


class GenerationFileRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    file_path: str
    file_content: str
    file_type: Optional[str] = None
    created_at: Optional[datetime] = None


class GenerationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    user_id: str
    prompt: str
    model: Optional[str] = None
    status: GenerationStatus
    thinking_duration: Optional[int] = None
    generation_start_time: Optional[datetime] = None
    generation_end_time: Optional[datetime] = None
    total_tokens: Optional[int] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None


class GenerationDetail(GenerationRecord):
    files: List[GenerationFileRecord] = Field(default_factory=list)


class GenerationListResponse(BaseModel):
    results: List[GenerationRecord]
    total: int


class GenerationStats(BaseModel):
    total: int
    successful: int
    failed: int
    avgThinkingTime: float


class ProjectFilesResponse(BaseModel):
    projectId: str
    files: List[GeneratedFile]
    total: int


class ModelOption(BaseModel):
    id: str
    name: str
    provider: str
