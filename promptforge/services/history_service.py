# /promptforge/services/history_service.py

"""
Read-side business logic over persisted generations: a project's generation
history, single-generation detail, per-user statistics, and the project's
current file set (the files of its latest complete generation).

Every function takes the already-authorized project or user; ownership checks
live in the routers.
"""

import logging
from typing import List, Optional

from .database_service import DatabaseService
from ..models.generation_model import (
    GeneratedFile,
    GenerationRecord,
    GenerationDetail,
    GenerationFileRecord,
    GenerationListResponse,
    GenerationStats,
)

logger = logging.getLogger(__name__)


def get_latest_project_files(db: DatabaseService, project_id: str) -> List[GeneratedFile]:
    """Files of the most recently created `complete` generation, [] if there is none."""
    return [
        GeneratedFile(path=row.file_path, content=row.file_content, type=row.file_type)
        for row in db.get_latest_project_files(project_id)
    ]


def get_project_history(db: DatabaseService, project_id: str, limit: int = 50) -> GenerationListResponse:
    records = []
    for generation in db.get_project_generations(project_id, limit):
        try:
            records.append(GenerationRecord.model_validate(generation))
        except Exception as e:
            logger.warning(f"Skipping corrupted generation record: {getattr(generation, 'id', 'N/A')}. Error: {e}")
            continue
    return GenerationListResponse(results=records, total=len(records))


def get_generation_detail(db: DatabaseService, generation_id: str, user_id: str) -> Optional[GenerationDetail]:
    """Returns the generation with its persisted files, or None if it is missing or not the user's."""
    generation = db.get_generation_by_id(generation_id)
    if not generation or generation.user_id != user_id:
        return None
    record = GenerationRecord.model_validate(generation)
    files = [GenerationFileRecord.model_validate(row) for row in db.get_generation_files(generation_id)]
    return GenerationDetail(**record.model_dump(), files=files)


def get_generation_stats(db: DatabaseService, user_id: str) -> GenerationStats:
    return GenerationStats(**db.get_generation_stats(user_id))
