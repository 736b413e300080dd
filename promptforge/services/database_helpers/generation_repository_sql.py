# /promptforge/services/database_helpers/generation_repository_sql.py

"""
Raw SQLAlchemy queries for the `generations` and `generation_files` tables.

Every write is a single commit. On failure the session is rolled back and a
PersistenceError is raised, so callers never see a half-applied write.
"""

from typing import List, Dict, Optional
from sqlalchemy import func, case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...core.errors import PersistenceError
from ...db.models.generation_models import Generation, GeneratedFile

COMPLETE = "complete"
FAILED = "failed"


class GenerationRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, action: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to {action}: {e}") from e

    # --- Generation Methods ---
    def add_generation(self, record: Dict) -> Generation:
        """Creates a new Generation record in the database from a dictionary."""
        new_generation = Generation(**record)
        self.db.add(new_generation)
        self._commit("create generation")
        self.db.refresh(new_generation)
        return new_generation

    def get_generation_by_id(self, generation_id: str) -> Optional[Generation]:
        return self.db.query(Generation).filter(Generation.id == generation_id).first()

    def update_generation(self, generation_id: str, fields: Dict) -> Optional[Generation]:
        generation = self.get_generation_by_id(generation_id)
        if not generation:
            return None
        for key, value in fields.items():
            setattr(generation, key, value)
        self._commit(f"update generation {generation_id}")
        return generation

    def complete_generation(self, generation_id: str, files: List[Dict], fields: Dict) -> Optional[Generation]:
        """Bulk-inserts the file rows and marks the generation finished in one transaction."""
        generation = self.get_generation_by_id(generation_id)
        if not generation:
            return None
        self.db.add_all(GeneratedFile(generation_id=generation_id, **file_record) for file_record in files)
        for key, value in fields.items():
            setattr(generation, key, value)
        self._commit(f"persist files for generation {generation_id}")
        return generation

    def get_project_generations(self, project_id: str, limit: int = 50) -> List[Generation]:
        """Retrieves a project's generations, most recent first."""
        return (
            self.db.query(Generation)
            .filter(Generation.project_id == project_id)
            .order_by(Generation.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_latest_complete_generation(self, project_id: str) -> Optional[Generation]:
        return (
            self.db.query(Generation)
            .filter(Generation.project_id == project_id, Generation.status == COMPLETE)
            .order_by(Generation.created_at.desc())
            .first()
        )

    def get_generation_stats(self, user_id: str) -> Dict:
        row = (
            self.db.query(
                func.count(Generation.id),
                func.count(case((Generation.status == COMPLETE, 1))),
                func.count(case((Generation.status == FAILED, 1))),
                func.avg(Generation.thinking_duration),
            )
            .filter(Generation.user_id == user_id)
            .one()
        )
        total, successful, failed, avg_thinking = row
        return {
            "total": int(total or 0),
            "successful": int(successful or 0),
            "failed": int(failed or 0),
            "avgThinkingTime": float(avg_thinking or 0),
        }

    # --- Generated File Methods ---
    def get_generation_files(self, generation_id: str) -> List[GeneratedFile]:
        return (
            self.db.query(GeneratedFile)
            .filter(GeneratedFile.generation_id == generation_id)
            .order_by(GeneratedFile.file_path.asc(), GeneratedFile.id.asc())
            .all()
        )

    def get_latest_project_files(self, project_id: str) -> List[GeneratedFile]:
        """Files of the most recently created `complete` generation, or [] if there is none."""
        latest = self.get_latest_complete_generation(project_id)
        if not latest:
            return []
        return self.get_generation_files(latest.id)
