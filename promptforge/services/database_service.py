# /promptforge/services/database_service.py

from typing import List, Dict, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from ..db.database import get_db

# --- Repository Imports ---
from .database_helpers.generation_repository_sql import GenerationRepositorySQL
from .database_helpers.project_repository_sql import ProjectRepositorySQL
from .database_helpers.stores import GenerationStore, ProjectStore


class DatabaseService(GenerationStore, ProjectStore):
    """Single facade over the SQL repositories; routers and services only talk to this."""

    def __init__(self, db_session: Session):
        self.project_repo = ProjectRepositorySQL(db_session)
        self.generation_repo = GenerationRepositorySQL(db_session)

    # --- USER & PROJECT METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.project_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.project_repo.get_user_by_email(email)
    def add_user(self, user_record: Dict): return self.project_repo.add_user(user_record)
    def get_project_by_id(self, project_id: str): return self.project_repo.get_project_by_id(project_id)
    def add_project(self, project_record: Dict): return self.project_repo.add_project(project_record)

    # --- GENERATION METHODS (DELEGATED) ---
    def create_generation(self, record: Dict): return self.generation_repo.add_generation(record)
    def get_generation_by_id(self, generation_id: str): return self.generation_repo.get_generation_by_id(generation_id)
    def update_generation(self, generation_id: str, fields: Dict): return self.generation_repo.update_generation(generation_id, fields)
    def complete_generation(self, generation_id: str, files: List[Dict], fields: Dict):
        return self.generation_repo.complete_generation(generation_id, files, fields)
    def get_project_generations(self, project_id: str, limit: int = 50) -> List: return self.generation_repo.get_project_generations(project_id, limit)
    def get_generation_stats(self, user_id: str) -> Dict: return self.generation_repo.get_generation_stats(user_id)

    # --- GENERATED FILE METHODS (DELEGATED) ---
    def get_generation_files(self, generation_id: str) -> List: return self.generation_repo.get_generation_files(generation_id)
    def get_latest_project_files(self, project_id: str) -> List: return self.generation_repo.get_latest_project_files(project_id)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
