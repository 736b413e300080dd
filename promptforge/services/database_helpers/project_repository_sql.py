# /promptforge/services/database_helpers/project_repository_sql.py

from typing import Dict, Optional
from sqlalchemy.orm import Session

from ...db.models.project_models import User, Project


class ProjectRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    # --- Project Methods ---
    def get_project_by_id(self, project_id: str) -> Optional[Project]:
        return self.db.query(Project).filter(Project.id == project_id).first()

    def add_project(self, record: Dict) -> Project:
        new_project = Project(**record)
        self.db.add(new_project)
        self.db.commit()
        self.db.refresh(new_project)
        return new_project
