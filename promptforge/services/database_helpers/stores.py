# /promptforge/services/database_helpers/stores.py

"""
Abstract storage capabilities the generation pipeline depends on.

The orchestrator and state machine only see these interfaces; the SQL
repositories (behind DatabaseService) are the production implementation.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any


class GenerationStore(ABC):

    @abstractmethod
    def create_generation(self, record: Dict) -> Any: ...

    @abstractmethod
    def update_generation(self, generation_id: str, fields: Dict) -> Optional[Any]:
        """Applies `fields` to one generation in a single commit. Raises PersistenceError."""

    @abstractmethod
    def complete_generation(self, generation_id: str, files: List[Dict], fields: Dict) -> Optional[Any]:
        """Inserts every file row and applies `fields` in ONE commit. Raises PersistenceError."""

    @abstractmethod
    def get_generation_by_id(self, generation_id: str) -> Optional[Any]: ...

    @abstractmethod
    def get_generation_files(self, generation_id: str) -> List[Any]: ...

    @abstractmethod
    def get_project_generations(self, project_id: str, limit: int = 50) -> List[Any]: ...

    @abstractmethod
    def get_latest_project_files(self, project_id: str) -> List[Any]: ...


class ProjectStore(ABC):

    @abstractmethod
    def get_project_by_id(self, project_id: str) -> Optional[Any]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[Any]: ...
