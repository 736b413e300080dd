# /promptforge/db/models/generation_models.py

"""
ORM models for generation attempts and the files they produced.

`generation_end_time` is only ever set together with a terminal status, and
file rows are only written in the same commit that marks a generation
`complete` (see GenerationRepositorySQL.complete_generation).
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Generation(Base):
    id = Column(String, primary_key=True, index=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    prompt = Column(Text, nullable=False)
    model = Column(String, nullable=True)
    status = Column(String, index=True, nullable=False, default="pending")
    thinking_duration = Column(Integer, nullable=True)
    generation_start_time = Column(DateTime(timezone=True), nullable=True)
    generation_end_time = Column(DateTime(timezone=True), nullable=True)
    total_tokens = Column(Integer, nullable=True)
    error_message = Column(Text, nullable=True)
    # Python-side default keeps sub-second ordering for "latest complete generation".
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)

    project = relationship("Project", back_populates="generations")
    files = relationship(
        "GeneratedFile",
        back_populates="generation",
        cascade="all, delete-orphan",
        order_by="GeneratedFile.file_path, GeneratedFile.id",
    )


class GeneratedFile(Base):
    __tablename__ = "generation_files" # Override automatic pluralization
    id = Column(Integer, primary_key=True, autoincrement=True)
    generation_id = Column(String, ForeignKey("generations.id"), nullable=False, index=True)
    file_path = Column(String, nullable=False)
    file_content = Column(Text, nullable=False)
    file_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    generation = relationship("Generation", back_populates="files")
