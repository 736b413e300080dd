# /promptforge/services/generation_state.py

r"""
The lifecycle of one generation attempt:

    pending -> thinking -> generating -> complete
         \_________\___________\______-> failed

Transitions only move forward and `complete`/`failed` absorb everything after
them. Every transition is written through the GenerationStore before the
caller emits the matching stream event.

Plain status writes are lenient: a PersistenceError is logged and the
in-memory state still advances, so a stale row is possible. The final write
into `complete` is strict because it carries the file rows.
"""

import logging
from typing import Dict, List, Optional

from ..core.errors import InvalidTransitionError, PersistenceError
from ..db.models.generation_models import utcnow
from ..models.generation_model import GenerationStatus, GeneratedFile
from .database_helpers.stores import GenerationStore

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    GenerationStatus.PENDING: {GenerationStatus.THINKING, GenerationStatus.FAILED},
    GenerationStatus.THINKING: {GenerationStatus.GENERATING, GenerationStatus.FAILED},
    GenerationStatus.GENERATING: {GenerationStatus.COMPLETE, GenerationStatus.FAILED},
    GenerationStatus.COMPLETE: set(),
    GenerationStatus.FAILED: set(),
}


class GenerationStateMachine:
    def __init__(self, store: GenerationStore, generation_id: str, status: GenerationStatus = GenerationStatus.PENDING):
        self.store = store
        self.generation_id = generation_id
        self._status = GenerationStatus(status)
        self.thinking_duration: Optional[int] = None
        self.total_tokens: Optional[int] = None
        self.error_message: Optional[str] = None

    @property
    def status(self) -> GenerationStatus:
        return self._status

    @property
    def is_terminal(self) -> bool:
        return self._status.is_terminal

    def _check(self, target: GenerationStatus):
        if target not in ALLOWED_TRANSITIONS[self._status]:
            raise InvalidTransitionError(
                f"Generation {self.generation_id} cannot move from '{self._status.value}' to '{target.value}'."
            )

    def _persist(self, fields: Dict):
        try:
            self.store.update_generation(self.generation_id, fields)
        except PersistenceError as e:
            logger.warning(f"Status write for generation {self.generation_id} was not saved: {e}")

    # --- Transitions ---

    def begin_thinking(self):
        self._check(GenerationStatus.THINKING)
        self._persist({"status": GenerationStatus.THINKING.value})
        self._status = GenerationStatus.THINKING

    def record_thinking_duration(self, duration_ms: int):
        """Stores the provider wait time. May only happen once, while thinking."""
        if self._status is not GenerationStatus.THINKING:
            raise InvalidTransitionError(f"Thinking duration can only be recorded while thinking (status '{self._status.value}').")
        if self.thinking_duration is not None:
            raise InvalidTransitionError(f"Thinking duration already recorded for generation {self.generation_id}.")
        self.thinking_duration = int(duration_ms)
        self._persist({"thinking_duration": self.thinking_duration})

    def record_total_tokens(self, total_tokens: Optional[int]):
        if total_tokens is None:
            return
        if self.total_tokens is not None:
            raise InvalidTransitionError(f"Token count already recorded for generation {self.generation_id}.")
        self.total_tokens = int(total_tokens)

    def begin_generating(self):
        self._check(GenerationStatus.GENERATING)
        self._persist({"status": GenerationStatus.GENERATING.value})
        self._status = GenerationStatus.GENERATING

    def complete(self, files: List[GeneratedFile]):
        """
        Writes every file row and the `complete` status in one commit.
        A PersistenceError propagates so the pipeline can fail the generation instead.
        """
        self._check(GenerationStatus.COMPLETE)
        fields = {
            "status": GenerationStatus.COMPLETE.value,
            "thinking_duration": self.thinking_duration,
            "generation_end_time": utcnow(),
        }
        if self.total_tokens is not None:
            fields["total_tokens"] = self.total_tokens
        file_rows = [
            {"file_path": f.path, "file_content": f.content, "file_type": f.type}
            for f in files
        ]
        self.store.complete_generation(self.generation_id, file_rows, fields)
        self._status = GenerationStatus.COMPLETE

    def fail(self, message: str) -> bool:
        """Moves into `failed`. Returns False (and writes nothing) if already terminal."""
        if self.is_terminal:
            logger.info(f"Ignoring failure for generation {self.generation_id}: already '{self._status.value}'.")
            return False
        self.error_message = message or "Generation failed"
        self._persist({
            "status": GenerationStatus.FAILED.value,
            "error_message": self.error_message,
            "generation_end_time": utcnow(),
        })
        self._status = GenerationStatus.FAILED
        return True
