# /promptforge/services/generation_service.py

r"""
This module defines the GenerationService, the orchestrator of the
prompt-to-project pipeline.

One generation runs inside the HTTP request that submitted it. The service
drives the state machine, calls the provider adapter once, extracts files from
the completion and yields GenerationEvents in this order:

    thinking -> [thinking_longer] -> generating -> file* -> complete
                                                        \-> error (any stage)

Each lifecycle event is yielded only after its status write. File rows are
buffered and written together with the `complete` status, so a failed or
abandoned generation never has persisted files, even if some `file` events
were already delivered.
"""

import asyncio
import logging
import time
import uuid
from typing import AsyncIterator, Callable, List, Optional

from fastapi import Depends

from ..core.config import THINKING_LONGER_THRESHOLD_MS
from ..models.generation_model import GenerationStatus, GeneratedFile
from . import prompt_library
from .ai_providers.base import ProviderAdapter
from .database_service import DatabaseService, get_db_service
from .file_extraction import extract_project_files
from .generation_events import (
    GenerationEvent,
    ThinkingEvent,
    ThinkingLongerEvent,
    GeneratingEvent,
    FileExtractedEvent,
    CompleteEvent,
    FailedEvent,
)
from .generation_state import GenerationStateMachine
from ..db.models.generation_models import utcnow

logger = logging.getLogger(__name__)


class GenerationService:
    def __init__(
        self,
        db: DatabaseService,
        clock: Callable[[], float] = time.monotonic,
        system_prompt: str = prompt_library.CODE_GENERATION_SYSTEM_PROMPT
    ):
        self.db = db
        self.clock = clock
        self.system_prompt = system_prompt

    def create_generation(self, project_id: str, user_id: str, prompt: str, model: Optional[str]):
        """Creates the `pending` generation row for a submission."""
        generation = self.db.create_generation({
            "id": f"gen_{uuid.uuid4().hex[:16]}",
            "project_id": project_id,
            "user_id": user_id,
            "prompt": prompt,
            "model": model or "openrouter",
            "status": GenerationStatus.PENDING.value,
            "generation_start_time": utcnow(),
        })
        logger.info(f"Created generation {generation.id} for project {project_id} (model: {generation.model})")
        return generation

    async def stream_generation(
        self,
        generation_id: str,
        prompt: str,
        provider: ProviderAdapter,
        model_hint: Optional[str] = None
    ) -> AsyncIterator[GenerationEvent]:
        """Runs the whole pipeline for one generation, yielding events as they happen."""
        state = GenerationStateMachine(self.db, generation_id)
        try:
            state.begin_thinking()
            yield ThinkingEvent(message=prompt_library.THINKING_MESSAGE)

            started = self.clock()
            completion = await provider.complete(prompt, self.system_prompt, model_hint)
            thinking_duration = round((self.clock() - started) * 1000)

            state.record_thinking_duration(thinking_duration)
            state.record_total_tokens(completion.total_tokens)
            logger.info(
                f"Generation {generation_id}: {provider.name} answered in {thinking_duration}ms "
                f"({completion.total_tokens or 'unknown'} tokens)"
            )
            if thinking_duration > THINKING_LONGER_THRESHOLD_MS:
                yield ThinkingLongerEvent(thinking_duration=thinking_duration)

            state.begin_generating()
            yield GeneratingEvent(message=prompt_library.GENERATING_MESSAGE)

            files: List[GeneratedFile] = extract_project_files(completion.text)
            for generated_file in files:
                yield FileExtractedEvent(
                    file=generated_file,
                    message=prompt_library.FILE_CREATED_MESSAGE.format(path=generated_file.path),
                )

            state.complete(files)
            logger.info(f"Generation {generation_id} complete with {len(files)} file(s)")
            yield CompleteEvent(total_files=len(files), thinking_duration=state.thinking_duration)

        except asyncio.CancelledError:
            logger.warning(f"Generation {generation_id} cancelled; client likely disconnected.")
            state.fail(prompt_library.ABORTED_MESSAGE)
            raise
        except Exception as e:
            message = str(e) or prompt_library.DEFAULT_ERROR_MESSAGE
            logger.error(f"Generation {generation_id} failed: {message}")
            state.fail(message)
            yield FailedEvent(message=message)
        finally:
            # Reached without a terminal state only when the consumer closed the stream early.
            if not state.is_terminal:
                logger.warning(f"Generation {generation_id} stream closed before a terminal event.")
                state.fail(prompt_library.ABORTED_MESSAGE)


def get_generation_service(db: DatabaseService = Depends(get_db_service)) -> GenerationService:
    return GenerationService(db)
