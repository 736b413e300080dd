# /promptforge/routers/generation_router.py

"""
The generation submission endpoint.

Everything that can be rejected is rejected before the stream opens, as a
plain JSON error: 401 without a caller, 400 without projectId/prompt, 404 for
a project the caller does not own, 500 when the selected provider has no
credential. After that the response is a `text/event-stream` that always ends
with exactly one `complete` or `error` event.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from ..core.deps import get_current_active_user
from ..core.errors import ConfigurationError
from ..db.models.project_models import User
from ..models.generation_model import GenerateCodeRequest, ModelOption
from ..services.ai_providers.registry import AVAILABLE_MODELS, resolve_provider
from ..services.database_service import DatabaseService, get_db_service
from ..services.event_stream import SSE_HEADERS, SSE_MEDIA_TYPE, encode_event_stream
from ..services.generation_service import GenerationService, get_generation_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate-code",
    summary="Generate a Project from a Prompt (streamed)",
    description="Streams generation progress as Server-Sent Events: thinking, thinking_longer, generating, file, complete or error.",
    responses={
        200: {"content": {SSE_MEDIA_TYPE: {}}, "description": "Event stream"},
        400: {"description": "Missing projectId or prompt"},
        401: {"description": "No authenticated caller"},
        404: {"description": "Project not found"},
    }
)
async def generate_code(
    request: GenerateCodeRequest,
    db: DatabaseService = Depends(get_db_service),
    generation_svc: GenerationService = Depends(get_generation_service),
    current_user: User = Depends(get_current_active_user)
):
    if not request.projectId or not request.prompt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project ID and prompt are required",
        )

    project = db.get_project_by_id(request.projectId)
    if not project or project.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    try:
        provider, model_hint = resolve_provider(request.model)
        generation = generation_svc.create_generation(
            project_id=project.id,
            user_id=current_user.id,
            prompt=request.prompt,
            model=request.model,
        )
    except ConfigurationError as e:
        logger.error(f"Generation rejected, provider not configured: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"ERROR starting generation for project {project.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate code",
        )

    events = generation_svc.stream_generation(generation.id, request.prompt, provider, model_hint)
    return StreamingResponse(
        encode_event_stream(events),
        media_type=SSE_MEDIA_TYPE,
        headers=SSE_HEADERS,
    )


@router.get(
    "/models",
    response_model=List[ModelOption],
    summary="List Selectable Models"
)
def list_models():
    return AVAILABLE_MODELS
