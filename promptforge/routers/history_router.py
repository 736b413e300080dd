# /promptforge/routers/history_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.deps import get_current_active_user
from ..db.models.project_models import User
from ..models import generation_model
from ..services import history_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _get_owned_project(project_id: str, db: DatabaseService, user: User):
    project = db.get_project_by_id(project_id)
    if not project or project.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get(
    "/generations/stats",
    response_model=generation_model.GenerationStats,
    summary="Get Generation Statistics"
)
def get_generation_stats(
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_active_user)
):
    """Totals, success/failure counts and the average thinking time for the caller."""
    return history_service.get_generation_stats(db=db, user_id=current_user.id)


@router.get(
    "/generations/{generation_id}",
    response_model=generation_model.GenerationDetail,
    summary="Get a Generation with its Files",
    responses={404: {"description": "Generation not found"}}
)
def get_generation(
    generation_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_active_user)
):
    detail = history_service.get_generation_detail(db=db, generation_id=generation_id, user_id=current_user.id)
    if not detail:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Generation with ID {generation_id} not found.",
        )
    return detail


@router.get(
    "/projects/{project_id}/generations",
    response_model=generation_model.GenerationListResponse,
    summary="Get a Project's Generation History"
)
def get_project_generations(
    project_id: str,
    limit: int = Query(50, ge=1, le=200),
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_active_user)
):
    _get_owned_project(project_id, db, current_user)
    return history_service.get_project_history(db=db, project_id=project_id, limit=limit)


@router.get(
    "/projects/{project_id}/files",
    response_model=generation_model.ProjectFilesResponse,
    summary="Get a Project's Current Files",
    description="Files of the most recently created complete generation; empty if there is none."
)
def get_project_files(
    project_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_active_user)
):
    _get_owned_project(project_id, db, current_user)
    files = history_service.get_latest_project_files(db=db, project_id=project_id)
    return generation_model.ProjectFilesResponse(projectId=project_id, files=files, total=len(files))
