# /promptforge/routers/download_router.py

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..core.deps import get_current_active_user
from ..core.errors import NothingToArchiveError
from ..db.models.project_models import User
from ..services import history_service, zip_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/{project_id}",
    summary="Download a Project as a ZIP Archive",
    response_class=Response,
    responses={
        200: {"content": {zip_service.ARCHIVE_MEDIA_TYPE: {}}, "description": "The project archive"},
        404: {"description": "Project not found, or it has no files to download"},
    }
)
def download_project(
    project_id: str,
    db: DatabaseService = Depends(get_db_service),
    current_user: User = Depends(get_current_active_user)
):
    project = db.get_project_by_id(project_id)
    if not project or project.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    files = history_service.get_latest_project_files(db=db, project_id=project_id)
    try:
        archive = zip_service.build_project_archive(project.name, files)
    except NothingToArchiveError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(
        content=archive.content,
        media_type=zip_service.ARCHIVE_MEDIA_TYPE,
        headers={"Content-Disposition": archive.content_disposition},
    )
