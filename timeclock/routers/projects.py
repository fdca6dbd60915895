from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.project import ProjectPayload, ProjectRead
from ..services import projects as project_service
from .auth import require_user

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("")
async def list_projects(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    rows = project_service.list_projects(db, user_id)
    return {"projects": [ProjectRead.model_validate(row).model_dump() for row in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(payload: ProjectPayload, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    project = project_service.create_project(db, user_id, payload.name)
    return {"message": "Project created", "project": ProjectRead.model_validate(project).model_dump()}


@router.put("/{project_id}")
async def rename_project(
    project_id: int,
    payload: ProjectPayload,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    project = project_service.rename_project(db, user_id, project_id, payload.name)
    return {"message": "Project updated", "project": ProjectRead.model_validate(project).model_dump()}


@router.delete("/{project_id}")
async def delete_project(project_id: int, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    project_service.delete_project(db, user_id, project_id)
    return {"message": "Project deleted"}
