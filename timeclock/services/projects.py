from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ..models import ActiveSession, Project, WorkSession
from .errors import Conflict, InvalidInput, NotFound

logger = logging.getLogger(__name__)


def list_projects(db: Session, user_id: int) -> list[Project]:
    return db.query(Project).filter(Project.user_id == user_id).order_by(Project.name.asc()).all()


def get_project(db: Session, user_id: int, project_id: int) -> Project:
    project = (
        db.query(Project)
        .filter(Project.id == project_id, Project.user_id == user_id)
        .one_or_none()
    )
    if not project:
        raise NotFound("Project not found")
    return project


def create_project(db: Session, user_id: int, name: str | None) -> Project:
    trimmed = _clean_name(name)
    if _name_taken(db, user_id, trimmed):
        raise Conflict("Project already exists")
    project = Project(user_id=user_id, name=trimmed)
    db.add(project)
    db.commit()
    db.refresh(project)
    logger.info("User %s created project %s", user_id, project.id)
    return project


def rename_project(db: Session, user_id: int, project_id: int, name: str | None) -> Project:
    trimmed = _clean_name(name)
    project = get_project(db, user_id, project_id)
    if _name_taken(db, user_id, trimmed, exclude_id=project.id):
        raise Conflict("Project name already exists")
    project.name = trimmed
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, user_id: int, project_id: int) -> None:
    project = get_project(db, user_id, project_id)
    # Sessions outlive their project; they fall into the "No Project" bucket.
    db.query(WorkSession).filter(WorkSession.project_id == project.id).update(
        {"project_id": None}, synchronize_session=False
    )
    db.query(ActiveSession).filter(ActiveSession.project_id == project.id).update(
        {"project_id": None}, synchronize_session=False
    )
    db.delete(project)
    db.commit()
    logger.info("User %s deleted project %s", user_id, project_id)


def _clean_name(name: str | None) -> str:
    trimmed = (name or "").strip()
    if not trimmed:
        raise InvalidInput("Project name is required")
    return trimmed


def _name_taken(db: Session, user_id: int, name: str, exclude_id: int | None = None) -> bool:
    query = db.query(Project.id).filter(Project.user_id == user_id, Project.name == name)
    if exclude_id is not None:
        query = query.filter(Project.id != exclude_id)
    return query.first() is not None
