import uuid
from typing import Any

from fastapi import APIRouter, HTTPException

from app import crud
from app.api.deps import ProjectDep, SessionDep
from app.models import Activity, ActivityCreate, ActivityPublic, ActivityUpdate, Message, Project

router = APIRouter()


def _get_activity_or_404(session: SessionDep, project: Project, activity_id: uuid.UUID) -> Activity:
    activity = crud.get_activity_in_project(
        session=session, project_id=project.id, activity_id=activity_id
    )
    if not activity:
        raise HTTPException(
            status_code=404, detail="Activity not found or does not belong to this project"
        )
    return activity


@router.get("", response_model=list[ActivityPublic])
def read_activities(session: SessionDep, project: ProjectDep) -> Any:
    return crud.list_activities(session=session, project_id=project.id)


@router.post("", response_model=ActivityPublic, status_code=201)
def create_new_activity(
    *, session: SessionDep, project: ProjectDep, activity_in: ActivityCreate
) -> Any:
    return crud.create_activity(session=session, activity_in=activity_in, project_id=project.id)


@router.get("/{activity_id}", response_model=ActivityPublic)
def read_activity(session: SessionDep, project: ProjectDep, activity_id: uuid.UUID) -> Any:
    return _get_activity_or_404(session, project, activity_id)


@router.put("/{activity_id}", response_model=ActivityPublic)
def update_existing_activity(
    *,
    session: SessionDep,
    project: ProjectDep,
    activity_id: uuid.UUID,
    activity_in: ActivityUpdate,
) -> Any:
    activity = _get_activity_or_404(session, project, activity_id)
    return crud.update_activity(session=session, db_activity=activity, activity_in=activity_in)


@router.delete("/{activity_id}", response_model=Message)
def delete_activity(session: SessionDep, project: ProjectDep, activity_id: uuid.UUID) -> Any:
    """
    Delete an activity and every impact that references it.
    """
    activity = _get_activity_or_404(session, project, activity_id)
    crud.delete_entity(session=session, db_obj=activity)
    return Message(message="Activity deleted successfully")
