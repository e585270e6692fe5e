from typing import Any

from fastapi import APIRouter

from app import crud
from app.api.deps import ProjectDep, SessionDep
from app.models import Message, ProjectCreate, ProjectPublic, ProjectUpdate, ProjectWithRelations

router = APIRouter()


@router.get("", response_model=list[ProjectPublic])
def read_projects(session: SessionDep) -> Any:
    return crud.list_projects(session=session)


@router.post("", response_model=ProjectPublic, status_code=201)
def create_new_project(*, session: SessionDep, project_in: ProjectCreate) -> Any:
    return crud.create_project(session=session, project_in=project_in)


@router.get("/{id}", response_model=ProjectWithRelations)
def read_project(project: ProjectDep) -> Any:
    """
    Retrieve a project with its activities, components and impacts.
    """
    return project


@router.put("/{id}", response_model=ProjectPublic)
def update_existing_project(
    *, session: SessionDep, project: ProjectDep, project_in: ProjectUpdate
) -> Any:
    return crud.update_project(session=session, db_project=project, project_in=project_in)


@router.delete("/{id}", response_model=Message)
def delete_project(session: SessionDep, project: ProjectDep) -> Any:
    """
    Delete a project together with its activities, components and impacts.
    """
    crud.delete_entity(session=session, db_obj=project)
    return Message(message="Project deleted successfully")
