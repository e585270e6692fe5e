import uuid
from typing import Any

from fastapi import APIRouter, HTTPException

from app import crud
from app.api.deps import ProjectDep, SessionDep
from app.models import (
    EnvironmentalComponent,
    EnvironmentalComponentCreate,
    EnvironmentalComponentPublic,
    EnvironmentalComponentUpdate,
    Message,
    Project,
)

router = APIRouter()


def _get_component_or_404(
    session: SessionDep, project: Project, component_id: uuid.UUID
) -> EnvironmentalComponent:
    component = crud.get_component_in_project(
        session=session, project_id=project.id, component_id=component_id
    )
    if not component:
        raise HTTPException(
            status_code=404,
            detail="Environmental component not found or does not belong to this project",
        )
    return component


@router.get("", response_model=list[EnvironmentalComponentPublic])
def read_components(session: SessionDep, project: ProjectDep) -> Any:
    return crud.list_components(session=session, project_id=project.id)


@router.post("", response_model=EnvironmentalComponentPublic, status_code=201)
def create_new_component(
    *, session: SessionDep, project: ProjectDep, component_in: EnvironmentalComponentCreate
) -> Any:
    return crud.create_component(
        session=session, component_in=component_in, project_id=project.id
    )


@router.get("/{component_id}", response_model=EnvironmentalComponentPublic)
def read_component(session: SessionDep, project: ProjectDep, component_id: uuid.UUID) -> Any:
    return _get_component_or_404(session, project, component_id)


@router.put("/{component_id}", response_model=EnvironmentalComponentPublic)
def update_existing_component(
    *,
    session: SessionDep,
    project: ProjectDep,
    component_id: uuid.UUID,
    component_in: EnvironmentalComponentUpdate,
) -> Any:
    component = _get_component_or_404(session, project, component_id)
    return crud.update_component(
        session=session, db_component=component, component_in=component_in
    )


@router.delete("/{component_id}", response_model=Message)
def delete_component(session: SessionDep, project: ProjectDep, component_id: uuid.UUID) -> Any:
    """
    Delete an environmental component and every impact that references it.
    """
    component = _get_component_or_404(session, project, component_id)
    crud.delete_entity(session=session, db_obj=component)
    return Message(message="Environmental component deleted successfully")
