import uuid
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlmodel import Session

from app import crud
from app.api.deps import ProjectDep, SessionDep
from app.models import (
    Impact,
    ImpactCreate,
    ImpactPublic,
    ImpactUpdate,
    ImpactWithRelations,
    Message,
    Project,
)

router = APIRouter()


def _get_impact_or_404(session: Session, project: Project, impact_id: uuid.UUID) -> Impact:
    impact = crud.get_impact_in_project(session=session, project_id=project.id, impact_id=impact_id)
    if not impact:
        raise HTTPException(status_code=404, detail="Impact not found")
    return impact


def _check_impact_cell(
    session: Session,
    project: Project,
    impact_in: ImpactCreate,
    current_impact_id: uuid.UUID | None = None,
) -> None:
    """Both ends of the impact must belong to `project`, and the matrix cell must be free."""
    activity = crud.get_activity_in_project(
        session=session, project_id=project.id, activity_id=impact_in.activity_id
    )
    if not activity:
        raise HTTPException(
            status_code=404, detail="Activity not found or does not belong to this project"
        )
    component = crud.get_component_in_project(
        session=session, project_id=project.id, component_id=impact_in.environmental_component_id
    )
    if not component:
        raise HTTPException(
            status_code=404,
            detail="Environmental component not found or does not belong to this project",
        )
    existing = crud.get_impact_for_cell(
        session=session, activity_id=activity.id, component_id=component.id
    )
    if existing and existing.id != current_impact_id:
        raise HTTPException(
            status_code=409,
            detail="An impact already exists for this activity and environmental component",
        )


@router.get("", response_model=list[ImpactWithRelations])
def read_impacts(session: SessionDep, project: ProjectDep) -> Any:
    return crud.list_impacts(session=session, project_id=project.id)


@router.post("", response_model=ImpactPublic, status_code=201)
def create_new_impact(*, session: SessionDep, project: ProjectDep, impact_in: ImpactCreate) -> Any:
    _check_impact_cell(session, project, impact_in)
    return crud.create_impact(session=session, impact_in=impact_in, project_id=project.id)


@router.get("/{impact_id}", response_model=ImpactWithRelations)
def read_impact(session: SessionDep, project: ProjectDep, impact_id: uuid.UUID) -> Any:
    return _get_impact_or_404(session, project, impact_id)


@router.put("/{impact_id}", response_model=ImpactPublic)
def update_existing_impact(
    *,
    session: SessionDep,
    project: ProjectDep,
    impact_id: uuid.UUID,
    impact_in: ImpactUpdate,
) -> Any:
    impact = _get_impact_or_404(session, project, impact_id)
    _check_impact_cell(session, project, impact_in, current_impact_id=impact.id)
    return crud.update_impact(session=session, db_impact=impact, impact_in=impact_in)


@router.delete("/{impact_id}", response_model=Message)
def delete_impact(session: SessionDep, project: ProjectDep, impact_id: uuid.UUID) -> Any:
    impact = _get_impact_or_404(session, project, impact_id)
    crud.delete_entity(session=session, db_obj=impact)
    return Message(message="Impact deleted successfully")
