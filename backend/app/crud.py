import logging
import uuid
from typing import Any

from pydantic import ValidationError
from sqlmodel import Session, col, delete, select

from app.agent.artifacts import SuggestedImpact
from app.models import (
    Activity,
    ActivityCreate,
    ActivityUpdate,
    EnvironmentalComponent,
    EnvironmentalComponentCreate,
    EnvironmentalComponentUpdate,
    Impact,
    ImpactCreate,
    ImpactUpdate,
    Project,
    ProjectCreate,
    ProjectUpdate,
)

logger = logging.getLogger(__name__)


def create_project(*, session: Session, project_in: ProjectCreate) -> Project:
    db_project = Project.model_validate(project_in)
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


def update_project(*, session: Session, db_project: Project, project_in: ProjectUpdate) -> Project:
    db_project.sqlmodel_update(project_in.model_dump())
    session.add(db_project)
    session.commit()
    session.refresh(db_project)
    return db_project


def list_projects(*, session: Session) -> list[Project]:
    statement = select(Project).order_by(col(Project.created_at).desc())
    return list(session.exec(statement).all())


def get_activity_in_project(
    *, session: Session, project_id: uuid.UUID, activity_id: uuid.UUID
) -> Activity | None:
    statement = select(Activity).where(
        Activity.id == activity_id, Activity.project_id == project_id
    )
    return session.exec(statement).first()


def list_activities(*, session: Session, project_id: uuid.UUID) -> list[Activity]:
    statement = (
        select(Activity).where(Activity.project_id == project_id).order_by(col(Activity.name))
    )
    return list(session.exec(statement).all())


def create_activity(
    *, session: Session, activity_in: ActivityCreate, project_id: uuid.UUID
) -> Activity:
    db_activity = Activity.model_validate(activity_in, update={"project_id": project_id})
    session.add(db_activity)
    session.commit()
    session.refresh(db_activity)
    return db_activity


def update_activity(
    *, session: Session, db_activity: Activity, activity_in: ActivityUpdate
) -> Activity:
    db_activity.sqlmodel_update(activity_in.model_dump())
    session.add(db_activity)
    session.commit()
    session.refresh(db_activity)
    return db_activity


def get_component_in_project(
    *, session: Session, project_id: uuid.UUID, component_id: uuid.UUID
) -> EnvironmentalComponent | None:
    statement = select(EnvironmentalComponent).where(
        EnvironmentalComponent.id == component_id,
        EnvironmentalComponent.project_id == project_id,
    )
    return session.exec(statement).first()


def list_components(*, session: Session, project_id: uuid.UUID) -> list[EnvironmentalComponent]:
    statement = (
        select(EnvironmentalComponent)
        .where(EnvironmentalComponent.project_id == project_id)
        .order_by(col(EnvironmentalComponent.category), col(EnvironmentalComponent.name))
    )
    return list(session.exec(statement).all())


def create_component(
    *,
    session: Session,
    component_in: EnvironmentalComponentCreate,
    project_id: uuid.UUID,
) -> EnvironmentalComponent:
    db_component = EnvironmentalComponent.model_validate(
        component_in, update={"project_id": project_id}
    )
    session.add(db_component)
    session.commit()
    session.refresh(db_component)
    return db_component


def update_component(
    *,
    session: Session,
    db_component: EnvironmentalComponent,
    component_in: EnvironmentalComponentUpdate,
) -> EnvironmentalComponent:
    db_component.sqlmodel_update(component_in.model_dump())
    session.add(db_component)
    session.commit()
    session.refresh(db_component)
    return db_component


def get_impact_in_project(
    *, session: Session, project_id: uuid.UUID, impact_id: uuid.UUID
) -> Impact | None:
    statement = select(Impact).where(Impact.id == impact_id, Impact.project_id == project_id)
    return session.exec(statement).first()


def get_impact_for_cell(
    *, session: Session, activity_id: uuid.UUID, component_id: uuid.UUID
) -> Impact | None:
    statement = select(Impact).where(
        Impact.activity_id == activity_id,
        Impact.environmental_component_id == component_id,
    )
    return session.exec(statement).first()


def list_impacts(*, session: Session, project_id: uuid.UUID) -> list[Impact]:
    statement = (
        select(Impact)
        .where(Impact.project_id == project_id)
        .order_by(col(Impact.importance).desc())
    )
    return list(session.exec(statement).all())


def create_impact(*, session: Session, impact_in: ImpactCreate, project_id: uuid.UUID) -> Impact:
    db_impact = Impact.model_validate(impact_in, update={"project_id": project_id})
    session.add(db_impact)
    session.commit()
    session.refresh(db_impact)
    return db_impact


def update_impact(*, session: Session, db_impact: Impact, impact_in: ImpactUpdate) -> Impact:
    db_impact.sqlmodel_update(impact_in.model_dump())
    session.add(db_impact)
    session.commit()
    session.refresh(db_impact)
    return db_impact


def save_impact_analysis(
    *, session: Session, db_impact: Impact, analysis: str, mitigation_measures: list[str]
) -> Impact:
    db_impact.ai_analysis = analysis
    db_impact.mitigation_measures = (
        "\n".join(f"- {measure}" for measure in mitigation_measures) or None
    )
    session.add(db_impact)
    session.commit()
    session.refresh(db_impact)
    return db_impact


def delete_entity(*, session: Session, db_obj: Any) -> None:
    # Dependent rows go through the cascading relationships declared on the models.
    session.delete(db_obj)
    session.commit()


def replace_project_impacts(
    *, session: Session, project: Project, suggestions: list[SuggestedImpact]
) -> tuple[list[Impact], list[SuggestedImpact]]:
    """
    Replace every impact of `project` with impacts built from `suggestions`.

    Suggestions whose ids do not resolve to an activity and component of the
    project, that repeat an already used cell, or that fail impact validation
    are skipped. The delete and the inserts share one transaction, so a failure
    leaves the previous impact set untouched.
    """
    activity_ids = {str(activity.id).lower(): activity.id for activity in project.activities}
    component_ids = {
        str(component.id).lower(): component.id for component in project.components
    }

    created: list[Impact] = []
    skipped: list[SuggestedImpact] = []
    seen_cells: set[tuple[uuid.UUID, uuid.UUID]] = set()

    try:
        session.exec(delete(Impact).where(col(Impact.project_id) == project.id))
        for suggestion in suggestions:
            activity_id = activity_ids.get(suggestion.activity_id.strip().lower())
            component_id = component_ids.get(suggestion.component_id.strip().lower())
            if activity_id is None or component_id is None:
                logger.warning(
                    "Activity or component not found for suggested impact: %s - %s",
                    suggestion.activity_id,
                    suggestion.component_id,
                )
                skipped.append(suggestion)
                continue
            if (activity_id, component_id) in seen_cells:
                logger.warning(
                    "Duplicate suggested impact for cell %s - %s, keeping the first one",
                    activity_id,
                    component_id,
                )
                skipped.append(suggestion)
                continue
            try:
                impact_in = ImpactCreate(
                    magnitude=suggestion.magnitude,
                    importance=suggestion.importance,
                    description=suggestion.justification or None,
                    activity_id=activity_id,
                    environmental_component_id=component_id,
                )
            except ValidationError as e:
                logger.warning(
                    "Suggested impact %s - %s rejected by validation: %s",
                    activity_id,
                    component_id,
                    e.errors(include_url=False),
                )
                skipped.append(suggestion)
                continue

            db_impact = Impact.model_validate(impact_in, update={"project_id": project.id})
            session.add(db_impact)
            created.append(db_impact)
            seen_cells.add((activity_id, component_id))

        session.commit()
    except Exception:
        session.rollback()
        raise

    for db_impact in created:
        session.refresh(db_impact)
    session.refresh(project)
    return created, skipped
