import logging
import uuid
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from app import crud
from app.agent.artifacts import (
    ActivityBrief,
    Artifact,
    ComponentBrief,
    ImpactAnalysisResult,
    ImpactBrief,
    PGESRequest,
    PGESResult,
    ProjectAnalysisRequest,
    ScoredImpactRequest,
    SuggestedImpact,
    UnscoredImpactRequest,
)
from app.agent.impact_agent import ImpactAnalysisAgent
from app.agent.pges_agent import PGESAgent
from app.agent.project_agent import ProjectAnalysisAgent
from app.api.deps import (
    ProjectDep,
    SessionDep,
    get_impact_agent,
    get_pges_agent,
    get_project_agent,
)
from app.models import Impact, ImpactPublic, ImpactWithRelations

router = APIRouter()
logger = logging.getLogger(__name__)

ImpactAgentDep = Annotated[ImpactAnalysisAgent, Depends(get_impact_agent)]
ProjectAgentDep = Annotated[ProjectAnalysisAgent, Depends(get_project_agent)]
PGESAgentDep = Annotated[PGESAgent, Depends(get_pges_agent)]


class ImpactAnalyzeRequest(Artifact):
    impact_id: uuid.UUID


class ImpactAnalyzeResponse(Artifact):
    impact: ImpactPublic
    analysis: ImpactAnalysisResult


class ImpactEvaluateRequest(Artifact):
    activity_id: uuid.UUID
    environmental_component_id: uuid.UUID


class SuggestedImpactView(SuggestedImpact):
    activity_name: str
    component_name: str
    activity_phase: str
    component_category: str


class ProjectAnalysisResponse(Artifact):
    message: str
    summary: str
    suggested_impacts: list[SuggestedImpactView]
    created_impacts: list[ImpactWithRelations]
    skipped_count: int


class PGESResponse(Artifact):
    message: str
    pges: PGESResult


def _scored_request(impact: Impact) -> ScoredImpactRequest:
    return ScoredImpactRequest(
        activity_name=impact.activity.name,
        activity_description=impact.activity.description,
        component_name=impact.environmental_component.name,
        component_category=impact.environmental_component.category.value,
        component_description=impact.environmental_component.description,
        magnitude=impact.magnitude,
        importance=impact.importance,
    )


@router.post("/impacts/analyze", response_model=ImpactAnalyzeResponse)
async def analyze_impact(
    *, session: SessionDep, agent: ImpactAgentDep, request_in: ImpactAnalyzeRequest
) -> Any:
    """
    Justify an existing impact's scores and store the analysis and mitigation measures on it.
    """
    impact = session.get(Impact, request_in.impact_id)
    if not impact:
        raise HTTPException(status_code=404, detail="Impact not found")

    analysis = await agent.run(_scored_request(impact))

    impact = crud.save_impact_analysis(
        session=session,
        db_impact=impact,
        analysis=analysis.analysis,
        mitigation_measures=analysis.mitigation_measures,
    )
    return ImpactAnalyzeResponse(impact=ImpactPublic.model_validate(impact), analysis=analysis)


@router.post("/projects/{id}/impacts/evaluate", response_model=ImpactAnalysisResult)
async def evaluate_impact(
    *,
    session: SessionDep,
    project: ProjectDep,
    agent: ImpactAgentDep,
    request_in: ImpactEvaluateRequest,
) -> Any:
    """
    Ask the model to score an activity × component pair. Nothing is persisted.
    """
    activity = crud.get_activity_in_project(
        session=session, project_id=project.id, activity_id=request_in.activity_id
    )
    if not activity:
        raise HTTPException(
            status_code=404, detail="Activity not found or does not belong to this project"
        )
    component = crud.get_component_in_project(
        session=session,
        project_id=project.id,
        component_id=request_in.environmental_component_id,
    )
    if not component:
        raise HTTPException(
            status_code=404,
            detail="Environmental component not found or does not belong to this project",
        )

    return await agent.run(
        UnscoredImpactRequest(
            activity_name=activity.name,
            activity_description=activity.description,
            component_name=component.name,
            component_category=component.category.value,
            component_description=component.description,
        )
    )


@router.post("/projects/{id}/analyze", response_model=ProjectAnalysisResponse)
async def analyze_project(
    *, session: SessionDep, project: ProjectDep, agent: ProjectAgentDep
) -> Any:
    """
    Screen the whole project and replace its impacts with the suggested ones.
    """
    if not project.activities or not project.components:
        raise HTTPException(
            status_code=400,
            detail="The project needs at least one activity and one environmental component",
        )

    activities = {str(a.id): a for a in project.activities}
    components = {str(c.id): c for c in project.components}
    analysis_request = ProjectAnalysisRequest(
        project_name=project.name,
        project_description=project.description,
        activities=[
            ActivityBrief(id=key, name=a.name, phase=a.phase.value, description=a.description)
            for key, a in activities.items()
        ],
        components=[
            ComponentBrief(id=key, name=c.name, category=c.category.value, description=c.description)
            for key, c in components.items()
        ],
    )

    result = await agent.run(analysis_request)
    logger.info(
        "Project %s analysis suggested %s impacts", project.id, len(result.suggested_impacts)
    )

    suggested_views: list[SuggestedImpactView] = []
    for suggestion in result.suggested_impacts:
        activity = activities.get(suggestion.activity_id.strip().lower())
        component = components.get(suggestion.component_id.strip().lower())
        suggested_views.append(
            SuggestedImpactView(
                **suggestion.model_dump(),
                activity_name=activity.name if activity else "Unknown activity",
                component_name=component.name if component else "Unknown component",
                activity_phase=activity.phase.value if activity else "",
                component_category=component.category.value if component else "",
            )
        )

    created, skipped = crud.replace_project_impacts(
        session=session, project=project, suggestions=result.suggested_impacts
    )

    return ProjectAnalysisResponse(
        message="Project analysis completed",
        summary=result.summary,
        suggested_impacts=suggested_views,
        created_impacts=[ImpactWithRelations.model_validate(impact) for impact in created],
        skipped_count=len(skipped),
    )


@router.post("/projects/{id}/pges", response_model=PGESResponse)
async def generate_pges(*, project: ProjectDep, agent: PGESAgentDep) -> Any:
    """
    Draft the environmental and social management plan from the project's impacts.
    """
    if not project.impacts:
        raise HTTPException(status_code=400, detail="The project has no impacts to analyze")

    pges_request = PGESRequest(
        project_name=project.name,
        project_description=project.description,
        impacts=[
            ImpactBrief(
                activity_name=impact.activity.name,
                activity_phase=impact.activity.phase.value,
                component_name=impact.environmental_component.name,
                component_category=impact.environmental_component.category.value,
                magnitude=impact.magnitude,
                importance=impact.importance,
                analysis=impact.ai_analysis,
            )
            for impact in project.impacts
        ],
    )

    pges = await agent.run(pges_request)
    return PGESResponse(message="PGES generated", pges=pges)
