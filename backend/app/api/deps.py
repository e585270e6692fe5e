import uuid
from collections.abc import Generator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException
from sqlmodel import Session

from app.agent.impact_agent import ImpactAnalysisAgent
from app.agent.pges_agent import PGESAgent
from app.agent.project_agent import ProjectAnalysisAgent
from app.core.db import engine
from app.models import Project


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


def get_project(id: uuid.UUID, session: SessionDep) -> Project:
    project = session.get(Project, id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


ProjectDep = Annotated[Project, Depends(get_project)]


# One agent, and so one pooled provider client, per process.
@lru_cache
def get_impact_agent() -> ImpactAnalysisAgent:
    return ImpactAnalysisAgent()


@lru_cache
def get_project_agent() -> ProjectAnalysisAgent:
    return ProjectAnalysisAgent()


@lru_cache
def get_pges_agent() -> PGESAgent:
    return PGESAgent()
