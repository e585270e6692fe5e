from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Artifact(BaseModel):
    """Base for analysis artifacts; serialized with camelCase keys by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Single-impact analysis

class _ImpactRequestBase(Artifact):
    activity_name: str
    activity_description: str | None = None
    component_name: str
    component_category: str
    component_description: str | None = None


class ScoredImpactRequest(_ImpactRequestBase):
    """The impact already carries magnitude and importance; the model only justifies them."""
    kind: Literal["scored"] = "scored"
    magnitude: int
    importance: int


class UnscoredImpactRequest(_ImpactRequestBase):
    """The model has to propose magnitude and importance itself."""
    kind: Literal["unscored"] = "unscored"


ImpactAnalysisRequest = Annotated[
    Union[ScoredImpactRequest, UnscoredImpactRequest], Field(discriminator="kind")
]


class ImpactAnalysisResult(Artifact):
    """Artifact produced by the Impact Analysis Agent."""
    magnitude: int = Field(description="Signed severity, -10..+10; 0 when the model gave none")
    importance: int = Field(description="Significance, 1..10; 5 when the model gave none")
    justification: str = ""
    analysis: str = ""
    mitigation_measures: list[str] = Field(default_factory=list)


# Project-wide interaction analysis

class ActivityBrief(Artifact):
    id: str
    name: str
    phase: str
    description: str | None = None


class ComponentBrief(Artifact):
    id: str
    name: str
    category: str
    description: str | None = None


class ProjectAnalysisRequest(Artifact):
    project_name: str
    project_description: str | None = None
    activities: list[ActivityBrief]
    components: list[ComponentBrief]


class SuggestedImpact(Artifact):
    activity_id: str
    component_id: str
    magnitude: int
    importance: int
    justification: str = ""


class ProjectAnalysisResult(Artifact):
    """Artifact produced by the Project Analysis Agent."""
    suggested_impacts: list[SuggestedImpact] = Field(default_factory=list)
    summary: str = ""


# Environmental and social management plan (PGES)

class ImpactBrief(Artifact):
    activity_name: str
    activity_phase: str
    component_name: str
    component_category: str
    magnitude: int
    importance: int
    analysis: str | None = None


class PGESRequest(Artifact):
    project_name: str
    project_description: str | None = None
    impacts: list[ImpactBrief]


class Priority(str, Enum):
    high = "Élevée"
    medium = "Moyenne"
    low = "Faible"


class PrioritizedImpact(Artifact):
    activity_name: str
    component_name: str
    magnitude: int
    importance: int
    priority: Priority


class Recommendation(Artifact):
    category: str
    measures: list[str] = Field(default_factory=list)


class MonitoringItem(Artifact):
    indicator: str
    frequency: str
    responsible_party: str


class PGESResult(Artifact):
    """Artifact produced by the PGES Agent."""
    summary: str = ""
    prioritized_impacts: list[PrioritizedImpact] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    monitoring_plan: list[MonitoringItem] = Field(default_factory=list)
