import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCDateTime = Annotated[datetime | None, AfterValidator(as_utc)]


# Mixed into every model exposed through the API so JSON uses camelCase keys
# while snake_case is still accepted on input. Table models stay plain.
class APIModel(SQLModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityPhase(str, Enum):
    preparation = "preparation"
    construction = "construction"
    exploitation = "exploitation"
    maintenance = "maintenance"


class ComponentCategory(str, Enum):
    physique = "physique"
    biologique = "biologique"
    social = "social"
    economique = "economique"
    culturel = "culturel"


# Generic message
class Message(APIModel):
    message: str


# Projects

class ProjectBase(SQLModel):
    name: str = Field(min_length=3, max_length=255)
    description: str | None = Field(default=None)


class ProjectCreate(ProjectBase, APIModel):
    pass


# Properties to receive via API on update, full replacement
class ProjectUpdate(ProjectBase, APIModel):
    pass


class Project(ProjectBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    activities: list["Activity"] = Relationship(back_populates="project", cascade_delete=True)
    components: list["EnvironmentalComponent"] = Relationship(
        back_populates="project", cascade_delete=True
    )
    impacts: list["Impact"] = Relationship(back_populates="project", cascade_delete=True)


class ProjectPublic(ProjectBase, APIModel):
    id: uuid.UUID
    created_at: UTCDateTime = None


# Activities

class ActivityBase(SQLModel):
    name: str = Field(min_length=3, max_length=255)
    description: str | None = Field(default=None)
    phase: ActivityPhase


class ActivityCreate(ActivityBase, APIModel):
    pass


class ActivityUpdate(ActivityBase, APIModel):
    pass


class Activity(ActivityBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE", index=True
    )
    project: Project | None = Relationship(back_populates="activities")
    impacts: list["Impact"] = Relationship(back_populates="activity", cascade_delete=True)


class ActivityPublic(ActivityBase, APIModel):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: UTCDateTime = None


# Environmental components

class EnvironmentalComponentBase(SQLModel):
    name: str = Field(min_length=3, max_length=255)
    description: str | None = Field(default=None)
    category: ComponentCategory


class EnvironmentalComponentCreate(EnvironmentalComponentBase, APIModel):
    pass


class EnvironmentalComponentUpdate(EnvironmentalComponentBase, APIModel):
    pass


class EnvironmentalComponent(EnvironmentalComponentBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE", index=True
    )
    project: Project | None = Relationship(back_populates="components")
    impacts: list["Impact"] = Relationship(
        back_populates="environmental_component", cascade_delete=True
    )


class EnvironmentalComponentPublic(EnvironmentalComponentBase, APIModel):
    id: uuid.UUID
    project_id: uuid.UUID
    created_at: UTCDateTime = None


# Impacts

class ImpactBase(SQLModel):
    magnitude: int = Field(ge=-10, le=10)
    importance: int = Field(ge=1, le=10)
    description: str | None = Field(default=None)
    mitigation_measures: str | None = Field(default=None)

    @field_validator("magnitude", "importance", mode="before")
    @classmethod
    def scores_are_integers(cls, v: Any) -> Any:
        # Booleans and numeric strings would otherwise be coerced.
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("Must be an integer")
        return v

    @field_validator("magnitude")
    @classmethod
    def magnitude_not_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("Magnitude must be between -10 and +10 and cannot be 0")
        return v


class ImpactCreate(ImpactBase, APIModel):
    activity_id: uuid.UUID
    environmental_component_id: uuid.UUID


class ImpactUpdate(ImpactCreate):
    pass


class Impact(ImpactBase, table=True):
    __table_args__ = (
        UniqueConstraint("activity_id", "environmental_component_id", name="uq_impact_cell"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    ai_analysis: str | None = Field(default=None)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    project_id: uuid.UUID = Field(
        foreign_key="project.id", nullable=False, ondelete="CASCADE", index=True
    )
    activity_id: uuid.UUID = Field(
        foreign_key="activity.id", nullable=False, ondelete="CASCADE"
    )
    environmental_component_id: uuid.UUID = Field(
        foreign_key="environmentalcomponent.id", nullable=False, ondelete="CASCADE"
    )
    project: Project | None = Relationship(back_populates="impacts")
    activity: Activity | None = Relationship(back_populates="impacts")
    environmental_component: EnvironmentalComponent | None = Relationship(back_populates="impacts")


class ImpactPublic(ImpactBase, APIModel):
    id: uuid.UUID
    project_id: uuid.UUID
    activity_id: uuid.UUID
    environmental_component_id: uuid.UUID
    ai_analysis: str | None = None
    created_at: UTCDateTime = None


class ImpactWithRelations(ImpactPublic):
    activity: ActivityPublic
    environmental_component: EnvironmentalComponentPublic


class ProjectWithRelations(ProjectPublic):
    activities: list[ActivityPublic]
    components: list[EnvironmentalComponentPublic]
    impacts: list[ImpactWithRelations]
