import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.models import ActivityCreate, ImpactCreate, ProjectCreate, ProjectPublic


def _impact(**overrides) -> ImpactCreate:
    data = {
        "activity_id": uuid.uuid4(),
        "environmental_component_id": uuid.uuid4(),
        "magnitude": -5,
        "importance": 8,
    }
    data.update(overrides)
    return ImpactCreate(**data)


def test_impact_accepts_bounds():
    assert _impact(magnitude=-10, importance=1).magnitude == -10
    assert _impact(magnitude=10, importance=10).importance == 10


@pytest.mark.parametrize("magnitude", [0, -11, 11])
def test_impact_rejects_invalid_magnitude(magnitude):
    with pytest.raises(ValidationError):
        _impact(magnitude=magnitude)


def test_impact_zero_magnitude_message():
    with pytest.raises(ValidationError) as exc_info:
        _impact(magnitude=0)
    assert "cannot be 0" in str(exc_info.value)


@pytest.mark.parametrize("importance", [0, 11])
def test_impact_rejects_invalid_importance(importance):
    with pytest.raises(ValidationError):
        _impact(importance=importance)


def test_project_name_min_length():
    with pytest.raises(ValidationError):
        ProjectCreate(name="ab")
    assert ProjectCreate(name="abc").name == "abc"


def test_activity_rejects_unknown_phase():
    with pytest.raises(ValidationError):
        ActivityCreate(name="Excavation", phase="demolition")


def test_api_models_accept_camel_case_and_dump_it():
    impact = ImpactCreate(
        activityId=uuid.uuid4(),
        environmentalComponentId=uuid.uuid4(),
        magnitude=3,
        importance=2,
    )
    dumped = impact.model_dump(by_alias=True)
    assert "environmentalComponentId" in dumped
    assert "mitigationMeasures" in dumped

    project = ProjectPublic(id=uuid.uuid4(), name="Dam A")
    assert "createdAt" in project.model_dump(by_alias=True)


@pytest.mark.parametrize(
    "field,value",
    [("magnitude", True), ("magnitude", "-4"), ("importance", "7"), ("importance", 7.0)],
)
def test_impact_scores_must_be_integers(field, value):
    with pytest.raises(ValidationError):
        _impact(**{field: value})


def test_public_timestamps_are_utc():
    naive = datetime(2026, 1, 2, 3, 4, 5)

    project = ProjectPublic(id=uuid.uuid4(), name="Dam A", created_at=naive)

    assert project.created_at == naive.replace(tzinfo=timezone.utc)
