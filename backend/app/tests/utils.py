from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from app.core.config import settings


def fake_llm(response_text: str) -> MagicMock:
    """LLMClient stand-in whose generate_text answers with `response_text`."""
    llm = MagicMock()
    llm.generate_text = AsyncMock(return_value=response_text)
    return llm


def mock_openai_client(content: str | None) -> tuple[AsyncMock, MagicMock]:
    """Mock AsyncOpenAI instance mapping the OpenAI chat completion response structure."""
    mock_message = MagicMock()
    mock_message.content = content

    mock_choice = MagicMock()
    mock_choice.message = mock_message

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    mock_completions = MagicMock()
    mock_completions.create = AsyncMock(return_value=mock_response)

    mock_chat = MagicMock()
    mock_chat.completions = mock_completions

    mock_client_instance = AsyncMock()
    mock_client_instance.chat = mock_chat
    return mock_client_instance, mock_completions


def create_project(client: TestClient, name: str = "Dam A", description: str | None = None) -> dict:
    r = client.post(
        f"{settings.API_V1_STR}/projects", json={"name": name, "description": description}
    )
    assert r.status_code == 201, r.text
    return r.json()


def create_activity(
    client: TestClient, project_id: str, name: str = "Excavation", phase: str = "construction"
) -> dict:
    r = client.post(
        f"{settings.API_V1_STR}/projects/{project_id}/activities",
        json={"name": name, "phase": phase},
    )
    assert r.status_code == 201, r.text
    return r.json()


def create_component(
    client: TestClient, project_id: str, name: str = "River flow", category: str = "physique"
) -> dict:
    r = client.post(
        f"{settings.API_V1_STR}/projects/{project_id}/components",
        json={"name": name, "category": category},
    )
    assert r.status_code == 201, r.text
    return r.json()


def create_impact(
    client: TestClient,
    project_id: str,
    activity_id: str,
    component_id: str,
    magnitude: int = -5,
    importance: int = 8,
) -> dict:
    r = client.post(
        f"{settings.API_V1_STR}/projects/{project_id}/impacts",
        json={
            "activityId": activity_id,
            "environmentalComponentId": component_id,
            "magnitude": magnitude,
            "importance": importance,
        },
    )
    assert r.status_code == 201, r.text
    return r.json()
