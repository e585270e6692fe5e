import pytest

from app.agent.artifacts import ActivityBrief, ComponentBrief, ProjectAnalysisRequest
from app.agent.project_agent import ProjectAnalysisAgent
from app.tests.utils import fake_llm


def _request() -> ProjectAnalysisRequest:
    return ProjectAnalysisRequest(
        project_name="Dam A",
        project_description="Barrage hydroélectrique",
        activities=[
            ActivityBrief(id="a1", name="Excavation", phase="construction"),
            ActivityBrief(id="a2", name="Turbinage", phase="exploitation", description="Production"),
        ],
        components=[
            ComponentBrief(id="c1", name="River flow", category="physique"),
        ],
    )


def test_project_prompt_lists_ids():
    agent = ProjectAnalysisAgent(llm=fake_llm(""))

    prompt = agent.build_user_prompt(_request())

    assert "- Nom: Dam A" in prompt
    assert "- ID: a1, Nom: Excavation, Phase: construction" in prompt
    assert "- ID: a2, Nom: Turbinage, Phase: exploitation, Description: Production" in prompt
    assert "- ID: c1, Nom: River flow, Catégorie: physique" in prompt
    assert "IMPACTS SUGGÉRÉS:" in prompt
    assert "SYNTHÈSE NARRATIVE:" in prompt


@pytest.mark.asyncio
async def test_project_agent_run():
    llm = fake_llm(
        "IMPACTS SUGGÉRÉS:\n"
        "1. Activité ID: a1, Composante ID: c1, Magnitude: -5, Importance: 8, Justification: Érosion\n"
        "2. Activité ID: a2, Composante ID: c1, Magnitude: -3, Importance: 6, Justification: Débit réduit\n"
        "\n"
        "SYNTHÈSE NARRATIVE:\n"
        "Impacts concentrés sur l'hydrologie."
    )
    agent = ProjectAnalysisAgent(llm=llm)

    result = await agent.run(_request())

    assert [(s.activity_id, s.component_id) for s in result.suggested_impacts] == [
        ("a1", "c1"),
        ("a2", "c1"),
    ]
    assert result.summary == "Impacts concentrés sur l'hydrologie."
    llm.generate_text.assert_awaited_once()
