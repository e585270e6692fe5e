import pytest

from app.agent.artifacts import ImpactBrief, PGESRequest, Priority
from app.agent.pges_agent import PGESAgent
from app.tests.utils import fake_llm


def _request() -> PGESRequest:
    return PGESRequest(
        project_name="Dam A",
        impacts=[
            ImpactBrief(
                activity_name="Excavation",
                activity_phase="construction",
                component_name="River flow",
                component_category="physique",
                magnitude=-5,
                importance=8,
                analysis="Turbidité accrue",
            )
        ],
    )


def test_pges_prompt_lists_impacts():
    agent = PGESAgent(llm=fake_llm(""))

    prompt = agent.build_user_prompt(_request())

    assert "- Nom: Dam A" in prompt
    assert (
        "- Activité: Excavation (construction), Composante: River flow (physique), "
        "Magnitude: -5, Importance: 8, Analyse: Turbidité accrue"
    ) in prompt
    assert "PLAN DE SUIVI:" in prompt


@pytest.mark.asyncio
async def test_pges_agent_run():
    llm = fake_llm(
        "SYNTHÈSE: Un impact majeur.\n"
        "PRIORISATION DES IMPACTS:\n"
        "- Activité: Excavation, Composante: River flow, Magnitude: -5, Importance: 8, Priorité: Haute\n"
        "RECOMMANDATIONS:\n"
        "Catégorie: Eau\n"
        "- Bassins de décantation\n"
        "PLAN DE SUIVI:\n"
        "- Indicateur: Turbidité, Fréquence: Hebdomadaire, Responsable: Entrepreneur"
    )
    agent = PGESAgent(llm=llm)

    result = await agent.run(_request())

    assert result.summary == "Un impact majeur."
    assert result.prioritized_impacts[0].priority == Priority.high
    assert result.recommendations[0].measures == ["Bassins de décantation"]
    assert result.monitoring_plan[0].responsible_party == "Entrepreneur"
