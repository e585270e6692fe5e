from app.agent.artifacts import Priority, ScoredImpactRequest, UnscoredImpactRequest
from app.agent.parsing import (
    parse_impact_analysis,
    parse_pges,
    parse_project_analysis,
    split_bullets,
)

SCORED = ScoredImpactRequest(
    activity_name="Excavation",
    component_name="River flow",
    component_category="physique",
    magnitude=-5,
    importance=8,
)
UNSCORED = UnscoredImpactRequest(
    activity_name="Excavation",
    component_name="River flow",
    component_category="physique",
)


def test_parse_impact_analysis_sections():
    content = "JUSTIFICATION: foo\nANALYSE: bar\nMESURES D'ATTÉNUATION:\n- a\n- b"

    result = parse_impact_analysis(content, UNSCORED)

    assert result.justification == "foo"
    assert result.analysis == "bar"
    assert result.mitigation_measures == ["a", "b"]


def test_parse_impact_analysis_unscored_defaults():
    result = parse_impact_analysis("JUSTIFICATION: foo\nANALYSE: bar", UNSCORED)

    assert result.magnitude == 0
    assert result.importance == 5
    assert result.mitigation_measures == []


def test_parse_impact_analysis_unscored_reads_scores():
    content = (
        "MAGNITUDE: -7\n"
        "IMPORTANCE: 9\n"
        "JUSTIFICATION: Forte perturbation du lit\n"
        "ANALYSE: Turbidité accrue en aval\n"
        "MESURES D'ATTÉNUATION:\n"
        "- Batardeaux\n"
        "- Travaux en période d'étiage"
    )

    result = parse_impact_analysis(content, UNSCORED)

    assert result.magnitude == -7
    assert result.importance == 9
    assert result.justification == "Forte perturbation du lit"
    assert result.mitigation_measures == ["Batardeaux", "Travaux en période d'étiage"]


def test_parse_impact_analysis_scored_keeps_input_scores():
    content = "MAGNITUDE: 3\nIMPORTANCE: 2\nJUSTIFICATION: foo\nANALYSE: bar"

    result = parse_impact_analysis(content, SCORED)

    assert result.magnitude == -5
    assert result.importance == 8


def test_parse_impact_analysis_without_markers_keeps_raw_text():
    result = parse_impact_analysis("  Une réponse sans structure.  ", SCORED)

    assert result.analysis == "Une réponse sans structure."
    assert result.justification == ""
    assert result.mitigation_measures == []


def test_parse_impact_analysis_ignores_markdown_emphasis():
    content = "**JUSTIFICATION:** foo\n**ANALYSE:** bar\n**MESURES D’ATTENUATION:**\n• a\n• b"

    result = parse_impact_analysis(content, SCORED)

    assert result.justification == "foo"
    assert result.analysis == "bar"
    assert result.mitigation_measures == ["a", "b"]


def test_split_bullets():
    assert split_bullets("Intro\n- un\n* deux\n  • trois\n-  ") == ["un", "deux", "trois"]
    assert split_bullets("ligne un\n\nligne deux") == ["ligne un", "ligne deux"]
    assert split_bullets("- une mesure\n  sur deux lignes") == ["une mesure sur deux lignes"]


def test_parse_project_analysis():
    content = (
        "IMPACTS SUGGÉRÉS:\n"
        "- Activité ID: a1, Composante ID: c1, Magnitude: -5, Importance: 8, Justification: Érosion des berges\n"
        "- Activité ID: a2, Composante ID: c2, Magnitude: +3, Importance: 4, Justification: Emplois locaux\n"
        "- Activité ID: a3, Composante ID: c3, Magnitude: beaucoup\n"
        "\n"
        "SYNTHÈSE NARRATIVE:\n"
        "Le projet a surtout des impacts physiques."
    )

    result = parse_project_analysis(content)

    assert len(result.suggested_impacts) == 2
    first, second = result.suggested_impacts
    assert (first.activity_id, first.component_id) == ("a1", "c1")
    assert (first.magnitude, first.importance) == (-5, 8)
    assert first.justification == "Érosion des berges"
    assert (second.magnitude, second.importance) == (3, 4)
    assert result.summary == "Le projet a surtout des impacts physiques."


def test_parse_project_analysis_without_section_header():
    content = "Activité ID: a1, Composante ID: c1, Magnitude: [-2], Importance: [6], Justification: Bruit"

    result = parse_project_analysis(content)

    assert len(result.suggested_impacts) == 1
    assert result.suggested_impacts[0].magnitude == -2
    assert result.suggested_impacts[0].importance == 6
    assert result.summary == ""


def test_parse_project_analysis_empty_response():
    result = parse_project_analysis("")

    assert result.suggested_impacts == []
    assert result.summary == ""


PGES_RESPONSE = """SYNTHÈSE:
Le projet présente des impacts modérés sur le milieu physique.

PRIORISATION DES IMPACTS:
- Activité: Excavation, Composante: River flow, Magnitude: -5, Importance: 8, Priorité: Élevée
- Activité: Transport, Composante: Air quality, Magnitude: -3, Importance: 4, Priorité: Moyenne
- Activité: Clôture, Composante: Paysage, Magnitude: -1, Importance: 2, Priorité: Inconnue

RECOMMANDATIONS:
1. Catégorie: Eau
- Installer des bassins de décantation
- Surveiller la turbidité
2. Catégorie: Air
- Arroser les pistes

PLAN DE SUIVI:
- Indicateur: Turbidité, Fréquence: Hebdomadaire, Responsable: Entrepreneur
- Indicateur: Poussières, Fréquence: Mensuelle, Responsable: Bureau de contrôle
"""


def test_parse_pges():
    result = parse_pges(PGES_RESPONSE)

    assert result.summary == "Le projet présente des impacts modérés sur le milieu physique."

    assert [p.priority for p in result.prioritized_impacts] == [Priority.high, Priority.medium]
    assert result.prioritized_impacts[0].activity_name == "Excavation"
    assert result.prioritized_impacts[0].component_name == "River flow"
    assert result.prioritized_impacts[0].magnitude == -5

    assert [r.category for r in result.recommendations] == ["Eau", "Air"]
    assert result.recommendations[0].measures == [
        "Installer des bassins de décantation",
        "Surveiller la turbidité",
    ]
    assert result.recommendations[1].measures == ["Arroser les pistes"]

    assert len(result.monitoring_plan) == 2
    assert result.monitoring_plan[1].indicator == "Poussières"
    assert result.monitoring_plan[1].frequency == "Mensuelle"
    assert result.monitoring_plan[1].responsible_party == "Bureau de contrôle"


def test_parse_pges_missing_sections():
    result = parse_pges("SYNTHÈSE: Rien à signaler.")

    assert result.summary == "Rien à signaler."
    assert result.prioritized_impacts == []
    assert result.recommendations == []
    assert result.monitoring_plan == []


def test_parse_impact_analysis_sections_stop_at_score_markers():
    content = "JUSTIFICATION: foo\nMAGNITUDE: -3\nIMPORTANCE: 4\nANALYSE: bar"

    result = parse_impact_analysis(content, UNSCORED)

    assert result.justification == "foo"
    assert result.analysis == "bar"
    assert (result.magnitude, result.importance) == (-3, 4)


def test_parse_project_analysis_tolerates_spaces_before_commas():
    content = (
        "IMPACTS SUGGÉRÉS:\n"
        "- Activité ID: a1 , Composante ID: c1 , Magnitude: -3 , Importance: 7 , Justification: Bruit"
    )

    result = parse_project_analysis(content)

    assert len(result.suggested_impacts) == 1
    suggestion = result.suggested_impacts[0]
    assert (suggestion.activity_id, suggestion.component_id) == ("a1", "c1")
    assert (suggestion.magnitude, suggestion.importance) == (-3, 7)
