from app.agent.artifacts import ImpactAnalysisResult, ScoredImpactRequest, UnscoredImpactRequest
from app.agent.base import BaseAgent
from app.agent.parsing import parse_impact_analysis
from app.agent.prompts.impact import (
    IMPACT_SYSTEM_PROMPT,
    RESPONSE_FORMAT,
    SCORE_FORMAT,
    SCORED_INSTRUCTIONS,
    UNSCORED_INSTRUCTIONS,
)


class ImpactAnalysisAgent(
    BaseAgent[ScoredImpactRequest | UnscoredImpactRequest, ImpactAnalysisResult]
):
    """
    Agent responsible for analysing one activity × component interaction.
    Scored requests get their magnitude and importance justified; unscored ones get them proposed.
    """

    system_prompt = IMPACT_SYSTEM_PROMPT

    def build_user_prompt(self, input_data: ScoredImpactRequest | UnscoredImpactRequest) -> str:
        lines = [
            "Analyser l'impact environnemental suivant selon la méthodologie de la matrice de Léopold:",
            "",
            "ACTIVITÉ DU PROJET:",
            f"- Nom: {input_data.activity_name}",
        ]
        if input_data.activity_description:
            lines.append(f"- Description: {input_data.activity_description}")
        lines += [
            "",
            "COMPOSANTE ENVIRONNEMENTALE AFFECTÉE:",
            f"- Nom: {input_data.component_name}",
            f"- Catégorie: {input_data.component_category}",
        ]
        if input_data.component_description:
            lines.append(f"- Description: {input_data.component_description}")
        lines.append("")

        if isinstance(input_data, ScoredImpactRequest):
            lines.append(
                SCORED_INSTRUCTIONS.format(
                    magnitude=input_data.magnitude, importance=input_data.importance
                )
            )
            response_format = RESPONSE_FORMAT
        else:
            lines.append(UNSCORED_INSTRUCTIONS)
            response_format = SCORE_FORMAT + RESPONSE_FORMAT

        lines += ["", "Format de réponse souhaité:", response_format]
        return "\n".join(lines)

    def parse_response(
        self, content: str, input_data: ScoredImpactRequest | UnscoredImpactRequest
    ) -> ImpactAnalysisResult:
        return parse_impact_analysis(content, input_data)
