from app.agent.artifacts import PGESRequest, PGESResult
from app.agent.base import BaseAgent
from app.agent.parsing import parse_pges
from app.agent.prompts.pges import PGES_INSTRUCTIONS, PGES_RESPONSE_FORMAT, PGES_SYSTEM_PROMPT


class PGESAgent(BaseAgent[PGESRequest, PGESResult]):
    """Agent responsible for drafting the environmental and social management plan."""

    system_prompt = PGES_SYSTEM_PROMPT

    def build_user_prompt(self, input_data: PGESRequest) -> str:
        impacts = "\n".join(
            f"- Activité: {i.activity_name} ({i.activity_phase}), "
            f"Composante: {i.component_name} ({i.component_category}), "
            f"Magnitude: {i.magnitude}, Importance: {i.importance}"
            + (f", Analyse: {i.analysis}" if i.analysis else "")
            for i in input_data.impacts
        )

        lines = [
            "Générer un Plan de Gestion Environnementale et Sociale (PGES) pour le projet suivant:",
            "",
            "PROJET:",
            f"- Nom: {input_data.project_name}",
        ]
        if input_data.project_description:
            lines.append(f"- Description: {input_data.project_description}")
        lines += [
            "",
            "IMPACTS IDENTIFIÉS:",
            impacts,
            "",
            PGES_INSTRUCTIONS,
            "",
            "Format de réponse souhaité:",
            PGES_RESPONSE_FORMAT,
        ]
        return "\n".join(lines)

    def parse_response(self, content: str, input_data: PGESRequest) -> PGESResult:
        return parse_pges(content)
