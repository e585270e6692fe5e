from app.agent.artifacts import ProjectAnalysisRequest, ProjectAnalysisResult
from app.agent.base import BaseAgent
from app.agent.parsing import parse_project_analysis
from app.agent.prompts.project import (
    MAX_SUGGESTED_PAIRS,
    MIN_SUGGESTED_PAIRS,
    PROJECT_INSTRUCTIONS,
    PROJECT_RESPONSE_FORMAT,
    PROJECT_SYSTEM_PROMPT,
)


class ProjectAnalysisAgent(BaseAgent[ProjectAnalysisRequest, ProjectAnalysisResult]):
    """
    Agent responsible for screening a whole project: it picks the relevant
    activity × component pairs and scores each of them.
    """

    system_prompt = PROJECT_SYSTEM_PROMPT

    def build_user_prompt(self, input_data: ProjectAnalysisRequest) -> str:
        activities = "\n".join(
            f"- ID: {a.id}, Nom: {a.name}, Phase: {a.phase}"
            + (f", Description: {a.description}" if a.description else "")
            for a in input_data.activities
        )
        components = "\n".join(
            f"- ID: {c.id}, Nom: {c.name}, Catégorie: {c.category}"
            + (f", Description: {c.description}" if c.description else "")
            for c in input_data.components
        )

        lines = [
            "Analyser le projet suivant et identifier les interactions pertinentes entre les activités "
            "et les composantes environnementales selon la méthodologie de la matrice de Léopold:",
            "",
            "PROJET:",
            f"- Nom: {input_data.project_name}",
        ]
        if input_data.project_description:
            lines.append(f"- Description: {input_data.project_description}")
        lines += [
            "",
            "ACTIVITÉS DU PROJET:",
            activities,
            "",
            "COMPOSANTES ENVIRONNEMENTALES:",
            components,
            "",
            PROJECT_INSTRUCTIONS.format(
                min_pairs=MIN_SUGGESTED_PAIRS, max_pairs=MAX_SUGGESTED_PAIRS
            ),
            "",
            "Format de réponse souhaité:",
            PROJECT_RESPONSE_FORMAT,
        ]
        return "\n".join(lines)

    def parse_response(
        self, content: str, input_data: ProjectAnalysisRequest
    ) -> ProjectAnalysisResult:
        return parse_project_analysis(content)
