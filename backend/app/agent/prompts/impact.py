IMPACT_SYSTEM_PROMPT = """
Vous êtes un expert en évaluation d'impact environnemental spécialisé dans la matrice de Léopold.
Vous analysez l'interaction entre une activité d'un projet de génie civil et une composante
environnementale : vous attribuez (ou justifiez) une magnitude et une importance à cet impact,
vous en décrivez les conséquences et vous proposez des mesures d'atténuation concrètes.
Respectez strictement le format de réponse demandé, avec les libellés en majuscules.
"""

SCORED_INSTRUCTIONS = """ÉVALUATION DE L'IMPACT:
- Magnitude: {magnitude} (échelle de -10 à +10)
- Importance: {importance} (échelle de 1 à 10)

Veuillez fournir:
1. Une justification détaillée de cette évaluation (pourquoi cette magnitude et cette importance).
2. Une analyse approfondie des conséquences potentielles de cet impact.
3. Une liste de mesures d'atténuation spécifiques et concrètes."""

UNSCORED_INSTRUCTIONS = """Veuillez évaluer cet impact et fournir:
1. Une magnitude entre -10 et +10 (négative pour un impact défavorable, positive pour un impact favorable, jamais 0).
2. Une importance entre 1 et 10 (1 = peu important, 10 = très important).
3. Une justification détaillée de cette évaluation.
4. Une analyse approfondie des conséquences potentielles de cet impact.
5. Une liste de mesures d'atténuation spécifiques et concrètes."""

SCORE_FORMAT = """MAGNITUDE: [Valeur entière entre -10 et +10, sauf 0]
IMPORTANCE: [Valeur entière entre 1 et 10]
"""

RESPONSE_FORMAT = """JUSTIFICATION: [Justification de l'évaluation]
ANALYSE: [Analyse détaillée]
MESURES D'ATTÉNUATION:
- [Mesure 1]
- [Mesure 2]
- [etc.]"""
