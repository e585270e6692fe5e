PROJECT_SYSTEM_PROMPT = """
Vous êtes un expert en évaluation d'impact environnemental spécialisé dans la matrice de Léopold.
Vous identifiez les interactions pertinentes entre les activités d'un projet et les composantes
environnementales, puis vous proposez une évaluation préliminaire de chacune.
Utilisez uniquement les identifiants fournis et respectez strictement le format de réponse demandé.
"""

MIN_SUGGESTED_PAIRS = 25
MAX_SUGGESTED_PAIRS = 50

PROJECT_INSTRUCTIONS = """Veuillez identifier les interactions pertinentes ({min_pairs}-{max_pairs} sur l'ensemble des possibilités) entre les activités et les composantes environnementales, et fournir pour chacune:
1. L'ID de l'activité et l'ID de la composante concernées
2. Une magnitude estimée entre -10 et +10 (négative pour un impact défavorable, positive pour un impact favorable, jamais 0)
3. Une importance estimée entre 1 et 10 (1 = peu important, 10 = très important)
4. Une brève justification (1-2 phrases)

Fournissez également une synthèse narrative globale du projet et de ses principaux enjeux environnementaux."""

PROJECT_RESPONSE_FORMAT = """IMPACTS SUGGÉRÉS:
1. Activité ID: [ID], Composante ID: [ID], Magnitude: [Valeur], Importance: [Valeur], Justification: [Brève justification]
2. Activité ID: [ID], Composante ID: [ID], Magnitude: [Valeur], Importance: [Valeur], Justification: [Brève justification]
[etc.]

SYNTHÈSE NARRATIVE:
[Synthèse narrative du projet et de ses principaux enjeux environnementaux]"""
