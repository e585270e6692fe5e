"""
Best-effort decoding of free-text model answers into analysis artifacts.

The model is asked to answer with labelled sections (``JUSTIFICATION:``,
``IMPACTS SUGGÉRÉS:``, ``PLAN DE SUIVI:``, ...), but nothing guarantees it
does. Every decoder here degrades to an empty list or a default value when a
section or a field is missing, and skips lines it cannot read. Nothing in this
module raises on malformed input.
"""

import logging
import re
import unicodedata

from app.agent.artifacts import (
    ImpactAnalysisResult,
    MonitoringItem,
    PGESResult,
    PrioritizedImpact,
    Priority,
    ProjectAnalysisResult,
    Recommendation,
    ScoredImpactRequest,
    SuggestedImpact,
    UnscoredImpactRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_MAGNITUDE = 0
DEFAULT_IMPORTANCE = 5

_MITIGATION_MARKER = r"MESURES D['’]ATT[ÉE]NUATION\s*:"
_SCORE_MARKERS = r"MAGNITUDE\s*:|IMPORTANCE\s*:"

# Single-impact analysis
_MAGNITUDE_RE = re.compile(r"MAGNITUDE\s*:\s*\[?\s*([+-]?\d+)", re.IGNORECASE)
_IMPORTANCE_RE = re.compile(r"IMPORTANCE\s*:\s*\[?\s*(\d+)", re.IGNORECASE)
_JUSTIFICATION_RE = re.compile(
    rf"JUSTIFICATION\s*:(.*?)(?=ANALYSE\s*:|{_SCORE_MARKERS}|{_MITIGATION_MARKER}|\Z)", re.DOTALL
)
_ANALYSIS_RE = re.compile(
    rf"ANALYSE\s*:(.*?)(?=JUSTIFICATION\s*:|{_SCORE_MARKERS}|{_MITIGATION_MARKER}|\Z)", re.DOTALL
)
_MITIGATION_RE = re.compile(rf"{_MITIGATION_MARKER}(.*)\Z", re.DOTALL)

# Project-wide analysis
_SUGGESTED_SECTION_RE = re.compile(
    r"IMPACTS SUGG[ÉE]R[ÉE]S\s*:(.*?)(?=SYNTH[ÈE]SE NARRATIVE\s*:|\Z)", re.DOTALL
)
_SUGGESTED_LINE_RE = re.compile(
    r"Activit[ée] ID[ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Composante ID[ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Magnitude[ \t]*:[ \t]*\[?([+-]?\d+)\]?[ \t]*,"
    r"[ \t]*Importance[ \t]*:[ \t]*\[?(\d+)\]?[ \t]*,"
    r"[ \t]*Justification[ \t]*:[ \t]*([^\n]+)",
    re.IGNORECASE,
)
_NARRATIVE_RE = re.compile(r"SYNTH[ÈE]SE NARRATIVE\s*:(.*)\Z", re.DOTALL)

# PGES
_PGES_SUMMARY_RE = re.compile(
    r"SYNTH[ÈE]SE\s*:(.*?)(?=PRIORISATION DES IMPACTS\s*:|RECOMMANDATIONS\s*:|PLAN DE SUIVI\s*:|\Z)",
    re.DOTALL,
)
_PRIORITIZED_SECTION_RE = re.compile(
    r"PRIORISATION DES IMPACTS\s*:(.*?)(?=RECOMMANDATIONS\s*:|PLAN DE SUIVI\s*:|\Z)", re.DOTALL
)
_PRIORITIZED_LINE_RE = re.compile(
    r"Activit[ée][ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Composante[ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Magnitude[ \t]*:[ \t]*\[?([+-]?\d+)\]?[ \t]*,"
    r"[ \t]*Importance[ \t]*:[ \t]*\[?(\d+)\]?[ \t]*,"
    r"[ \t]*Priorit[ée][ \t]*:[ \t]*\[?([^\],.\n]+)",
    re.IGNORECASE,
)
_RECOMMENDATIONS_SECTION_RE = re.compile(
    r"RECOMMANDATIONS\s*:(.*?)(?=PLAN DE SUIVI\s*:|\Z)", re.DOTALL
)
_CATEGORY_RE = re.compile(
    r"Cat[ée]gorie[ \t]*:[ \t]*([^\n]+)\n?(.*?)"
    r"(?=^[ \t]*(?:\d+\.)?[ \t]*Cat[ée]gorie[ \t]*:|\Z)",
    re.DOTALL | re.MULTILINE | re.IGNORECASE,
)
_MONITORING_SECTION_RE = re.compile(r"PLAN DE SUIVI\s*:(.*)\Z", re.DOTALL)
_MONITORING_LINE_RE = re.compile(
    r"Indicateur[ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Fr[ée]quence[ \t]*:[ \t]*([^,\n]+),"
    r"[ \t]*Responsable[ \t]*:[ \t]*([^\n]+)",
    re.IGNORECASE,
)

_BULLET_RE = re.compile(r"^[ \t]*[-•*–][ \t]+", re.MULTILINE)

_PRIORITY_ALIASES = {
    "elevee": Priority.high,
    "haute": Priority.high,
    "high": Priority.high,
    "moyenne": Priority.medium,
    "medium": Priority.medium,
    "faible": Priority.low,
    "basse": Priority.low,
    "low": Priority.low,
}


def _normalize(content: str) -> str:
    # Markdown emphasis around labels ("**ANALYSE:**") would hide the markers.
    return (content or "").replace("\r\n", "\n").replace("**", "")


def _clean_block(text: str) -> str:
    return text.strip().strip("#").strip()


def _clean_value(text: str) -> str:
    return text.strip().strip("[]").strip()


def _section(pattern: re.Pattern, content: str, name: str) -> str | None:
    match = pattern.search(content)
    if not match:
        logger.debug("Section %s not found in model response", name)
        return None
    return _clean_block(match.group(1))


def split_bullets(block: str) -> list[str]:
    """
    Split a bulleted block into trimmed entries, dropping empty ones.
    Text before the first bullet is ignored; a block without bullets is read one entry per line.
    """
    parts = _BULLET_RE.split(block)
    items = parts[1:] if len(parts) > 1 else block.splitlines()
    return [" ".join(item.split()) for item in items if item.strip()]


def parse_impact_analysis(
    content: str, request: ScoredImpactRequest | UnscoredImpactRequest
) -> ImpactAnalysisResult:
    text = _normalize(content)

    if isinstance(request, ScoredImpactRequest):
        magnitude = request.magnitude
        importance = request.importance
    else:
        magnitude = DEFAULT_MAGNITUDE
        importance = DEFAULT_IMPORTANCE
        magnitude_match = _MAGNITUDE_RE.search(text)
        if magnitude_match:
            magnitude = int(magnitude_match.group(1))
        else:
            logger.debug("No MAGNITUDE in model response, using %s", DEFAULT_MAGNITUDE)
        importance_match = _IMPORTANCE_RE.search(text)
        if importance_match:
            importance = int(importance_match.group(1))
        else:
            logger.debug("No IMPORTANCE in model response, using %s", DEFAULT_IMPORTANCE)

    justification = _section(_JUSTIFICATION_RE, text, "JUSTIFICATION") or ""

    analysis = _section(_ANALYSIS_RE, text, "ANALYSE")
    if analysis is None:
        # Keep the whole answer rather than dropping it.
        analysis = text.strip()

    mitigation_block = _section(_MITIGATION_RE, text, "MESURES D'ATTÉNUATION")
    mitigation_measures = split_bullets(mitigation_block) if mitigation_block else []

    return ImpactAnalysisResult(
        magnitude=magnitude,
        importance=importance,
        justification=justification,
        analysis=analysis,
        mitigation_measures=mitigation_measures,
    )


def parse_project_analysis(content: str) -> ProjectAnalysisResult:
    text = _normalize(content)

    impacts_block = _section(_SUGGESTED_SECTION_RE, text, "IMPACTS SUGGÉRÉS")
    if impacts_block is None:
        impacts_block = text

    suggested_impacts: list[SuggestedImpact] = []
    for match in _SUGGESTED_LINE_RE.finditer(impacts_block):
        activity_id, component_id, magnitude, importance, justification = match.groups()
        suggested_impacts.append(
            SuggestedImpact(
                activity_id=_clean_value(activity_id),
                component_id=_clean_value(component_id),
                magnitude=int(magnitude),
                importance=int(importance),
                justification=_clean_value(justification),
            )
        )

    summary = _section(_NARRATIVE_RE, text, "SYNTHÈSE NARRATIVE") or ""
    return ProjectAnalysisResult(suggested_impacts=suggested_impacts, summary=summary)


def _parse_priority(raw: str) -> Priority | None:
    words = unicodedata.normalize("NFKD", raw).encode("ascii", "ignore").decode().lower().split()
    return _PRIORITY_ALIASES.get(words[0]) if words else None


def parse_pges(content: str) -> PGESResult:
    text = _normalize(content)

    summary = _section(_PGES_SUMMARY_RE, text, "SYNTHÈSE") or ""

    prioritized_impacts: list[PrioritizedImpact] = []
    prioritized_block = _section(_PRIORITIZED_SECTION_RE, text, "PRIORISATION DES IMPACTS")
    if prioritized_block:
        for match in _PRIORITIZED_LINE_RE.finditer(prioritized_block):
            activity_name, component_name, magnitude, importance, raw_priority = match.groups()
            priority = _parse_priority(raw_priority)
            if priority is None:
                logger.debug("Unknown priority %r, skipping line", raw_priority)
                continue
            prioritized_impacts.append(
                PrioritizedImpact(
                    activity_name=_clean_value(activity_name),
                    component_name=_clean_value(component_name),
                    magnitude=int(magnitude),
                    importance=int(importance),
                    priority=priority,
                )
            )

    recommendations: list[Recommendation] = []
    recommendations_block = _section(_RECOMMENDATIONS_SECTION_RE, text, "RECOMMANDATIONS")
    if recommendations_block:
        for match in _CATEGORY_RE.finditer(recommendations_block):
            category, measures_text = match.groups()
            recommendations.append(
                Recommendation(
                    category=_clean_value(category),
                    measures=split_bullets(measures_text),
                )
            )

    monitoring_plan: list[MonitoringItem] = []
    monitoring_block = _section(_MONITORING_SECTION_RE, text, "PLAN DE SUIVI")
    if monitoring_block:
        for match in _MONITORING_LINE_RE.finditer(monitoring_block):
            indicator, frequency, responsible_party = match.groups()
            monitoring_plan.append(
                MonitoringItem(
                    indicator=_clean_value(indicator),
                    frequency=_clean_value(frequency),
                    responsible_party=_clean_value(responsible_party),
                )
            )

    return PGESResult(
        summary=summary,
        prioritized_impacts=prioritized_impacts,
        recommendations=recommendations,
        monitoring_plan=monitoring_plan,
    )
