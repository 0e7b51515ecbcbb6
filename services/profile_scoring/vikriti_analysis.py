# services/profile_scoring/vikriti_analysis.py
# Narrative reading of the vikriti section: summary, imbalance levels, balance score.

import logging
import math
from typing import List, Optional, Sequence, Tuple

from services.profile_scoring.definitions import (
    BALANCE_IMBALANCE_PENALTY,
    BALANCE_SCORE_CAPS,
    BALANCED_EMOTIONAL_LINE,
    BALANCED_RECOMMENDATION,
    BALANCED_SUMMARY,
    DOSHA_ORDER,
    EMOTIONAL_LINES,
    NEUTRAL_ANSWER,
    VIKRITI_ANALYSIS_ORDER,
)
from services.profile_scoring.models import (
    Dosha,
    DoshaCounts,
    ImbalanceLevel,
    VikritiAnalysis,
    VikritiImbalance,
)
from services.profile_scoring.sections import count_categories

logger = logging.getLogger(__name__)


def canonical_vikriti_key(summary: str) -> str:
    """'Pitta-Vata' -> 'Vata-Pitta'. Single doshas and 'Balanced' are returned unchanged."""
    parts = summary.split("-")
    if len(parts) != 2:
        return summary
    by_label = {d.label: d for d in Dosha}
    if not all(p in by_label for p in parts):
        return summary
    ordered = sorted((by_label[p] for p in parts), key=DOSHA_ORDER.index)
    return "-".join(d.label for d in ordered)


def compute_balance_score(counts: DoshaCounts) -> Tuple[int, int]:
    """
    Returns (score, raw_imbalance). The raw imbalance is the sum of pairwise count
    differences; the score is 100 minus twice that, capped hard for strong single counts.
    """
    raw_imbalance = (abs(counts.vata - counts.pitta)
                     + abs(counts.pitta - counts.kapha)
                     + abs(counts.vata - counts.kapha))
    score = max(0, 100 - raw_imbalance * BALANCE_IMBALANCE_PENALTY)

    max_count = max(counts.vata, counts.pitta, counts.kapha)
    for threshold, cap in BALANCE_SCORE_CAPS:
        if max_count >= threshold:
            score = min(score, cap)
            break
    return max(0, min(100, score)), raw_imbalance


def short_emotional_line(summary: str) -> str:
    return EMOTIONAL_LINES.get(canonical_vikriti_key(summary), BALANCED_EMOTIONAL_LINE)


def _level(count: int, is_top: bool, top_count: int) -> Optional[ImbalanceLevel]:
    if count <= 0:
        return None
    if is_top:
        return ImbalanceLevel.DOMINANT
    if count >= top_count / 2:
        return ImbalanceLevel.SECONDARY
    return ImbalanceLevel.MILD


def _rank(counts: DoshaCounts) -> List[Dosha]:
    # sorted() is stable, so equal counts keep VIKRITI_ANALYSIS_ORDER
    return sorted(VIKRITI_ANALYSIS_ORDER, key=lambda d: -counts.get(d))


def analyze_vikriti(section: Sequence[int]) -> VikritiAnalysis:
    """
    Reads the vikriti answers as a summary plus graded imbalances.

    A section where at least half the answers (rounded up) are neutral is Balanced.
    Otherwise the neutral answers are dropped and the doshas ranked by count
    (ties Pitta > Vata > Kapha): the second dosha joins the summary when its count
    is at least half the leader's.
    """
    raw_counts = count_categories(section)
    score, raw_imbalance = compute_balance_score(raw_counts)

    neutral = sum(1 for v in section if v == NEUTRAL_ANSWER)
    if neutral >= math.ceil(len(section) / 2):
        logger.debug(f"Vikriti balanced: {neutral} of {len(section)} answers neutral")
        return VikritiAnalysis(
            summary=BALANCED_SUMMARY,
            imbalances=(),
            counts=DoshaCounts(),
            recommendation=BALANCED_RECOMMENDATION,
            balance_score=score,
            raw_imbalance=raw_imbalance,
            emotional_line=BALANCED_EMOTIONAL_LINE,
        )

    ranked = _rank(raw_counts)
    top, second = ranked[0], ranked[1]
    top_count, second_count = raw_counts.get(top), raw_counts.get(second)

    imbalances = []
    for position, dosha in enumerate(ranked):
        level = _level(raw_counts.get(dosha), position == 0, top_count)
        if level is not None:
            imbalances.append(VikritiImbalance(dosha=dosha, count=raw_counts.get(dosha), level=level))

    if second_count >= top_count:
        summary = f"{top.label}-{second.label}"
        recommendation = (f"Dual imbalance: {top.label} ({top_count}) and "
                          f"{second.label} ({second_count}) both dominant")
    elif second_count >= top_count / 2:
        summary = f"{top.label}-{second.label}"
        recommendation = (f"Dual imbalance: {top.label} ({top_count}) dominant with "
                          f"{second.label} ({second_count}) secondary")
    else:
        summary = top.label
        recommendation = f"Single imbalance: {top.label} ({top_count}) dominant"

    return VikritiAnalysis(
        summary=summary,
        imbalances=tuple(imbalances),
        counts=raw_counts,
        recommendation=recommendation,
        balance_score=score,
        raw_imbalance=raw_imbalance,
        emotional_line=short_emotional_line(summary),
    )
