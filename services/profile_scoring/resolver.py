import logging
from typing import Optional, Sequence, Tuple

from services.profile_scoring.definitions import DOSHA_ORDER
from services.profile_scoring.models import Dosha, DoshaCounts

logger = logging.getLogger(__name__)


def earliest_precedence(section: Sequence[int], tied: Sequence[Dosha], target: int) -> Dosha:
    """
    Tie-break by earliest-question precedence.

    Scans the section from first to last answer, keeping a running count for each tied
    dosha, and returns the one whose running count reaches `target` first. Falls back to
    Vata > Pitta > Kapha when the scan cannot separate them.
    """
    running = {dosha: 0 for dosha in tied}
    for answer in section:
        if answer in running:
            running[answer] += 1
            if running[answer] == target:
                return Dosha(answer)

    for dosha in DOSHA_ORDER:
        if dosha in running:
            return dosha
    raise ValueError("earliest_precedence needs at least one tied dosha")


def _pick(counts: DoshaCounts, candidates: Sequence[Dosha], section: Sequence[int]) -> Tuple[Dosha, int]:
    best = max(counts.get(d) for d in candidates)
    tied = [d for d in candidates if counts.get(d) == best]
    if len(tied) == 1:
        return tied[0], best
    winner = earliest_precedence(section, tied, best)
    logger.debug(f"Tie at {best} between {[d.label for d in tied]} resolved to {winner.label}")
    return winner, best


def resolve_primary_and_modifier(
    counts: DoshaCounts,
    section: Sequence[int],
) -> Tuple[Dosha, Optional[Dosha]]:
    """
    Determines the primary dosha (highest count) and the modifier (highest of the
    remaining two). The modifier is None when the remaining doshas were never chosen.
    """
    primary, _ = _pick(counts, DOSHA_ORDER, section)

    remaining = [d for d in DOSHA_ORDER if d != primary]
    modifier, second_count = _pick(counts, remaining, section)
    if second_count == 0:
        return primary, None
    return primary, modifier
