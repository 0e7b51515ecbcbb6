# services/profile_scoring/code_mapper.py
# Maps constitutional section results onto the closed B/P/V/I code spaces.

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from services.profile_scoring.definitions import (
    DOSHA_ORDER,
    SECTION_CODE_TABLES,
    VIKRITI_BALANCED_CEILING,
    VIKRITI_BALANCED_CODE,
    VIKRITI_DOMINANT_THRESHOLD,
    VIKRITI_PAIR_CODES,
    VIKRITI_PAIR_THRESHOLD,
    VIKRITI_SINGLE_CODES,
)
from services.profile_scoring.models import Dosha, DoshaCounts
from services.profile_scoring.resolver import earliest_precedence
from services.profile_scoring.rules import Rule, first_match

logger = logging.getLogger(__name__)


def map_section_code(section_name: str, primary: Dosha, modifier: Optional[Dosha]) -> str:
    """Body (B1-B9) and prakriti (P1-P9) lookup. No modifier selects the single-dosha code."""
    try:
        table = SECTION_CODE_TABLES[section_name]
    except KeyError:
        raise ValueError(f"No code table for section '{section_name}'")
    return table[(primary, modifier if modifier is not None else primary)]


@dataclass(frozen=True)
class VikritiFacts:
    counts: DoshaCounts
    section: Tuple[int, ...]


def _strictly_dominant(dosha: Dosha):
    def predicate(facts: VikritiFacts) -> bool:
        own = facts.counts.get(dosha)
        others = [facts.counts.get(d) for d in DOSHA_ORDER if d != dosha]
        return own >= VIKRITI_DOMINANT_THRESHOLD and all(own > other for other in others)
    return predicate


def _paired(first: Dosha, second: Dosha):
    def predicate(facts: VikritiFacts) -> bool:
        return (facts.counts.get(first) >= VIKRITI_PAIR_THRESHOLD
                and facts.counts.get(second) >= VIKRITI_PAIR_THRESHOLD)
    return predicate


def _pair_leader(first: Dosha, second: Dosha, first_code: str, second_code: str):
    def outcome(facts: VikritiFacts) -> str:
        a, b = facts.counts.get(first), facts.counts.get(second)
        if a > b:
            return first_code
        if b > a:
            return second_code
        # Equal counts: the dosha whose running count reaches the shared value first leads.
        leader = earliest_precedence(facts.section, (first, second), a)
        return first_code if leader == first else second_code
    return outcome


def _all_within_ceiling(facts: VikritiFacts) -> bool:
    return all(facts.counts.get(d) <= VIKRITI_BALANCED_CEILING for d in DOSHA_ORDER)


def _highest(dosha: Dosha):
    def predicate(facts: VikritiFacts) -> bool:
        own = facts.counts.get(dosha)
        return all(own >= facts.counts.get(d) for d in DOSHA_ORDER)
    return predicate


# Order is significant: dominant before paired before balanced before fallback.
VIKRITI_RULES: Tuple[Rule, ...] = (
    *(Rule(f"dominant-{d.label.lower()}", _strictly_dominant(d), VIKRITI_SINGLE_CODES[d])
      for d in DOSHA_ORDER),
    *(Rule(f"paired-{a.label.lower()}-{b.label.lower()}", _paired(a, b), _pair_leader(a, b, code_a, code_b))
      for a, b, code_a, code_b in VIKRITI_PAIR_CODES),
    Rule("balanced", _all_within_ceiling, VIKRITI_BALANCED_CODE),
    *(Rule(f"highest-{d.label.lower()}", _highest(d), VIKRITI_SINGLE_CODES[d])
      for d in DOSHA_ORDER),
)


def map_vikriti_code(counts: DoshaCounts, section: Sequence[int]) -> str:
    """Vikriti code (V0 balanced, I1-I9 imbalances) from raw section counts."""
    code = first_match(VIKRITI_RULES, VikritiFacts(counts=counts, section=tuple(section)))
    logger.debug(f"Vikriti counts V={counts.vata} P={counts.pitta} K={counts.kapha} -> {code}")
    return code
