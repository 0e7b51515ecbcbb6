# services/profile_scoring/naming.py
# Three-step personality naming: [CORE GROUP] – [MIND WORD] [ROLE]

import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from services.profile_scoring.definitions import (
    ADAPTIVE_NAVIGATORS,
    CALM_THINKERS,
    DYNAMIC_ENERGIZERS,
    MIND_WORDS,
    NAMED_DIMENSIONS,
    UNKNOWN_PERSONALITY,
)
from services.profile_scoring.models import DimensionResult, Variant
from services.profile_scoring.rules import Rule, first_match

logger = logging.getLogger(__name__)

A, B, C = Variant.A, Variant.B, Variant.C


@dataclass(frozen=True)
class CoreFacts:
    mind: Variant
    stress: Variant
    energy: Variant

    def count(self, variant: Variant) -> int:
        return [self.mind, self.stress, self.energy].count(variant)


@dataclass(frozen=True)
class RoleFacts:
    social: Variant
    discipline: Variant
    habits: Variant

    @property
    def balanced_count(self) -> int:
        return [self.social, self.discipline, self.habits].count(B)


CORE_GROUP_RULES: Tuple[Rule, ...] = (
    Rule("mostly-calm", lambda f: f.count(A) >= 2, CALM_THINKERS),
    Rule("mostly-dynamic", lambda f: f.count(C) >= 2, DYNAMIC_ENERGIZERS),
    Rule("mixed", lambda f: True, ADAPTIVE_NAVIGATORS),
)

# Social: A=Inner, C=People. Discipline: A=Structured, C=Flexible. Habits: A=Consistency, C=Motivated.
FUNCTIONAL_ROLE_RULES: Tuple[Rule, ...] = (
    Rule("connector", lambda f: f.social == C and f.habits == C, "Connector"),
    Rule("explorer", lambda f: f.discipline == C, "Explorer"),
    Rule("planner", lambda f: f.discipline == A, "Planner"),
    Rule("builder", lambda f: f.habits == A and f.social == A, "Builder"),
    Rule("starter", lambda f: f.habits == C, "Starter"),
    Rule("relationship-builder", lambda f: f.social == C and f.habits == A, "Relationship Builder"),
    # Shadowed by "explorer".
    Rule("social-energizer", lambda f: f.social == C and f.discipline == C, "Social Energizer",
         reachable=False),
    # Shadowed by "builder".
    Rule("quiet-builder", lambda f: f.social == A and f.habits == A, "Quiet Builder",
         reachable=False),
    # Shadowed by "planner".
    Rule("insight-seeker", lambda f: f.social == A and f.discipline == A, "Insight Seeker",
         reachable=False),
    Rule("inner-balancer", lambda f: f.social == A and f.balanced_count >= 2, "Inner Balancer"),
    # Shadowed by "explorer".
    Rule("momentum-driver", lambda f: f.habits == C and f.discipline == C, "Momentum Driver",
         reachable=False),
    Rule("balancer", lambda f: f.balanced_count >= 2, "Balancer"),
    # Every combination with fewer than two balanced dimensions is caught above.
    Rule("fallback", lambda f: True, "Balancer", reachable=False),
)


def determine_core_group(mind: Variant, stress: Variant, energy: Variant) -> str:
    return first_match(CORE_GROUP_RULES, CoreFacts(mind=mind, stress=stress, energy=energy))


def determine_functional_role(social: Variant, discipline: Variant, habits: Variant) -> str:
    return first_match(FUNCTIONAL_ROLE_RULES, RoleFacts(social=social, discipline=discipline, habits=habits))


def determine_mind_word(mind: Variant) -> str:
    return MIND_WORDS[mind]


def generate_personality_name(dimensions: Sequence[DimensionResult]) -> str:
    """
    Builds "{core group} – {mind word} {role}" from the six dimension results.
    Returns the "Unknown Personality" sentinel when any expected dimension is missing.
    """
    by_key: Dict[str, Variant] = {d.key: d.variant for d in dimensions}
    missing = [key for key in NAMED_DIMENSIONS if key not in by_key]
    if missing:
        logger.warning(f"Cannot name personality, missing dimensions: {missing}")
        return UNKNOWN_PERSONALITY

    core_group = determine_core_group(by_key["mind"], by_key["stress"], by_key["energy"])
    role = determine_functional_role(by_key["social"], by_key["discipline"], by_key["habits"])
    mind_word = determine_mind_word(by_key["mind"])
    return f"{core_group} – {mind_word} {role}"
