# services/profile_scoring/definitions.py
# Static reference tables for both instruments: code spaces, thresholds and the personality catalog.

from services.profile_scoring.models import Dosha, Variant

DOSHA_ORDER = (Dosha.VATA, Dosha.PITTA, Dosha.KAPHA)  # fixed fallback precedence
NEUTRAL_ANSWER = 4

# --- Part 1: Constitutional codes ---

# (primary, modifier) -> code. "No modifier" is looked up as (primary, primary).
SECTION_CODE_TABLES = {
    "body": {
        (Dosha.VATA, Dosha.VATA): "B1",     # Vata only
        (Dosha.VATA, Dosha.PITTA): "B2",    # Vata + Pitta
        (Dosha.VATA, Dosha.KAPHA): "B3",    # Vata + Kapha
        (Dosha.PITTA, Dosha.PITTA): "B4",   # Pitta only
        (Dosha.PITTA, Dosha.VATA): "B5",    # Pitta + Vata
        (Dosha.PITTA, Dosha.KAPHA): "B6",   # Pitta + Kapha
        (Dosha.KAPHA, Dosha.KAPHA): "B7",   # Kapha only
        (Dosha.KAPHA, Dosha.VATA): "B8",    # Kapha + Vata
        (Dosha.KAPHA, Dosha.PITTA): "B9",   # Kapha + Pitta
    },
    "prakriti": {
        (Dosha.VATA, Dosha.VATA): "P1",
        (Dosha.VATA, Dosha.PITTA): "P2",
        (Dosha.VATA, Dosha.KAPHA): "P3",
        (Dosha.PITTA, Dosha.PITTA): "P4",
        (Dosha.PITTA, Dosha.VATA): "P5",
        (Dosha.PITTA, Dosha.KAPHA): "P6",
        (Dosha.KAPHA, Dosha.KAPHA): "P7",
        (Dosha.KAPHA, Dosha.VATA): "P8",
        (Dosha.KAPHA, Dosha.PITTA): "P9",
    },
}

VIKRITI_DOMINANT_THRESHOLD = 7  # single dosha, strictly highest
VIKRITI_PAIR_THRESHOLD = 6      # both doshas of a pair
VIKRITI_BALANCED_CEILING = 5    # every dosha at or below

VIKRITI_BALANCED_CODE = "V0"
VIKRITI_SINGLE_CODES = {
    Dosha.VATA: "I1",
    Dosha.PITTA: "I2",
    Dosha.KAPHA: "I3",
}
# (first, second, code when first leads, code when second leads), in evaluation order
VIKRITI_PAIR_CODES = (
    (Dosha.VATA, Dosha.PITTA, "I4", "I5"),
    (Dosha.PITTA, Dosha.KAPHA, "I6", "I7"),
    (Dosha.VATA, Dosha.KAPHA, "I8", "I9"),
)

# --- Vikriti analysis (summary, levels, balance score) ---

# Ranking order when counts are equal; differs from DOSHA_ORDER on purpose.
VIKRITI_ANALYSIS_ORDER = (Dosha.PITTA, Dosha.VATA, Dosha.KAPHA)
BALANCED_SUMMARY = "Balanced"
BALANCED_RECOMMENDATION = "Currently, no major imbalance detected. System is relatively stable."

BALANCE_IMBALANCE_PENALTY = 2
# (max count at or above, score cap), highest first
BALANCE_SCORE_CAPS = ((10, 30), (9, 40), (8, 50))

# Keyed by canonical summary; pair keys are ordered Vata, Pitta, Kapha.
EMOTIONAL_LINES = {
    "Vata": "Your system feels restless and needs grounding.",
    "Pitta": "Your system is heated — cool and calm routines will help.",
    "Kapha": "Your system feels heavy — warmth, movement and light foods will help.",
    "Vata-Pitta": "Restless and heated — ground + cool.",
    "Vata-Kapha": "Restless yet heavy — ground + move.",
    "Pitta-Kapha": "Heated and heavy — cool + move.",
}
BALANCED_EMOTIONAL_LINE = "You're well balanced — maintain your current routines."

# --- Constitutional narrative fallbacks ---

DEFAULT_VIKRITI_QUICK_TIP = "Maintain balanced routines and lifestyle practices."
DEFAULT_PAID_PREVIEW = "72-hour reset • 14-day meal plan • 14-day movement plan"

# --- Part 2: Personality test ---

VARIANT_GAP = 5  # minimum pole difference for a non-balanced variant
BALANCED_CODE_LETTER = "B"
MAX_PERSONALITY_ANSWER = 7

CORE_GROUP_DIMENSIONS = ("mind", "stress", "energy")
ROLE_DIMENSIONS = ("social", "discipline", "habits")
NAMED_DIMENSIONS = ("mind", "stress", "discipline", "social", "energy", "habits")

CALM_THINKERS = "Calm Thinkers"
ADAPTIVE_NAVIGATORS = "Adaptive Navigators"
DYNAMIC_ENERGIZERS = "Dynamic Energizers"

MIND_WORDS = {
    Variant.A: "Thoughtful",   # Reflective
    Variant.B: "Adaptive",
    Variant.C: "Expressive",
}

UNKNOWN_PERSONALITY = "Unknown Personality"

# Dimension display name -> narrative template prefix
DIMENSION_TEMPLATE_PREFIXES = {
    "Mind Style": "Mind",
    "Stress Response": "Stress",
    "Health Discipline Style": "Discipline",
    "Social & Emotional Style": "Social",
    "Energy & Activity Style": "Energy",
    "Habit & Change Style": "Habit",
}

# 18 core personalities
PERSONALITY_TYPES = [
    {"id": 1, "family": CALM_THINKERS, "name": "Calm Adaptive Thinker",
     "descriptor": "Thoughtful, steady, flexible in real life", "code": "R-C-F-I-A-B"},
    {"id": 2, "family": CALM_THINKERS, "name": "Grounded Reflective Planner",
     "descriptor": "Calm, structured, dependable", "code": "R-C-S-I-R-C"},
    {"id": 3, "family": CALM_THINKERS, "name": "Quiet Consistent Builder",
     "descriptor": "Stable mind, steady habits", "code": "R-C-S-I-R-M"},
    {"id": 4, "family": CALM_THINKERS, "name": "Insightful Solo Navigator",
     "descriptor": "Deep thinker, values space and rhythm", "code": "R-C-F-I-R-B"},
    {"id": 5, "family": CALM_THINKERS, "name": "Gentle Routine Keeper",
     "descriptor": "Calm, disciplined, predictable", "code": "R-C-S-I-A-C"},
    {"id": 6, "family": CALM_THINKERS, "name": "Balanced Inner Harmonizer",
     "descriptor": "Emotionally steady, well-balanced", "code": "R-C-B-I-B-B"},
    {"id": 7, "family": ADAPTIVE_NAVIGATORS, "name": "Balanced Life Navigator",
     "descriptor": "Flexible, stable across situations", "code": "B-B-B-B-B-B"},
    {"id": 8, "family": ADAPTIVE_NAVIGATORS, "name": "Practical Flexible Planner",
     "descriptor": "Realistic, adaptable, health-oriented", "code": "B-C-F-B-A-B"},
    {"id": 9, "family": ADAPTIVE_NAVIGATORS, "name": "Steady Social Balancer",
     "descriptor": "Emotionally aware, socially flexible", "code": "B-B-F-P-B-B"},
    {"id": 10, "family": ADAPTIVE_NAVIGATORS, "name": "Mindful Energy Manager",
     "descriptor": "Balances activity and rest", "code": "B-C-B-B-R-B"},
    {"id": 11, "family": ADAPTIVE_NAVIGATORS, "name": "Adaptive Habit Shaper",
     "descriptor": "Builds habits with awareness", "code": "B-B-F-B-B-M"},
    {"id": 12, "family": ADAPTIVE_NAVIGATORS, "name": "Calm-Action Integrator",
     "descriptor": "Calm inside, active outside", "code": "B-C-B-B-A-C"},
    {"id": 13, "family": DYNAMIC_ENERGIZERS, "name": "Dynamic Expressive Explorer",
     "descriptor": "Energetic, expressive, interest-driven", "code": "E-R-F-P-A-M"},
    {"id": 14, "family": DYNAMIC_ENERGIZERS, "name": "Passion-Driven Connector",
     "descriptor": "Social, emotional, inspiration-led", "code": "E-R-F-P-B-M"},
    {"id": 15, "family": DYNAMIC_ENERGIZERS, "name": "High-Energy Action Starter",
     "descriptor": "Active, enthusiastic, fast-moving", "code": "E-R-B-P-A-B"},
    {"id": 16, "family": DYNAMIC_ENERGIZERS, "name": "Creative Momentum Seeker",
     "descriptor": "Thrives on novelty and movement", "code": "E-B-F-P-A-M"},
    {"id": 17, "family": DYNAMIC_ENERGIZERS, "name": "Expressive Habit Starter",
     "descriptor": "Starts strong, needs variety", "code": "E-R-F-B-A-M"},
    {"id": 18, "family": DYNAMIC_ENERGIZERS, "name": "Vibrant Social Energizer",
     "descriptor": "People-focused, lively, engaging", "code": "E-B-B-P-A-B"},
]
