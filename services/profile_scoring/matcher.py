import re
from typing import Dict, Optional, Sequence

from services.profile_scoring.definitions import PERSONALITY_TYPES
from services.profile_scoring.models import DimensionResult, PersonalityType

_WHITESPACE = re.compile(r"\s+")


def normalize_code(code: str) -> str:
    return _WHITESPACE.sub("", code).upper()


CATALOG: Dict[str, PersonalityType] = {
    normalize_code(entry["code"]): PersonalityType(**entry) for entry in PERSONALITY_TYPES
}


def build_personality_code(dimensions: Sequence[DimensionResult]) -> str:
    """Hyphen-joined code letters in dimension order, e.g. "R-C-F-I-A-B"."""
    return "-".join(d.code_letter for d in sorted(dimensions, key=lambda d: d.index))


def match_personality_type(code: str) -> Optional[PersonalityType]:
    """Exact catalog match; most of the code space has no named type and yields None."""
    return CATALOG.get(normalize_code(code))
