from typing import List, Sequence

from services.profile_scoring.definitions import BALANCED_CODE_LETTER, VARIANT_GAP
from services.profile_scoring.models import DimensionResult, DimensionSpec, Variant
from services.profile_scoring.sections import sum_poles


def classify_variant(left_score: int, right_score: int) -> Variant:
    """
    Variant A: left pole score >= 5 points higher than right pole
    Variant C: right pole score >= 5 points higher than left pole
    Variant B: difference < 5 points (balanced)
    """
    if abs(left_score - right_score) < VARIANT_GAP:
        return Variant.B
    if left_score >= right_score + VARIANT_GAP:
        return Variant.A
    return Variant.C


def code_letter(variant: Variant, left_pole: str, right_pole: str) -> str:
    if variant == Variant.B:
        return BALANCED_CODE_LETTER
    pole = left_pole if variant == Variant.A else right_pole
    return pole[:1].upper()


def score_dimension(dimension: DimensionSpec, answers: Sequence[int]) -> DimensionResult:
    left, right = sum_poles(answers, dimension)
    variant = classify_variant(left, right)
    return DimensionResult(
        index=dimension.index,
        key=dimension.key,
        name=dimension.name,
        left_pole=dimension.left_pole,
        right_pole=dimension.right_pole,
        left_score=left,
        right_score=right,
        variant=variant,
        code_letter=code_letter(variant, dimension.left_pole, dimension.right_pole),
    )


def score_dimensions(dimensions: Sequence[DimensionSpec], answers: Sequence[int]) -> List[DimensionResult]:
    """Scores every dimension, ordered by dimension index."""
    ordered = sorted(dimensions, key=lambda d: d.index)
    return [score_dimension(dim, answers) for dim in ordered]
