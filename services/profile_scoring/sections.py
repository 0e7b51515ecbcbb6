from typing import Dict, Sequence, Tuple

from services.profile_scoring.models import DimensionSpec, DoshaCounts, InstrumentSpec


def segment_sections(answers: Sequence[int], spec: InstrumentSpec) -> Dict[str, Tuple[int, ...]]:
    """Slices a validated constitutional vector into its named sections."""
    return {
        section.name: tuple(answers[section.start:section.end])
        for section in spec.constitution_sections
    }


def count_categories(section: Sequence[int]) -> DoshaCounts:
    """Counts 1 (Vata), 2 (Pitta) and 3 (Kapha). The neutral option 4 is not counted."""
    return DoshaCounts(
        vata=sum(1 for v in section if v == 1),
        pitta=sum(1 for v in section if v == 2),
        kapha=sum(1 for v in section if v == 3),
    )


def sum_poles(answers: Sequence[int], dimension: DimensionSpec) -> Tuple[int, int]:
    """Returns (left pole sum, right pole sum) for one personality dimension."""
    left = sum(answers[q] for q in dimension.left_questions)
    right = sum(answers[q] for q in dimension.right_questions)
    return left, right
