import logging
import math
from typing import Optional, Sequence

from services.profile_scoring.code_mapper import map_section_code, map_vikriti_code
from services.profile_scoring.config import ProfileEngineSettings
from services.profile_scoring.definitions import MAX_PERSONALITY_ANSWER
from services.profile_scoring.dimension_scorer import score_dimensions
from services.profile_scoring.loader import get_default_instrument_spec, load_instrument_spec_from_file
from services.profile_scoring.logging_config import setup_logging
from services.profile_scoring.matcher import build_personality_code, match_personality_type
from services.profile_scoring.models import (
    ConstitutionReport,
    InstrumentSpec,
    MergedConstitutionReport,
    MergedPersonalityReport,
    MergedVikritiAnalysis,
    PersonalityResult,
    SectionResult,
    VikritiAnalysis,
    VikritiResult,
)
from services.profile_scoring.naming import generate_personality_name
from services.profile_scoring.report_text import render_report_text
from services.profile_scoring.resolver import resolve_primary_and_modifier
from services.profile_scoring.sections import count_categories, segment_sections
from services.profile_scoring.templates import (
    FileTemplateRepository,
    TemplateRepository,
    merge_constitution_report_with_templates,
    merge_personality_report_with_templates,
    merge_vikriti_analysis_with_templates,
)
from services.profile_scoring.validator import validate_answers
from services.profile_scoring.vikriti_analysis import analyze_vikriti

logger = logging.getLogger(__name__)


def _round2(value: float) -> float:
    # Half-up to two decimals
    return math.floor(value * 100 + 0.5) / 100


def _classify_section(name: str, section: Sequence[int]) -> SectionResult:
    counts = count_categories(section)
    primary, modifier = resolve_primary_and_modifier(counts, section)
    return SectionResult(
        code=map_section_code(name, primary, modifier),
        primary=primary,
        modifier=modifier,
        counts=counts,
    )


def generate_report(answers: Sequence[int], spec: Optional[InstrumentSpec] = None) -> ConstitutionReport:
    """
    Scores the 35-question constitutional test.

    Args:
        answers: 35 answers, each 1 (Vata), 2 (Pitta), 3 (Kapha) or 4 (neutral).
        spec: Instrument layout; the packaged layout when omitted.

    Returns:
        Body (B1-B9) and prakriti (P1-P9) results with primary/modifier, and the
        vikriti code (V0, I1-I9), each with its dosha counts.

    Raises:
        InvalidInputError: If the answer vector is malformed.
    """
    spec = spec or get_default_instrument_spec()
    values = validate_answers(answers, spec.instrument("constitution"), "constitution answers")
    sections = segment_sections(values, spec)

    vikriti_counts = count_categories(sections["vikriti"])
    report = ConstitutionReport(
        body=_classify_section("body", sections["body"]),
        prakriti=_classify_section("prakriti", sections["prakriti"]),
        vikriti=VikritiResult(
            code=map_vikriti_code(vikriti_counts, sections["vikriti"]),
            counts=vikriti_counts,
        ),
    )
    logger.debug(f"Constitution report: body={report.body.code} prakriti={report.prakriti.code} vikriti={report.vikriti.code}")
    return report


def generate_vikriti_analysis(answers: Sequence[int], spec: Optional[InstrumentSpec] = None) -> VikritiAnalysis:
    """Summary, graded imbalances, balance score and emotional line for the vikriti section."""
    spec = spec or get_default_instrument_spec()
    values = validate_answers(answers, spec.instrument("constitution"), "constitution answers")
    return analyze_vikriti(segment_sections(values, spec)["vikriti"])


def score_personality(answers: Sequence[int], spec: Optional[InstrumentSpec] = None) -> PersonalityResult:
    """
    Scores the 48-question personality test: six dimension variants, the hyphenated
    code, the catalog type (None when the code has no named entry), the generated
    name and an overall 0-100 score.
    """
    spec = spec or get_default_instrument_spec()
    values = validate_answers(answers, spec.instrument("personality"), "personality answers")

    dimensions = score_dimensions(spec.personality_dimensions, values)
    code = build_personality_code(dimensions)
    personality_type = match_personality_type(code)
    if personality_type is None:
        logger.info(f"Personality code {code} has no catalog entry")

    mean = sum(values) / len(values)
    return PersonalityResult(
        code=code,
        dimensions=tuple(dimensions),
        personality_type=personality_type,
        personality_name=generate_personality_name(dimensions),
        score=_round2(mean / MAX_PERSONALITY_ANSWER * 100),
    )


class ProfileEngine:
    """
    Bundles an instrument layout with a template repository so callers
    (HTTP handlers, batch jobs) hold a single dependency.
    """

    def __init__(
        self,
        templates: TemplateRepository,
        spec: Optional[InstrumentSpec] = None,
        clinic_name: Optional[str] = None,
    ):
        self.spec = spec or get_default_instrument_spec()
        self.templates = templates
        self.clinic_name = clinic_name

    @classmethod
    def from_settings(cls, settings: ProfileEngineSettings) -> "ProfileEngine":
        setup_logging(settings.log_level)
        spec = load_instrument_spec_from_file(settings.instruments_path)
        return cls(
            templates=FileTemplateRepository(settings.templates_path),
            spec=spec,
            clinic_name=settings.clinic_name,
        )

    def generate_report(self, answers: Sequence[int]) -> ConstitutionReport:
        return generate_report(answers, self.spec)

    def score_personality(self, answers: Sequence[int]) -> PersonalityResult:
        return score_personality(answers, self.spec)

    def merge_personality_report(self, result: PersonalityResult) -> MergedPersonalityReport:
        return merge_personality_report_with_templates(result, self.templates)

    def merge_constitution_report(self, report: ConstitutionReport) -> MergedConstitutionReport:
        return merge_constitution_report_with_templates(report, self.templates)

    def render_report_text(self, report: ConstitutionReport) -> str:
        return render_report_text(report, self.clinic_name)

    def analyze_vikriti(self, answers: Sequence[int]) -> VikritiAnalysis:
        return generate_vikriti_analysis(answers, self.spec)

    def merge_vikriti_analysis(self, analysis: VikritiAnalysis) -> MergedVikritiAnalysis:
        return merge_vikriti_analysis_with_templates(analysis, self.templates)
