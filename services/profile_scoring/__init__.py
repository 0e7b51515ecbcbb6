# Profile scoring: constitutional (body / prakriti / vikriti) and personality questionnaires
from .models import (
    ConstitutionReport, DimensionResult, Dosha, DoshaCounts, InstrumentSpecError,
    InvalidInputError, PersonalityResult, PersonalityType, TemplateStoreError, Variant,
    VikritiAnalysis
)
from .engine import ProfileEngine, generate_report, generate_vikriti_analysis, score_personality
from .templates import (
    FileTemplateRepository, InMemoryTemplateRepository, TemplateRepository,
    merge_constitution_report_with_templates, merge_personality_report_with_templates,
    merge_vikriti_analysis_with_templates
)
from .logging_config import setup_logging
