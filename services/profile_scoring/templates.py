# services/profile_scoring/templates.py
# Narrative template lookup and merge for both instruments.

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from services.profile_scoring.definitions import (
    DEFAULT_PAID_PREVIEW,
    DEFAULT_VIKRITI_QUICK_TIP,
    DIMENSION_TEMPLATE_PREFIXES,
)
from services.profile_scoring.models import (
    ConstitutionReport,
    DimensionResult,
    Dosha,
    MergedConstitutionReport,
    MergedDimension,
    MergedPersonalityReport,
    MergedSection,
    MergedVikritiAnalysis,
    PersonalityResult,
    TemplateStoreError,
    Variant,
    VikritiAnalysis,
)
from services.profile_scoring.vikriti_analysis import canonical_vikriti_key

logger = logging.getLogger(__name__)


class TemplateSet(BaseModel):
    """Read-only narrative records, keyed by template key or result code."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    personality_dimensions: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="personalityDimensions")
    body_code_reports: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="bodyCodeReports")
    prakriti_code_reports: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="prakritiCodeReports")
    vikriti_code_reports: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="vikritiCodeReports")

    # Body type name (Ectomorph, ...) -> modifier dosha -> line
    modifiers: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="modifiers")
    # Prakriti dosha -> modifier dosha -> line
    prakriti_modifiers: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="prakritiModifiers")
    # Canonical vikriti summary -> {paragraph, quickTip, empathyLine}
    vikriti: Dict[str, Dict[str, Any]] = Field(default_factory=dict, alias="vikriti")
    paid_preview: Optional[Dict[str, Any]] = Field(None, alias="paidPreview")


class TemplateRepository(ABC):
    """Source of narrative templates. Implementations must not mutate what they return."""

    @abstractmethod
    def load(self) -> TemplateSet:
        pass


class InMemoryTemplateRepository(TemplateRepository):
    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        try:
            self._templates = TemplateSet.model_validate(dict(data or {}))
        except ValidationError as e:
            raise TemplateStoreError(f"Invalid template data: {e}")

    def load(self) -> TemplateSet:
        return self._templates


class FileTemplateRepository(TemplateRepository):
    """
    Reads templates from a JSON or YAML file on every load, so edits to the
    file are picked up without restarting the process.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> TemplateSet:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                if self.path.suffix.lower() in (".yml", ".yaml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except FileNotFoundError:
            raise TemplateStoreError(f"Template file not found: {self.path}")
        except OSError as e:
            raise TemplateStoreError(f"Cannot read template file {self.path}: {e}")
        except UnicodeDecodeError as e:
            raise TemplateStoreError(f"Template file {self.path} is not valid UTF-8: {e}")
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise TemplateStoreError(f"Error parsing template file {self.path}: {e}")

        if not isinstance(data, dict):
            raise TemplateStoreError(f"Template file is empty or not a mapping: {self.path}")
        try:
            return TemplateSet.model_validate(data)
        except ValidationError as e:
            raise TemplateStoreError(f"Invalid template file {self.path}: {e}")


# --- Personality templates ---

def _first_word(pole: str) -> str:
    # "Consistency-Driven" -> "Consistency", "Inner-focused" -> "Inner"
    return pole.split()[0].split("-")[0] if pole.strip() else pole


def template_key(dimension: DimensionResult) -> str:
    """
    Format: {DimensionPrefix}_{Variant}_{PoleWord}
    Examples: "Mind_A_Reflective", "Mind_B_Balanced", "Habit_C_Motivation"
    """
    prefix = DIMENSION_TEMPLATE_PREFIXES.get(dimension.name)
    if prefix is None:
        prefix = "".join(dimension.name.split()).replace("&", "")

    if dimension.variant == Variant.B:
        return f"{prefix}_B_Balanced"
    if dimension.variant == Variant.A:
        return f"{prefix}_A_{_first_word(dimension.left_pole)}"
    return f"{prefix}_C_{_first_word(dimension.right_pole)}"


def merge_personality_report_with_templates(
    result: PersonalityResult,
    repository: TemplateRepository,
) -> MergedPersonalityReport:
    """
    Pairs each dimension result with its narrative template. A missing template is
    logged and left as None; the remaining dimensions are still merged.
    """
    templates = repository.load().personality_dimensions

    merged = []
    for dim in result.dimensions:
        key = template_key(dim)
        template = templates.get(key)
        if template is None:
            prefix = key.split("_")[0]
            logger.warning(
                f"Template not found for key: '{key}'",
                extra={
                    "template_key": key,
                    "dimension_name": dim.name,
                    "variant": dim.variant.value,
                    "available_keys": sorted(k for k in templates if k.startswith(prefix)),
                },
            )
        merged.append(MergedDimension(dimension_result=dim, template=template))

    return MergedPersonalityReport(
        code=result.code,
        personality_type=result.personality_type,
        dimensions=tuple(merged),
    )


# --- Constitutional code reports ---

def _lookup_code_report(table: Mapping[str, Dict[str, Any]], section: str, code: str) -> MergedSection:
    template = table.get(code)
    if template is None:
        logger.warning(f"No {section} code report for code: '{code}'", extra={"section": section, "code": code})
    return MergedSection(code=code, template=template)


def _modifier_line(
    table: Mapping[str, Dict[str, Any]],
    primary_key: str,
    modifier: Optional[Dosha],
    subject: str,
) -> Optional[str]:
    """Line from {primary: {modifier: line}}; a generic sentence when the pair has no entry."""
    if modifier is None:
        return None
    line = table.get(primary_key, {}).get(modifier.label)
    if line is None:
        logger.info(f"No modifier line for {primary_key}/{modifier.label}, using generic text")
        return f"Your {subject} has a {modifier.label} modifier."
    return line


def merge_constitution_report_with_templates(
    report: ConstitutionReport,
    repository: TemplateRepository,
) -> MergedConstitutionReport:
    templates = repository.load()
    paid_preview = templates.paid_preview or {}
    return MergedConstitutionReport(
        body=_lookup_code_report(templates.body_code_reports, "body", report.body.code),
        prakriti=_lookup_code_report(templates.prakriti_code_reports, "prakriti", report.prakriti.code),
        vikriti=_lookup_code_report(templates.vikriti_code_reports, "vikriti", report.vikriti.code),
        body_modifier_line=_modifier_line(
            templates.modifiers, report.body.primary.body_type, report.body.modifier, "body type"),
        prakriti_modifier_line=_modifier_line(
            templates.prakriti_modifiers, report.prakriti.primary.label, report.prakriti.modifier, "constitution"),
        paid_preview_text=paid_preview.get("text") or DEFAULT_PAID_PREVIEW,
    )


# --- Vikriti narrative ---

def merge_vikriti_analysis_with_templates(
    analysis: VikritiAnalysis,
    repository: TemplateRepository,
) -> MergedVikritiAnalysis:
    """
    Looks up the vikriti narrative by canonical summary ("Pitta-Vata" and "Vata-Pitta"
    share one entry). Without an entry the emotional line stands in for the paragraph.
    """
    key = canonical_vikriti_key(analysis.summary)
    template = repository.load().vikriti.get(key)
    if template is None:
        logger.warning(f"No vikriti narrative for summary: '{key}'", extra={"section": "vikriti", "template_key": key})
        template = {}

    return MergedVikritiAnalysis(
        analysis=analysis,
        template_key=key,
        paragraph=template.get("paragraph") or analysis.emotional_line,
        quick_tip=template.get("quickTip") or DEFAULT_VIKRITI_QUICK_TIP,
        empathy_line=template.get("empathyLine") or analysis.emotional_line,
    )
