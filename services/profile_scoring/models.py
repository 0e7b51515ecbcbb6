from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Dosha(IntEnum):
    """Constitutional categories, valued as they appear in the answer vector."""
    VATA = 1
    PITTA = 2
    KAPHA = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def body_type(self) -> str:
        return {1: "Ectomorph", 2: "Mesomorph", 3: "Endomorph"}[self.value]


class Variant(str, Enum):
    A = "A"  # left pole dominant
    B = "B"  # balanced
    C = "C"  # right pole dominant


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# --- Instrument layout (loaded from assets/instruments.yml) ---

class InstrumentRange(BaseModel):
    length: int = Field(..., gt=0)
    min_value: int
    max_value: int


class SectionRange(BaseModel):
    name: str
    start: int = Field(..., ge=0)
    end: int = Field(..., gt=0)


class DimensionSpec(BaseModel):
    index: int = Field(..., ge=0)
    key: str
    name: str
    left_pole: str
    right_pole: str
    left_questions: List[int]
    right_questions: List[int]


class InstrumentSpec(BaseModel):
    version: str
    instruments: Dict[str, InstrumentRange]
    constitution_sections: List[SectionRange]
    personality_dimensions: List[DimensionSpec]

    def instrument(self, name: str) -> InstrumentRange:
        try:
            return self.instruments[name]
        except KeyError:
            raise InstrumentSpecError(f"Unknown instrument: {name}")

    def section(self, name: str) -> SectionRange:
        for section in self.constitution_sections:
            if section.name == name:
                return section
        raise InstrumentSpecError(f"Unknown constitution section: {name}")


# --- Constitutional test results ---

class DoshaCounts(FrozenModel):
    vata: int = Field(0, ge=0, alias="V")
    pitta: int = Field(0, ge=0, alias="P")
    kapha: int = Field(0, ge=0, alias="K")

    def get(self, dosha: Dosha) -> int:
        return getattr(self, dosha.name.lower())

    @property
    def total(self) -> int:
        return self.vata + self.pitta + self.kapha


class SectionResult(FrozenModel):
    code: str
    primary: Dosha
    modifier: Optional[Dosha] = None
    counts: DoshaCounts


class VikritiResult(FrozenModel):
    code: str
    counts: DoshaCounts


class ImbalanceLevel(str, Enum):
    DOMINANT = "dominant"
    SECONDARY = "secondary"
    MILD = "mild"


class VikritiImbalance(FrozenModel):
    dosha: Dosha
    count: int
    level: ImbalanceLevel


class VikritiAnalysis(FrozenModel):
    """Narrative-oriented reading of the vikriti section, alongside its I/V code."""
    summary: str                     # "Balanced", "Vata" or "Pitta-Vata" (leading dosha first)
    imbalances: Tuple[VikritiImbalance, ...] = ()
    counts: DoshaCounts
    recommendation: str
    balance_score: int
    raw_imbalance: int
    emotional_line: str


class ConstitutionReport(FrozenModel):
    body: SectionResult
    prakriti: SectionResult
    vikriti: VikritiResult


# --- Personality test results ---

class DimensionResult(FrozenModel):
    index: int
    key: str
    name: str
    left_pole: str
    right_pole: str
    left_score: int
    right_score: int
    variant: Variant
    code_letter: str


class PersonalityType(FrozenModel):
    id: int
    family: str
    name: str
    descriptor: str
    code: str


class PersonalityResult(FrozenModel):
    code: str
    dimensions: Tuple[DimensionResult, ...]
    personality_type: Optional[PersonalityType] = None
    personality_name: str
    score: float


# --- Template merge output ---

class MergedDimension(FrozenModel):
    dimension_result: DimensionResult
    template: Optional[Dict[str, Any]] = None


class MergedPersonalityReport(FrozenModel):
    code: str
    personality_type: Optional[PersonalityType] = None
    dimensions: Tuple[MergedDimension, ...]


class MergedSection(FrozenModel):
    code: str
    template: Optional[Dict[str, Any]] = None


class MergedConstitutionReport(FrozenModel):
    body: MergedSection
    prakriti: MergedSection
    vikriti: MergedSection
    body_modifier_line: Optional[str] = None
    prakriti_modifier_line: Optional[str] = None
    paid_preview_text: str


class MergedVikritiAnalysis(FrozenModel):
    analysis: VikritiAnalysis
    template_key: str
    paragraph: str
    quick_tip: str
    empathy_line: str


# Custom Error Classes
class InvalidInputError(ValueError):
    """Raised when an answer vector has the wrong length or an out-of-range value."""
    pass

class InstrumentSpecError(ValueError):
    """Raised when the declarative instrument layout is missing or inconsistent."""
    pass

class TemplateStoreError(RuntimeError):
    """Raised when the narrative template store cannot be read."""
    pass
