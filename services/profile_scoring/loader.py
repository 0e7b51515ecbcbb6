import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Set

import yaml
from pydantic import ValidationError

from services.profile_scoring.models import InstrumentSpec, InstrumentSpecError

logger = logging.getLogger(__name__)

DEFAULT_INSTRUMENTS_PATH = Path(__file__).parent / "assets" / "instruments.yml"

REQUIRED_INSTRUMENTS = ("constitution", "personality")
REQUIRED_SECTIONS = ("body", "prakriti", "vikriti")


def _validate_sections(config: InstrumentSpec) -> None:
    length = config.instrument("constitution").length
    names = [s.name for s in config.constitution_sections]
    for name in REQUIRED_SECTIONS:
        if name not in names:
            raise InstrumentSpecError(f"Missing constitution section: {name}")
    if len(names) != len(set(names)):
        raise InstrumentSpecError(f"Duplicate constitution section names: {names}")

    # Sections must tile [0, length) with no gaps or overlaps, in declaration order.
    cursor = 0
    for section in config.constitution_sections:
        if section.start != cursor:
            raise InstrumentSpecError(
                f"Section '{section.name}' starts at {section.start}, expected {cursor}"
            )
        if section.end <= section.start:
            raise InstrumentSpecError(f"Section '{section.name}' is empty or reversed")
        cursor = section.end
    if cursor != length:
        raise InstrumentSpecError(
            f"Constitution sections cover {cursor} answers, instrument length is {length}"
        )


def _validate_dimensions(config: InstrumentSpec) -> None:
    length = config.instrument("personality").length
    seen_indexes: Set[int] = set()
    seen_keys: Set[str] = set()
    used_questions: Set[int] = set()

    for dim in config.personality_dimensions:
        if dim.index in seen_indexes:
            raise InstrumentSpecError(f"Duplicate dimension index: {dim.index}")
        seen_indexes.add(dim.index)
        if dim.key in seen_keys:
            raise InstrumentSpecError(f"Duplicate dimension key: {dim.key}")
        seen_keys.add(dim.key)

        if not dim.left_questions or not dim.right_questions:
            raise InstrumentSpecError(f"Dimension '{dim.key}' needs questions on both poles")
        for q in dim.left_questions + dim.right_questions:
            if not 0 <= q < length:
                raise InstrumentSpecError(
                    f"Question index {q} in dimension '{dim.key}' is outside 0..{length - 1}"
                )
            if q in used_questions:
                raise InstrumentSpecError(
                    f"Question index {q} is assigned more than once (dimension '{dim.key}')"
                )
            used_questions.add(q)

    if sorted(seen_indexes) != list(range(len(config.personality_dimensions))):
        raise InstrumentSpecError(
            f"Dimension indexes must run 0..{len(config.personality_dimensions) - 1}, got {sorted(seen_indexes)}"
        )


def load_instrument_spec_data(data: Dict[str, Any]) -> InstrumentSpec:
    """
    Validates the raw dictionary data against the InstrumentSpec model
    and performs the layout checks pydantic cannot express.
    """
    try:
        config = InstrumentSpec.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    for name in REQUIRED_INSTRUMENTS:
        instrument = config.instrument(name)
        if instrument.min_value > instrument.max_value:
            raise InstrumentSpecError(f"Instrument '{name}' has min_value above max_value")

    _validate_sections(config)
    _validate_dimensions(config)
    return config


def load_instrument_spec_from_file(file_path: str) -> InstrumentSpec:
    """
    Loads the instrument layout from a YAML file, validates it,
    and returns an InstrumentSpec object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise InstrumentSpecError(f"File not found: {file_path}")
    except OSError as e:
        raise InstrumentSpecError(f"Cannot read layout file {file_path}: {e}")
    except UnicodeDecodeError as e:
        raise InstrumentSpecError(f"Layout file {file_path} is not valid UTF-8: {e}")
    except yaml.YAMLError as e:
        raise InstrumentSpecError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise InstrumentSpecError(f"YAML file is empty or invalid: {file_path}")

    spec = load_instrument_spec_data(data)
    logger.info(f"Loaded instrument layout v{spec.version} from {file_path}")
    return spec


@lru_cache(maxsize=None)
def get_default_instrument_spec() -> InstrumentSpec:
    """The packaged layout, loaded and validated once per process."""
    return load_instrument_spec_from_file(str(DEFAULT_INSTRUMENTS_PATH))
