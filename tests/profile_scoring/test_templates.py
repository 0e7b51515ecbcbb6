import json
import logging

import pytest
import yaml

from services.profile_scoring.engine import generate_report, score_personality
from services.profile_scoring.models import DimensionResult, TemplateStoreError, Variant
from services.profile_scoring.templates import (
    FileTemplateRepository,
    InMemoryTemplateRepository,
    merge_constitution_report_with_templates,
    merge_personality_report_with_templates,
    merge_vikriti_analysis_with_templates,
    template_key,
)
from services.profile_scoring.vikriti_analysis import analyze_vikriti


def _dimension(name, left_pole, right_pole, variant):
    return DimensionResult(
        index=0, key="x", name=name, left_pole=left_pole, right_pole=right_pole,
        left_score=16, right_score=16, variant=variant, code_letter="B",
    )


# --- Template keys ---

@pytest.mark.parametrize("name,left,right,variant,key", [
    ("Mind Style", "Reflective", "Expressive", Variant.A, "Mind_A_Reflective"),
    ("Mind Style", "Reflective", "Expressive", Variant.B, "Mind_B_Balanced"),
    ("Mind Style", "Reflective", "Expressive", Variant.C, "Mind_C_Expressive"),
    ("Habit & Change Style", "Consistency-Driven", "Motivation-Driven", Variant.C, "Habit_C_Motivation"),
    ("Social & Emotional Style", "Inner-focused", "People-focused", Variant.C, "Social_C_People"),
    ("Health Discipline Style", "Structured", "Flexible", Variant.A, "Discipline_A_Structured"),
    ("Sleep & Rest Style", "Early Riser", "Night Owl", Variant.A, "SleepRestStyle_A_Early"),
])
def test_template_key(name, left, right, variant, key):
    assert template_key(_dimension(name, left, right, variant)) == key


def test_template_keys_for_scored_result(build_personality):
    result = score_personality(build_personality([(7, 1), (7, 1), (1, 7), (7, 1), (7, 1), (4, 4)]))
    assert [template_key(d) for d in result.dimensions] == [
        "Mind_A_Reflective", "Stress_A_Composed", "Discipline_C_Flexible",
        "Social_A_Inner", "Energy_A_Active", "Habit_B_Balanced",
    ]


# --- Personality merge ---

def test_merge_personality_report(build_personality, template_repository):
    result = score_personality(build_personality([(7, 1), (7, 1), (1, 7), (7, 1), (7, 1), (4, 4)]))
    merged = merge_personality_report_with_templates(result, template_repository)

    assert merged.code == "R-C-F-I-A-B"
    assert merged.personality_type.id == 1
    assert [m.template["title"] for m in merged.dimensions] == [
        "The Reflective Mind", "Composed Under Pressure", "Flexible Health Habits",
        "Inner-Focused", "Active Energy", "Balanced Habits",
    ]
    assert merged.dimensions[0].dimension_result == result.dimensions[0]


def test_missing_templates_are_none_and_logged(build_personality, template_repository, caplog):
    result = score_personality(build_personality([(1, 7)] * 6))
    with caplog.at_level(logging.WARNING):
        merged = merge_personality_report_with_templates(result, template_repository)

    templates = {template_key(m.dimension_result): m.template for m in merged.dimensions}
    assert templates["Mind_C_Expressive"] == {"title": "The Expressive Mind"}
    assert templates["Discipline_C_Flexible"] == {"title": "Flexible Health Habits"}
    for key in ("Stress_C_Reactive", "Social_C_People", "Energy_C_Relaxed", "Habit_C_Motivation"):
        assert templates[key] is None
        assert key in caplog.text

    record = next(r for r in caplog.records if "Stress_C_Reactive" in r.getMessage())
    assert record.available_keys == ["Stress_A_Composed", "Stress_B_Balanced"]
    assert record.variant == "C"


def test_merge_does_not_modify_repository(build_personality, template_repository, template_data):
    result = score_personality(build_personality([(4, 4)] * 6))
    merge_personality_report_with_templates(result, template_repository)
    assert template_repository.load().personality_dimensions == template_data["personalityDimensions"]


# --- Constitution merge ---

def test_merge_constitution_report(build_constitution, template_repository):
    report = generate_report(build_constitution([1] * 6, [2] * 12, [4] * 17))
    merged = merge_constitution_report_with_templates(report, template_repository)
    assert (merged.body.code, merged.prakriti.code, merged.vikriti.code) == ("B1", "P4", "V0")
    assert merged.body.template == {"title": "Light and Quick"}
    assert merged.prakriti.template == {"title": "Focused Fire"}
    assert merged.vikriti.template == {"title": "In Balance"}
    assert merged.body_modifier_line is None
    assert merged.prakriti_modifier_line is None
    assert merged.paid_preview_text == "Full 14-day plan"


def test_merge_constitution_report_missing_code(build_constitution, template_repository, caplog):
    report = generate_report(build_constitution([3] * 6, [2] * 12, [1] * 17))
    with caplog.at_level(logging.WARNING):
        merged = merge_constitution_report_with_templates(report, template_repository)
    assert merged.body.code == "B7"
    assert merged.body.template is None
    assert merged.vikriti.code == "I1"
    assert merged.vikriti.template is None
    assert "B7" in caplog.text


# --- Repositories ---

def test_in_memory_repository_defaults_to_empty():
    templates = InMemoryTemplateRepository().load()
    assert templates.personality_dimensions == {}
    assert templates.body_code_reports == {}


def test_in_memory_repository_rejects_invalid_data():
    with pytest.raises(TemplateStoreError):
        InMemoryTemplateRepository({"personalityDimensions": ["not", "a", "mapping"]})


def test_file_repository_reads_json(tmp_path, template_data):
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(template_data), encoding="utf-8")
    templates = FileTemplateRepository(str(path)).load()
    assert templates.body_code_reports["B1"] == {"title": "Light and Quick"}


def test_file_repository_reads_yaml(tmp_path, template_data):
    path = tmp_path / "templates.yml"
    path.write_text(yaml.safe_dump(template_data), encoding="utf-8")
    templates = FileTemplateRepository(str(path)).load()
    assert templates.personality_dimensions["Mind_A_Reflective"] == {"title": "The Reflective Mind"}


def test_file_repository_picks_up_edits(tmp_path, template_data):
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(template_data), encoding="utf-8")
    repository = FileTemplateRepository(str(path))
    assert "B2" not in repository.load().body_code_reports

    template_data["bodyCodeReports"]["B2"] = {"title": "Quick and Driven"}
    path.write_text(json.dumps(template_data), encoding="utf-8")
    assert repository.load().body_code_reports["B2"] == {"title": "Quick and Driven"}


def test_file_repository_missing_file(tmp_path):
    with pytest.raises(TemplateStoreError, match="not found"):
        FileTemplateRepository(str(tmp_path / "missing.json")).load()


def test_file_repository_malformed_json(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(TemplateStoreError, match="Error parsing"):
        FileTemplateRepository(str(path)).load()


def test_file_repository_empty_yaml(tmp_path):
    path = tmp_path / "templates.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(TemplateStoreError, match="empty or not a mapping"):
        FileTemplateRepository(str(path)).load()


def test_file_repository_directory_path(tmp_path):
    with pytest.raises(TemplateStoreError, match="Cannot read"):
        FileTemplateRepository(str(tmp_path)).load()


@pytest.mark.parametrize("name", ["templates.json", "templates.yml"])
def test_file_repository_invalid_utf8(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(TemplateStoreError, match="not valid UTF-8"):
        FileTemplateRepository(str(path)).load()


@pytest.mark.parametrize("name", ["templates.YML", "templates.Yaml"])
def test_file_repository_yaml_suffix_is_case_insensitive(tmp_path, template_data, name):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(template_data), encoding="utf-8")
    templates = FileTemplateRepository(str(path)).load()
    assert templates.vikriti_code_reports["V0"] == {"title": "In Balance"}


def test_modifier_lines_fall_back_to_generic_text(build_constitution, template_repository):
    report = generate_report(build_constitution([3, 3, 3, 1, 1, 2], [1] * 6 + [3] * 6, [4] * 17))
    merged = merge_constitution_report_with_templates(report, template_repository)
    assert (report.body.primary.body_type, report.body.modifier.label) == ("Endomorph", "Vata")
    assert merged.body_modifier_line == "Your body type has a Vata modifier."
    assert merged.prakriti_modifier_line == "Your constitution has a Kapha modifier."


def test_paid_preview_default(build_constitution):
    report = generate_report(build_constitution([1] * 6, [2] * 12, [4] * 17))
    merged = merge_constitution_report_with_templates(report, InMemoryTemplateRepository())
    assert merged.paid_preview_text == "72-hour reset • 14-day meal plan • 14-day movement plan"


# --- Vikriti narrative ---

def test_merge_vikriti_analysis_single(template_repository):
    analysis = analyze_vikriti([1] * 9 + [4] * 8)
    merged = merge_vikriti_analysis_with_templates(analysis, template_repository)
    assert merged.template_key == "Vata"
    assert merged.paragraph == "Vata is running high."
    assert merged.quick_tip == "Eat warm, regular meals."
    assert merged.empathy_line == "It makes sense that you feel scattered."
    assert merged.analysis == analysis


def test_merge_vikriti_analysis_uses_canonical_pair_key(template_repository):
    # Pitta leads on the tie, but the narrative is stored under "Vata-Pitta"
    analysis = analyze_vikriti([1] * 6 + [2] * 6 + [4] * 5)
    assert analysis.summary == "Pitta-Vata"
    merged = merge_vikriti_analysis_with_templates(analysis, template_repository)
    assert merged.template_key == "Vata-Pitta"
    assert merged.paragraph == "Air and fire are both up."


def test_merge_vikriti_analysis_without_template(template_repository, caplog):
    analysis = analyze_vikriti([4] * 17)
    with caplog.at_level(logging.WARNING):
        merged = merge_vikriti_analysis_with_templates(analysis, template_repository)
    assert merged.template_key == "Balanced"
    assert merged.paragraph == analysis.emotional_line
    assert merged.empathy_line == analysis.emotional_line
    assert merged.quick_tip == "Maintain balanced routines and lifestyle practices."
    assert "Balanced" in caplog.text
