import logging

import pytest

from services.profile_scoring.loader import get_default_instrument_spec
from services.profile_scoring.templates import InMemoryTemplateRepository


@pytest.fixture(scope="session")
def spec():
    """The packaged instrument layout."""
    return get_default_instrument_spec()


def constitution_answers(body, prakriti, vikriti):
    """Concatenates the three sections into a 35-answer vector, checking section sizes."""
    assert len(body) == 6 and len(prakriti) == 12 and len(vikriti) == 17
    return list(body) + list(prakriti) + list(vikriti)


def personality_answers(pole_values):
    """
    Builds a 48-answer vector from six (left, right) pairs; every question on a pole
    gets the same value, so pole sums are 4x the given value.
    """
    answers = []
    for left, right in pole_values:
        answers.extend([left] * 4 + [right] * 4)
    return answers


@pytest.fixture
def template_data():
    return {
        "personalityDimensions": {
            "Mind_A_Reflective": {"title": "The Reflective Mind"},
            "Mind_B_Balanced": {"title": "The Balanced Mind"},
            "Mind_C_Expressive": {"title": "The Expressive Mind"},
            "Stress_A_Composed": {"title": "Composed Under Pressure"},
            "Stress_B_Balanced": {"title": "Steady Stress Response"},
            "Discipline_C_Flexible": {"title": "Flexible Health Habits"},
            "Social_A_Inner": {"title": "Inner-Focused"},
            "Energy_A_Active": {"title": "Active Energy"},
            "Habit_B_Balanced": {"title": "Balanced Habits"},
            "Habit_A_Consistency": {"title": "Consistency-Driven"},
        },
        "bodyCodeReports": {"B1": {"title": "Light and Quick"}},
        "prakritiCodeReports": {"P4": {"title": "Focused Fire"}},
        "vikritiCodeReports": {"V0": {"title": "In Balance"}},
        "modifiers": {"Ectomorph": {"Pitta": "A light frame with a warm, driven edge."}},
        "prakritiModifiers": {"Pitta": {"Vata": "Sharp focus with an airy, creative streak."}},
        "vikriti": {
            "Vata": {
                "paragraph": "Vata is running high.",
                "quickTip": "Eat warm, regular meals.",
                "empathyLine": "It makes sense that you feel scattered.",
            },
            "Vata-Pitta": {"paragraph": "Air and fire are both up.", "quickTip": "Slow down and cool off."},
        },
        "paidPreview": {"text": "Full 14-day plan", "features": ["Meal plan", "Movement plan"]},
    }


@pytest.fixture
def template_repository(template_data):
    return InMemoryTemplateRepository(template_data)


@pytest.fixture
def build_constitution():
    return constitution_answers


@pytest.fixture
def build_personality():
    return personality_answers


@pytest.fixture
def restore_root_logger():
    """Yields the root logger and puts its handlers and level back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)
