from services.profile_scoring.engine import generate_report
from services.profile_scoring.report_text import render_report_text

EXPECTED = """BODY MODULE
Code: B2
Primary Dosha: Vata
Body Type: Ectomorph
Modifier: Pitta
Counts: V=3, P=2, K=1

PRAKRITI MODULE
Code: P5
Primary Dosha: Pitta
Modifier: Vata
Counts: V=3, P=6, K=2

VIKRITI MODULE
Code: I1
Counts: V=10, P=5, K=0
"""


def _report(build_constitution):
    return generate_report(build_constitution(
        [1, 2, 1, 2, 3, 1],
        [2, 2, 1, 2, 3, 1, 2, 3, 2, 1, 4, 2],
        [1, 1, 2, 1, 1, 2, 1, 2, 1, 1, 2, 1, 1, 2, 1, 4, 4],
    ))


def test_render_report_text(build_constitution):
    assert render_report_text(_report(build_constitution)) == EXPECTED


def test_render_report_text_with_clinic_footer(build_constitution):
    text = render_report_text(_report(build_constitution), clinic_name="Lotus Clinic")
    assert text == EXPECTED + "\n— Lotus Clinic\n"


def test_modifier_line_omitted_without_modifier(build_constitution):
    report = generate_report(build_constitution([3] * 6, [2] * 12, [4] * 17))
    text = render_report_text(report)
    body_block = text.split("\n\n")[0]
    assert body_block == "BODY MODULE\nCode: B7\nPrimary Dosha: Kapha\nBody Type: Endomorph\nCounts: V=0, P=0, K=6"
    assert "Modifier" not in text
