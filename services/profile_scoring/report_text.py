from typing import List, Optional

from services.profile_scoring.models import ConstitutionReport, DoshaCounts, SectionResult


def _counts_line(counts: DoshaCounts) -> str:
    return f"Counts: V={counts.vata}, P={counts.pitta}, K={counts.kapha}"


def _section_block(title: str, result: SectionResult, with_body_type: bool = False) -> List[str]:
    lines = [title, f"Code: {result.code}", f"Primary Dosha: {result.primary.label}"]
    if with_body_type:
        lines.append(f"Body Type: {result.primary.body_type}")
    if result.modifier is not None:
        lines.append(f"Modifier: {result.modifier.label}")
    lines.append(_counts_line(result.counts))
    return lines


def render_report_text(report: ConstitutionReport, clinic_name: Optional[str] = None) -> str:
    """Plain-text BODY / PRAKRITI / VIKRITI module blocks for a constitutional report."""
    blocks = [
        _section_block("BODY MODULE", report.body, with_body_type=True),
        _section_block("PRAKRITI MODULE", report.prakriti),
        ["VIKRITI MODULE", f"Code: {report.vikriti.code}", _counts_line(report.vikriti.counts)],
    ]
    text = "\n\n".join("\n".join(block) for block in blocks) + "\n"
    if clinic_name:
        text += f"\n— {clinic_name}\n"
    return text
