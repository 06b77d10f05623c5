"""
Generate a PDF report of a comparison result: summary, statistics, and one
section per annotated change.
"""

from __future__ import annotations

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, PageBreak
from reportlab.lib.styles import getSampleStyleSheet

from .models import ComparisonResult


def _escape_for_rl(s: str, truncate_chars: int = 4000) -> str:
    """Basic escaping for ReportLab Paragraph markup."""
    s = s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if truncate_chars and len(s) > truncate_chars:
        s = s[:truncate_chars] + "\n...[truncated]..."
    return s.replace("\n", "<br/>")


def save_comparison_report_pdf(
    result: ComparisonResult,
    out_pdf_path: str,
    *,
    title: str = "Polish Comparison Report",
    truncate_chars: int = 4000,
) -> None:
    styles = getSampleStyleSheet()
    story = []

    md = result.metadata
    st = result.statistics

    story.append(Paragraph(f"<b>{_escape_for_rl(title)}</b>", styles["Title"]))
    story.append(Spacer(1, 0.5 * cm))

    story.append(Paragraph(f"<b>Trace:</b> {_escape_for_rl(result.trace_id)}", styles["Normal"]))
    story.append(Paragraph(f"<b>Original words:</b> {md.original_word_count}", styles["Normal"]))
    story.append(Paragraph(f"<b>Polished words:</b> {md.polished_word_count}", styles["Normal"]))
    story.append(Paragraph(f"<b>Total changes:</b> {md.total_changes}", styles["Normal"]))
    story.append(
        Paragraph(f"<b>Academic score improvement:</b> {md.academic_score_improvement:.1f}%", styles["Normal"])
    )
    story.append(
        Paragraph(
            f"<b>Vocabulary:</b> {st.vocabulary} &nbsp; <b>Grammar:</b> {st.grammar} "
            f"&nbsp; <b>Structure:</b> {st.structure}",
            styles["Normal"],
        )
    )
    story.append(Spacer(1, 0.3 * cm))

    story.append(Paragraph("<b>Final text:</b>", styles["Normal"]))
    story.append(Paragraph(_escape_for_rl(result.final_content, truncate_chars), styles["BodyText"]))
    story.append(PageBreak())

    for c in result.annotations:
        story.append(
            Paragraph(
                f"<b>{c.id}</b> | <b>Type:</b> {c.type.value} | <b>Status:</b> {c.status.value} | "
                f"<b>Line:</b> {c.position.line} | <b>Confidence:</b> {c.confidence:.2f}",
                styles["Heading3"],
            )
        )
        story.append(Spacer(1, 0.2 * cm))
        story.append(Paragraph(f"<b>Reason:</b> {_escape_for_rl(c.reason)}", styles["Normal"]))
        story.append(Paragraph(f"<b>Impact:</b> {c.impact}", styles["Normal"]))
        story.append(Spacer(1, 0.2 * cm))

        if c.original_text:
            story.append(Paragraph("<b>Original text:</b>", styles["Normal"]))
            story.append(
                Paragraph(f"<font name='Courier'>{_escape_for_rl(c.original_text, truncate_chars)}</font>", styles["BodyText"])
            )
            story.append(Spacer(1, 0.2 * cm))

        story.append(Paragraph("<b>Polished text:</b>", styles["Normal"]))
        story.append(
            Paragraph(f"<font name='Courier'>{_escape_for_rl(c.polished_text, truncate_chars)}</font>", styles["BodyText"])
        )
        story.append(Spacer(1, 0.2 * cm))

        if c.alternatives:
            story.append(Paragraph("<b>Alternatives:</b>", styles["Normal"]))
            for alt in c.alternatives:
                story.append(
                    Paragraph(f"- {_escape_for_rl(alt.text)}: {_escape_for_rl(alt.reason)}", styles["BodyText"])
                )
        story.append(Spacer(1, 0.3 * cm))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    doc.build(story)
