from __future__ import annotations

from io import BytesIO
from typing import Optional, Protocol, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


class TableRenderer(Protocol):
    """Tabular report sink: structured columns/rows in, document bytes out."""

    content_type: str

    def render_table(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: Optional[str] = None,
    ) -> bytes:
        raise NotImplementedError


class ReportLabTableRenderer(TableRenderer):
    """PDF sink built on reportlab's platypus Table."""

    content_type = "application/pdf"

    def __init__(self, *, school_name: Optional[str] = None, pagesize=landscape(A4), font_size: int = 9):
        self._school_name = school_name
        self._pagesize = pagesize
        self._font_size = int(font_size)

    def render_table(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: Optional[str] = None,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._pagesize,
            leftMargin=12 * mm,
            rightMargin=12 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
            title=title or "",
        )
        styles = getSampleStyleSheet()
        elements = []

        if self._school_name:
            elements.append(Paragraph(self._school_name, styles["Title"]))
        if title:
            elements.append(Paragraph(title, styles["Heading2"]))
        elements.append(Spacer(1, 12))

        data = [list(columns)] + [[str(cell) for cell in row] for row in rows]
        table = Table(data, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.grey),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                    ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), self._font_size),
                    ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
                ]
            )
        )
        elements.append(table)
        doc.build(elements)
        return buffer.getvalue()
