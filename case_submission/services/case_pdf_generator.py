"""
Case Summary PDF Generator
Draws the submitted case onto A4 pages, section by section, with the reportlab canvas
"""

import io
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from ..config import PDF_FALLBACK_FONT, PDF_FONT_PATH
from ..exceptions import RenderFailure
from ..field_catalog import FIELD_CATALOG, Section, iter_present_fields
from ..formatting import format_field_label
from .pdf_fonts import FontStatus, resolve_font

logger = logging.getLogger(__name__)

TITLE = "Case Submission Summary"

# Layout (points)
MARGIN = 50
TITLE_SIZE = 18
TITLE_STEP = 30
HEADING_SIZE = 14
HEADING_STEP = 24
LINE_SIZE = 11
LINE_STEP = 18
SECTION_GAP = 12
FOOTER_SIZE = 9


@dataclass(frozen=True)
class PdfLine:
    kind: str  # "title", "heading", "field" or "timestamp"
    text: str


def layout_case_lines(
    form: Mapping[str, str], catalog: Sequence[Section] = FIELD_CATALOG
) -> list[PdfLine]:
    """Ordered lines of the summary body, without the generation timestamp"""
    lines = [PdfLine("title", TITLE)]
    for section in catalog:
        lines.append(PdfLine("heading", section.title))
        for key, value in iter_present_fields(form, section):
            lines.append(PdfLine("field", f"{format_field_label(key)}: {value}"))
    return lines


class CasePDFGenerator:
    """Generate the PDF summary attached to every case email"""

    def __init__(
        self,
        form: Mapping[str, str],
        catalog: Sequence[Section] = FIELD_CATALOG,
        font_path: Optional[str] = PDF_FONT_PATH,
        fallback_font: str = PDF_FALLBACK_FONT,
        page_compression: bool = True,
    ):
        self.form = form
        self.catalog = catalog
        self.font_path = font_path
        self.fallback_font = fallback_font
        self.page_compression = page_compression

        self.page_width, self.page_height = A4
        self.top = self.page_height - MARGIN
        self.content_width = self.page_width - (2 * MARGIN)
        self.dark_gray = colors.HexColor("#1e293b")
        self._page_number = 1

    def generate(self, generated_at: Optional[datetime] = None) -> bytes:
        """Generate PDF and return bytes"""
        try:
            return self._build(generated_at or datetime.now())
        except RenderFailure:
            raise
        except Exception as e:
            logger.error(f"❌ Case PDF generation failed: {e}")
            raise RenderFailure(f"Failed to build case PDF: {e}") from e

    def _build(self, generated_at: datetime) -> bytes:
        font = resolve_font(self.font_path, self.fallback_font)
        if font.status is FontStatus.FAILED:
            raise RenderFailure(f"No usable font for case PDF: {font.detail}")

        body_font = font.font_name
        heading_font = body_font
        if font.status is FontStatus.FALLBACK and f"{body_font}-Bold" in pdfmetrics.standardFonts:
            heading_font = f"{body_font}-Bold"

        styles = {
            "title": (heading_font, TITLE_SIZE, TITLE_STEP),
            "heading": (heading_font, HEADING_SIZE, HEADING_STEP),
            "field": (body_font, LINE_SIZE, LINE_STEP),
            "timestamp": (body_font, LINE_SIZE, LINE_STEP),
        }

        lines = layout_case_lines(self.form, self.catalog)
        lines.append(PdfLine("timestamp", f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"))

        buffer = io.BytesIO()
        # Fixed creation date and document ID
        pdf = canvas.Canvas(
            buffer,
            pagesize=A4,
            pageCompression=1 if self.page_compression else 0,
            invariant=1,
        )
        pdf.setTitle(TITLE)
        pdf.setAuthor("Case Submission")

        self._page_number = 1
        y = self.top
        first_heading = True

        for line in lines:
            font_name, size, step = styles[line.kind]
            if line.kind == "heading":
                if not first_heading:
                    y -= SECTION_GAP
                first_heading = False
            elif line.kind == "timestamp":
                y -= SECTION_GAP

            for row in simpleSplit(line.text, font_name, size, self.content_width) or [""]:
                if y - step < MARGIN:
                    self._finish_page(pdf, body_font)
                    y = self.top
                y -= step
                pdf.setFont(font_name, size)
                pdf.setFillColor(self.dark_gray)
                pdf.drawString(MARGIN, y, row)

        self._finish_page(pdf, body_font)
        pdf.save()

        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.info(f"✅ Generated case PDF ({len(pdf_bytes)} bytes, {self._page_number - 1} page(s))")
        return pdf_bytes

    def _finish_page(self, pdf: canvas.Canvas, font_name: str):
        """Add the page number and close the current page"""
        pdf.setFont(font_name, FOOTER_SIZE)
        pdf.setFillColor(colors.grey)
        pdf.drawRightString(self.page_width - MARGIN, MARGIN / 2, f"Page {self._page_number}")
        pdf.showPage()
        self._page_number += 1

