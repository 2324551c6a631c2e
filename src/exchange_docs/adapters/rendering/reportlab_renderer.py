"""PDF rendering using reportlab."""

import logging
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from ...domain.pages import (
    Color,
    DrawOp,
    ImageOp,
    LineOp,
    PageSet,
    RectOp,
    TableOp,
    TextOp,
)
from ...exceptions import RenderError
from ...ports.rendering import DocumentRenderer

logger = logging.getLogger(__name__)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
GRID_COLOR = (220, 220, 220)


def _color(rgb: Color) -> colors.Color:
    r, g, b = rgb
    return colors.Color(r / 255, g / 255, b / 255)


class ReportLabRenderer(DocumentRenderer):
    """Draws page sets onto a reportlab canvas.

    The canvas is created with ``invariant=1`` so identical page sets
    produce identical bytes.
    """

    supports_tables = True

    def __init__(self, supports_tables: bool = True) -> None:
        self.supports_tables = supports_tables

    def render(self, page_set: PageSet) -> bytes:
        logger.debug(f"Rendering {len(page_set.pages)} page(s): {page_set.info.title}")
        buffer = BytesIO()
        try:
            c = canvas.Canvas(
                buffer,
                pagesize=(page_set.width * mm, page_set.height * mm),
                invariant=1,
            )
            info = page_set.info
            c.setTitle(info.title)
            c.setSubject(info.subject)
            c.setAuthor(info.author)
            c.setKeywords(", ".join(info.keywords))
            c.setCreator(info.creator)

            for page in page_set.pages:
                for op in page.ops:
                    self._draw(c, op, page_set.height)
                c.showPage()
            c.save()
        except Exception as e:
            raise RenderError(f"PDF rendering failed: {e}") from e

        return buffer.getvalue()

    def _draw(self, c: canvas.Canvas, op: DrawOp, page_height: float) -> None:
        # Page set coordinates grow downwards from the top edge
        def top(y: float) -> float:
            return (page_height - y) * mm

        if isinstance(op, TextOp):
            c.setFont(FONT_BOLD if op.bold else FONT, op.size)
            c.setFillColor(_color(op.color))
            if op.align == "center":
                c.drawCentredString(op.x * mm, top(op.y), op.text)
            elif op.align == "right":
                c.drawRightString(op.x * mm, top(op.y), op.text)
            else:
                c.drawString(op.x * mm, top(op.y), op.text)

        elif isinstance(op, RectOp):
            if op.fill:
                c.setFillColor(_color(op.fill))
            if op.stroke:
                c.setStrokeColor(_color(op.stroke))
                c.setLineWidth(0.3 * mm)
            x, y = op.x * mm, top(op.y + op.height)
            width, height = op.width * mm, op.height * mm
            fill, stroke = int(op.fill is not None), int(op.stroke is not None)
            if op.radius:
                c.roundRect(x, y, width, height, op.radius * mm, stroke=stroke, fill=fill)
            else:
                c.rect(x, y, width, height, stroke=stroke, fill=fill)

        elif isinstance(op, LineOp):
            c.setStrokeColor(_color(op.color))
            c.setLineWidth(op.width * mm)
            c.line(op.x1 * mm, top(op.y1), op.x2 * mm, top(op.y2))

        elif isinstance(op, ImageOp):
            c.drawImage(
                ImageReader(BytesIO(op.data)),
                op.x * mm,
                top(op.y + op.height),
                op.width * mm,
                op.height * mm,
                mask="auto",
            )

        elif isinstance(op, TableOp):
            if not self.supports_tables:
                raise RenderError("Table drawing is disabled for this renderer")
            self._draw_table(c, op, top(op.y))

        else:
            raise RenderError(f"Unknown drawing operation: {type(op).__name__}")

    def _draw_table(self, c: canvas.Canvas, op: TableOp, top_edge: float) -> None:
        data = [list(op.header), *(list(row) for row in op.rows)]
        table = Table(
            data,
            colWidths=[w * mm for w in op.col_widths],
            rowHeights=[op.row_height * mm] * len(data),
        )
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), _color(op.header_fill)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), FONT_BOLD),
            ("FONTNAME", (0, 1), (-1, -1), FONT),
            ("FONTSIZE", (0, 0), (-1, -1), op.font_size),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("GRID", (0, 0), (-1, -1), 0.25, _color(GRID_COLOR)),
        ]
        if op.rows:
            style.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _color(op.alt_fill)]))
        table.setStyle(TableStyle(style))

        width = sum(op.col_widths) * mm
        _, height = table.wrapOn(c, width, top_edge)
        table.drawOn(c, op.x * mm, top_edge - height)
