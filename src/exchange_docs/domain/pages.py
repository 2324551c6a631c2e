"""Renderer-independent page description.

Coordinates and sizes are millimetres measured from the top-left corner of
the page. Text ``y`` is the baseline.
"""

from dataclasses import dataclass, field

Color = tuple[int, int, int]

A4_WIDTH = 210.0
A4_HEIGHT = 297.0


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    size: float = 10
    color: Color = (60, 60, 60)
    align: str = "left"  # left | center | right
    bold: bool = False


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    width: float
    height: float
    fill: Color | None = None
    stroke: Color | None = None
    radius: float = 0


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = (220, 220, 220)
    width: float = 0.3


@dataclass(frozen=True)
class ImageOp:
    x: float
    y: float
    width: float
    height: float
    data: bytes


@dataclass(frozen=True)
class TableOp:
    """A grid table drawn by the renderer; ``y`` is the top edge."""

    x: float
    y: float
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    col_widths: tuple[float, ...]
    row_height: float = 8
    font_size: float = 8
    header_fill: Color = (59, 130, 246)
    alt_fill: Color = (245, 247, 250)


DrawOp = TextOp | RectOp | LineOp | ImageOp | TableOp


@dataclass
class Page:
    ops: list[DrawOp] = field(default_factory=list)

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]

    def tables(self) -> list[TableOp]:
        return [op for op in self.ops if isinstance(op, TableOp)]


@dataclass
class DocumentInfo:
    """Document properties written into the PDF."""

    title: str
    subject: str = ""
    author: str = ""
    keywords: list[str] = field(default_factory=list)
    creator: str = "exchange-docs"


@dataclass
class PageSet:
    info: DocumentInfo
    pages: list[Page] = field(default_factory=list)
    width: float = A4_WIDTH
    height: float = A4_HEIGHT

    def new_page(self) -> Page:
        page = Page()
        self.pages.append(page)
        return page

    def texts(self) -> list[str]:
        return [text for page in self.pages for text in page.texts()]
