"""Buffered drawing surface on top of a ReportLab canvas.

Coordinates are top-down: ``y`` grows toward the bottom of the page, the
way the table and footer layouts reason about cursors. Pages are kept as
display lists until ``save()`` so that a layout can switch back to an
earlier page, which a plain ReportLab canvas cannot do once ``showPage()``
has been called.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from reportlab.lib.colors import Color, HexColor, toColor
from reportlab.lib.pagesizes import A4, LEGAL, LETTER, landscape
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import getAscentDescent, stringWidth
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "letter": LETTER,
    "a4": A4,
    "legal": LEGAL,
}
DEFAULT_MARGIN = 36  # 0.5 inch margins
ELLIPSIS = "..."

PageListener = Callable[["CanvasSurface"], None]


@dataclass
class PageLayout:
    """Page size and margins, in points."""
    page_width: float = LETTER[0]
    page_height: float = LETTER[1]
    margin_left: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    margin_top: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN
    orientation: str = "portrait"  # "portrait" or "landscape"

    @classmethod
    def portrait(cls, size: str = "letter") -> "PageLayout":
        """Create a portrait layout."""
        width, height = PAGE_SIZES[size.lower()]
        return cls(page_width=width, page_height=height, orientation="portrait")

    @classmethod
    def landscape(cls, size: str = "letter") -> "PageLayout":
        """Create a landscape layout."""
        width, height = landscape(PAGE_SIZES[size.lower()])
        return cls(page_width=width, page_height=height, orientation="landscape")

    @classmethod
    def from_name(
        cls,
        size: str = "letter",
        orientation: str = "portrait",
        margins: Optional[Dict[str, float]] = None
    ) -> "PageLayout":
        """Create a layout from a page size name, orientation and margins."""
        if orientation == "landscape":
            layout = cls.landscape(size)
        else:
            layout = cls.portrait(size)
        for side, value in (margins or {}).items():
            setattr(layout, f"margin_{side}", value)
        return layout

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_left(self) -> float:
        return self.margin_left

    @property
    def content_top(self) -> float:
        return self.margin_top

    @property
    def content_bottom(self) -> float:
        """Lowest y available for content (top-down coordinates)."""
        return self.page_height - self.margin_bottom

    @property
    def margins(self) -> Dict[str, float]:
        return {
            "top": self.margin_top,
            "right": self.margin_right,
            "bottom": self.margin_bottom,
            "left": self.margin_left,
        }


def to_color(value: Union[str, Color]) -> Color:
    """Convert a hex string (``#rgb`` or ``#rrggbb``) or color name to a Color."""
    if isinstance(value, Color):
        return value
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return HexColor(f"#{digits}")
    return toColor(value)


def truncate_text(text: str, max_width: float, font_name: str, font_size: float) -> str:
    """Truncate text to fit within max_width, adding '...' if needed."""
    if not text:
        return text

    if stringWidth(text, font_name, font_size) <= max_width:
        return text

    ellipsis_width = stringWidth(ELLIPSIS, font_name, font_size)
    available_width = max_width - ellipsis_width

    if available_width <= 0:
        return ELLIPSIS[:1]

    for i in range(len(text), 0, -1):
        truncated = text[:i]
        if stringWidth(truncated, font_name, font_size) <= available_width:
            return truncated + ELLIPSIS

    return ELLIPSIS


@dataclass
class _GraphicsState:
    fill_color: Color
    stroke_color: Color
    font: str
    font_size: float


class CanvasSurface:
    """Paginated drawing surface that replays onto a ReportLab canvas."""

    def __init__(self, layout: Optional[PageLayout] = None, title: str = ""):
        self.layout = layout or PageLayout()
        self.title = title
        self.x = self.layout.content_left
        self.y = self.layout.content_top
        self.page_number = 0  # incremented on every add_page
        self._pages: List[List[Tuple[Any, ...]]] = []
        self._current_page = -1
        self._listeners: List[PageListener] = []
        self._state = _GraphicsState(
            fill_color=to_color("black"),
            stroke_color=to_color("black"),
            font="Helvetica",
            font_size=12,
        )
        self._state_stack: List[_GraphicsState] = []

    # ------------------------------------------------------------------
    # Queries

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def page_left(self) -> float:
        return self.layout.content_left

    @property
    def content_width(self) -> float:
        return self.layout.content_width

    @property
    def content_height(self) -> float:
        return self.layout.content_height

    @property
    def page_width(self) -> float:
        return self.layout.page_width

    @property
    def page_height(self) -> float:
        return self.layout.page_height

    @property
    def margins(self) -> Dict[str, float]:
        return self.layout.margins

    @property
    def font(self) -> str:
        return self._state.font

    @property
    def font_size(self) -> float:
        return self._state.font_size

    def line_height(self) -> float:
        """Height of one line in the current font, without line gap."""
        ascent, descent = getAscentDescent(self._state.font, self._state.font_size)
        return ascent - descent

    def string_width(self, text: str) -> float:
        return stringWidth(text, self._state.font, self._state.font_size)

    # ------------------------------------------------------------------
    # Pages and listeners

    def add_page_listener(self, listener: PageListener) -> None:
        """Register a callback run after each new page is created."""
        self._listeners.append(listener)

    def remove_page_listener(self, listener: PageListener) -> None:
        self._listeners.remove(listener)

    def add_page(self) -> int:
        """Create a new page, make it current and notify listeners."""
        self._pages.append([])
        self._current_page = len(self._pages) - 1
        self.page_number += 1
        self._reset_cursor()
        logger.debug("Added page %d (page number %d)", self._current_page, self.page_number)

        for listener in list(self._listeners):
            self.save_state()
            listener(self)
            self.restore_state()

        self._reset_cursor()
        return self._current_page

    def switch_to_page(self, index: int) -> None:
        """Make a buffered page the target of subsequent drawing."""
        if not 0 <= index < len(self._pages):
            raise IndexError(
                f"switch_to_page({index}) out of bounds, current buffer covers "
                f"pages 0 to {len(self._pages) - 1}"
            )
        self._current_page = index

    def add_page_if_needed(
        self,
        current_page: int,
        page_count: int,
        needed_height: float = 0.0
    ) -> bool:
        """
        Move to the next page when content of needed_height does not fit.

        When a later page is already buffered (an earlier column broke onto
        it), that page is reused instead of adding a new one.

        Returns:
            True if the cursor moved to another page.
        """
        if self.y + needed_height <= self.layout.content_bottom:
            return False

        if current_page + 1 < page_count:
            self.switch_to_page(current_page + 1)
            self._reset_cursor()
            logger.debug("Page break: reusing buffered page %d", current_page + 1)
        else:
            self.add_page()
            logger.debug("Page break: added page %d", self._current_page)
        return True

    def move_down(self, amount: float) -> None:
        self.y += amount

    def _reset_cursor(self) -> None:
        self.x = self.layout.content_left
        self.y = self.layout.content_top

    # ------------------------------------------------------------------
    # Graphics state

    def _record(self, *op) -> None:
        self._pages[self._current_page].append(op)

    def _flip(self, y: float) -> float:
        return self.layout.page_height - y

    def set_fill_color(self, color: Union[str, Color]) -> None:
        self._state.fill_color = to_color(color)
        self._record("fill_color", self._state.fill_color)

    def set_stroke_color(self, color: Union[str, Color]) -> None:
        self._state.stroke_color = to_color(color)
        self._record("stroke_color", self._state.stroke_color)

    def set_font(self, name: str) -> None:
        self._state.font = name
        self._record("font", self._state.font, self._state.font_size)

    def set_font_size(self, size: float) -> None:
        self._state.font_size = size
        self._record("font", self._state.font, self._state.font_size)

    def save_state(self) -> None:
        self._state_stack.append(_GraphicsState(**vars(self._state)))
        self._record("save")

    def restore_state(self) -> None:
        self._state = self._state_stack.pop()
        self._record("restore")

    def transform(self, a: float, b: float, c: float, d: float, e: float, f: float) -> None:
        """Apply an affine transform given in top-down page coordinates."""
        height = self.layout.page_height
        # Conjugate with the y flip so the matrix applies in ReportLab space
        self._record("transform", a, -b, -c, d, c * height + e, height - d * height - f)

    # ------------------------------------------------------------------
    # Drawing

    def text(
        self,
        text: str,
        x: Optional[float] = None,
        y: Optional[float] = None,
        align: str = "left",
        line_break: bool = True,
        line_gap: float = 0.0,
        width: Optional[float] = None,
        height: Optional[float] = None,
        ellipsis: bool = False,
        continued: bool = False,
    ) -> None:
        """
        Draw text at (x, y), or at the cursor when no position is given.

        The cursor moves below the drawn lines, or to the end of the text on
        the same line when ``continued`` is set.
        """
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y

        font, size = self._state.font, self._state.font_size
        text = str(text)

        if width is None:
            width = self.layout.content_width - (self.x - self.layout.content_left)

        if ellipsis:
            lines = [truncate_text(text, width, font, size)]
        elif line_break:
            lines = simpleSplit(text, font, size, width) or [""]
        else:
            lines = [text]
        ascent = getAscentDescent(font, size)[0]
        line_height = self.line_height()
        if height is not None and line_height + line_gap > 0:
            max_lines = max(1, int(height // (line_height + line_gap)))
            lines = lines[:max_lines]

        cursor_y = self.y
        for line in lines:
            line_width = self.string_width(line)
            if align == "right":
                line_x = self.x + width - line_width
            elif align == "center":
                line_x = self.x + (width - line_width) / 2
            else:
                line_x = self.x
            self._record("text", line_x, self._flip(cursor_y + ascent), line)
            if continued:
                self.x = line_x + line_width
                return
            cursor_y += line_height + line_gap

        self.y = cursor_y

    def stroke_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        width: float = 1.0,
        color: Union[str, Color, None] = None
    ) -> None:
        """Stroke a straight line segment."""
        self.save_state()
        if color is not None:
            self.set_stroke_color(color)
        self._record("line_width", width)
        self._record("line", x1, self._flip(y1), x2, self._flip(y2))
        self.restore_state()

    # ------------------------------------------------------------------
    # Output

    def _replay(self, c: canvas.Canvas) -> None:
        for ops in self._pages:
            c.setFont("Helvetica", 12)
            for op in ops:
                kind, args = op[0], op[1:]
                if kind == "fill_color":
                    c.setFillColor(args[0])
                elif kind == "stroke_color":
                    c.setStrokeColor(args[0])
                elif kind == "font":
                    c.setFont(*args)
                elif kind == "save":
                    c.saveState()
                elif kind == "restore":
                    c.restoreState()
                elif kind == "transform":
                    c.transform(*args)
                elif kind == "text":
                    c.drawString(*args)
                elif kind == "line_width":
                    c.setLineWidth(args[0])
                elif kind == "line":
                    c.line(*args)
            c.showPage()

    def save(self, path: Union[str, Path]) -> Path:
        """Write all buffered pages to a PDF file."""
        path = Path(path)
        c = canvas.Canvas(str(path), pagesize=(self.layout.page_width, self.layout.page_height))
        if self.title:
            c.setTitle(self.title)
        self._replay(c)
        c.save()
        logger.debug("Saved %d pages to %s", len(self._pages), path)
        return path

    def to_bytes(self) -> bytes:
        """Render all buffered pages and return the PDF bytes."""
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.layout.page_width, self.layout.page_height))
        if self.title:
            c.setTitle(self.title)
        self._replay(c)
        c.save()
        return buffer.getvalue()
