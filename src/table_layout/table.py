"""Column-by-column table layout with page breaks and repeated headers."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .columns import ColumnSpec, compute_column_widths, resolve_column_width
from .styles import CellSpec, ResolvedCellStyle, TableStyle

logger = logging.getLogger(__name__)

# Shear used in place of an italic font variant
SKEW_FACTOR = math.tan((-15 * math.pi) / 180)
HEADER_BORDER_OFFSET = 0.85
ROW_BORDER_OFFSET = 0.7


@dataclass
class TableMargins:
    """Space around the table; only ``bottom`` affects layout."""
    bottom: float = 30
    left: float = 0
    right: float = 0
    top: float = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, float]]) -> "TableMargins":
        return cls(**(data or {}))


@dataclass
class Position:
    x: float
    y: float


class TableLayoutEngine:
    """
    Lays out a table onto a drawing surface.

    Columns are drawn left to right, each starting at the same page and
    vertical origin. Within a column the header is drawn at an explicit
    position and the rows follow the surface's own cursor. When a row does
    not fit, the surface moves to the next page and the column header is
    drawn again before that row.

    Usage::

        table = TableLayoutEngine([
            ColumnSpec.from_dict({"header": {"text": "ID"},
                                  "rows": [{"text": "1"}, {"text": "2"}]}),
            ColumnSpec.from_dict({"header": {"text": "Name"},
                                  "rows": [{"text": "Billy"}, {"text": "Suzy"}],
                                  "width": 0.75}),
        ], header_font_size=12)
        table.render(surface)
    """

    def __init__(
        self,
        columns: Optional[List[Union[ColumnSpec, Dict[str, Any]]]] = None,
        style: Optional[TableStyle] = None,
        margins: Union[TableMargins, Dict[str, float], None] = None,
        **options
    ):
        self.columns: List[ColumnSpec] = [
            c if isinstance(c, ColumnSpec) else ColumnSpec.from_dict(c)
            for c in (columns or [])
        ]
        if style is not None and options:
            raise TypeError(
                f"Pass either a TableStyle or style options, not both: {sorted(options)}"
            )
        self.style = style or TableStyle.from_options(options)
        if isinstance(margins, TableMargins):
            self.margins = margins
        else:
            self.margins = TableMargins.from_dict(margins)
        self.skew_factor = SKEW_FACTOR

        self.surface = None
        self.column_width = 0.0
        self.current_page = 0
        self.current_position = Position(0.0, 0.0)
        self.starting_page = 0
        self.starting_position = Position(0.0, 0.0)

    def render(self, surface) -> None:
        """Draw the table onto the surface and move its cursor below it."""
        self.surface = surface
        self.current_page = surface.current_page
        self.starting_page = surface.current_page
        self.current_position = Position(surface.page_left, surface.y)
        self.starting_position = Position(surface.page_left, surface.y)

        for column in self.columns:
            self.current_page = self.starting_page
            self.current_position.y = self.starting_position.y
            surface.switch_to_page(self.current_page)
            self._add_column(column)

        surface.move_down(self.margins.bottom)

    def table_width(self, surface=None) -> float:
        """Full width of the table, from the page size and margins."""
        return (surface or self.surface).content_width

    def column_widths(self, surface=None) -> List[float]:
        """Resolved width of every column for the given surface."""
        return compute_column_widths(self.columns, self.table_width(surface))

    def _add_column(self, column: ColumnSpec) -> None:
        self.column_width = resolve_column_width(
            column.width, len(self.columns), self.table_width()
        )
        logger.debug(
            "Column at x=%.2f: width %.2f, %d rows",
            self.current_position.x, self.column_width, len(column.rows)
        )

        self._add_header(column)

        for row in column.rows:
            self._add_row(column, row)

        # Next column starts to the right
        self.current_position.x += self.column_width

    def _add_header(self, column: ColumnSpec) -> None:
        surface = self.surface
        resolved = self.style.resolve_header(column.header)
        position = self.current_position
        width = self.column_width

        surface.save_state()
        self._apply_text_style(resolved, anchor_y=position.y)
        surface.text(resolved.text, position.x, position.y, **self._text_options(resolved, width))
        surface.restore_state()

        # Border style is resolved for headers but the border is always drawn
        border_y = surface.y - resolved.font_size * HEADER_BORDER_OFFSET
        surface.stroke_line(
            surface.x, border_y, surface.x + width, border_y,
            width=resolved.border_width, color=resolved.border_color,
        )

    def _add_row(self, column: ColumnSpec, row: CellSpec) -> None:
        surface = self.surface
        resolved = self.style.resolve_cell(row)

        # Repeat the header if a new page is needed
        needed_height = resolved.font_size + resolved.line_gap
        if surface.add_page_if_needed(self.current_page, surface.page_count, needed_height):
            self.current_page += 1
            self.current_position.y = surface.y
            logger.debug("Row moved to page %d, repeating header", self.current_page)
            self._add_header(column)

        width = self.column_width

        surface.save_state()
        self._apply_text_style(resolved, anchor_y=surface.y)
        surface.text(resolved.text, **self._text_options(resolved, width))
        surface.restore_state()

        if resolved.border_style == "none":
            return

        border_y = surface.y - resolved.font_size * ROW_BORDER_OFFSET
        surface.stroke_line(
            surface.x, border_y, surface.x + width, border_y,
            width=resolved.border_width, color=resolved.border_color,
        )

    def _apply_text_style(self, resolved: ResolvedCellStyle, anchor_y: float) -> None:
        surface = self.surface
        surface.set_fill_color(resolved.color)
        surface.set_font(resolved.font)
        surface.set_font_size(resolved.font_size)
        if resolved.italic:
            surface.transform(1, 0, self.skew_factor, 1, (-anchor_y * self.skew_factor) + 1, 0)

    def _text_options(self, resolved: ResolvedCellStyle, width: float) -> Dict[str, Any]:
        if resolved.allow_wrap:
            return {
                "align": resolved.align,
                "line_break": True,
                "line_gap": resolved.line_gap,
                "width": width,
            }
        return {
            "align": resolved.align,
            "line_break": False,
            "line_gap": resolved.line_gap,
            "width": width,
            "height": resolved.line_gap,
            "ellipsis": True,
        }
