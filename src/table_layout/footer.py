"""Per-page footer lines and pagination."""

from typing import Any, Dict, List, Optional, Union

from .styles import get_bold_font

FooterEntry = Union[str, Dict[str, Any]]

FOOTER_FONT_SIZE = 9


def _is_label_value(entry: Any) -> bool:
    return isinstance(entry, dict) and "label" in entry and "value" in entry


class FooterRenderer:
    """
    Draws footer data and page numbers at the bottom of every page.

    Register ``on_page_added`` as a page listener on the surface. Entries are
    stacked bottom-up: the last entry sits on the bottom margin line and
    each earlier entry one line above it. Pagination is right-aligned on
    the same line as the last entry.
    """

    def __init__(
        self,
        data: Union[FooterEntry, List[FooterEntry], None] = None,
        include_pagination: bool = True,
        font: str = "Helvetica",
        bold_font: Optional[str] = None,
        font_size: float = FOOTER_FONT_SIZE,
    ):
        self.include_pagination = include_pagination is not False
        if data is None:
            data = []
        if not isinstance(data, list):
            data = [data]
        self.data: List[FooterEntry] = [
            entry for entry in data
            if isinstance(entry, str) or _is_label_value(entry)
        ]
        self.font = font
        self.bold_font = bold_font or get_bold_font(font)
        self.font_size = font_size

        self.width = 0.0
        self.height = 0.0
        self.current_page = 1
        self.doc_title = ""
        self.surface = None

    def on_page_added(self, surface) -> None:
        """Page listener: cache the page geometry and draw the footer."""
        margins = surface.margins
        self.width = surface.page_width - margins["left"] - margins["right"]
        self.height = surface.page_height - margins["top"] - margins["bottom"]
        self.current_page = surface.page_number
        self.doc_title = surface.title or ""
        self.surface = surface

        self.add_footer_data()
        if self.include_pagination:
            self.add_pagination()

    def line_y(self, line: int) -> float:
        """Y of a footer line counted upward from the bottom margin line."""
        return (self.height + self.surface.margins["bottom"]) - (line * self.font_size)

    def add_footer_data(self) -> None:
        surface = self.surface
        left = surface.margins["left"]
        surface.set_font(self.font)
        surface.set_font_size(self.font_size)

        line = len(self.data) - 1
        for entry in self.data:
            y = self.line_y(line)
            if isinstance(entry, str):
                surface.text(entry, left, y)
            else:
                surface.set_font(self.bold_font)
                surface.text(f"{entry['label']}:", left, y, line_break=False, continued=True)
                surface.set_font(self.font)
                surface.text(str(entry["value"]), line_break=False)
            line -= 1

    def pagination_text(self) -> str:
        if self.doc_title:
            return f"{self.doc_title} - {self.current_page}"
        return str(self.current_page)

    def add_pagination(self) -> None:
        surface = self.surface
        surface.set_font(self.font)
        surface.set_font_size(self.font_size)
        surface.text(
            self.pagination_text(),
            surface.margins["left"],
            self.line_y(0),
            align="right",
            width=self.width,
        )
