"""Document builder composing a surface, tables and a footer."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .columns import ColumnSpec
from .footer import FooterRenderer
from .surface import CanvasSurface, PageLayout
from .table import TableLayoutEngine

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """Builds a paginated PDF from tables, with an optional per-page footer."""

    def __init__(
        self,
        title: str = "",
        layout: Optional[PageLayout] = None,
        footer: Optional[FooterRenderer] = None,
    ):
        self.title = title
        self.layout = layout or PageLayout()
        self.surface = CanvasSurface(self.layout, title=title)
        self.footer = footer
        self.tables: List[TableLayoutEngine] = []

        if footer is not None:
            self.surface.add_page_listener(footer.on_page_added)
        self.surface.add_page()

    @property
    def page_count(self) -> int:
        return self.surface.page_count

    def add_page(self) -> int:
        """Start a new page and return its index."""
        return self.surface.add_page()

    def add_space(self, amount: float) -> None:
        """Move the cursor down by amount points."""
        self.surface.move_down(amount)

    def add_table(
        self,
        table: Union[TableLayoutEngine, List[Union[ColumnSpec, Dict[str, Any]]]],
        **options
    ) -> TableLayoutEngine:
        """
        Render a table at the current cursor.

        Args:
            table: A TableLayoutEngine, or a list of columns to build one from
            **options: Style options and ``margins`` used when building one

        Returns:
            The engine that rendered the table
        """
        if not isinstance(table, TableLayoutEngine):
            margins = options.pop("margins", None)
            table = TableLayoutEngine(table, margins=margins, **options)

        logger.debug(
            "Adding table %d with %d columns on page %d",
            len(self.tables), len(table.columns), self.surface.current_page
        )
        table.render(self.surface)
        self.tables.append(table)
        return table

    def save(self, path: Union[str, Path]) -> Path:
        """Write the document to a PDF file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return self.surface.save(path)

    def to_bytes(self) -> bytes:
        return self.surface.to_bytes()
