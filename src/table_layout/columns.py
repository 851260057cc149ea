"""Column specifications and column width resolution."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .styles import CellSpec


@dataclass
class ColumnSpec:
    """Specification for a table column.

    ``width`` is an absolute width in points (>= 1), a fraction of the
    table width (0 <= width < 1), or None for an equal share.
    """
    header: CellSpec = field(default_factory=CellSpec)
    rows: List[CellSpec] = field(default_factory=list)
    width: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnSpec":
        """Build a column from a mapping of header, rows and width.

        Raises KeyError when ``rows`` is missing and TypeError when it is a
        string or mapping rather than a sequence of cells.
        """
        rows = data["rows"]
        if isinstance(rows, (str, dict)):
            raise TypeError(f"Column rows must be a list of cells, got {type(rows).__name__}")
        return cls(
            header=CellSpec.from_dict(data.get("header")),
            rows=[CellSpec.from_dict(row) for row in rows],
            width=data.get("width"),
        )

    @classmethod
    def from_values(
        cls,
        header: str,
        values: List[Any],
        width: Optional[float] = None,
        **cell_options
    ) -> "ColumnSpec":
        """Build a column from a header label and plain row values."""
        rows = []
        for value in values:
            text = None if value is None else str(value)
            rows.append(CellSpec(text=text, **cell_options))
        return cls(header=CellSpec(text=header), rows=rows, width=width)


def resolve_column_width(
    width: Optional[float],
    column_count: int,
    content_width: float
) -> float:
    """
    Compute the absolute width of one column.

    A single-column table always spans the full content width. Fractions
    are not normalized, so fractional widths summing above 1 overflow.
    """
    if column_count < 2:
        return content_width

    if width is None:
        return content_width / column_count

    if width < 1:
        return content_width * width

    return width


def compute_column_widths(columns: List[ColumnSpec], content_width: float) -> List[float]:
    """Resolve widths for every column of a table."""
    return [
        resolve_column_width(column.width, len(columns), content_width)
        for column in columns
    ]
