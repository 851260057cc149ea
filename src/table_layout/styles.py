"""Cell specifications, table style defaults and per-cell style resolution."""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

# Option names used by older table definitions, mapped to field names
CAMEL_CASE_KEYS: Dict[str, str] = {
    "fontSize": "font_size",
    "borderColor": "border_color",
    "borderWidth": "border_width",
    "borderStyle": "border_style",
    "allowWrap": "allow_wrap",
    "emptyColor": "empty_color",
    "emptyFontSize": "empty_font_size",
    "emptyItalic": "empty_italic",
    "emptyText": "empty_text",
}

HEADER_LINE_GAP_FACTOR = 1.2
ROW_LINE_GAP_FACTOR = 1.07


def _snake_case(key: str) -> str:
    """Convert a camelCase option name to snake_case."""
    out = []
    for char in key:
        if char.isupper():
            out.append("_")
            out.append(char.lower())
        else:
            out.append(char)
    return "".join(out)


def pick(*values: Any) -> Any:
    """Return the first value that is not None.

    Tiered lookup used for every style attribute: cell override, then the
    table default, then a hard default. ``0``, ``False`` and ``""`` count as
    set values.
    """
    for value in values:
        if value is not None:
            return value
    return None


def is_empty_text(text: Optional[str]) -> bool:
    return text is None or len(text) < 1


@dataclass(frozen=True)
class CellSpec:
    """Styling and content for a single header or row cell."""
    text: Optional[str] = None
    align: Optional[str] = None  # "left", "center", "right"
    color: Optional[str] = None
    font: Optional[str] = None
    font_size: Optional[float] = None
    italic: Optional[bool] = None
    border_color: Optional[str] = None
    border_width: Optional[float] = None
    border_style: Optional[str] = None  # only "none" changes row drawing
    allow_wrap: Optional[bool] = None
    empty_color: Optional[str] = None
    empty_font_size: Optional[float] = None
    empty_italic: Optional[bool] = None
    empty_text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Union[None, str, Dict[str, Any], "CellSpec"]) -> "CellSpec":
        """Build a CellSpec from a mapping, a bare string or None."""
        if data is None:
            return cls()
        if isinstance(data, CellSpec):
            return data
        if isinstance(data, str):
            return cls(text=data)

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = CAMEL_CASE_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        # YAML loads unquoted numbers as int/float
        for name in ("text", "empty_text"):
            if kwargs.get(name) is not None:
                kwargs[name] = str(kwargs[name])
        return cls(**kwargs)


@dataclass(frozen=True)
class ResolvedCellStyle:
    """Final attributes used to draw one header or row cell."""
    text: str
    align: str
    color: str
    font: str
    font_size: float
    italic: bool
    border_color: str
    border_width: float
    border_style: str
    allow_wrap: bool
    line_gap: float


@dataclass(frozen=True)
class TableStyle:
    """Table-level defaults for headers and cells.

    The empty-variant font size and italic flag default to the matching
    non-empty value when left as None.
    """
    cell_align: str = "left"
    cell_allow_wrap: bool = False
    cell_border_color: str = "#ccc"
    cell_border_style: str = "bottom"
    cell_border_width: float = 1
    cell_color: str = "#222"
    cell_font: str = "Helvetica"
    cell_font_size: float = 14
    cell_italic: bool = False
    cell_empty_color: str = "#FFFFFF"
    cell_empty_font_size: Optional[float] = None
    cell_empty_italic: Optional[bool] = None
    cell_empty_text: str = "none"

    header_align: str = "left"
    header_allow_wrap: bool = False
    header_border_color: str = "#000"
    header_border_style: str = "bottom"
    header_border_width: float = 1.5
    header_color: str = "#000"
    header_font: str = "Helvetica-Bold"
    header_font_size: float = 14
    header_italic: bool = False
    header_empty_color: str = "#FFFFFF"
    header_empty_font_size: Optional[float] = None
    header_empty_italic: Optional[bool] = None
    header_empty_text: str = "none"

    def __post_init__(self):
        # frozen dataclass, so derived defaults go through object.__setattr__
        if self.cell_empty_font_size is None:
            object.__setattr__(self, "cell_empty_font_size", self.cell_font_size)
        if self.cell_empty_italic is None:
            object.__setattr__(self, "cell_empty_italic", self.cell_italic)
        if self.header_empty_font_size is None:
            object.__setattr__(self, "header_empty_font_size", self.header_font_size)
        if self.header_empty_italic is None:
            object.__setattr__(self, "header_empty_italic", self.header_italic)

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> "TableStyle":
        """Build a style from snake_case or camelCase option names.

        Options set to None keep the hard default. Unknown options are ignored.
        """
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _snake_case(key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def resolve_header(self, header: CellSpec) -> ResolvedCellStyle:
        """Resolve a header cell against the header defaults."""
        return self._resolve(header, "header", HEADER_LINE_GAP_FACTOR)

    def resolve_cell(self, cell: CellSpec) -> ResolvedCellStyle:
        """Resolve a row cell against the cell defaults."""
        return self._resolve(cell, "cell", ROW_LINE_GAP_FACTOR)

    def _default(self, prefix: str, name: str) -> Any:
        return getattr(self, f"{prefix}_{name}")

    def _resolve(self, spec: CellSpec, prefix: str, gap_factor: float) -> ResolvedCellStyle:
        color = pick(spec.color, self._default(prefix, "color"))
        font_size = pick(spec.font_size, self._default(prefix, "font_size"))
        italic = pick(spec.italic, self._default(prefix, "italic"))
        text = spec.text

        # Line gap follows the non-empty font size even for empty cells
        line_gap = font_size * gap_factor

        if is_empty_text(text):
            color = pick(spec.empty_color, self._default(prefix, "empty_color"))
            font_size = pick(spec.empty_font_size, self._default(prefix, "empty_font_size"))
            italic = pick(spec.empty_italic, self._default(prefix, "empty_italic"))
            text = pick(spec.empty_text, self._default(prefix, "empty_text"))

        return ResolvedCellStyle(
            text=text,
            align=pick(spec.align, self._default(prefix, "align")),
            color=color,
            font=pick(spec.font, self._default(prefix, "font")),
            font_size=font_size,
            italic=bool(italic),
            border_color=pick(spec.border_color, self._default(prefix, "border_color")),
            border_width=pick(spec.border_width, self._default(prefix, "border_width")),
            border_style=pick(spec.border_style, self._default(prefix, "border_style")),
            allow_wrap=bool(pick(spec.allow_wrap, self._default(prefix, "allow_wrap"))),
            line_gap=line_gap,
        )


def get_bold_font(font_family: str) -> str:
    """Get the bold variant of a standard font family."""
    if font_family == "Times-Roman":
        return "Times-Bold"
    elif font_family.endswith("-Bold"):
        return font_family
    else:
        return f"{font_family}-Bold"
