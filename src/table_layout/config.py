"""Report definitions loaded from YAML."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .builder import DocumentBuilder
from .columns import ColumnSpec
from .footer import FooterRenderer
from .surface import DEFAULT_MARGIN, PageLayout
from .table import TableLayoutEngine


@dataclass
class PageConfig:
    """Page size, orientation and margins."""
    size: str = "letter"
    orientation: str = "portrait"
    margins: Dict[str, float] = field(default_factory=lambda: {
        "top": DEFAULT_MARGIN,
        "right": DEFAULT_MARGIN,
        "bottom": DEFAULT_MARGIN,
        "left": DEFAULT_MARGIN,
    })

    def to_layout(self) -> PageLayout:
        return PageLayout.from_name(self.size, self.orientation, self.margins)


@dataclass
class FooterConfig:
    data: List[Any] = field(default_factory=list)
    include_pagination: bool = True

    def to_renderer(self) -> FooterRenderer:
        return FooterRenderer(self.data, include_pagination=self.include_pagination)


@dataclass
class TableConfig:
    """One table: column definitions plus table-level style options."""
    columns: List[Dict[str, Any]] = field(default_factory=list)
    style: Dict[str, Any] = field(default_factory=dict)
    margins: Optional[Dict[str, float]] = None

    def to_engine(self) -> TableLayoutEngine:
        return TableLayoutEngine(
            [ColumnSpec.from_dict(column) for column in self.columns],
            margins=self.margins,
            **self.style,
        )


@dataclass
class ReportConfig:
    """A complete report: title, page setup, footer and tables."""

    title: str = ""
    page: PageConfig = field(default_factory=PageConfig)
    footer: Optional[FooterConfig] = None
    tables: List[TableConfig] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportConfig":
        if not isinstance(data, dict):
            raise ValueError(
                f"Report definition must be a mapping, got {type(data).__name__}"
            )

        page_data = dict(data.get("page") or {})
        if "margins" in page_data:
            # Partial margins keep the defaults for the other sides
            margins = PageConfig().margins
            margins.update(page_data["margins"] or {})
            page_data["margins"] = margins

        footer = None
        if data.get("footer") is not None:
            footer = FooterConfig(**data["footer"])

        return cls(
            title=data.get("title", ""),
            page=PageConfig(**page_data),
            footer=footer,
            tables=[TableConfig(**table) for table in data.get("tables") or []],
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "ReportConfig":
        """Load a report definition from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "page": {
                "size": self.page.size,
                "orientation": self.page.orientation,
                "margins": dict(self.page.margins),
            },
            "tables": [
                {"columns": t.columns, "style": t.style, "margins": t.margins}
                for t in self.tables
            ],
        }
        if self.footer is not None:
            data["footer"] = {
                "data": self.footer.data,
                "include_pagination": self.footer.include_pagination,
            }
        return data

    def to_yaml(self, path: Path) -> None:
        """Save the report definition to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def build(self) -> DocumentBuilder:
        """Lay out every table into a new document."""
        footer = self.footer.to_renderer() if self.footer is not None else None
        builder = DocumentBuilder(
            title=self.title,
            layout=self.page.to_layout(),
            footer=footer,
        )
        for table in self.tables:
            builder.add_table(table.to_engine())
        return builder


def load_config(path: Optional[Path] = None) -> ReportConfig:
    """Load config from path or return an empty report."""
    if path is None:
        return ReportConfig()
    return ReportConfig.from_yaml(path)
