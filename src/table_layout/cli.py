"""Command-line interface for rendering table reports to PDF."""

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import List, Optional

from faker import Faker

from .builder import DocumentBuilder
from .columns import ColumnSpec
from .config import load_config
from .footer import FooterRenderer
from .table import TableLayoutEngine


def build_demo_columns(fake: Faker, num_rows: int = 40) -> List[ColumnSpec]:
    """Generate a four-column vendor payment table with fake data."""
    dates, vendors, references, amounts = [], [], [], []
    for _ in range(num_rows):
        dates.append(fake.date_between(start_date="-90d", end_date="today").strftime("%m/%d/%y"))
        vendors.append(fake.company())
        # Some references left blank to show the empty-cell styling
        references.append(fake.bothify("INV-#####") if fake.boolean(80) else None)
        amounts.append(f"{fake.pyfloat(min_value=10, max_value=25000, right_digits=2):,.2f}")

    return [
        ColumnSpec.from_values("Date", dates, width=0.15),
        ColumnSpec.from_values("Vendor", vendors, width=0.45),
        ColumnSpec.from_values("Reference", references, width=0.2),
        ColumnSpec.from_values("Amount", amounts, width=0.2, align="right"),
    ]


def build_demo_report(title: str, num_rows: int, seed: int) -> DocumentBuilder:
    """Build a demo document with a single fake payments table."""
    fake = Faker()
    fake.seed_instance(seed)

    footer = FooterRenderer([
        f"Generated {date.today().isoformat()}",
        {"label": "Rows", "value": str(num_rows)},
    ])
    builder = DocumentBuilder(title=title, footer=footer)
    builder.add_table(TableLayoutEngine(
        build_demo_columns(fake, num_rows),
        header_font_size=11,
        cell_font_size=9,
        cell_empty_text="-",
        cell_empty_color="#999",
    ))
    return builder


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Render paginated table reports to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML report definition (renders a demo report if omitted)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("out/report.pdf"),
        help="Output PDF path",
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=60,
        help="Number of rows in the demo report",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for the demo report",
    )
    parser.add_argument(
        "--title",
        help="Document title (overrides config)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log layout decisions",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    if args.config:
        config = load_config(args.config)
        if args.title is not None:
            config.title = args.title
        builder = config.build()
    else:
        builder = build_demo_report(args.title or "Vendor Payments", args.rows, args.seed)

    pdf_path = builder.save(args.out)

    print("Rendering complete!")
    print(f"  Tables: {len(builder.tables)}")
    print(f"  Pages: {builder.page_count}")
    print(f"  Output: {pdf_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
