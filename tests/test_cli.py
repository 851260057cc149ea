"""
Tests for the command-line interface.
"""

import logging
from unittest.mock import patch

import pytest
import yaml
from faker import Faker

from table_layout.cli import build_demo_columns, main


class TestDemoData:

    def test_columns(self):
        fake = Faker()
        fake.seed_instance(1)
        columns = build_demo_columns(fake, num_rows=12)

        assert [c.header.text for c in columns] == ["Date", "Vendor", "Reference", "Amount"]
        assert all(len(c.rows) == 12 for c in columns)
        assert sum(c.width for c in columns) == pytest.approx(1.0)
        assert all(r.align == "right" for r in columns[3].rows)

    def test_seeded(self):
        first, second = Faker(), Faker()
        first.seed_instance(7)
        second.seed_instance(7)
        assert build_demo_columns(first, 5) == build_demo_columns(second, 5)


class TestMain:

    def test_demo_report(self, tmp_path, capsys):
        out = tmp_path / "demo.pdf"
        assert main(["--out", str(out), "--rows", "80", "--seed", "3"]) == 0

        assert out.read_bytes().startswith(b"%PDF")
        output = capsys.readouterr().out
        assert "Rendering complete!" in output
        assert "Tables: 1" in output

    def test_config_report(self, tmp_path, capsys):
        config = tmp_path / "report.yaml"
        config.write_text(yaml.safe_dump({
            "title": "From config",
            "tables": [{"columns": [{"header": {"text": "A"}, "rows": [{"text": "1"}]}]}],
        }))
        out = tmp_path / "report.pdf"

        assert main(["--config", str(config), "--out", str(out), "--title", "Override"]) == 0
        assert out.exists()
        assert "Pages: 1" in capsys.readouterr().out

    @pytest.mark.parametrize("flags, level", [
        (["--verbose"], logging.DEBUG),
        ([], logging.WARNING),
    ])
    def test_log_level(self, tmp_path, flags, level):
        with patch("table_layout.cli.logging.basicConfig") as basic_config:
            assert main(["--out", str(tmp_path / "demo.pdf"), "--rows", "3"] + flags) == 0
        assert basic_config.call_args.kwargs["level"] == level
