import io
from datetime import datetime

from rich.console import Console

from aws_bill_audit.report import (
    HEADINGS,
    TITLE,
    ReportRow,
    build_table,
    format_cell,
    format_row,
    render_plain,
    render_table,
)
from aws_bill_audit.utilization import Utilization


def make_row(resource_id="i-1", cpu=Utilization.average(12.346)):
    return ReportRow(resource_id, "web", "t3.micro", "EC2", datetime(2024, 1, 2, 3, 4, 5),
                     cpu, Utilization.unavailable(), "On-Demand", 0.0116, 2.8536, 8.352)


def render(rows):
    console = Console(file=io.StringIO(), width=300, color_system=None)
    render_table(rows, console)
    return console.file.getvalue()


class TestFormatting:

    def test_format_row(self):
        assert format_row(make_row()) == [
            "i-1", "web", "t3.micro", "EC2", "2024-01-02 03:04:05",
            "12.35", "No data", "On-Demand", "0.0116", "2.85", "8.35",
        ]

    def test_no_data_cpu(self):
        assert format_row(make_row(cpu=Utilization.unavailable()))[5] == "No data"

    def test_format_cell(self):
        assert format_cell(None) == ""
        assert format_cell("x") == "x"
        assert format_cell(3.0) == "3.00"


class TestRenderTable:

    def test_headings_and_title(self):
        table = build_table([])
        assert table.title == TITLE
        assert [c.header for c in table.columns] == HEADINGS
        assert table.row_count == 0

    def test_empty_table_is_well_formed(self):
        out = render([])
        assert TITLE in out
        for heading in HEADINGS:
            assert heading in out

    def test_rows_in_input_order(self):
        out = render([make_row("i-zzz"), make_row("i-aaa")])
        assert out.index("i-zzz") < out.index("i-aaa")


class TestRenderPlain:

    def test_empty(self):
        out = render_plain([])
        assert out.splitlines()[0] == TITLE
        for heading in HEADINGS:
            assert heading in out

    def test_rows(self):
        out = render_plain([make_row("i-zzz"), make_row("i-aaa")])
        assert out.index("i-zzz") < out.index("i-aaa")
        assert "No data" in out
        assert "0.0116" in out
