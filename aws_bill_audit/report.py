from datetime import datetime
from typing import List, NamedTuple, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tabulate import tabulate

from aws_bill_audit.utilization import Utilization

TITLE = 'AWS Resource Utilization'
HEADINGS = [
    'ResourceID',
    'ResourceName',
    'ResourceFamily',
    'ResourceType',
    'ResourceCreationDate',
    'AvgCPUUtilization',
    'AvgMemoryUtilization',
    'InstanceLifecycle',
    'PricePerHour',
    'EstBillMonthTillDate',
    'EstBillForTheMonth',
]
NAME_NOT_AVAILABLE = 'N/A'


class ReportRow(NamedTuple):
    resource_id: str
    resource_name: str
    resource_family: str
    resource_type: str
    created_at: object
    avg_cpu: Utilization
    avg_memory: Utilization
    lifecycle: str
    price_per_hour: float
    bill_month_to_date: float
    bill_for_month: float


# ----------------------------
# Cell formatting
# ----------------------------
def format_cell(value, precision: int = 2) -> str:
    if value is None:
        return ''
    if isinstance(value, Utilization):
        return str(value)
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M:%S %Z').strip()
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)


def format_row(row: ReportRow) -> List[str]:
    cells = [format_cell(v) for v in row]
    # hourly rates are often fractions of a cent
    cells[8] = format_cell(row.price_per_hour, precision=4)
    return cells


# ----------------------------
# Rendering
# ----------------------------
def build_table(rows: Sequence[ReportRow]) -> Table:
    table = Table(title=TITLE, show_header=True, header_style="bold magenta", show_lines=False)
    for i, heading in enumerate(HEADINGS):
        table.add_column(heading, justify="right" if i >= 8 else "left", overflow="fold")
    for row in rows:
        table.add_row(*[escape(cell) for cell in format_row(row)])
    return table


def render_table(rows: Sequence[ReportRow], console: Console) -> None:
    console.print(build_table(rows))


def render_plain(rows: Sequence[ReportRow]) -> str:
    """Same table as a tabulate grid, for pipes and log files."""
    grid = tabulate([format_row(r) for r in rows], headers=HEADINGS, tablefmt='grid',
                    stralign='left', numalign='right', disable_numparse=True)
    return f"{TITLE}\n{grid}"
