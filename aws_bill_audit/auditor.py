import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from rich.console import Console

from aws_bill_audit.collectors import COLLECTORS
from aws_bill_audit.report import ReportRow, render_plain, render_table

log = logging.getLogger(__name__)

ALL_SERVICES = [c.selector for c in COLLECTORS]


def parse_selection(text: Optional[str]) -> List[str]:
    """'1, 3' -> ['1', '3']; blank -> []."""
    if not text:
        return []
    return [part.strip() for part in text.split(',') if part.strip()]


class BillAuditor:
    """Runs the selected collectors in fixed category order and prints the table."""

    def __init__(self, clients, console: Optional[Console] = None,
                 clock: Callable[[], datetime] = datetime.now, workers: int = 1):
        self.console = console or Console()
        self.collectors = [cls(clients, console=self.console, clock=clock, workers=workers)
                           for cls in COLLECTORS]

    def collect(self, services: Iterable[str]) -> List[ReportRow]:
        services = list(services) or ALL_SERVICES
        unknown = [s for s in services if s not in ALL_SERVICES]
        if unknown:
            log.debug("Ignoring unknown service selectors: %s", unknown)

        rows: List[ReportRow] = []
        for collector in self.collectors:
            if collector.selector in services:
                rows.extend(collector.collect())
        log.info("Collected %d rows", len(rows))
        return rows

    def audit(self, services: Iterable[str], plain: bool = False) -> List[ReportRow]:
        rows = self.collect(services)
        # pipes and files get the fixed-width grid; rich would fold it to 80 columns
        if plain or not self.console.is_terminal:
            self.console.print(render_plain(rows), markup=False, highlight=False, soft_wrap=True)
        else:
            render_table(rows, self.console)
        return rows
