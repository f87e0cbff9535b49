from typing import Optional

from rich.console import Console
from rich.table import Table

from .models import CrawlSummary, Result, ResultKind


class Reporter:
    """Prints the results selected by the visibility flags, one per line."""

    def __init__(
        self,
        success: bool = False,
        ignored: bool = False,
        failed: bool = True,
        console: Optional[Console] = None,
    ):
        self.visible = {
            ResultKind.OK: success,
            ResultKind.IGNORED: ignored,
            ResultKind.FAILED: failed,
        }
        # URLs may contain "[...]", keep rich from reading them as markup
        self.console = console or Console(highlight=False, soft_wrap=True)

    def __call__(self, result: Result) -> None:
        if self.visible[result.kind]:
            self.console.print(str(result), markup=False, highlight=False)


def render_summary(summary: CrawlSummary) -> Table:
    table = Table(title="Link check summary")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Fetched", str(summary.spawned))
    table.add_row("OK", str(summary.counts[ResultKind.OK]))
    table.add_row("Ignored", str(summary.counts[ResultKind.IGNORED]))
    table.add_row("Failed", str(summary.counts[ResultKind.FAILED]))
    return table
