"""Tabular per-tick report."""

from typing import List, TextIO

from ..models.passenger import RouteTag
from ..simulation.engine import Outcome, SimulationResult, TickSnapshot


# (header, width) pairs, in print order
COLUMNS = [
    ("Time", 6),
    ("Next", 15),
    ("S", 6),
    ("L", 6),
    ("C", 6),
    ("WQS", 14),
    ("WQL", 14),
    ("WQC", 14),
    ("CS", 8),
    ("StatS", 10),
    ("CL", 8),
    ("StatL", 10),
    ("CC", 8),
    ("StatC", 10),
]

REPORT_ROUTES = (RouteTag.SHORT, RouteTag.LONG, RouteTag.CITY)


class ReportRenderer:
    """Renders tick snapshots as a fixed-width text table."""

    def header(self) -> str:
        return self._format_row([name for name, _ in COLUMNS])

    def row(self, snapshot: TickSnapshot) -> str:
        """
        Format one tick.

        Args:
            snapshot: Snapshot to render

        Returns:
            Table row without trailing newline
        """
        routes = [snapshot.route(tag) for tag in REPORT_ROUTES]

        cells = [str(snapshot.tick), snapshot.arrivals_label]
        cells += [str(r.queue_length) for r in routes]
        cells += [r.queue_label for r in routes]
        for r in routes:
            cells += [str(r.capacity_remaining), r.status.value]

        return self._format_row(cells)

    def footer(self, result: SimulationResult) -> str:
        """Terminal message for a finished run."""
        if result.outcome == Outcome.COMPLETED:
            return (
                f"Simulation ended at time {result.final_tick}"
                " - No more passengers to process."
            )
        return f"Warning: Simulation terminated after {result.config.max_ticks} time units"

    def render(self, result: SimulationResult) -> str:
        """Render the full report for a result."""
        lines: List[str] = [self.header()]
        lines.extend(self.row(snapshot) for snapshot in result.snapshots)
        lines.append("")
        lines.append(self.footer(result))
        return "\n".join(lines) + "\n"

    def write(self, result: SimulationResult, stream: TextIO):
        stream.write(self.render(result))

    @staticmethod
    def _format_row(cells: List[str]) -> str:
        return "".join(
            cell.ljust(width) for cell, (_, width) in zip(cells, COLUMNS)
        ).rstrip()
