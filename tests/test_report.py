"""Tests for ReportRenderer."""

import io

from taxirank.io.report import ReportRenderer
from taxirank.simulation.engine import SimulationConfig, SimulationEngine

from conftest import make_feed


class TestReportRenderer:
    def test_header_columns(self):
        header = ReportRenderer().header()

        assert header.split() == [
            "Time", "Next", "S", "L", "C", "WQS", "WQL", "WQC",
            "CS", "StatS", "CL", "StatL", "CC", "StatC",
        ]

    def test_row_for_first_tick(self):
        feed = make_feed([(0, "S", 2), (0, "S", 1), (0, "C", 1)])
        result = SimulationEngine().run(feed)

        row = ReportRenderer().row(result.snapshots[0])

        assert row.split() == [
            "0", "S(2)S(1)C(1)", "1", "0", "0", "S(1)", "0", "0",
            "5", "Waiting", "5", "Waiting", "5", "Waiting",
        ]

    def test_row_shows_departure(self, five_short_passengers):
        result = SimulationEngine().run(five_short_passengers)

        row = ReportRenderer().row(result.snapshots[5]).split()

        # No arrivals at tick 5, so the Next column is blank
        assert row[0] == "5"
        assert row[7:9] == ["0", "Departed"]

    def test_completion_footer(self, five_short_passengers):
        result = SimulationEngine().run(five_short_passengers)

        assert ReportRenderer().footer(result) == (
            "Simulation ended at time 5 - No more passengers to process."
        )

    def test_safety_bound_footer(self):
        feed = make_feed([(tick, "C", 1) for tick in range(30)])
        result = SimulationEngine(SimulationConfig(max_ticks=10)).run(feed)

        assert ReportRenderer().footer(result) == (
            "Warning: Simulation terminated after 10 time units"
        )

    def test_render_has_one_row_per_tick(self, five_short_passengers):
        result = SimulationEngine().run(five_short_passengers)
        stream = io.StringIO()

        ReportRenderer().write(result, stream)

        lines = stream.getvalue().splitlines()
        # header + 6 ticks + blank + footer
        assert len(lines) == 9
        assert lines[-1].startswith("Simulation ended at time 5")
