"""Tests for ArrivalDispatcher."""

import logging

from taxirank.models.passenger import RouteTag
from taxirank.simulation.dispatcher import ArrivalDispatcher
from taxirank.simulation.state import SimulationState

from conftest import make_feed


def queued(state, tag):
    return list(state.routes[tag].queue)


class TestDispatch:
    def test_routes_passengers_by_tag(self):
        feed = make_feed([(0, "S", 1), (0, "L", 2), (0, "C", 3)])
        state = SimulationState.create(feed)

        result = ArrivalDispatcher().dispatch(state, 0)

        assert result.arrivals == tuple(feed)
        assert result.dropped == ()
        assert queued(state, RouteTag.SHORT) == [feed[0]]
        assert queued(state, RouteTag.LONG) == [feed[1]]
        assert queued(state, RouteTag.CITY) == [feed[2]]
        assert state.cursor == 3
        assert state.feed_exhausted

    def test_stops_at_first_later_arrival(self):
        feed = make_feed([(0, "S", 1), (2, "S", 1), (2, "L", 1)])
        state = SimulationState.create(feed)
        dispatcher = ArrivalDispatcher()

        dispatcher.dispatch(state, 0)
        assert state.cursor == 1

        result = dispatcher.dispatch(state, 1)
        assert result.arrivals == ()
        assert state.cursor == 1

        result = dispatcher.dispatch(state, 2)
        assert len(result.arrivals) == 2
        assert state.cursor == 3

    def test_queue_is_fifo_in_arrival_order(self):
        feed = make_feed([(0, "S", 3), (0, "S", 1), (0, "S", 2)])
        state = SimulationState.create(feed)

        ArrivalDispatcher().dispatch(state, 0)

        assert [p.boarding_duration for p in queued(state, RouteTag.SHORT)] == [3, 1, 2]

    def test_unknown_tag_is_dropped_but_consumed(self):
        feed = make_feed([(0, "X", 1), (0, "S", 1)])
        state = SimulationState.create(feed)

        result = ArrivalDispatcher().dispatch(state, 0)

        assert result.dropped == (feed[0],)
        assert result.arrivals == tuple(feed)
        assert state.cursor == 2
        assert state.dropped_count == 1
        assert state.dispatched_count == 1
        for tag in RouteTag:
            assert feed[0] not in queued(state, tag)

    def test_dropped_passenger_is_logged_at_debug(self, caplog):
        feed = make_feed([(0, "X", 1)])
        state = SimulationState.create(feed)

        with caplog.at_level(logging.DEBUG, logger="taxirank.simulation.dispatcher"):
            ArrivalDispatcher().dispatch(state, 0)

        assert [r.levelno for r in caplog.records] == [logging.DEBUG]
        assert "unknown route" in caplog.records[0].getMessage()

    def test_empty_feed(self):
        state = SimulationState.create([])

        result = ArrivalDispatcher().dispatch(state, 0)

        assert result.arrivals == ()
        assert state.feed_exhausted

    def test_label_lists_all_arrivals(self):
        feed = make_feed([(0, "S", 2), (0, "?", 0), (0, "C", 1)])
        state = SimulationState.create(feed)

        result = ArrivalDispatcher().dispatch(state, 0)

        assert result.label == "S(2)?(0)C(1)"
