"""Tests for the per-route state machine."""

from taxirank.models.passenger import RouteTag
from taxirank.models.route import RouteState, RouteStatus

from conftest import make_feed


def route_with_queue(records, capacity=5) -> RouteState:
    route = RouteState(route=RouteTag.SHORT, capacity=capacity)
    for passenger in make_feed(records):
        route.queue.enqueue(passenger)
    return route


class TestRouteStateInitial:
    def test_starts_empty_and_waiting(self):
        route = RouteState(route=RouteTag.CITY, capacity=4)

        assert route.status == RouteStatus.WAITING
        assert route.capacity_remaining == 4
        assert route.onboard_count == 0
        assert route.boarding_passenger is None
        assert route.is_idle


class TestResetOnDeparture:
    def test_departed_vehicle_is_reset(self):
        route = route_with_queue([])
        route.onboard.extend(make_feed([(0, "S", 1)] * 5))
        route.capacity_remaining = 0
        route.status = RouteStatus.DEPARTED

        route.reset_on_departure()

        assert route.status == RouteStatus.WAITING
        assert route.capacity_remaining == 5
        assert route.onboard_count == 0

    def test_board_status_is_left_alone(self):
        route = route_with_queue([])
        route.onboard.extend(make_feed([(0, "S", 1)] * 2))
        route.capacity_remaining = 3
        route.status = RouteStatus.BOARD

        route.reset_on_departure()

        assert route.status == RouteStatus.BOARD
        assert route.capacity_remaining == 3
        assert route.onboard_count == 2


class TestAdvanceBoarding:
    def test_no_boarder_is_noop(self):
        route = route_with_queue([(0, "S", 2)])

        route.advance_boarding()

        assert route.status == RouteStatus.WAITING
        assert len(route.queue) == 1
        assert route.onboard_count == 0

    def test_timer_counts_down_without_seating(self):
        route = route_with_queue([(0, "S", 3)])
        route.start_next_boarding()

        route.advance_boarding()

        assert route.boarding_timer_remaining == 2
        assert route.is_boarding
        assert route.onboard_count == 0

    def test_seats_passenger_when_timer_expires(self):
        route = route_with_queue([(0, "S", 1)])
        route.start_next_boarding()

        route.advance_boarding()

        assert not route.is_boarding
        assert route.onboard_count == 1
        assert route.capacity_remaining == 4
        assert route.status == RouteStatus.BOARD

    def test_filling_vehicle_departs_immediately(self):
        route = route_with_queue([(0, "S", 1)], capacity=1)
        route.start_next_boarding()

        route.advance_boarding()

        assert route.capacity_remaining == 0
        assert route.status == RouteStatus.DEPARTED
        assert route.departures == 1


class TestStartNextBoarding:
    def test_dequeues_head_and_sets_timer(self):
        route = route_with_queue([(0, "S", 4), (0, "S", 1)])
        head = list(route.queue)[0]

        route.start_next_boarding()

        assert route.boarding_passenger is head
        assert route.boarding_timer_remaining == 4
        assert len(route.queue) == 1
        assert route.status == RouteStatus.WAITING

    def test_does_not_replace_current_boarder(self):
        route = route_with_queue([(0, "S", 4), (0, "S", 1)])
        route.start_next_boarding()
        first = route.boarding_passenger

        route.start_next_boarding()

        assert route.boarding_passenger is first
        assert len(route.queue) == 1

    def test_empty_queue_is_noop(self):
        route = route_with_queue([])

        route.start_next_boarding()

        assert route.boarding_passenger is None

    def test_departed_vehicle_takes_nobody(self):
        route = route_with_queue([(0, "S", 1)])
        route.status = RouteStatus.DEPARTED

        route.start_next_boarding()

        assert route.boarding_passenger is None
        assert len(route.queue) == 1

    def test_full_vehicle_takes_nobody(self):
        route = route_with_queue([(0, "S", 1)])
        route.capacity_remaining = 0

        route.start_next_boarding()

        assert route.boarding_passenger is None


class TestAdvance:
    def test_five_one_tick_boarders_depart_at_tick_five(self):
        route = route_with_queue([(0, "S", 1)] * 5)
        statuses = []

        for tick in range(7):
            route.advance(tick)
            statuses.append((route.status, route.capacity_remaining))

        assert statuses[0] == (RouteStatus.WAITING, 5)
        assert statuses[1:5] == [
            (RouteStatus.BOARD, 4),
            (RouteStatus.BOARD, 3),
            (RouteStatus.BOARD, 2),
            (RouteStatus.BOARD, 1),
        ]
        assert statuses[5] == (RouteStatus.DEPARTED, 0)
        assert statuses[6] == (RouteStatus.WAITING, 5)

    def test_next_vehicle_starts_boarding_the_tick_after_departure(self):
        route = route_with_queue([(0, "S", 1)] * 6)

        for tick in range(6):
            route.advance(tick)
        assert route.status == RouteStatus.DEPARTED
        assert len(route.queue) == 1

        route.advance(6)

        assert route.status == RouteStatus.WAITING
        assert route.is_boarding
        assert len(route.queue) == 0

    def test_duration_d_seats_d_ticks_after_dequeue(self):
        route = route_with_queue([(0, "S", 3)])

        route.advance(0)
        route.advance(1)
        route.advance(2)
        assert route.onboard_count == 0

        route.advance(3)
        assert route.onboard_count == 1

    def test_zero_duration_seats_on_next_tick(self):
        route = route_with_queue([(0, "S", 0)])

        route.advance(0)
        assert route.onboard_count == 0

        route.advance(1)
        assert route.onboard_count == 1

    def test_partly_filled_vehicle_never_departs(self):
        route = route_with_queue([(0, "S", 1)] * 2)

        for tick in range(50):
            route.advance(tick)

        assert route.onboard_count == 2
        assert route.capacity_remaining == 3
        assert route.status == RouteStatus.BOARD
        assert route.departures == 0

    def test_capacity_plus_onboard_is_constant(self):
        route = route_with_queue([(0, "S", d) for d in (1, 2, 0, 3, 1, 1, 2, 1, 1, 1, 1)], capacity=4)

        for tick in range(40):
            route.advance(tick)
            assert route.capacity_remaining + route.onboard_count == 4
