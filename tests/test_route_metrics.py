import pytest

from routeplanner.models.domain import Coordinate, Stop, Tour
from routeplanner.services.routing.errors import LegScoringError
from routeplanner.services.routing.metrics import accumulate_route_metrics
from routeplanner.services.routing.models import LegEstimate
from routeplanner.services.routing.optimizer import RouteOptimizer
from routeplanner.services.routing.pacing import RequestPacer


def _stop(name: str, lat: float, lon: float) -> Stop:
    return Stop(name=name, coordinate=Coordinate(lat, lon), stop_id=name)


class FakeScorer:
    def __init__(self, failing: set[tuple[float, float]] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[tuple[Coordinate, Coordinate]] = []

    def score(self, origin: Coordinate, destination: Coordinate) -> LegEstimate:
        self.calls.append((origin, destination))
        if origin.as_lat_lon() in self.failing:
            raise LegScoringError("no route")
        return LegEstimate(distance_m=1000.0, duration_s=60.0)


def _tour() -> Tour:
    return Tour.of([_stop("A", 0, 0), _stop("B", 0, 1), _stop("C", 0, 2), _stop("D", 0, 3)])


def test_all_legs_scored_in_order():
    tour = _tour()
    scorer = FakeScorer()

    metrics = accumulate_route_metrics(tour, scorer)

    assert metrics.total_distance_m == 3000.0
    assert metrics.total_duration_s == 180.0
    assert not metrics.partial
    assert scorer.calls == [(a.coordinate, b.coordinate) for a, b in tour.legs()]
    assert [leg.origin_id for leg in metrics.legs] == ["A", "B", "C"]


def test_failed_leg_contributes_zero_and_marks_partial():
    metrics = accumulate_route_metrics(_tour(), FakeScorer(failing={(0.0, 1.0)}))

    assert metrics.total_distance_m == 2000.0
    assert metrics.total_duration_s == 120.0
    assert metrics.failed_legs == 1
    assert metrics.partial
    failed = [leg for leg in metrics.legs if not leg.ok]
    assert failed[0].origin_id == "B"
    assert failed[0].error == "no route"


def test_single_stop_tour_has_no_legs():
    metrics = accumulate_route_metrics(Tour.of([_stop("A", 0, 0)]), FakeScorer())
    assert metrics.legs == []
    assert metrics.total_distance_m == 0.0


def test_optimizer_measure_uses_pacer():
    waits = []

    class ListPacer(RequestPacer):
        def wait(self) -> None:
            waits.append(True)

    metrics = RouteOptimizer().measure(_tour(), FakeScorer(), ListPacer(0.0))
    assert len(waits) == 3
    assert metrics.total_distance_m == pytest.approx(3000.0)
