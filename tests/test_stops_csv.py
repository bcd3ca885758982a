import pytest

from routeplanner.data.stops_csv import parse_lat_lon, parse_stops_csv
from routeplanner.models.domain import Coordinate


def test_named_rows_with_coordinates():
    stops = parse_stops_csv("Depot, 48.85, 2.35\nCafe, Paris, 48.86, 2.36\n")

    assert [stop.name for stop in stops] == ["Depot", "Cafe,Paris"]
    assert stops[0].coordinate == Coordinate(48.85, 2.35)
    assert stops[1].address is None


def test_bare_coordinate_rows_are_numbered():
    stops = parse_stops_csv("48.85,2.35\n\n   \n48.86,2.36", start_index=3)

    assert [stop.name for stop in stops] == ["Stop 4", "Stop 5"]
    assert stops[1].coordinate == Coordinate(48.86, 2.36)


def test_address_rows_need_resolution():
    stops = parse_stops_csv("Bakery, 12 Rue Oberkampf, Paris\nTown Hall\n")

    assert stops[0].name == "Bakery"
    assert stops[0].address == "12 Rue Oberkampf,Paris"
    assert stops[0].coordinate is None
    assert stops[1].name == "Town Hall"
    assert stops[1].address == "Town Hall"


def test_trailing_text_is_not_a_coordinate():
    stops = parse_stops_csv("Warehouse, 48.85, north gate")
    assert stops[0].coordinate is None
    assert stops[0].address == "48.85,north gate"


def test_out_of_range_coordinate_names_the_line():
    with pytest.raises(ValueError, match="Line 2"):
        parse_stops_csv("A, 1, 1\nB, 95, 1")


def test_lat_lon_text_is_read_as_a_coordinate():
    assert parse_lat_lon("48.85,2.35") == Coordinate(48.85, 2.35)
    assert parse_lat_lon("  -33.9 ,  151.2 ") == Coordinate(-33.9, 151.2)


@pytest.mark.parametrize("text", ["12 Rue Oberkampf, Paris", "48.85", "48.85, 2.35, 10", "95, 2", "48.85, east", ""])
def test_other_text_is_left_for_the_geocoder(text):
    assert parse_lat_lon(text) is None
