"""Climate station inventory, search service and triggers."""

import json

import pytest
from pydantic import ValidationError

from climate_stations.config import ClimateConfig
from climate_stations.exceptions import SearchParameterError, StationNotFoundError
from climate_stations.inventory import StationInventory, haversine_km, sort_matches
from climate_stations.models import Interval, SortBy, StationMetadata, StationSearchParameters
from climate_stations.service import ClimateStationService
from climate_stations.triggers import StationSearchTrigger, StationTrigger


def station(station_id, name, lat, lng, hourly=(0, 0), daily=(1990, 2020), monthly=(1990, 2006)):
    return {
        "Name": name,
        "Province": "ONTARIO",
        "Climate ID": 6105976,
        "Station ID": station_id,
        "WMO ID": "",
        "TC ID": "",
        "Latitude (Decimal Degrees)": lat,
        "Longitude (Decimal Degrees)": lng,
        "Latitude": int(lat * 1e7),
        "Longitude": int(lng * 1e7),
        "Elevation (m)": 79.2,
        "First Year": 1990,
        "Last Year": 2020,
        "HLY First Year": hourly[0] or None,
        "HLY Last Year": hourly[1] or None,
        "DLY First Year": daily[0],
        "DLY Last Year": daily[1],
        "MLY First Year": monthly[0],
        "MLY Last Year": monthly[1],
    }


RAW = [
    station(4333, "OTTAWA CDA", 45.38, -75.72, hourly=(1953, 2012)),
    station(49568, "OTTAWA CDA RCS", 45.38, -75.71),
    station(5097, "TORONTO", 43.67, -79.40, hourly=(1953, 2013), daily=(1840, 2017)),
    station(889, "KINGSTON A", 44.23, -76.60),
    station(31688, "TORONTO CITY CENTRE", 43.63, -79.40, hourly=(2009, 2025)),
]


@pytest.fixture
def inventory():
    return StationInventory([StationMetadata.model_validate(raw) for raw in RAW])


@pytest.fixture
def service(inventory):
    return ClimateStationService(config=ClimateConfig(default_max=3), inventory_loader=lambda: inventory)


def test_haversine():
    assert haversine_km(45.0, -75.0, 45.0, -75.0) == 0
    # Ottawa to Toronto is roughly 350 km
    assert 340 < haversine_km(45.42, -75.70, 43.65, -79.38) < 360


def test_inventory_record_parsing():
    record = StationMetadata.model_validate(RAW[0])
    assert record.climate_id == "6105976"
    assert record.hourly_first_year == 1953
    blank = StationMetadata.model_validate(RAW[1])
    assert blank.timeframe(Interval.HOURLY) == (0, 0)
    assert not blank.reports(Interval.HOURLY)
    assert blank.reports(Interval.DAILY)


def test_serialized_keys(inventory):
    dumped = inventory.station(5097).model_dump(by_alias=True)
    assert dumped["stationID"] == 5097
    assert dumped["hourlyFirstYear"] == 1953
    assert "climate_id" not in dumped and "climateID" not in dumped


def test_find_nearest_sorted_by_distance(inventory):
    matches = inventory.find(43.64, -79.40, 2)
    assert [m.station.station_id for m in matches] == [31688, 5097]
    assert matches[0].distance < matches[1].distance


def test_find_with_interval(inventory):
    matches = inventory.find(45.4, -75.7, 2, Interval.HOURLY)
    assert [m.station.station_id for m in matches] == [4333, 5097]


def test_name_search(inventory):
    assert [m.station.station_id for m in inventory.name_contains("toronto", 10)] == [5097, 31688]
    assert [m.station.station_id for m in inventory.name_starts_with("ottawa", 1)] == [4333]
    assert inventory.name_contains("cda", 10, Interval.HOURLY)[0].station.station_id == 4333


def test_sort_by_record_length(inventory):
    matches = inventory.name_contains("toronto", 10)
    ordered = sort_matches(matches, SortBy.HOURLY)
    assert [m.station.station_id for m in ordered] == [31688, 5097]


def test_inventory_from_file(tmp_path):
    path = tmp_path / "station-inventory.json"
    path.write_text(json.dumps(RAW))
    assert len(StationInventory.from_file(path)) == len(RAW)


class TestSearchParameters:

    def test_point_search(self):
        params = StationSearchParameters.from_query_params({"lat": "45.4", "lng": "-75.7", "max": "5"})
        assert params.is_proximity
        assert params.max == 5

    def test_interval_by_name_or_number(self):
        assert StationSearchParameters(name="x", interval="daily").interval is Interval.DAILY
        assert StationSearchParameters(name="x", interval="3").interval is Interval.MONTHLY

    def test_prefix_flag(self):
        assert StationSearchParameters.from_query_params({"name": "ott", "prefix": "true"}).prefix

    @pytest.mark.parametrize("query", [
        {},
        {"lat": "45.0"},
        {"lat": "north", "lng": "-75"},
        {"lat": "95", "lng": "-75"},
        {"name": "x", "interval": "weekly"},
        {"name": "x", "sort": "elevation"},
        {"name": "x", "sort": "distance"},
        {"name": "x", "max": "0"},
    ])
    def test_rejected(self, query):
        with pytest.raises(ValidationError):
            StationSearchParameters.from_query_params(query)

    def test_interval_parse_error(self):
        with pytest.raises(SearchParameterError):
            Interval.parse("fortnightly")


class TestService:

    def test_default_max(self, service):
        result = service.search(StationSearchParameters(lat=45.4, lng=-75.7))
        assert result.number_returned == 3
        distances = [m.distance for m in result.stations]
        assert distances == sorted(distances)

    def test_sort_by_name(self, service):
        result = service.search(StationSearchParameters(lat=45.4, lng=-75.7, max=5, sort="name"))
        names = [m.station.name for m in result.stations]
        assert names == sorted(names)

    def test_no_matches(self, service):
        with pytest.raises(StationNotFoundError):
            service.search(StationSearchParameters(name="whitehorse"))

    def test_get_station(self, service):
        assert service.get_station(889).station.name == "KINGSTON A"
        with pytest.raises(StationNotFoundError):
            service.get_station(1)


class TestTriggers:

    def test_search(self, service, make_request):
        req = make_request("/api/climate/stations", {"lat": "43.64", "lng": "-79.40", "max": "1"})
        response = StationSearchTrigger(service).handle(req)
        payload = json.loads(response.get_body())
        assert response.status_code == 200
        assert payload["numberReturned"] == 1
        assert payload["stations"][0]["stationID"] == 31688
        assert "distance" in payload["stations"][0]

    def test_bad_search(self, service, make_request):
        response = StationSearchTrigger(service).handle(make_request("/api/climate/stations", {"lat": "1"}))
        assert response.status_code == 400

    def test_search_without_results(self, service, make_request):
        req = make_request("/api/climate/stations", {"name": "iqaluit"})
        assert StationSearchTrigger(service).handle(req).status_code == 404

    def test_station(self, service, make_request):
        req = make_request("/api/climate/stations/4333", route_params={"station_id": "4333"})
        payload = json.loads(StationTrigger(service).handle(req).get_body())
        assert payload["name"] == "OTTAWA CDA"
        assert "distance" not in payload

    @pytest.mark.parametrize("station_id,status", [("abc", 400), ("7", 404)])
    def test_station_errors(self, service, make_request, station_id, status):
        req = make_request(f"/api/climate/stations/{station_id}", route_params={"station_id": station_id})
        assert StationTrigger(service).handle(req).status_code == status


def test_station_errors_are_independent_of_wells_errors():
    from water_wells.exceptions import WaterWellsError

    assert not issubclass(StationNotFoundError, WaterWellsError)
    assert not issubclass(SearchParameterError, WaterWellsError)
    assert issubclass(StationNotFoundError, LookupError)
