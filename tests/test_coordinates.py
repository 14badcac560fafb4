"""Row to [lat, lng] projections."""

import pytest

from water_wells.coordinates import LatLngProjection, UTMProjection, utm_crs


def test_latlng_passthrough_rounds_and_skips_missing():
    project = LatLngProjection(latitude="Latitude", longitude="Longitude")
    rows = [
        {"Latitude": 53.123456789, "Longitude": -113.5},
        {"Latitude": None, "Longitude": -113.5},
        {"Latitude": "52.0", "Longitude": "-110.25"},
    ]
    assert project(rows) == [[53.123457, -113.5], [52.0, -110.25]]


def test_latlng_columns():
    assert LatLngProjection("lat", "lng").columns == ("lat", "lng")


def test_utm_central_meridian():
    project = UTMProjection(easting="e", northing="n", zone=17)
    [[lat, lng]] = project([{"e": 500000, "n": 5000000}])
    assert lng == pytest.approx(-81.0, abs=1e-6)
    assert 45.0 < lat < 45.3


def test_utm_fixed_zone_nova_scotia():
    project = UTMProjection(easting="Easting", northing="Northing", zone=20)
    [[lat, lng]] = project([{"Easting": 500000, "Northing": 4950000}])
    assert lng == pytest.approx(-63.0, abs=1e-6)
    assert 44.5 < lat < 44.8


def test_utm_per_row_zone_keeps_row_order():
    project = UTMProjection(easting="easting", northing="northing", zone_column="ZONE", band_column="code")
    rows = [
        {"easting": 500000, "northing": 5000000, "ZONE": 17, "code": "T"},
        {"easting": 500000, "northing": 5000000, "ZONE": 18, "code": "T"},
        {"easting": None, "northing": 5000000, "ZONE": 17, "code": "T"},
        {"easting": 500000, "northing": 5000000, "ZONE": 17, "code": "T"},
    ]
    points = project(rows)
    assert [round(lng) for _, lng in points] == [-81, -75, -81]


def test_utm_southern_band():
    project = UTMProjection(easting="e", northing="n", zone_column="z", band_column="b")
    [[lat, _]] = project([{"e": 500000, "n": 9000000, "z": 17, "b": "M"}])
    assert lat < 0


def test_utm_columns():
    project = UTMProjection(easting="e", northing="n", zone_column="z", band_column="b")
    assert project.columns == ("e", "n", "z", "b")


@pytest.mark.parametrize("zone", [0, 61])
def test_invalid_zone(zone):
    with pytest.raises(ValueError):
        utm_crs(zone)


def test_utm_crs_epsg():
    assert utm_crs(17).to_epsg() == 32617
    assert utm_crs(17, north=False).to_epsg() == 32717
