"""HTTP triggers for the wells API."""

import json
from unittest.mock import MagicMock

import pytest

from water_wells.exceptions import DatasetNotFoundError, RetrieverError
from water_wells.service import WellsService
from water_wells.triggers import WellsDatasetsTrigger, WellsQueryTrigger, get_wells_triggers


@pytest.fixture
def service(wells_config, fake_store):
    return WellsService(config=wells_config, store_factory=lambda database: fake_store)


def body(response):
    return json.loads(response.get_body())


def test_trigger_routes():
    routes = [(t['route'], t['methods']) for t in get_wells_triggers()]
    assert routes == [('wells', ['GET']), ('wells/{dataset}', ['GET'])]


def test_query_returns_envelope(service, fake_store, make_request):
    fake_store.count.return_value = 1
    fake_store.fetch.return_value = [{"latitude": 50.0, "longitude": -105.0}]
    req = make_request("/api/wells/saskatchewan", {"status": "supply"}, {"dataset": "saskatchewan"})

    response = WellsQueryTrigger(service).handle(req)

    assert response.status_code == 200
    assert response.mimetype == "application/json"
    payload = body(response)
    assert set(payload) == {"statement", "total", "chunk", "page", "pageCount", "data"}
    assert payload["data"] == [[50.0, -105.0]]
    assert payload["pageCount"] == 1


def test_unknown_dataset_is_404(service, make_request):
    req = make_request("/api/wells/yukon", route_params={"dataset": "yukon"})
    response = WellsQueryTrigger(service).handle(req)
    assert response.status_code == 404
    assert body(response)["code"] == "NotFound"


@pytest.mark.parametrize("params", [
    {"rate": "lots"},
    {"page": "-1"},
    {"completed.start": "not-a-date"},
])
def test_bad_request(service, make_request, params):
    req = make_request("/api/wells/alberta", params, {"dataset": "alberta"})
    response = WellsQueryTrigger(service).handle(req)
    assert response.status_code == 400
    assert body(response)["code"] == "BadRequest"


def test_store_failure_is_500(make_request):
    failing = MagicMock()
    failing.query_wells.side_effect = RetrieverError("connection refused")
    req = make_request("/api/wells/alberta", route_params={"dataset": "alberta"})

    response = WellsQueryTrigger(failing).handle(req)

    assert response.status_code == 500
    assert body(response) == {"code": "InternalServerError", "description": "connection refused"}


def test_list_datasets(service, make_request):
    response = WellsDatasetsTrigger(service).handle(make_request("/api/wells"))
    assert response.status_code == 200
    assert len(body(response)["datasets"]) == 5


def test_not_found_message(make_request):
    failing = MagicMock()
    failing.query_wells.side_effect = DatasetNotFoundError("mars")
    response = WellsQueryTrigger(failing).handle(make_request("/api/wells/mars", route_params={"dataset": "mars"}))
    assert body(response)["description"] == "Dataset 'mars' not found"
