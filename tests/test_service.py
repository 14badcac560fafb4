"""Wells service layer."""

import pytest

from water_wells.exceptions import DatasetNotFoundError
from water_wells.models import WellsQueryParameters
from water_wells.service import WellsService


@pytest.fixture
def service(wells_config, fake_store):
    factory_calls = []

    def factory(database):
        factory_calls.append(database)
        return fake_store

    svc = WellsService(config=wells_config, store_factory=factory)
    svc.factory_calls = factory_calls
    return svc


def test_query_builds_envelope(service, fake_store):
    fake_store.count.return_value = 2
    fake_store.fetch.return_value = [
        {"latitude": 50.1, "longitude": -105.2},
        {"latitude": 51.0, "longitude": -106.0},
    ]
    params = WellsQueryParameters.from_query_params({"rate": "10:"})

    response = service.query_wells("saskatchewan", params)

    assert response.total == 2
    assert (response.chunk, response.page, response.page_count) == (2, 1, 1)
    assert response.data == [[50.1, -105.2], [51.0, -106.0]]
    assert '"recommended_pumping_rate" >= %s' in response.statement


def test_dataset_lookup_is_case_insensitive(service, fake_store):
    service.query_wells("Saskatchewan", WellsQueryParameters())
    fake_store.count.assert_called_once()


def test_store_is_reused_per_database(service):
    service.query_wells("alberta", WellsQueryParameters())
    service.query_wells("alberta", WellsQueryParameters(page=2))
    service.query_wells("ontario", WellsQueryParameters())
    assert service.factory_calls == ["alberta", "ontario"]


def test_unknown_dataset(service):
    with pytest.raises(DatasetNotFoundError):
        service.query_wells("yukon", WellsQueryParameters())


def test_list_datasets(service):
    listing = service.list_datasets()
    ids = [d.id for d in listing.datasets]
    assert ids == ["alberta", "british-columbia", "nova-scotia", "ontario", "saskatchewan"]
    saskatchewan = listing.datasets[-1]
    assert "bedrock" not in saskatchewan.filters
    assert saskatchewan.filters["status"]["type"] == "list"
