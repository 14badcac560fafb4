"""Request decoding and the response envelope."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from water_wells.exceptions import RequestDecodeError
from water_wells.models import WellsQueryParameters, WellsResponse
from water_wells.options import CategoricalListOption, NumericRangeOption, TimeRangeOption


def test_defaults():
    params = WellsQueryParameters.from_query_params({})
    assert (params.page, params.total, params.chunk) == (1, 0, 0)
    assert params.to_overrides() == {}


def test_dotted_time_bounds():
    params = WellsQueryParameters.from_query_params({
        "completed.start": "2019-01-01",
        "completed.end": "2020-06-30T12:00:00",
    })
    assert params.completed.start == datetime(2019, 1, 1)
    assert params.completed.end == datetime(2020, 6, 30, 12)


def test_time_interval_with_open_end():
    params = WellsQueryParameters.from_query_params({"abandoned": "2001-03-04/.."})
    assert params.abandoned.start == datetime(2001, 3, 4)
    assert params.abandoned.end is None


def test_number_range():
    params = WellsQueryParameters.from_query_params({"rate": "50:500", "depth.end": "90"})
    assert (params.rate.start, params.rate.end) == (50, 500)
    assert (params.depth.start, params.depth.end) == (None, 90)


def test_number_start_only():
    params = WellsQueryParameters.from_query_params({"bedrock": "12"})
    assert (params.bedrock.start, params.bedrock.end) == (12, None)


def test_categories_split_on_commas():
    params = WellsQueryParameters.from_query_params({"status": "supply, abandoned,", "page": "3", "total": "900"})
    assert params.status == ["supply", "abandoned"]
    assert (params.page, params.total) == (3, 900)


def test_overrides():
    params = WellsQueryParameters.from_query_params({
        "completed": "2019-01-01/2019-12-31",
        "rate": "5:",
        "use": "domestic",
    })
    overrides = params.to_overrides()
    assert isinstance(overrides["completed"], TimeRangeOption)
    assert overrides["rate"] == NumericRangeOption(start=5, end=None)
    assert overrides["use"] == CategoricalListOption(selected=("domestic",))


@pytest.mark.parametrize("query", [
    {"rate": "lots"},
    {"rate": "1:2:3"},
    {"depth.start": "x"},
    {"page": "two"},
    {"completed": "a/b/c"},
])
def test_decode_errors(query):
    with pytest.raises(RequestDecodeError):
        WellsQueryParameters.from_query_params(query)


@pytest.mark.parametrize("query", [
    {"page": "-1"},
    {"total": "-1"},
    {"completed.start": "yesterday"},
])
def test_validation_errors(query):
    with pytest.raises(ValidationError):
        WellsQueryParameters.from_query_params(query)


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        WellsQueryParameters(colour=["clear"], flavour=["sweet"])


def test_response_uses_page_count_alias():
    response = WellsResponse(statement="SELECT 1", total=2, chunk=2, page=1, page_count=1, data=[[1.0, 2.0]])
    dumped = response.model_dump(mode="json", by_alias=True)
    assert dumped == {
        "statement": "SELECT 1",
        "total": 2,
        "chunk": 2,
        "page": 1,
        "pageCount": 1,
        "data": [[1.0, 2.0]],
    }


def test_page_zero_means_first_page():
    assert WellsQueryParameters.from_query_params({"page": "0"}).page == 1
