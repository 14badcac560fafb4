"""Provincial dataset definitions."""

import pytest

from tests.conftest import render
from water_wells.datasets import DATASETS, get_dataset
from water_wells.exceptions import DatasetNotFoundError
from water_wells.options import FILTER_NAMES, CategoricalListOption, NumericRangeOption, TimeRangeOption
from datetime import datetime


@pytest.mark.parametrize("slug", sorted(DATASETS))
def test_every_filter_name_is_declared(slug):
    assert tuple(DATASETS[slug].options) == FILTER_NAMES


@pytest.mark.parametrize("slug", sorted(DATASETS))
def test_every_dataset_builds_with_all_filters(slug):
    retriever = DATASETS[slug]
    overrides = {
        "completed": TimeRangeOption(start=datetime(1990, 1, 1)),
        "abandoned": TimeRangeOption(end=datetime(2000, 1, 1)),
        "rate": NumericRangeOption(start=1),
        "depth": NumericRangeOption(start=1, end=100),
        "bedrock": NumericRangeOption(end=50),
    }
    for name in ("status", "use", "colour", "taste", "odour"):
        option = retriever.options[name]
        if isinstance(option, CategoricalListOption):
            overrides[name] = CategoricalListOption(selected=(next(iter(option.items)),))

    built = retriever.build_query(overrides)
    text = render(built.query)
    assert text.startswith("SELECT ")
    assert text.count("%s") == len(built.params)


def test_british_columbia_abandoned_is_constrained():
    built = get_dataset("british-columbia").build_query({"abandoned": TimeRangeOption(start=datetime(2001, 1, 1))})
    assert '"well_status_code" = %s' in render(built.query)
    assert "ABANDONED" in built.params


def test_nova_scotia_abandoned_status_codes():
    built = get_dataset("nova-scotia").build_query({"abandoned": TimeRangeOption(start=datetime(2001, 1, 1))})
    assert '"FinalStatusOfWellL" IN (' in render(built.query)


def test_ontario_always_joins_utm_table():
    text = render(get_dataset("ontario").build_query().query)
    assert 'INNER JOIN "gryVBUTM"' in text
    assert text.startswith('SELECT "northing", "easting", "ZONE", "code" FROM "qryWaterWellRecord"')


def test_unknown_dataset():
    with pytest.raises(DatasetNotFoundError):
        get_dataset("nunavut")
