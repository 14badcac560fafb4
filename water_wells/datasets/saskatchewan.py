"""Saskatchewan Water Security Agency well records."""

from ..coordinates import LatLngProjection
from ..options import (
    CategoricalListOption,
    FilterOption,
    NumericRangeOption,
    TimeRangeOption,
)
from ..retriever import Retriever
from .common import LAYOUT_DOTTED_DATE, RESPONSE_CHUNKS

SASKATCHEWAN = Retriever(
    slug="saskatchewan",
    title="Saskatchewan",
    database="saskatchewan",
    table="tblWells",
    projection=LatLngProjection(latitude="latitude", longitude="longitude"),
    response_chunks=RESPONSE_CHUNKS,
    options={
        "completed": TimeRangeOption(
            column="completed",
            layout=LAYOUT_DOTTED_DATE,
        ),
        "abandoned": TimeRangeOption(
            column="date_decommisioned",
            layout=LAYOUT_DOTTED_DATE,
        ),
        "status": CategoricalListOption(
            column="well_use",
            multiple=True,
            items={
                "supply": (None, "Withdrawal"),
                "research": (
                    "Observation", "Quality Monitoring", "Seismic Test Hole", "Soil Test Hole", "Water Test Hole",
                ),
                "geothermal": (),
                "abandoned": (),
                "other": ("Waste Disposal", "Recharge"),
                "unknown": (),
            },
        ),
        "use": CategoricalListOption(
            column="water_use",
            multiple=True,
            items={
                "domestic": (None, "Domestic"),
                "commercial": ("Multi-purpose",),
                "industial": ("Industrial", "Mineral Recovery", "Mineral Water"),
                "municipal": ("Municipal", "Recreation"),
                "irrigation": ("Irrigation", "Drainage"),
                "agriculture": (),
                "research": ("Research",),
                "other": ("Other",),
                "unknown": (),
            },
        ),
        "colour": FilterOption(),
        "taste": FilterOption(),
        "odour": FilterOption(),
        "rate": NumericRangeOption(column="recommended_pumping_rate"),
        "depth": NumericRangeOption(column="TotalOrFinishedDepth"),
        "bedrock": FilterOption(),
    },
)
