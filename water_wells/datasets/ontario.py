"""
Ontario Water Well Information System.

UTM coordinates are in ``gryVBUTM``, joined on every query. Each row
carries its own zone and latitude band.
"""

from ..coordinates import UTMProjection
from ..joins import JoinKind, JoinSpec, JoinTable
from ..options import (
    CategoricalListOption,
    FilterOption,
    NumericRangeOption,
    TimeRangeOption,
)
from ..retriever import Retriever
from .common import LAYOUT_12_HOUR, RESPONSE_CHUNKS

UTM_SELECT = '"northing", "easting", "ZONE", "code"'


def _lookup(table: str) -> JoinSpec:
    return JoinSpec(
        kind=JoinKind.INNER,
        left=JoinTable("qryWaterWellRecord", "WELL_ID"),
        right=JoinTable(table, "Well_ID"),
        group_by='"qryWaterWellRecord"."Well_ID"',
        order_by='"northing"',
        select=UTM_SELECT,
    )


UTM_COORDINATES = JoinSpec(
    kind=JoinKind.INNER,
    left=JoinTable("qryWaterWellRecord", "WELL_ID"),
    right=JoinTable("gryVBUTM", "Well_ID"),
    order_by='"northing"',
    select=UTM_SELECT,
)

ONTARIO = Retriever(
    slug="ontario",
    title="Ontario",
    database="ontario",
    table="qryWaterWellRecord",
    joins=(UTM_COORDINATES,),
    projection=UTMProjection(
        easting="easting",
        northing="northing",
        zone_column="ZONE",
        band_column="code",
    ),
    response_chunks=RESPONSE_CHUNKS,
    options={
        "completed": TimeRangeOption(
            column="Received",
            layout=LAYOUT_12_HOUR,
        ),
        "abandoned": TimeRangeOption(
            column="Received",
            layout=LAYOUT_12_HOUR,
            joins=(_lookup("qryAbandoned"),),
        ),
        "status": CategoricalListOption(
            column="Final_Status",
            multiple=True,
            items={
                "supply": ("NULL", "Water Supply"),
                "research": ("Test Hole", "Monitoring and Test Hole", "Observation Wells"),
                "geothermal": (),
                "abandoned": (
                    "Abandoned Monitoring and Test Hole", "Abandoned-Other", "Abandoned-Quality", "Abandoned-Supply",
                ),
                "other": (
                    "Alteration", "Dewatering", "Not A Well", "Other Status", "Recharge Well", "Replacement Well",
                ),
                "unknown": ("Unfinished",),
            },
        ),
        "use": CategoricalListOption(
            column="Use1",
            multiple=True,
            items={
                "domestic": ("NULL", "Domestic"),
                "commercial": ("Commerical", "Cooling And A/C", "Dewatering"),
                "industial": ("Industrial",),
                "municipal": ("Municipal", "Public"),
                "irrigation": ("Irrigation",),
                "agriculture": ("Livestock",),
                "research": ("Monitoring", "Monitoring and Test Hole", "Test Hole"),
                "other": ("Other", "Not Used"),
                "unknown": (),
            },
        ),
        "colour": FilterOption(),
        "taste": FilterOption(),
        "odour": FilterOption(),
        "rate": NumericRangeOption(
            column="tblPump_Test.Recom_rate",
            joins=(_lookup("tblPump_Test"),),
        ),
        "depth": NumericRangeOption(
            column="qryWellDepth.Well_Depth_m",
            joins=(_lookup("qryWellDepth"),),
        ),
        "bedrock": FilterOption(),
    },
)
