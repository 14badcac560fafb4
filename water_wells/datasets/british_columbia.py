"""
British Columbia groundwater wells (GWELLS).

Everything except lithology lives on the ``well`` table. Abandoned wells
are the construction end date filtered to ABANDONED status.
"""

from ..coordinates import LatLngProjection
from ..joins import JoinKind, JoinSpec, JoinTable
from ..options import (
    CategoricalListOption,
    FilterOption,
    NumericRangeOption,
    TimeRangeOption,
)
from ..retriever import Retriever
from .common import LAYOUT_12_HOUR, RESPONSE_CHUNKS

LITHOLOGY = JoinSpec(
    kind=JoinKind.INNER,
    left=JoinTable("well", "well_tag_number"),
    right=JoinTable("lithology", "well_tag_number"),
    group_by='"well"."well_tag_number"',
    order_by='MAX("latitude_Decdeg")',
    select='MAX("latitude_Decdeg") AS "latitude_Decdeg", MAX("longitude_Decdeg") AS "longitude_Decdeg"',
)

BRITISH_COLUMBIA = Retriever(
    slug="british-columbia",
    title="British Columbia",
    database="british-columbia",
    table="well",
    projection=LatLngProjection(latitude="latitude_Decdeg", longitude="longitude_Decdeg"),
    response_chunks=RESPONSE_CHUNKS,
    options={
        "completed": TimeRangeOption(
            column="construction_end_date",
            layout=LAYOUT_12_HOUR,
        ),
        "abandoned": TimeRangeOption(
            column="construction_end_date",
            layout=LAYOUT_12_HOUR,
            required={"well_status_code": "ABANDONED"},
        ),
        "status": CategoricalListOption(
            column="well_status_code",
            multiple=True,
            items={
                "supply": ("NEW",),
                "research": (),
                "geothermal": (),
                "abandoned": ("ABANDONED", "CLOSURE"),
                "other": ("ALTERATION", "OTHER"),
                "unknown": ("",),
            },
        ),
        "use": CategoricalListOption(
            column="intended_water_use_code",
            multiple=True,
            items={
                "domestic": ("DOM",),
                "commercial": ("COM", "DWS"),
                "industial": (),
                "municipal": (),
                "irrigation": ("IRR",),
                "agriculture": (),
                "research": ("TST", "OBS", "OP_LP_GEO"),
                "other": ("OTHER", "NA"),
                "unknown": ("UNK",),
            },
        ),
        "colour": CategoricalListOption(
            column="lithology.lithology_colour_code",
            multiple=True,
            joins=(LITHOLOGY,),
            items={
                "clear": ("NULL", "grey", "white"),
                "cloudy": ("salt & pepper", "speckled", "tan"),
                "light": ("light", "vari-coloured", "yellow"),
                "dark": ("black", "blue", "brown", "dark", "green", "purple", "red", "rust-coloured"),
                "other": (),
                "unknown": ("0 nothing entered",),
            },
        ),
        "taste": FilterOption(),
        "odour": FilterOption(),
        "rate": NumericRangeOption(column="well_yield_usgpm"),
        "depth": NumericRangeOption(column="finished_well_depth_ft-bgl"),
        "bedrock": NumericRangeOption(column="bedrock_depth_ft-bgl"),
    },
)
