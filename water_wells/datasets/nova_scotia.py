"""
Nova Scotia Well Logs Database.

Categories are stored as numeric lookup codes. Locations are UTM zone 20
(NAD83 / band T) eastings and northings.
"""

from ..coordinates import UTMProjection
from ..options import CategoricalListOption, NumericRangeOption, TimeRangeOption
from ..retriever import Retriever
from .common import LAYOUT_24_HOUR, RESPONSE_CHUNKS

# FinalStatusOfWellL codes that mark a decommissioned well
ABANDONED_STATUS_CODES = (5, 6, 7, 9, 16, 27)

NOVA_SCOTIA = Retriever(
    slug="nova-scotia",
    title="Nova Scotia",
    database="nova-scotia",
    table="tblWellLogs",
    projection=UTMProjection(easting="Easting", northing="Northing", zone=20, north=True),
    response_chunks=RESPONSE_CHUNKS,
    options={
        "completed": TimeRangeOption(
            column="DateWellCompleted",
            layout=LAYOUT_24_HOUR,
        ),
        "abandoned": TimeRangeOption(
            column="DateWellCompleted",
            layout=LAYOUT_24_HOUR,
            required={"FinalStatusOfWellL": ABANDONED_STATUS_CODES},
        ),
        "status": CategoricalListOption(
            column="FinalStatusOfWellL",
            multiple=True,
            items={
                "supply": (1,),
                "research": (2, 3, 18),
                "geothermal": (4, 38, 39, 40),
                "abandoned": (5, 6, 7, 8, 9, 16, 27, 36),
                "other": (10, 19, 23, 28, 31, 35),
                "unknown": (13,),
            },
        ),
        "use": CategoricalListOption(
            column="WaterUseL",
            multiple=True,
            items={
                "domestic": (1, 29),
                "commercial": (3,),
                "industial": (2,),
                "municipal": (4,),
                "irrigation": (6,),
                "agriculture": (8, 26),
                "research": (17, 22),
                "other": (5, 7, 9, 10, 12, 13, 14, 19),
                "unknown": (0, 18, 28),
            },
        ),
        "colour": CategoricalListOption(
            column="wqColourL",
            multiple=True,
            items={
                "clear": (1, 2, 14),
                "cloudy": (4, 5, 15),
                "light": (3, 6, 8),
                "dark": (7, 12, 13, 16),
                "other": (10,),
                "unknown": (9, 11),
            },
        ),
        "taste": CategoricalListOption(
            column="wqTasteL",
            multiple=True,
            items={
                "fresh": (5, 7, 11, 12),
                "mineral": (2, 4, 6),
                "sulfur": (1,),
                "salt": (3,),
                "other": (9,),
                "unknown": (8, 10),
            },
        ),
        "odour": CategoricalListOption(
            column="wqOdourL",
            multiple=True,
            items={
                "fresh": (3,),
                "mineral": (4, 12, 13),
                "sulfur": (1, 2),
                "organic": (5, 6, 7, 11),
                "other": (9,),
                "unknown": (8, 10),
            },
        ),
        "rate": NumericRangeOption(column="wyRate"),
        "depth": NumericRangeOption(column="TotalOrFinishedDepth"),
        "bedrock": NumericRangeOption(column="DepthToBedrock"),
    },
)
