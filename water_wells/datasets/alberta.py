"""
Alberta Water Well Information Database.

Well locations live in ``Wells``. Drilling reports (dates, use, yields)
are in ``Well_Reports`` and lithology logs in ``Lithologies``, both with
several rows per well, so every join groups by well and keeps the
maximum coordinates.
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

WELL_REPORTS = JoinSpec(
    kind=JoinKind.INNER,
    left=JoinTable("Wells", "Well_ID"),
    right=JoinTable("Well_Reports", "Well_ID"),
    group_by='"Wells"."Well_ID"',
    order_by='MAX("Latitude")',
    select='MAX("Latitude") AS "Latitude", MAX("Longitude") AS "Longitude"',
)

LITHOLOGIES = JoinSpec(
    kind=JoinKind.INNER,
    left=JoinTable("Wells", "GIC_Well_ID"),
    right=JoinTable("Lithologies", "GIC_Well_ID"),
    group_by='"Wells"."GIC_Well_ID"',
    order_by='MAX("Latitude")',
    select='MAX("Latitude") AS "Latitude", MAX("Longitude") AS "Longitude"',
)

ALBERTA = Retriever(
    slug="alberta",
    title="Alberta",
    database="alberta",
    table="Wells",
    projection=LatLngProjection(latitude="Latitude", longitude="Longitude"),
    response_chunks=RESPONSE_CHUNKS,
    options={
        "completed": TimeRangeOption(
            column="Well_Reports.Drilling_End_Date",
            layout=LAYOUT_12_HOUR,
            joins=(WELL_REPORTS,),
        ),
        "abandoned": TimeRangeOption(
            column="Well_Reports.Plug_Date",
            layout=LAYOUT_12_HOUR,
            joins=(WELL_REPORTS,),
        ),
        "status": CategoricalListOption(
            column="Well_Reports.Type_of_Work",
            multiple=True,
            joins=(WELL_REPORTS,),
            items={
                "supply": ("New Well", "Deepened", "Reconditioned", "Spring"),
                "research": (
                    "Test Hole", "Coal Test Hole", "Core Hole", "Federal Well Survey", "Chemistry",
                    "Structure Test Hole", "Well Inventory", "Drill Stem Test Hole", "Piezometer",
                    "Seismic Shot Hole",
                ),
                "geothermal": (),
                "abandoned": (
                    "Dry Hole", "Old Well-Yeild", "Dry Hole-Decommissioned", "New Well-Decommissioned",
                    "Test Hole-Decommissioned", "Existing Well-Decommissioned",
                ),
                "other": ("Other", "Flowing Shot Hole", "Oil Exploratory", "Cathodic Protection"),
                "unknown": ("Unknown",),
            },
        ),
        "use": CategoricalListOption(
            column="Well_Reports.Well_Use",
            multiple=True,
            joins=(WELL_REPORTS,),
            items={
                "domestic": ("NULL", "Domestic", "New Well", "Standby", "Water Hauling"),
                "commercial": ("Industial", "Dewatering", "Geothermal", "Heat Transfer"),
                "industial": ("Industial", "Domestic & Industrial", "Industrial Camp", "Injection"),
                "municipal": ("Municipal", "Co-ops (Colonies)", "Municipal & Industrial", "Rural Subdivision"),
                "irrigation": ("Irrigation", "Domestic & Irrigation", "Golf Courses"),
                "agriculture": ("Stock", "Domestic & Stock", "Industrial & Stock", "Intensive Livestock Operation"),
                "research": (
                    "Observation", "Contamination Invest.", "Hydrostatic Testing", "Investigation", "Monitoring",
                ),
                "other": (
                    "Other", "Dry Hole - Abandoned", "Old Well - Abandoned", "Test Hole - Abandoned",
                    "Test Hole-Abandoned",
                ),
                "unknown": ("Unknown",),
            },
        ),
        "colour": CategoricalListOption(
            column="Lithologies.Colour",
            multiple=True,
            joins=(LITHOLOGIES,),
            items={
                "clear": ("NULL", "Gray", "White"),
                "cloudy": ("Yellow", "Brown", "Green", "Blue", "Tan", "Red", "Gray Salt & Pepper", "Salt & Pepper"),
                "light": (
                    "Light", "Light Gray", "Light Red", "Greenish Gray", "Light Yellow", "Light Green",
                    "Light Blue", "Light Brown", "Blue Gray", "Greenish Yellow", "Greenish Gray",
                ),
                "dark": (
                    "Dark", "Black", "Dark Gray", "Dark Brown", "Dark Red", "Dark Blue", "Dark Green",
                    "Dark Yellow", "Bluish Green", "Brownish Gray", "Brownish Green", "Brownish Yellow",
                ),
                "other": ("See Comments",),
                "unknown": ("Unreadable", "Unknown"),
            },
        ),
        "taste": FilterOption(),
        "odour": FilterOption(),
        "rate": NumericRangeOption(
            column="Well_Reports.Recommended_Rate",
            joins=(WELL_REPORTS,),
        ),
        "depth": NumericRangeOption(
            column="Well_Reports.Total_Depth_Drilled",
            joins=(WELL_REPORTS,),
        ),
        "bedrock": FilterOption(),
    },
)
