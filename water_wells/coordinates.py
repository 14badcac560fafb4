# ============================================================================
# MODULE CONTEXT - COORDINATE PROJECTIONS
# ============================================================================
# STATUS: Core - Row to [lat, lng] conversion
# PURPOSE: Per-dataset projections from fetched rows to WGS84 coordinate pairs
# EXPORTS: Projection, LatLngProjection, UTMProjection, utm_crs
# DEPENDENCIES: rasterio (rasterio.warp.transform)
# ============================================================================

"""
Coordinate projections.

Most provinces publish decimal degrees and the rows pass straight
through. Nova Scotia and Ontario publish UTM eastings and northings.
Nova Scotia is entirely in zone 20, while Ontario records the zone and
latitude band on every row. UTM rows are reprojected with
``rasterio.warp.transform``, one call per zone.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from rasterio.crs import CRS
from rasterio.warp import transform

logger = logging.getLogger(__name__)

WGS84 = CRS.from_epsg(4326)
COORDINATE_PRECISION = 6

Row = Mapping[str, Any]


def utm_crs(zone: int, north: bool = True) -> CRS:
    """WGS84 / UTM CRS for a zone (EPSG:326xx north, EPSG:327xx south)."""
    if not 1 <= int(zone) <= 60:
        raise ValueError(f"UTM zone must be between 1 and 60, got {zone}")
    return CRS.from_epsg((32600 if north else 32700) + int(zone))


def _is_northern(band: Optional[str]) -> bool:
    # Latitude bands N..X are north of the equator
    if not band:
        return True
    return band.strip()[:1].upper() >= "N"


class Projection:
    """Callable turning fetched rows into ``[[lat, lng], ...]``."""

    columns: Tuple[str, ...] = ()

    def __call__(self, rows: Sequence[Row]) -> List[List[float]]:
        raise NotImplementedError


@dataclass(frozen=True)
class LatLngProjection(Projection):
    """Rows already carry decimal degrees."""
    latitude: str = "latitude"
    longitude: str = "longitude"

    @property
    def columns(self) -> Tuple[str, ...]:
        return (self.latitude, self.longitude)

    def __call__(self, rows: Sequence[Row]) -> List[List[float]]:
        points = []
        for row in rows:
            lat, lng = row.get(self.latitude), row.get(self.longitude)
            if lat is None or lng is None:
                continue
            points.append([round(float(lat), COORDINATE_PRECISION), round(float(lng), COORDINATE_PRECISION)])
        return points


@dataclass(frozen=True)
class UTMProjection(Projection):
    """
    Rows carry UTM easting/northing.

    Either ``zone`` is fixed for the dataset, or ``zone_column`` (and
    optionally ``band_column``) name where each row records its zone.
    """
    easting: str = "easting"
    northing: str = "northing"
    zone: Optional[int] = None
    north: bool = True
    zone_column: Optional[str] = None
    band_column: Optional[str] = None

    @property
    def columns(self) -> Tuple[str, ...]:
        extra = tuple(c for c in (self.zone_column, self.band_column) if c)
        return (self.easting, self.northing) + extra

    def _row_zone(self, row: Row) -> Optional[Tuple[int, bool]]:
        if self.zone_column is None:
            return (self.zone, self.north) if self.zone else None
        value = row.get(self.zone_column)
        if value in (None, ""):
            return None
        band = row.get(self.band_column) if self.band_column else None
        return int(value), _is_northern(band)

    def __call__(self, rows: Sequence[Row]) -> List[List[float]]:
        # zone -> [(row index, easting, northing)]
        grouped: Dict[Tuple[int, bool], List[Tuple[int, float, float]]] = OrderedDict()
        skipped = 0
        for index, row in enumerate(rows):
            zone = self._row_zone(row)
            x, y = row.get(self.easting), row.get(self.northing)
            if zone is None or x is None or y is None:
                skipped += 1
                continue
            grouped.setdefault(zone, []).append((index, float(x), float(y)))

        if skipped:
            logger.debug(f"Skipped {skipped} rows without UTM coordinates")

        projected: Dict[int, List[float]] = {}
        for (zone, north), points in grouped.items():
            xs = [p[1] for p in points]
            ys = [p[2] for p in points]
            lngs, lats = transform(utm_crs(zone, north), WGS84, xs, ys)
            for (index, _, _), lat, lng in zip(points, lats, lngs):
                projected[index] = [round(lat, COORDINATE_PRECISION), round(lng, COORDINATE_PRECISION)]

        return [projected[i] for i in sorted(projected)]
