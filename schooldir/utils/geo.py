# schooldir/utils/geo.py
from __future__ import annotations

import math
from dataclasses import dataclass

from geoalchemy2 import Geography
from sqlalchemy import cast, func

from schooldir.errors import InvalidInputError

# WGS84
SRID = 4326

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


def _coerce(field: str, value, bounds: tuple[float, float], location: str) -> float:
    # bool — подкласс int, но координатой не является
    if isinstance(value, bool):
        raise InvalidInputError(field, f"Invalid {field}", value, location)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(field, f"Invalid {field}", value, location) from None
    if not math.isfinite(number):
        raise InvalidInputError(field, f"Invalid {field}", value, location)
    low, high = bounds
    if not low <= number <= high:
        raise InvalidInputError(field, f"Invalid {field}", value, location)
    return number


@dataclass(frozen=True)
class GeoPoint:
    """Точка WGS84 в десятичных градусах."""

    latitude: float
    longitude: float

    @classmethod
    def parse(cls, latitude, longitude, location: str = "body") -> "GeoPoint":
        return cls(
            latitude=_coerce("latitude", latitude, LAT_RANGE, location),
            longitude=_coerce("longitude", longitude, LON_RANGE, location),
        )

    def as_geography(self):
        """
        ST_SetSRID(ST_MakePoint(lon, lat), 4326)::geography
        ST_MakePoint принимает сначала долготу, потом широту.
        """
        point = func.ST_SetSRID(func.ST_MakePoint(self.longitude, self.latitude), SRID)
        return cast(point, Geography(geometry_type="POINT", srid=SRID))
