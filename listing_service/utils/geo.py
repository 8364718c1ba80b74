"""
Geospatial helpers for distance-bounded property search.

Distances use the Haversine formula on a spherical Earth (radius 6371 km).
Searches narrow candidates with a latitude/longitude bounding box in SQL, which
any backend can answer from the coordinates index, then keep only the rows whose
great-circle distance is within the radius.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List, Tuple, Union, TYPE_CHECKING
import math

if TYPE_CHECKING:
    from listing_service.models.property import Property
    from listing_service.repositories.property import PropertyRepository

EARTH_RADIUS_KM = 6371.0

Number = Union[float, int, Decimal]


@dataclass(frozen=True)
class BoundingBox:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @property
    def crosses_antimeridian(self) -> bool:
        return self.min_longitude > self.max_longitude


def haversine_km(lat1: Number, lon1: Number, lat2: Number, lon2: Number) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1 = math.radians(float(lat1))
    phi2 = math.radians(float(lat2))
    d_phi = phi2 - phi1
    d_lambda = math.radians(float(lon2) - float(lon1))

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


def bounding_box(latitude: Number, longitude: Number, radius_km: float) -> BoundingBox:
    """
    Smallest latitude/longitude box containing every point within radius_km.

    Near the poles the box spans all longitudes. When it crosses the
    antimeridian, min_longitude is greater than max_longitude.
    """
    lat = float(latitude)
    lon = float(longitude)
    d_lat = math.degrees(radius_km / EARTH_RADIUS_KM)

    min_lat = lat - d_lat
    max_lat = lat + d_lat
    if min_lat <= -90 or max_lat >= 90:
        return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), -180.0, 180.0)

    d_lon = math.degrees(math.asin(math.sin(radius_km / EARTH_RADIUS_KM) / math.cos(math.radians(lat))))
    min_lon = lon - d_lon
    max_lon = lon + d_lon
    if min_lon < -180:
        min_lon += 360
    if max_lon > 180:
        max_lon -= 360

    return BoundingBox(min_lat, max_lat, min_lon, max_lon)


class GeoSearch:
    """
    Distance-bounded property search backed by a PropertyRepository.
    """

    def __init__(self, property_repo: "PropertyRepository"):
        self.property_repo = property_repo

    async def near_by(
        self,
        latitude: Number,
        longitude: Number,
        radius_km: float
    ) -> List["Property"]:
        """
        Properties within radius_km of the point, nearest first, images loaded.
        """
        box = bounding_box(latitude, longitude, radius_km)
        candidates = await self.property_repo.get_within_bounds(box)

        matches: List[Tuple[float, "Property"]] = []
        for property_obj in candidates:
            distance = haversine_km(latitude, longitude, property_obj.latitude, property_obj.longitude)
            if distance <= radius_km:
                matches.append((distance, property_obj))

        matches.sort(key=lambda item: item[0])
        return [property_obj for _, property_obj in matches]
