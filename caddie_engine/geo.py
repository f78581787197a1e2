"""Spherical geodesic helpers working in yards."""

from __future__ import annotations

from math import asin, atan2, cos, degrees, radians, sin, sqrt

from .models import Coordinate

EARTH_RADIUS_M = 6_371_000.0
YARDS_PER_METER = 1.0936133


def meters_to_yards(meters: float) -> float:
    return meters * YARDS_PER_METER


def yards_to_meters(yards: float) -> float:
    return yards / YARDS_PER_METER


def distance_yds(a: Coordinate, b: Coordinate) -> float:
    """Compute haversine distance between two coordinates in yards."""

    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = radians(b.lat - a.lat)
    dlon = radians(b.lon - a.lon)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return meters_to_yards(EARTH_RADIUS_M * c)


def bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Initial great-circle bearing from ``a`` toward ``b`` in [0, 360).

    Undefined when both points coincide; callers pick a fallback direction.
    """

    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlon = radians(b.lon - a.lon)

    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    bearing = (degrees(atan2(x, y)) + 360.0) % 360.0
    # -0.0 and float rounding can land exactly on 360
    return 0.0 if bearing >= 360.0 else bearing


def project(origin: Coordinate, bearing: float, distance: float) -> Coordinate:
    """Move ``distance`` yards from ``origin`` along ``bearing`` degrees."""

    if distance == 0:
        return origin

    lat1 = radians(origin.lat)
    lon1 = radians(origin.lon)
    theta = radians(bearing)
    dr = yards_to_meters(distance) / EARTH_RADIUS_M

    lat2 = asin(sin(lat1) * cos(dr) + cos(lat1) * sin(dr) * cos(theta))
    lon2 = lon1 + atan2(
        sin(theta) * sin(dr) * cos(lat1), cos(dr) - sin(lat1) * sin(lat2)
    )

    return Coordinate(lat=degrees(lat2), lon=(degrees(lon2) + 540.0) % 360.0 - 180.0)


__all__ = [
    "EARTH_RADIUS_M",
    "YARDS_PER_METER",
    "bearing_deg",
    "distance_yds",
    "meters_to_yards",
    "project",
    "yards_to_meters",
]
