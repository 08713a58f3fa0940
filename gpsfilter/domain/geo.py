#!/usr/bin/env python3
from __future__ import annotations

import math

EARTH_RADIUS_MILES = 3963.1676
SECONDS_PER_HOUR = 3600.0

# Formulas: http://www.movable-type.co.uk/scripts/latlong.html
# The (dlat, dlon) rate is treated as the displacement covered in one second.


def normalize_bearing(deg: float) -> float:
    while deg >= 360.0:
        deg -= 360.0
    while deg < 0.0:
        deg += 360.0
    return deg


def bearing_deg(lat: float, lon: float, dlat: float, dlon: float) -> float:
    """Initial great-circle bearing from (lat - dlat, lon - dlon) to (lat, lon), in [0, 360)."""
    lat = math.radians(lat)
    dlat = math.radians(dlat)
    dlon = math.radians(dlon)

    lat1 = lat - dlat
    y = math.sin(dlon) * math.cos(lat)
    x = math.cos(lat1) * math.sin(lat) - math.sin(lat1) * math.cos(lat) * math.cos(dlon)
    return normalize_bearing(math.degrees(math.atan2(y, x)))


def haversine_angle(lat: float, dlat: float, dlon: float) -> float:
    """Central angle (rad) between (lat - dlat, .) and (lat, .) separated by dlon; all args in rad."""
    lat1 = lat - dlat
    sin_half_dlat = math.sin(dlat / 2.0)
    sin_half_dlon = math.sin(dlon / 2.0)
    a = sin_half_dlat * sin_half_dlat + math.cos(lat1) * math.cos(lat) * sin_half_dlon * sin_half_dlon
    a = min(1.0, max(0.0, a))
    return 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def speed_mph(lat: float, lon: float, dlat: float, dlon: float) -> float:
    """Ground speed in mph for a per-second (dlat, dlon) rate at (lat, lon)."""
    radians_per_second = haversine_angle(math.radians(lat), math.radians(dlat), math.radians(dlon))
    miles_per_second = radians_per_second * EARTH_RADIUS_MILES
    return miles_per_second * SECONDS_PER_HOUR


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in degrees."""
    angle = haversine_angle(math.radians(lat2), math.radians(lat2 - lat1), math.radians(lon2 - lon1))
    return angle * EARTH_RADIUS_MILES
