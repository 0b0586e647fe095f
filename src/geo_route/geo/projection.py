# geo_route/geo/projection.py
"""
Forward ellipsoidal Transverse Mercator (UTM) on WGS84.

Lat/lon in degrees in; easting/northing in meters out. Everything is float64
numpy so the same code serves single points and whole node arrays.
"""

from __future__ import annotations

import numpy as np

from geo_route.domain.entities.geography import UTMCoord

A_AXIS = 6378137.0
FLATTENING = 1.0 / 298.257223563
K0 = 0.9996
FALSE_EASTING = 500_000.0
FALSE_NORTHING_SOUTH = 10_000_000.0

E2 = FLATTENING * (2.0 - FLATTENING)
EP2 = E2 / (1.0 - E2)

# meridional arc series coefficients
_M1 = 1.0 - E2 / 4.0 - 3.0 * E2**2 / 64.0 - 5.0 * E2**3 / 256.0
_M2 = 3.0 * E2 / 8.0 + 3.0 * E2**2 / 32.0 + 45.0 * E2**3 / 1024.0
_M3 = 15.0 * E2**2 / 256.0 + 45.0 * E2**3 / 1024.0
_M4 = 35.0 * E2**3 / 3072.0


def utm_zone(lon_deg):
    return np.floor((np.asarray(lon_deg, dtype=np.float64) + 180.0) / 6.0).astype(np.int64) + 1


def central_meridian_deg(zone):
    return (np.asarray(zone) - 1) * 6.0 - 180.0 + 3.0


def project_many(lat_deg, lon_deg) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    lat_deg = np.asarray(lat_deg, dtype=np.float64)
    lon_deg = np.asarray(lon_deg, dtype=np.float64)

    zone = utm_zone(lon_deg)
    lon0 = np.radians(central_meridian_deg(zone))
    lat = np.radians(lat_deg)
    lon = np.radians(lon_deg)

    sin_lat, cos_lat, tan_lat = np.sin(lat), np.cos(lat), np.tan(lat)
    N = A_AXIS / np.sqrt(1.0 - E2 * sin_lat**2)
    T = tan_lat**2
    C = EP2 * cos_lat**2
    A = (lon - lon0) * cos_lat
    M = A_AXIS * (
        _M1 * lat - _M2 * np.sin(2.0 * lat) + _M3 * np.sin(4.0 * lat) - _M4 * np.sin(6.0 * lat)
    )

    easting = (
        K0
        * N
        * (
            A
            + (1.0 - T + C) * A**3 / 6.0
            + (5.0 - 18.0 * T + T**2 + 72.0 * C - 58.0 * EP2) * A**5 / 120.0
        )
        + FALSE_EASTING
    )
    northing = K0 * (
        M
        + N
        * tan_lat
        * (
            A**2 / 2.0
            + (5.0 - T + 9.0 * C + 4.0 * C**2) * A**4 / 24.0
            + (61.0 - 58.0 * T + T**2 + 600.0 * C - 330.0 * EP2) * A**6 / 720.0
        )
    )
    northing = np.where(lat_deg < 0.0, northing + FALSE_NORTHING_SOUTH, northing)
    return easting, northing, zone


def project(lat_deg: float, lon_deg: float) -> UTMCoord:
    x, y, zone = project_many(lat_deg, lon_deg)
    return UTMCoord(float(x), float(y), int(zone))
