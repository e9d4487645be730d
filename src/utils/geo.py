"""Great-circle distance and radius filtering for located advisors.

Nothing in this module raises on bad geodata: missing coordinates exclude an
advisor, a missing reference location disables the filter, and NaN falls out
of the ``<=`` comparison.
"""
import math
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd

EARTH_RADIUS_MILES = 3958.8


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in miles between two points given in degrees."""
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding near antipodes can push a past 1
    if a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def calculate_distances(user_lat: float, user_lon: float, advisor_df: pd.DataFrame) -> List[Optional[float]]:
    """Distance in miles from the user to every row of ``advisor_df``.

    Rows with a missing or non-finite ``latitude``/``longitude`` get None.
    """
    lat_arr = pd.to_numeric(advisor_df["latitude"], errors="coerce").to_numpy(dtype=float)
    lon_arr = pd.to_numeric(advisor_df["longitude"], errors="coerce").to_numpy(dtype=float)
    if not (math.isfinite(user_lat) and math.isfinite(user_lon)):
        return [None] * len(advisor_df)

    distances = np.full(len(advisor_df), np.nan)
    valid = np.isfinite(lat_arr) & np.isfinite(lon_arr)
    lat_rad = np.radians(lat_arr[valid])
    user_lat_rad = math.radians(user_lat)
    dlat = np.radians(lat_arr[valid] - user_lat)
    dlon = np.radians(lon_arr[valid] - user_lon)
    a = np.sin(dlat / 2) ** 2 + math.cos(user_lat_rad) * np.cos(lat_rad) * np.sin(dlon / 2) ** 2
    a = np.minimum(a, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    distances[valid] = EARTH_RADIUS_MILES * c

    return [None if np.isnan(d) else float(d) for d in distances]


def _read_field(item: Any, name: str) -> Any:
    if item is None:
        return None
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def get_coordinate(item: Any, name: str) -> Optional[float]:
    """Return ``item[name]`` (or ``item.name``) as a float.

    None when absent, unreadable or non-finite; NaN is "no location", not a point.
    """
    value = _read_field(item, name)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def has_coordinates(item: Any) -> bool:
    return get_coordinate(item, "latitude") is not None and get_coordinate(item, "longitude") is not None


def distance_to(reference: Any, item: Any) -> Optional[float]:
    """Distance from ``reference`` to ``item``, or None when either cannot be located."""
    if not (has_coordinates(reference) and has_coordinates(item)):
        return None
    return calculate_distance(
        get_coordinate(reference, "latitude"),
        get_coordinate(reference, "longitude"),
        get_coordinate(item, "latitude"),
        get_coordinate(item, "longitude"),
    )


def filter_by_distance(entities: Sequence[Any], reference: Any, radius_miles: Any) -> List[Any]:
    """Keep the entities within ``radius_miles`` of ``reference``, in their original order.

    Args:
        entities: Advisors (mappings or objects) with ``latitude``/``longitude``
        reference: Search origin; None, or one with a missing or non-finite coordinate, turns
            the filter off and every entity is returned
        radius_miles: Inclusive radius; not validated

    Returns:
        A new list. Entities without both coordinates are never within range.
    """
    if not has_coordinates(reference):
        return list(entities)

    try:
        radius = float(radius_miles)
    except (TypeError, ValueError):
        radius = math.nan

    ref_lat = get_coordinate(reference, "latitude")
    ref_lon = get_coordinate(reference, "longitude")

    within = []
    for entity in entities:
        lat = get_coordinate(entity, "latitude")
        lon = get_coordinate(entity, "longitude")
        if lat is None or lon is None:
            continue
        if calculate_distance(ref_lat, ref_lon, lat, lon) <= radius:
            within.append(entity)
    return within
