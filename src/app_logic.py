import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from src.utils.config import get_search_config
from src.utils.geo import calculate_distances, distance_to, filter_by_distance, get_coordinate
from src.utils.location import (
    DeviceLocationProvider,
    GeocodingLocationProvider,
    LocationError,
    ReferenceLocation,
)

logger = logging.getLogger(__name__)

__all__ = [
    "SearchResult",
    "add_distance_column",
    "coerce_radius",
    "filter_advisors_by_radius",
    "filter_advisors_by_specialization",
    "get_unique_specializations",
    "matches_query",
    "paginate_advisors",
    "search_advisors",
    "sort_advisors",
]

SORT_OPTIONS = ("relevance", "rating", "reviews", "name", "company", "distance")


@dataclass
class SearchResult:
    advisors: List[Dict[str, Any]]
    reference: Optional[ReferenceLocation] = None
    location_error: Optional[str] = None


def coerce_radius(value: Any, default: Optional[float] = None) -> float:
    """Parse a radius from the query string, falling back to the configured default."""
    if default is None:
        default = float(get_search_config()["default_radius_miles"])
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        radius = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable radius {value!r}; using {default}")
        return default
    return radius if math.isfinite(radius) else default


def _location_label(advisor: Dict[str, Any]) -> str:
    label = advisor.get("location")
    if label:
        return str(label)
    city = advisor.get("principal_office_city") or ""
    state = advisor.get("principal_office_state") or ""
    return f"{city}, {state}"


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value if v is not None]
    return []


def matches_query(advisor: Dict[str, Any], query: str) -> bool:
    """Case-insensitive match on name, company, specializations or certifications."""
    q = query.lower()
    for key in ("name", "company", "primary_business_name"):
        value = advisor.get(key)
        if value and q in str(value).lower():
            return True
    terms = _as_list(advisor.get("specializations")) + _as_list(advisor.get("certifications"))
    return any(q in t.lower() for t in terms)


def sort_advisors(
    advisors: Sequence[Dict[str, Any]], sort_by: str = "relevance", reference: Any = None
) -> List[Dict[str, Any]]:
    """Stable sort of search results.

    ``distance`` needs a reference location; advisors that cannot be located
    go last. Unknown options keep the incoming order.
    """
    advisors = list(advisors)
    if sort_by == "rating":
        return sorted(advisors, key=lambda a: a.get("averageRating") or 0, reverse=True)
    if sort_by == "reviews":
        return sorted(advisors, key=lambda a: a.get("reviewCount") or 0, reverse=True)
    if sort_by in ("name", "company"):
        return sorted(advisors, key=lambda a: str(a.get(sort_by) or "").lower())
    if sort_by == "distance":
        if get_coordinate(reference, "latitude") is None or get_coordinate(reference, "longitude") is None:
            return advisors

        def _key(advisor):
            d = distance_to(reference, advisor)
            if d is None or math.isnan(d):
                return (1, 0.0)
            return (0, d)

        return sorted(advisors, key=_key)
    return advisors


def search_advisors(
    advisors: Sequence[Dict[str, Any]],
    *,
    location_text: Optional[str] = None,
    device_location: Optional[Dict[str, Any]] = None,
    radius_miles: Any = None,
    query: Optional[str] = None,
    sort_by: str = "relevance",
    geocode_fn: Optional[Callable[..., Any]] = None,
) -> SearchResult:
    """Run the directory search over already-fetched advisor records.

    1. A typed location is geocoded and used as the search origin. When it
       cannot be geocoded, advisors whose "City, ST" label contains the text
       are kept instead.
    2. Without a typed location, the device location (if any) is the origin.
    3. The free-text query narrows the results.
    4. Results are sorted.
    """
    radius = coerce_radius(radius_miles)
    results = list(advisors)
    reference = None
    location_error = None

    if location_text and location_text.strip():
        try:
            reference = GeocodingLocationProvider(location_text, geocode_fn=geocode_fn).resolve()
            results = filter_by_distance(results, reference, radius)
        except LocationError as e:
            logger.warning(f"Falling back to text location match for '{location_text}': {e}")
            location_error = str(e)
            needle = location_text.strip().lower()
            results = [a for a in results if needle in _location_label(a).lower()]
    elif device_location is not None:
        try:
            reference = DeviceLocationProvider(device_location).resolve()
            results = filter_by_distance(results, reference, radius)
        except LocationError as e:
            logger.info(f"Device location unavailable ({e.reason.value}); searching without distance filter")
            location_error = "Unable to get your location. You can still search by entering a location manually."

    if query and query.strip():
        results = [a for a in results if matches_query(a, query.strip())]

    results = sort_advisors(results, sort_by, reference)
    logger.debug(f"Advisor search returned {len(results)} of {len(advisors)} advisors")
    return SearchResult(advisors=results, reference=reference, location_error=location_error)


def paginate_advisors(
    advisors: Sequence[Dict[str, Any]], page: Any = 1, per_page: Optional[int] = None
) -> Tuple[List[Dict[str, Any]], int]:
    """Return one page of results and the total page count.

    Pages are 1-based; an out-of-range or unreadable page is clamped.
    """
    if per_page is None:
        per_page = get_search_config()["results_per_page"]
    per_page = max(int(per_page), 1)
    total_pages = max(math.ceil(len(advisors) / per_page), 1)
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return list(advisors[start:start + per_page]), total_pages


def add_distance_column(df: pd.DataFrame, reference: Any) -> pd.DataFrame:
    """Copy of ``df`` with ``distance_miles`` from ``reference`` (NaN where unknown)."""
    working = df.copy()
    ref_lat = get_coordinate(reference, "latitude")
    ref_lon = get_coordinate(reference, "longitude")
    if ref_lat is None or ref_lon is None or working.empty:
        working["distance_miles"] = pd.Series(float("nan"), index=working.index, dtype="float64")
        return working
    working["distance_miles"] = pd.Series(
        calculate_distances(ref_lat, ref_lon, working), index=working.index, dtype="float64"
    )
    return working


def filter_advisors_by_radius(df: pd.DataFrame, max_radius_miles: float) -> pd.DataFrame:
    """Filter advisors by maximum radius distance.

    Args:
        df: Advisor DataFrame with "distance_miles" column
        max_radius_miles: Maximum distance threshold in miles

    Returns:
        pd.DataFrame: Filtered DataFrame with only advisors within radius,
        in their original row order
    """
    if df is None or df.empty or "distance_miles" not in df.columns:
        return df
    return df[df["distance_miles"] <= max_radius_miles].copy()


def get_unique_specializations(advisor_df: pd.DataFrame) -> list[str]:
    """Extract unique specializations from advisor DataFrame.

    Handles comma-separated strings and list values.

    Returns:
        Sorted list of unique specialization strings
    """
    if advisor_df.empty or "specializations" not in advisor_df.columns:
        return []

    unique = set()
    for value in advisor_df["specializations"]:
        unique.update(_as_list(value))
    return sorted(unique)


def filter_advisors_by_specialization(df: pd.DataFrame, selected: list[str]) -> pd.DataFrame:
    """Filter advisors by selected specializations.

    Advisors with several specializations match if ANY of them is selected.
    """
    if df is None or df.empty:
        return df

    if not selected or "specializations" not in df.columns:
        return df

    mask = df["specializations"].apply(lambda v: any(s in selected for s in _as_list(v)))
    return df[mask].copy()
