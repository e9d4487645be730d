"""Utilities package for the MyLocalRIA advisor search.

Re-export stable helper functions from the submodules.
"""
# This module intentionally re-exports symbols from submodules. Flake8 F401
# warnings are expected for re-exported names and are silenced locally.
# flake8: noqa: F401

from .cleaning import advisors_to_records, clean_coordinates, load_advisor_data, validate_advisor_data
from .geo import EARTH_RADIUS_MILES, calculate_distance, calculate_distances, filter_by_distance
from .location import (
    DeviceLocationProvider,
    GeocodingLocationProvider,
    LocationError,
    LocationFailure,
    LocationProvider,
    ReferenceLocation,
    resolve_reference_location,
)
from .recently_viewed import RecentlyViewedAdvisors
from .search_history import SearchHistory, build_search_params
from .storage import InMemoryStore, KeyValueStore, SessionStateStore
from .validation import validate_address, validate_coordinates, validate_crd_number, validate_phone_number

__all__ = [
    # Distance and proximity
    "EARTH_RADIUS_MILES",
    "calculate_distance",
    "calculate_distances",
    "filter_by_distance",
    # Reference locations
    "DeviceLocationProvider",
    "GeocodingLocationProvider",
    "LocationError",
    "LocationFailure",
    "LocationProvider",
    "ReferenceLocation",
    "resolve_reference_location",
    # Advisor data
    "advisors_to_records",
    "clean_coordinates",
    "load_advisor_data",
    "validate_advisor_data",
    # Per-visitor persistence
    "InMemoryStore",
    "KeyValueStore",
    "RecentlyViewedAdvisors",
    "SearchHistory",
    "SessionStateStore",
    "build_search_params",
    # Validation
    "validate_address",
    "validate_coordinates",
    "validate_crd_number",
    "validate_phone_number",
]
