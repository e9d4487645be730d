"""Geocoding helpers with caching and rate limiting."""
import logging
from typing import Any, Optional, Tuple

import streamlit as st
from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from .config import get_api_config

logger = logging.getLogger(__name__)

# Cached factory
_RATE_LIMITED_GEOCODER = None


def _get_rate_limited_geocoder():
    global _RATE_LIMITED_GEOCODER
    if _RATE_LIMITED_GEOCODER is not None:
        return _RATE_LIMITED_GEOCODER

    config = get_api_config("geocoding")
    geolocator = Nominatim(user_agent=config["nominatim_user_agent"])
    rate_limited = RateLimiter(
        geolocator.geocode,
        min_delay_seconds=float(config["rate_limit_delay"]),
        max_retries=int(config["max_retries"]),
        swallow_exceptions=False,
    )

    def geocode_fn(q, timeout=None):
        return rate_limited(q, timeout=timeout or config["request_timeout"])

    _RATE_LIMITED_GEOCODER = geocode_fn
    return _RATE_LIMITED_GEOCODER


def reset_geocoder() -> None:
    """Drop the cached geocoder so the next lookup re-reads configuration."""
    global _RATE_LIMITED_GEOCODER
    _RATE_LIMITED_GEOCODER = None


def geocode_address(address: str, timeout: Optional[float] = None) -> Optional[Any]:
    """Look up ``address`` with Nominatim.

    Returns the geopy ``Location`` or None when nothing matched. geopy errors
    propagate so callers can tell a timeout from an empty result.
    """
    geocode_fn = _get_rate_limited_geocoder()
    location = geocode_fn(address, timeout=timeout)
    if location is None:
        logger.info(f"No geocoding results for '{address}'")
    return location


@st.cache_data(ttl=60 * 60 * 24)
def geocode_address_with_cache(address: str) -> Optional[Tuple[float, float]]:
    try:
        location = geocode_address(address)
        if location:
            return location.latitude, location.longitude
        return None
    except (GeocoderTimedOut, GeocoderServiceError) as e:
        logger.warning(f"Geocoding service unavailable for '{address}': {e}")
        return None


def handle_geocoding_error(address: str, error: Exception) -> str:
    et = str(error).lower()
    if isinstance(error, GeocoderTimedOut) or "timeout" in et or "timed out" in et:
        return "⏱️ **Geocoding Timeout**: The address lookup service is taking too long. Please try again in a moment."
    if "rate" in et or "limit" in et:
        return "🚦 **Rate Limited**: Too many requests to the geocoding service. Please wait a moment and try again."
    if "network" in et or "connection" in et:
        return "🌐 **Network Error**: Cannot connect to the geocoding service. Please check your internet connection."
    if isinstance(error, GeocoderServiceError) or "unavailable" in et or "service" in et:
        return "🔌 **Service Unavailable**: The geocoding service is temporarily unavailable. Please try again later."
    return f"❌ **Geocoding Error**: Unable to find location for '{address}'. (Error: {type(error).__name__})"
