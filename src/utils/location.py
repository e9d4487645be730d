"""Reference locations for proximity search.

A search origin comes either from the visitor's device (the browser
geolocation payload handed to the app) or from geocoding the location the
visitor typed. Both sit behind ``LocationProvider.resolve()``, which returns a
``ReferenceLocation`` or raises ``LocationError``. The distance filter itself
only ever sees the resolved value, or None.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from .geo import get_coordinate
from .validation import validate_address, validate_coordinates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceLocation:
    latitude: Optional[float]
    longitude: Optional[float]


class LocationFailure(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    NO_RESULTS = "no_results"
    INVALID_INPUT = "invalid_input"


class LocationError(Exception):
    """Raised when a provider cannot produce a reference location."""

    def __init__(self, message: str, reason: LocationFailure):
        super().__init__(message)
        self.reason = reason


# W3C GeolocationPositionError codes
_POSITION_ERROR_CODES = {
    1: LocationFailure.PERMISSION_DENIED,
    2: LocationFailure.POSITION_UNAVAILABLE,
    3: LocationFailure.TIMEOUT,
}


class LocationProvider(ABC):
    @abstractmethod
    def resolve(self) -> ReferenceLocation:
        """Return the reference location or raise ``LocationError``."""


class DeviceLocationProvider(LocationProvider):
    """Location reported by the visitor's browser.

    ``position`` is the payload of a ``getCurrentPosition`` call: the
    coordinates (flat or nested under ``coords``) on success, or an object
    with the W3C error ``code`` on failure. None means the browser does not
    support geolocation.
    """

    def __init__(self, position: Optional[Mapping[str, Any]]):
        self.position = position

    def resolve(self) -> ReferenceLocation:
        if self.position is None:
            raise LocationError(
                "Geolocation is not supported by your browser", LocationFailure.POSITION_UNAVAILABLE
            )

        if "code" in self.position:
            reason = _POSITION_ERROR_CODES.get(self.position.get("code"), LocationFailure.POSITION_UNAVAILABLE)
            message = self.position.get("message") or f"Unable to get your location ({reason.value})"
            raise LocationError(message, reason)

        coords = self.position.get("coords", self.position)
        lat = get_coordinate(coords, "latitude")
        lon = get_coordinate(coords, "longitude")
        if lat is None or lon is None:
            raise LocationError("Device did not report coordinates", LocationFailure.POSITION_UNAVAILABLE)
        return ReferenceLocation(latitude=lat, longitude=lon)


class GeocodingLocationProvider(LocationProvider):
    """Location found by geocoding a free-text address."""

    def __init__(
        self,
        address: str,
        geocode_fn: Optional[Callable[..., Any]] = None,
        timeout: Optional[float] = None,
    ):
        self.address = address
        self.timeout = timeout
        if geocode_fn is None:
            from .geocoding import geocode_address

            geocode_fn = geocode_address
        self._geocode_fn = geocode_fn

    def resolve(self) -> ReferenceLocation:
        is_valid, message = validate_address(self.address or "")
        if not is_valid:
            raise LocationError(message, LocationFailure.INVALID_INPUT)

        try:
            match = self._geocode_fn(self.address.strip(), timeout=self.timeout)
        except GeocoderTimedOut as e:
            raise LocationError(f"Geocoding timed out for '{self.address}'", LocationFailure.TIMEOUT) from e
        except GeocoderServiceError as e:
            raise LocationError(
                f"Geocoding service unavailable: {e}", LocationFailure.POSITION_UNAVAILABLE
            ) from e

        if match is None:
            raise LocationError(f"No results found for '{self.address}'", LocationFailure.NO_RESULTS)

        lat, lon = match.latitude, match.longitude
        is_valid, message = validate_coordinates(lat, lon)
        if not is_valid:
            logger.warning(f"Geocoder returned unusable coordinates for '{self.address}': {message}")
            raise LocationError(f"No usable results found for '{self.address}'", LocationFailure.NO_RESULTS)
        return ReferenceLocation(latitude=float(lat), longitude=float(lon))


def resolve_reference_location(provider: Optional[LocationProvider]) -> Optional[ReferenceLocation]:
    """Resolve ``provider``, turning any ``LocationError`` into None."""
    if provider is None:
        return None
    try:
        location = provider.resolve()
    except LocationError as e:
        logger.warning(f"Location unavailable ({e.reason.value}): {e}")
        return None
    logger.debug(f"Resolved reference location {location}")
    return location
