"""Validation utilities for addresses, coordinates, CRD numbers and phone numbers.

Small, self-contained helpers used across the application and tests. Each
returns an ``(is_valid, message)`` tuple instead of raising.
"""

import math
import re
from typing import Any, Tuple


def validate_address(address: str) -> Tuple[bool, str]:
    """
    Check that a free-text search location is worth sending to the geocoder.

    Args:
        address: Address, city or ZIP code typed by the user

    Returns:
        Tuple of (is_valid, message); the message may hold a suggestion even when valid
    """
    if not address or not address.strip():
        return False, "Location cannot be empty"

    addr = address.strip()
    if len(addr) < 3:
        return False, "Location appears too short. Please enter a city, address or ZIP code."

    if re.fullmatch(r"\d+", addr) and not re.fullmatch(r"\d{5}", addr):
        return False, "ZIP code should be 5 digits (e.g., '98101')"

    if "," not in addr and not re.search(r"\b\d{5}(-\d{4})?\b", addr):
        return True, "Consider adding a state or ZIP code for better accuracy"

    return True, ""


def validate_coordinates(lat: Any, lon: Any) -> Tuple[bool, str]:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude value
        lon: Longitude value

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(lat, bool) or isinstance(lon, bool):
        return False, "Coordinates must be numeric"
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return False, "Coordinates must be numeric"

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False, "Coordinates must be finite numbers"

    if not (-90 <= lat <= 90):
        return False, "Latitude must be between -90 and 90"

    if not (-180 <= lon <= 180):
        return False, "Longitude must be between -180 and 180"

    return True, "Valid coordinates"


def validate_crd_number(value: Any) -> Tuple[bool, str]:
    """
    Validate a FINRA Central Registration Depository (CRD) number.

    Accepts ints and digit-only strings, the same inputs the ADV endpoints take.
    """
    if value is None or isinstance(value, bool):
        return False, "CRD number is required"
    if isinstance(value, int):
        return (True, "Valid CRD number") if value >= 0 else (False, "CRD number must be numeric")

    text = str(value).strip()
    if not text:
        return False, "CRD number is required"
    if not text.isdigit():
        return False, "CRD number must be numeric"
    return True, "Valid CRD number"


def validate_phone_number(phone: str) -> Tuple[bool, str]:
    """
    Validate phone number format.

    Args:
        phone: Phone number string

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone or not phone.strip():
        return True, "Phone number is optional"

    cleaned = re.sub(r"[^\d]", "", phone)

    if len(cleaned) == 10:
        return True, "Valid phone number"
    elif len(cleaned) == 11 and cleaned.startswith("1"):
        return True, "Valid phone number"
    else:
        return False, "Phone number must be 10 digits or 11 digits starting with 1"
