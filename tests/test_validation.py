"""Test suite for validation utilities.

Tests verify address, coordinate, CRD number and phone number validation functions.
"""
import pytest

from src.utils.validation import validate_address, validate_coordinates, validate_crd_number, validate_phone_number


class TestValidateAddress:
    """Tests for free-text search location validation."""

    def test_city_and_state(self):
        valid, msg = validate_address("Seattle, WA")
        assert valid is True
        assert msg == ""

    def test_zip_code(self):
        valid, msg = validate_address("98101")
        assert valid is True

    def test_empty(self):
        valid, msg = validate_address("   ")
        assert valid is False
        assert "cannot be empty" in msg

    def test_too_short(self):
        valid, msg = validate_address("WA")
        assert valid is False

    def test_bad_zip(self):
        valid, msg = validate_address("9810")
        assert valid is False
        assert "5 digits" in msg

    def test_city_only_gets_suggestion(self):
        valid, msg = validate_address("Seattle")
        assert valid is True
        assert "Consider adding" in msg


class TestValidateCoordinates:
    """Tests for coordinate validation."""

    def test_valid_coordinates(self):
        valid, msg = validate_coordinates(47.6062, -122.3321)
        assert valid is True
        assert msg == "Valid coordinates"

    def test_boundary_values(self):
        assert validate_coordinates(90, 180)[0] is True
        assert validate_coordinates(-90, -180)[0] is True

    def test_invalid_latitude(self):
        valid, msg = validate_coordinates(91, 0)
        assert valid is False
        assert "Latitude" in msg

    def test_invalid_longitude(self):
        valid, msg = validate_coordinates(0, -180.5)
        assert valid is False
        assert "Longitude" in msg

    @pytest.mark.parametrize("lat, lon", [("47", -122), (None, 0), (True, 0)])
    def test_non_numeric(self, lat, lon):
        valid, msg = validate_coordinates(lat, lon)
        assert valid is False
        assert msg == "Coordinates must be numeric"

    def test_nan(self):
        valid, msg = validate_coordinates(float("nan"), 0)
        assert valid is False
        assert "finite" in msg


class TestValidateCrdNumber:
    @pytest.mark.parametrize("value", [123456, "123456", " 42 ", 0])
    def test_valid(self, value):
        assert validate_crd_number(value)[0] is True

    @pytest.mark.parametrize("value, message", [(None, "required"), ("", "required"), ("12a", "numeric"), (-5, "numeric")])
    def test_invalid(self, value, message):
        valid, msg = validate_crd_number(value)
        assert valid is False
        assert message in msg


class TestValidatePhoneNumber:
    """Tests for phone number validation."""

    def test_valid_ten_digits(self):
        assert validate_phone_number("(206) 555-0100") == (True, "Valid phone number")

    def test_valid_with_country_code(self):
        assert validate_phone_number("1-206-555-0100")[0] is True

    def test_optional(self):
        assert validate_phone_number("") == (True, "Phone number is optional")

    def test_invalid(self):
        assert validate_phone_number("555-0100")[0] is False
