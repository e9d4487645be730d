"""Pytest configuration helpers.

Ensure the project root is on sys.path so tests can import the `src` package
when pytest is invoked from the repository root or an isolated test runner.
"""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


def pytest_configure():
    # Insert the repository root (parent of the tests directory) at the front
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def memory_store():
    from src.utils.storage import InMemoryStore

    return InMemoryStore()


@pytest.fixture
def seattle_advisors():
    """Advisors around Seattle plus one in Portland and one that cannot be located."""
    return [
        {
            "id": "a1",
            "name": "Elliott Bay Wealth",
            "company": "Elliott Bay Wealth",
            "location": "Seattle, WA",
            "latitude": 47.6062,
            "longitude": -122.3321,
            "averageRating": 4.5,
            "reviewCount": 12,
            "specializations": ["Retirement Planning"],
            "certifications": ["CFP"],
        },
        {
            "id": "a2",
            "name": "Bellevue Capital",
            "company": "Bellevue Capital Advisors",
            "location": "Bellevue, WA",
            "latitude": 47.6101,
            "longitude": -122.2015,
            "averageRating": 4.9,
            "reviewCount": 3,
            "specializations": ["Tax Planning"],
            "certifications": ["CPA"],
        },
        {
            "id": "a3",
            "name": "Rose City Advisors",
            "company": "Rose City Advisors",
            "location": "Portland, OR",
            "latitude": 45.5152,
            "longitude": -122.6784,
            "averageRating": 3.8,
            "reviewCount": 40,
            "specializations": ["Estate Planning"],
            "certifications": ["CFA"],
        },
        {
            "id": "a4",
            "name": "Unmapped Partners",
            "company": "Unmapped Partners",
            "location": "Seattle, WA",
            "latitude": None,
            "longitude": None,
            "averageRating": 4.0,
            "reviewCount": 1,
            "specializations": [],
            "certifications": [],
        },
    ]


@pytest.fixture
def fake_geocoder():
    """Build a geocode function answering from a dict of address -> (lat, lon)."""

    def _factory(known):
        calls = []

        def geocode_fn(address, timeout=None):
            calls.append(address)
            if address not in known:
                return None
            lat, lon = known[address]
            return SimpleNamespace(latitude=lat, longitude=lon, address=address)

        geocode_fn.calls = calls
        return geocode_fn

    return _factory


@pytest.fixture
def mock_s3_config():
    """Mock S3 configuration."""
    return {
        "aws_access_key_id": "test_key",
        "aws_secret_access_key": "test_secret",
        "bucket_name": "test-bucket",
        "region_name": "us-east-1",
        "url_expiry_seconds": 3600,
    }
