"""
Configuration and secrets management for the MyLocalRIA advisor search.

This module provides a centralized way to access application configuration
and secrets, with fallbacks when a value is not configured.

Usage:
    from src.utils.config import get_api_config, get_search_config

    # Get geocoding configuration
    geocoding_config = get_api_config('geocoding')
    user_agent = geocoding_config.get('nominatim_user_agent')

    # Get search defaults
    radius = get_search_config()['default_radius_miles']
"""

import logging
from typing import Any, Dict

import streamlit as st

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_UPLOAD_TYPES = [
    "application/pdf",
    "image/jpeg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
]


def get_secret(key_path: str, default: Any = None) -> Any:
    """
    Safely retrieve a secret from Streamlit's secrets management.

    Args:
        key_path: Dot-notation path to the secret (e.g., 'geocoding.request_timeout')
        default: Default value if secret is not found

    Returns:
        The secret value or default if not found

    Examples:
        >>> get_secret('search.default_radius_miles', 50)
        >>> get_secret('uploads.bucket_name')
        >>> get_secret('app.debug_mode', False)
    """
    try:
        keys = key_path.split(".")
        value = st.secrets

        for key in keys:
            try:
                value = value[key]
            except Exception:
                return default

        return value
    except Exception as e:
        logger.warning(f"Failed to retrieve secret '{key_path}': {e}")
        return default


def get_api_config(api_name: str) -> Dict[str, Any]:
    """
    Get configuration for a specific API or service.

    Args:
        api_name: Name of the API/service ('geocoding' or 's3')

    Returns:
        Dictionary containing the API configuration
    """
    if api_name == "geocoding":
        return {
            "nominatim_user_agent": get_secret("geocoding.nominatim_user_agent", "mylocalria"),
            "request_timeout": get_secret("geocoding.request_timeout", 10),
            "rate_limit_delay": get_secret("geocoding.rate_limit_delay", 1.0),
            "max_retries": get_secret("geocoding.max_retries", 3),
        }
    elif api_name == "s3":
        return {
            "aws_access_key_id": get_secret("uploads.aws_access_key_id", ""),
            "aws_secret_access_key": get_secret("uploads.aws_secret_access_key", ""),
            "bucket_name": get_secret("uploads.bucket_name", ""),
            "region_name": get_secret("uploads.region_name", "us-east-1"),
            "url_expiry_seconds": get_secret("uploads.url_expiry_seconds", 3600),
        }
    else:
        return {}


def get_search_config() -> Dict[str, Any]:
    """Search defaults taken from the directory page."""
    return {
        "default_radius_miles": get_secret("search.default_radius_miles", 50),
        "results_per_page": get_secret("search.results_per_page", 10),
        "recently_viewed_max": get_secret("search.recently_viewed_max", 10),
        "search_history_max": get_secret("search.search_history_max", 10),
    }


def get_upload_config() -> Dict[str, Any]:
    """
    Get document upload limits.

    Returns:
        Dictionary with ``max_size_bytes`` and ``allowed_types``
    """
    return {
        "max_size_bytes": get_secret("uploads.max_size_bytes", 10 * 1024 * 1024),
        "allowed_types": list(get_secret("uploads.allowed_types", DEFAULT_ALLOWED_UPLOAD_TYPES)),
    }


def get_app_config() -> Dict[str, Any]:
    """
    Get general application configuration.

    Returns:
        Dictionary containing app configuration
    """
    return {
        "environment": get_secret("app.environment", "production"),
        "debug_mode": get_secret("app.debug_mode", False),
        "log_level": get_secret("app.log_level", "INFO"),
    }


def is_api_enabled(api_name: str) -> bool:
    """
    Check if a specific API is enabled and properly configured.

    Args:
        api_name: Name of the API to check

    Returns:
        True if the API is enabled and has required configuration
    """
    if api_name == "s3":
        config = get_api_config("s3")
        return (
            bool(config["aws_access_key_id"]) and bool(config["aws_secret_access_key"]) and bool(config["bucket_name"])
        )
    elif api_name == "geocoding":
        return bool(get_api_config("geocoding")["nominatim_user_agent"])
    else:
        return False


def validate_configuration() -> Dict[str, str]:
    """
    Validate the application configuration and return any warnings or errors.

    Returns:
        Dictionary with configuration validation results
    """
    issues = {}

    geocoding_config = get_api_config("geocoding")
    if not geocoding_config["nominatim_user_agent"]:
        issues["geocoding"] = "Nominatim requires a user agent"
    try:
        if float(geocoding_config["rate_limit_delay"]) < 1.0:
            issues["geocoding"] = "Nominatim usage policy allows at most one request per second"
    except (TypeError, ValueError):
        issues["geocoding"] = f"Invalid rate limit delay: {geocoding_config['rate_limit_delay']!r}"

    search_config = get_search_config()
    try:
        if float(search_config["default_radius_miles"]) <= 0:
            issues["search"] = "Default radius must be positive"
    except (TypeError, ValueError):
        issues["search"] = f"Invalid default radius: {search_config['default_radius_miles']!r}"

    s3_config = get_api_config("s3")
    if s3_config["bucket_name"] and not is_api_enabled("s3"):
        issues["uploads"] = "Upload bucket is set but AWS credentials are missing"

    app_config = get_app_config()
    if app_config["environment"] not in ["development", "staging", "production"]:
        issues["app"] = f"Unknown environment: {app_config['environment']}"

    return issues


if __name__ == "__main__":
    print("MyLocalRIA - Configuration Status")
    print("=" * 50)

    issues = validate_configuration()
    if issues:
        print("⚠️  Configuration Issues Found:")
        for component, issue in issues.items():
            print(f"  - {component}: {issue}")
    else:
        print("✅ Configuration validation passed")

    print("\n📋 API Status:")
    for api in ["geocoding", "s3"]:
        status = "✅ Enabled" if is_api_enabled(api) else "❌ Disabled/Not configured"
        print(f"  - {api}: {status}")

    print(f"\n🔧 Environment: {get_app_config()['environment']}")
    print(f"🐛 Debug Mode: {get_app_config()['debug_mode']}")
