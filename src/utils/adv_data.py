"""ADV Part 2A/2B brochure data submitted by advisors.

Documents are keyed by CRD number and merged on every upsert, so a partial
submission only overwrites the fields it carries.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .storage import KeyValueStore, load_json, save_json
from .validation import validate_crd_number

logger = logging.getLogger(__name__)

ADV_PARTS = {"2a": "Part 2A", "2b": "Part 2B"}


class ApiError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AdvValidationError(ApiError):
    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("Validation failed", status_code=400)
        self.errors = errors


@dataclass
class UpsertAdvDataRequest:
    crd_number: str
    rep_name: str
    data: Dict[str, Any] = field(default_factory=dict)


def validate_upsert_request(payload: Mapping[str, Any]) -> UpsertAdvDataRequest:
    """Check an upsert body and normalize it.

    Raises:
        AdvValidationError: listing every invalid field
    """
    errors = []
    if not isinstance(payload, Mapping):
        raise AdvValidationError([{"field": "body", "message": "Request body must be an object"}])

    crd_ok, crd_msg = validate_crd_number(payload.get("crd_number"))
    if not crd_ok:
        errors.append({"field": "crd_number", "message": crd_msg})

    rep_name = payload.get("rep_name")
    rep_name = rep_name.strip() if isinstance(rep_name, str) else ""
    if not rep_name:
        errors.append({"field": "rep_name", "message": "Representative name is required"})

    data = payload.get("data")
    if data is not None and not isinstance(data, Mapping):
        errors.append({"field": "data", "message": "Data must be an object"})

    if errors:
        raise AdvValidationError(errors)

    return UpsertAdvDataRequest(
        crd_number=str(payload["crd_number"]).strip(),
        rep_name=rep_name,
        data=dict(data or {}),
    )


def _document_key(part: str, crd_number: str) -> str:
    if part not in ADV_PARTS:
        raise ApiError(f"Unknown ADV part: {part}", status_code=404)
    return f"adv_part_{part}_data/{crd_number}"


def upsert_adv_data(
    store: KeyValueStore,
    part: str,
    payload: Mapping[str, Any],
    user_id: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Validate ``payload`` and merge it into the stored ADV document."""
    request = validate_upsert_request(payload)
    key = _document_key(part, request.crd_number)
    now = now or datetime.now(timezone.utc)

    existing = load_json(store, key, {})
    if not isinstance(existing, dict):
        existing = {}
    document = {
        **existing,
        "crd_number": request.crd_number,
        "rep_name": request.rep_name,
        **request.data,
        "updatedAt": now.isoformat(),
        "updatedBy": user_id,
    }
    save_json(store, key, document)
    logger.info(f"Upserted ADV {ADV_PARTS[part]} data for CRD {request.crd_number} by {user_id}")

    return {
        "success": True,
        "message": f"ADV {ADV_PARTS[part]} data successfully upserted",
        "crd_number": payload["crd_number"],
    }


def get_adv_data(store: KeyValueStore, part: str, crd_number: Any) -> Dict[str, Any]:
    crd_ok, _ = validate_crd_number(crd_number)
    if not crd_ok:
        raise ApiError("Valid CRD number is required", status_code=400)

    crd = str(crd_number).strip()
    document = load_json(store, _document_key(part, crd), None)
    if document is None:
        raise ApiError(f"No ADV {ADV_PARTS[part]} data found for CRD number: {crd}", status_code=404)
    return {"success": True, "data": document}


def error_response(error: Exception, debug: bool = False) -> Dict[str, Any]:
    """JSON body for a failed request."""
    if isinstance(error, AdvValidationError):
        return {"error": error.message, "message": error.message, "errors": error.errors}
    if isinstance(error, ApiError):
        body = {"error": type(error).__name__, "message": error.message}
    else:
        logger.error(f"Unhandled error: {type(error).__name__}: {error}")
        body = {"error": "Internal Server Error", "message": str(error) or "An unexpected error occurred"}
    if debug:
        body["type"] = type(error).__name__
    return body


def status_code_for(error: Exception) -> int:
    return error.status_code if isinstance(error, ApiError) else 500
