"""Document upload validation and storage.

``upload`` objects follow the shape of Streamlit's ``UploadedFile``: ``name``,
``size``, ``type`` and ``getvalue()``.
"""
import logging
import time
from typing import Any, Iterable, List, Optional

from .config import get_upload_config
from .io_utils import sanitize_filename
from .s3_client import S3DocumentClient, StorageError

logger = logging.getLogger(__name__)


class FileValidationError(ValueError):
    pass


class UploadError(Exception):
    pass


def validate_file(
    upload: Any,
    max_size: Optional[int] = None,
    allowed_types: Optional[Iterable[str]] = None,
) -> bool:
    """
    Validate a file before upload.

    Args:
        upload: The file to validate
        max_size: Maximum file size in bytes (default from config, 10MB)
        allowed_types: Allowed MIME types (default from config: pdf, jpeg, png, doc, docx)

    Returns:
        True when the file is acceptable

    Raises:
        FileValidationError: If the file is missing, too large or of a disallowed type
    """
    config = get_upload_config()
    max_size = config["max_size_bytes"] if max_size is None else max_size
    allowed = list(config["allowed_types"] if allowed_types is None else allowed_types)

    if upload is None:
        raise FileValidationError("No file provided")

    if upload.size > max_size:
        limit_mb = max_size / (1024 * 1024)
        raise FileValidationError(f"File size must be less than {limit_mb:g}MB")

    if upload.type not in allowed:
        raise FileValidationError("File type not allowed")

    return True


def build_storage_key(path: str, user_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    """Key of the form ``{path}/{user_id}/{timestamp}-{filename}``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    stem, dot, ext = filename.rpartition(".")
    safe_stem, safe_ext = sanitize_filename(stem), sanitize_filename(ext)
    safe_name = f"{safe_stem}.{safe_ext}" if dot and safe_stem and safe_ext else sanitize_filename(filename)
    safe_user = sanitize_filename(str(user_id))
    if not safe_user:
        raise ValueError(f"Invalid user id for storage key: {user_id!r}")
    return f"{path.strip('/')}/{safe_user}/{timestamp_ms}-{safe_name}"


def upload_document(
    upload: Any,
    path: str,
    user_id: str,
    client: Optional[S3DocumentClient] = None,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Validate and store one document, returning its download URL."""
    validate_file(upload)
    client = client or S3DocumentClient()
    key = build_storage_key(path, user_id, upload.name, timestamp_ms)
    try:
        client.upload_file(key, upload.getvalue(), upload.type)
        return client.get_download_url(key)
    except StorageError as e:
        logger.error(f"Error uploading file '{upload.name}': {e}")
        raise UploadError("Failed to upload file. Please try again.") from e


def upload_multiple_documents(
    uploads: Iterable[Any], path: str, user_id: str, client: Optional[S3DocumentClient] = None
) -> List[str]:
    """Upload every file in order; any failure aborts the batch."""
    client = client or S3DocumentClient()
    try:
        return [upload_document(u, path, user_id, client=client) for u in uploads]
    except UploadError as e:
        logger.error(f"Error uploading multiple files: {e}")
        raise UploadError("Failed to upload files. Please try again.") from e
