import re
import time
from typing import Optional

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

from src.shared.config import get_site_config
from src.shared.logging_utils import error as log_error, info as log_info
from src.specs.common.enums import StoragePath
from src.specs.common.errors import ConfigurationError, FormValidationError, StoreUnavailableError

MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10 MB
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def validate_image(content_type: Optional[str], size: int) -> str:
    """Check type and size of an image upload; returns the normalised content type."""
    ctype = (content_type or "").split(";")[0].strip().lower()
    errors = []
    if ctype not in ALLOWED_IMAGE_TYPES:
        errors.append({"field": "file", "message": "Only JPEG, PNG, and WebP images are allowed"})
    if size <= 0:
        errors.append({"field": "file", "message": "File is empty"})
    elif size > MAX_IMAGE_BYTES:
        errors.append({"field": "file", "message": "File size must be less than 10MB"})
    if errors:
        raise FormValidationError(errors)
    return "image/jpeg" if ctype == "image/jpg" else ctype


def build_blob_name(folder: StoragePath, filename: str, now_ms: Optional[int] = None) -> str:
    """``<folder>/<epoch ms>_<sanitised filename>``"""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    safe = _UNSAFE_CHARS.sub("_", filename.strip()).strip("._") or "upload"
    return f"{folder.value}/{stamp}_{safe}"


def _get_service_client() -> BlobServiceClient:
    conn = get_site_config().blob_connection_string
    if not conn:
        raise ConfigurationError("PUBLIC_BLOB_CONNECTION_STRING is required for blob uploads")
    return BlobServiceClient.from_connection_string(conn)


async def upload_image(
    *,
    folder: StoragePath,
    filename: str,
    data: bytes,
    content_type: Optional[str],
) -> str:
    """Upload an image to the public container, return the blob URL.

    Creates the container with blob-level public read access if missing.
    """
    ctype = validate_image(content_type, len(data))
    blob_name = build_blob_name(folder, filename)
    container = get_site_config().blob_container
    try:
        async with _get_service_client() as service:
            container_client = service.get_container_client(container)
            try:
                await container_client.create_container(public_access="blob")
            except ResourceExistsError:
                pass
            blob = container_client.get_blob_client(blob_name)
            await blob.upload_blob(
                data, overwrite=True, content_settings=ContentSettings(content_type=ctype)
            )
            url = blob.url
    except AzureError as exc:
        log_error(None, "upload:failed", blobName=blob_name, error=str(exc))
        raise StoreUnavailableError(f"Image upload failed: {exc}", {"blobName": blob_name}) from exc
    log_info(None, "upload:stored", blobName=blob_name, size=len(data))
    return url
