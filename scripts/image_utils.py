# Build the in-page preview for an uploaded image

import base64
import mimetypes

from loguru import logger

FALLBACK_MIME = "application/octet-stream"


def guess_mime(name, mime=None):
    if mime and mime.strip():
        return mime.strip()
    guessed, _ = mimetypes.guess_type(name or "")
    return guessed or FALLBACK_MIME


def to_data_url(data, mime=None):
    payload = base64.b64encode(bytes(data)).decode("ascii")
    return f"data:{mime or FALLBACK_MIME};base64,{payload}"


def read_preview(name, data, mime=None):
    """Data URL for the whole file, or None if the bytes cannot be read."""
    try:
        if hasattr(data, "read"):
            data = data.read()
        return to_data_url(data, guess_mime(name, mime))
    except (OSError, TypeError, ValueError) as e:
        logger.warning("Could not read {} for preview: {}", name, e)
        return None
