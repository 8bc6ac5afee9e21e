# Handle metadata extraction, GPS conversion and timestamps

import io
from datetime import datetime

import exifread
from loguru import logger

from scripts.metadata import MetadataSnapshot, TagRecord

# exifread groups whose entries never reach the snapshot
SKIPPED_GROUPS = ("Thumbnail", "MakerNote")
SKIPPED_KEYS = ("JPEGThumbnail", "TIFFThumbnail")

DATE_FORMAT = "%Y:%m:%d %H:%M:%S"


class ExifDecodeError(ValueError):
    """The file could not be decoded into any EXIF metadata."""


def get_float(val):
    try:
        if hasattr(val, "values"):
            val = val.values[0]
        if hasattr(val, "num") and hasattr(val, "den"):
            return float(val.num) / float(val.den)
        if isinstance(val, str) and "/" in val:
            num, den = map(float, val.split("/"))
            return num / den
        return float(val)
    except (TypeError, ValueError, IndexError, ZeroDivisionError):
        return None


def dms_to_decimal(dms, ref):
    if not isinstance(dms, (list, tuple)) or not dms:
        return None
    degrees = get_float(dms[0])
    minutes = get_float(dms[1]) if len(dms) > 1 else 0.0
    seconds = get_float(dms[2]) if len(dms) > 2 else 0.0
    if degrees is None or minutes is None or seconds is None:
        return None
    decimal = degrees + (minutes / 60.0) + (seconds / 3600.0)
    if ref in ["S", "W"]:
        decimal = -decimal
    return decimal


def _ref_of(tags, key):
    tag = tags.get(key)
    if tag is None:
        return None
    ref = tag.values
    if isinstance(ref, (list, tuple)):
        ref = ref[0] if ref else None
    return str(ref).strip().upper() if ref is not None else None


def _format_number(value):
    return f"{value:.7f}".rstrip("0").rstrip(".")


def _describe(key, tag, tags):
    """Human-readable text for one exifread tag."""
    name = key.split(" ", 1)[-1]
    printable = str(tag.printable).strip() if tag.printable is not None else ""

    if name in ("GPSLatitude", "GPSLongitude"):
        decimal = dms_to_decimal(tag.values, _ref_of(tags, key + "Ref"))
        return _format_number(decimal) if decimal is not None else printable

    if name == "FNumber":
        f = get_float(tag)
        return f"f/{f:g}" if f is not None else printable

    if name == "FocalLength":
        focal = get_float(tag)
        return f"{focal:g} mm" if focal is not None else printable

    if name == "GPSAltitude":
        alt = get_float(tag)
        if alt is None:
            return printable
        # GPSAltitudeRef 1 means below sea level
        if _ref_of(tags, "GPS GPSAltitudeRef") == "1":
            alt = -alt
        return f"{alt:g} m"

    return printable


def normalize_tags(tags):
    """Turn exifread output into a snapshot keyed by bare tag name."""
    pairs = []
    for key, tag in tags.items():
        if key in SKIPPED_KEYS or not hasattr(tag, "values"):
            continue
        group, _, name = key.partition(" ")
        if not name:
            name = group
        if group in SKIPPED_GROUPS:
            continue
        pairs.append((name, TagRecord(name, _describe(key, tag, tags), tag.values)))
    return MetadataSnapshot(pairs)


def read_metadata(data):
    """Decode EXIF tags from the raw bytes of an image file."""
    try:
        tags = exifread.process_file(io.BytesIO(data), details=False)
    except Exception as e:
        raise ExifDecodeError(f"EXIF decode failed: {e}") from e

    if not tags:
        raise ExifDecodeError("No EXIF metadata found")

    try:
        snapshot = normalize_tags(tags)
    except Exception as e:
        raise ExifDecodeError(f"Malformed EXIF tags: {e}") from e
    logger.debug("Decoded {} EXIF tags", len(snapshot))
    return snapshot


def get_capture_date_time(snapshot):
    for name in ("DateTimeOriginal", "DateTime"):
        record = snapshot.get(name) if snapshot is not None else None
        if record is None or record.display.is_absent:
            continue
        try:
            dt = datetime.strptime(record.display.text.strip(), DATE_FORMAT)
        except ValueError:
            continue
        return dt.date(), dt.time()
    return None, None
