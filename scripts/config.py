# Centralize configuration constants
import os


def get_setting(name, default=None):
    """Look up a deployment setting in Streamlit secrets, then the environment"""
    value = None

    try:
        import streamlit as st
        if hasattr(st, 'secrets'):
            value = st.secrets.get(name)
    except Exception:
        # No secrets.toml outside of a deployed app
        pass

    if value is None:
        value = os.getenv(name)

    return default if value is None else value


# File picker constraints
ACCEPTED_IMAGE_TYPES = ["jpg", "jpeg", "png", "tif", "tiff", "webp", "heic"]
PREVIEW_WIDTH_PERCENT = 45

# Tags of interest per panel, rendered in this order
METADATA_GROUPS = (
    ("📍 Location", ("GPSLatitude", "GPSLongitude", "GPSAltitude")),
    ("📷 Camera Info", ("Make", "Model", "LensModel")),
    ("🔧 Shooting Settings", ("ExposureTime", "FNumber", "ISOSpeedRatings")),
    ("🗓️ Date & Time", ("DateTimeOriginal", "DateTime")),
    ("🖼️ Image Properties", ("Orientation", "ImageWidth", "ImageHeight")),
)

# Map rendering
MAP_TILES = get_setting("EXIF_VIEWER_MAP_TILES", "OpenStreetMap")
MAP_ZOOM_START = int(get_setting("EXIF_VIEWER_MAP_ZOOM", 13))
MAP_HEIGHT = 420
COORDINATE_DECIMALS = 6

LOG_LEVEL = get_setting("EXIF_VIEWER_LOG_LEVEL", "INFO")
