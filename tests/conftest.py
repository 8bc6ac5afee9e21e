import pytest

from scripts import map_view
from scripts.metadata import MetadataSnapshot


@pytest.fixture
def make_snapshot():
    """Build a snapshot from ``{name: description}`` or ``{name: {"description", "value"}}``."""

    def _make(tags):
        normalized = {
            name: tag if isinstance(tag, dict) else {"description": tag}
            for name, tag in tags.items()
        }
        return MetadataSnapshot.from_mapping(normalized)

    return _make


@pytest.fixture
def gps_snapshot(make_snapshot):
    return make_snapshot({
        "Make": "Canon",
        "Model": "Canon EOS 5D",
        "GPSLatitude": "37.7749",
        "GPSLongitude": "-122.4194",
        "DateTimeOriginal": "2023:06:01 14:30:00",
    })


@pytest.fixture
def map_icons():
    map_view.init_map_icons()
    yield
