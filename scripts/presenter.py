# Turn a metadata snapshot into the lines each panel shows
from typing import NamedTuple, Tuple

import pandas as pd

from scripts.config import METADATA_GROUPS
from scripts.exif_utils import get_capture_date_time
from scripts.location import LATITUDE_TAG, LONGITUDE_TAG


class MetadataLine(NamedTuple):
    tag: str
    text: str


class MetadataGroup(NamedTuple):
    title: str
    lines: Tuple[MetadataLine, ...]


def _line(record):
    return MetadataLine(record.name, record.display.text)


def grouped_view(snapshot, groups=METADATA_GROUPS):
    """One entry per category; only tags present in the snapshot get a line."""
    result = []
    for title, names in groups:
        lines = tuple(_line(snapshot.get(name)) for name in names if name in snapshot)
        result.append(MetadataGroup(title, lines))
    return result


def full_view(snapshot):
    return [_line(record) for record in snapshot.records()]


def summary_view(snapshot):
    """Quick-look card: latitude, longitude and capture date when present."""
    lines = []
    for label, name in (("Latitude", LATITUDE_TAG), ("Longitude", LONGITUDE_TAG)):
        record = snapshot.get(name)
        if record is not None and not record.display.is_absent:
            lines.append(MetadataLine(label, record.display.text))

    date, time = get_capture_date_time(snapshot)
    if date is not None:
        lines.append(MetadataLine("Date", f"{date.isoformat()} {time.isoformat()}"))
    return lines


def metadata_dataframe(snapshot):
    return pd.DataFrame(full_view(snapshot), columns=["tag", "value"])


def metadata_csv(snapshot):
    return metadata_dataframe(snapshot).to_csv(index=False)
