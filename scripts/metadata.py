# Tag records and the per-image metadata snapshot

from dataclasses import dataclass, field
from typing import Any, Optional

DESCRIBED = "described"
RAW_ONLY = "raw_only"
ABSENT = "absent"


@dataclass(frozen=True)
class DisplayText:
    """What a tag shows on screen: its description, its raw value, or nothing."""

    kind: str
    text: str = ""

    @classmethod
    def described(cls, text):
        return cls(DESCRIBED, text)

    @classmethod
    def raw_only(cls, text):
        return cls(RAW_ONLY, text)

    @classmethod
    def absent(cls):
        return cls(ABSENT)

    @property
    def is_absent(self):
        return self.kind == ABSENT


def _value_to_text(value):
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore").strip("\x00 ")
    if isinstance(value, (list, tuple)):
        return ", ".join(_value_to_text(v) for v in value)
    return str(value)


def display_text_for(description, value):
    if description:
        return DisplayText.described(description)
    if value is not None:
        return DisplayText.raw_only(_value_to_text(value))
    return DisplayText.absent()


@dataclass(frozen=True)
class TagRecord:
    """One decoded EXIF tag. `display` is fixed when the record is built."""

    name: str
    description: Optional[str] = None
    value: Any = None
    display: DisplayText = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "display", display_text_for(self.description, self.value))


class MetadataSnapshot:
    """
    All tags decoded from one image, kept in decoder order.

    Stored as an ordered sequence of (name, record) pairs so the full listing
    is deterministic. Duplicate names keep the first record.
    """

    __slots__ = ("_pairs", "_index")

    def __init__(self, pairs=()):
        kept = []
        index = {}
        for name, record in pairs:
            if name in index:
                continue
            index[name] = record
            kept.append((name, record))
        self._pairs = tuple(kept)
        self._index = index

    @classmethod
    def from_pairs(cls, pairs):
        return cls(pairs)

    @classmethod
    def from_mapping(cls, tags):
        """Build from ``{name: {"description": ..., "value": ...}}``."""
        return cls(
            (name, TagRecord(name, tag.get("description"), tag.get("value")))
            for name, tag in tags.items()
        )

    def get(self, name):
        return self._index.get(name)

    def items(self):
        return self._pairs

    def records(self):
        return tuple(record for _, record in self._pairs)

    def __contains__(self, name):
        return name in self._index

    def __iter__(self):
        return (name for name, _ in self._pairs)

    def __len__(self):
        return len(self._pairs)

    def __repr__(self):
        return f"MetadataSnapshot({len(self)} tags)"
