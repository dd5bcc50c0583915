"""Core domain models for metadata bags and derived display data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Union

# A decoder's output for one file: tag name -> tag record (loosely typed).
MetadataBag = Mapping[str, Any]

Primitive = Union[str, Real]


@dataclass(frozen=True)
class PrimitiveTag:
    """A tag the decoder stored as a bare string or number."""

    value: Primitive


@dataclass(frozen=True)
class ValuedTag:
    """A tag object without a usable description.

    `value` is either a primitive or a sequence of arbitrary elements; only
    primitive elements are meaningful for display.
    """

    value: Primitive | Sequence[Any] | None


@dataclass(frozen=True)
class DescribedTag:
    """A tag object carrying a decoder-rendered description.

    `fallback` holds the raw value side, consulted when the description is
    rejected as a display value.
    """

    description: str
    fallback: ValuedTag | None = None


TagRecord = Union[PrimitiveTag, DescribedTag, ValuedTag]


@dataclass(frozen=True)
class FileInfo:
    """Minimal description of the loaded file (no platform handle)."""

    name: str
    size: int
    type: str


@dataclass(frozen=True)
class GPSCoordinate:
    """Signed decimal-degree position with its hemisphere references."""

    lat: float
    lng: float
    lat_ref: str = "N"
    lng_ref: str = "E"


@dataclass
class AIGenerationData:
    """Normalized AI generation parameters from either supported dialect."""

    prompt: str = ""
    negative_prompt: str = ""
    settings: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CameraInfo:
    camera: str = ""
    lens: str = ""
    subtitle: str = ""


@dataclass(frozen=True)
class StatItem:
    label: str
    value: str


@dataclass(frozen=True)
class DescriptionInfo:
    """Description and rights bundle.

    Attributes:
        description: Image description, if any.
        copyright: Copyright notice, if any.
        artist: Artist/creator, if any.
        has_content: True when at least one of the three is present.
    """

    description: str | None = None
    copyright: str | None = None
    artist: str | None = None
    has_content: bool = False


@dataclass(frozen=True)
class GridItem:
    """Input row of a grid section: a label, a raw tag record and an icon key."""

    label: str
    raw_tag: Any
    icon: str


@dataclass(frozen=True)
class DisplayItem:
    label: str
    value: str
    icon: str


@dataclass
class DisplayGroup:
    """A titled grid section holding only items that resolved to a value."""

    title: str
    items: list[DisplayItem] = field(default_factory=list)


@dataclass
class DerivedDisplayFields:
    """Every display projection derived from one bag (and optionally its file)."""

    headline: str
    camera_info: CameraInfo
    stats: list[StatItem]
    technical_specs: str
    capture_string: str | None
    edit_string: str | None
    description_info: DescriptionInfo
    groups: list[DisplayGroup] = field(default_factory=list)
