"""Derived display fields built from a metadata bag.

All builders accept a None bag and return neutral values instead of raising.
Tag access goes through `tag_resolver` only.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from core.models import (
    CameraInfo,
    DerivedDisplayFields,
    DescriptionInfo,
    FileInfo,
    MetadataBag,
    StatItem,
)
from core.services.date_service import format_date
from core.services.group_service import build_metadata_groups
from core.services.tag_resolver import resolve_first, resolve_tag

UNKNOWN_HEADLINE = "Unknown Image"
SEPARATOR = " • "
BYTES_PER_MB = 1024 * 1024

# (label, tag, template); a None template shows the value as-is.
_STAT_FIELDS: list[tuple[str, str, str | None]] = [
    ("Aperture", "FNumber", "f/{}"),
    ("Shutter", "ExposureTime", "{}s"),
    ("ISO", "ISOSpeedRatings", "ISO {}"),
    ("Focal Length", "FocalLength", None),
]


def get_camera_info(bag: MetadataBag | None) -> CameraInfo:
    """Camera ("Make Model"), lens and the combined subtitle."""
    if not bag:
        return CameraInfo()
    camera = " ".join(
        part for part in (resolve_tag(bag, "Make"), resolve_tag(bag, "Model")) if part
    )
    lens = resolve_tag(bag, "LensModel") or ""
    subtitle = SEPARATOR.join(part for part in (camera, lens) if part)
    return CameraInfo(camera=camera, lens=lens, subtitle=subtitle)


def calculate_camera_stats(bag: MetadataBag | None) -> list[StatItem]:
    """Headline exposure stats, keeping only those the bag provides."""
    if not bag:
        return []
    stats: list[StatItem] = []
    for label, tag, template in _STAT_FIELDS:
        value = resolve_tag(bag, tag)
        if value is None:
            continue
        stats.append(StatItem(label, template.format(value) if template else value))
    return stats


def _file_extension(file: FileInfo) -> str:
    _, _, subtype = file.type.partition("/")
    if subtype:
        return subtype.upper()
    return PurePosixPath(file.name).suffix.lstrip(".").upper()


def get_technical_specs(bag: MetadataBag | None, file: FileInfo | None) -> str:
    """Dimensions and file size/type, e.g. "4000 x 3000 px • 2.50 MB JPEG"."""
    segments: list[str] = []
    width = resolve_tag(bag, "PixelXDimension")
    height = resolve_tag(bag, "PixelYDimension")
    if width is not None and height is not None:
        segments.append(f"{width} x {height} px")
    if file is not None:
        size = f"{file.size / BYTES_PER_MB:.2f} MB"
        extension = _file_extension(file)
        segments.append(f"{size} {extension}" if extension else size)
    return SEPARATOR.join(segments)


def get_capture_info(bag: MetadataBag | None) -> str | None:
    if not bag:
        return None
    taken = format_date(resolve_first(bag, "DateTimeOriginal", "DateTime"))
    return f"Taken on {taken}" if taken else None


def get_edit_info(bag: MetadataBag | None) -> str | None:
    if not bag:
        return None
    software = resolve_tag(bag, "Software")
    if software is None:
        return None
    edited = format_date(resolve_tag(bag, "ModifyDate"))
    return f"Edited with {software} on {edited}" if edited else f"Edited with {software}"


def get_description_info(bag: MetadataBag | None) -> DescriptionInfo:
    """Description, copyright and artist with a `has_content` summary flag."""
    if not bag:
        return DescriptionInfo()
    description = resolve_first(bag, "ImageDescription", "description")
    copyright_ = resolve_tag(bag, "Copyright")
    artist = resolve_tag(bag, "Artist")
    return DescriptionInfo(
        description=description,
        copyright=copyright_,
        artist=artist,
        has_content=any(v is not None for v in (description, copyright_, artist)),
    )


def get_headline(bag: MetadataBag | None, file: FileInfo | None) -> str:
    """IPTC headline, else the file name, else a placeholder."""
    headline = resolve_tag(bag, "Headline")
    if headline is not None:
        return headline
    if file is not None and file.name:
        return file.name
    return UNKNOWN_HEADLINE


def build_display_fields(
    bag: MetadataBag | None, file: FileInfo | None = None
) -> DerivedDisplayFields:
    """Compute every derived display field for one bag."""
    headline = get_headline(bag, file)
    return DerivedDisplayFields(
        headline=headline,
        camera_info=get_camera_info(bag),
        stats=calculate_camera_stats(bag),
        technical_specs=get_technical_specs(bag, file),
        capture_string=get_capture_info(bag),
        edit_string=get_edit_info(bag),
        description_info=get_description_info(bag),
        groups=build_metadata_groups(bag, headline),
    )
