"""Grid sections built with one filter-and-collapse rule.

Each section is a list of `GridItem` rows. A row survives only when its raw
tag resolves to a value, and a section with no surviving rows is dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from core.models import AIGenerationData, DisplayGroup, DisplayItem, GridItem, MetadataBag
from core.services.tag_resolver import get_tag, resolve, tag_is_present

# title -> rows of (label, candidate tag names, icon key)
METADATA_SECTIONS: list[tuple[str, list[tuple[str, tuple[str, ...], str]]]] = [
    (
        "Image Properties",
        [
            ("Image Width", ("Image Width",), "image"),
            ("Image Height", ("Image Height",), "image"),
            ("Bit Depth", ("Bit Depth",), "palette"),
            ("Color Type", ("Color Type",), "palette"),
            ("Compression", ("Compression",), "sliders"),
            ("Filter", ("Filter",), "focus"),
            ("Interlace", ("Interlace",), "sliders"),
        ],
    ),
    (
        "Capture Settings",
        [
            ("Exposure Program", ("ExposureProgram",), "sliders"),
            ("Metering Mode", ("MeteringMode",), "crosshair"),
            ("Flash", ("Flash",), "zap"),
            ("White Balance", ("WhiteBalance",), "sun"),
        ],
    ),
    (
        "Editorial",
        [
            ("Instructions", ("Instructions",), "file-text"),
            ("Credit", ("Credit",), "user"),
            ("Source", ("Source",), "globe"),
            ("Headline", ("Headline",), "type"),
        ],
    ),
    (
        "Image Quality & Processing",
        [
            ("Color Space", ("ColorSpace",), "palette"),
            ("Contrast", ("Contrast",), "contrast"),
            ("Saturation", ("Saturation",), "sparkle"),
            ("Sharpness", ("Sharpness",), "focus"),
            ("Scene Type", ("SceneCaptureType",), "camera"),
            ("Custom Rendered", ("CustomRendered",), "sliders"),
        ],
    ),
    (
        "Camera & Lens Details",
        [
            ("Camera Serial", ("SerialNumber", "InternalSerialNumber"), "camera"),
            ("Lens Serial", ("LensSerialNumber",), "aperture"),
            ("35mm Focal Length", ("FocalLengthIn35mmFormat",), "focus"),
            ("Sensing Method", ("SensingMethod",), "crosshair"),
            ("Owner Name", ("OwnerName",), "user"),
            ("Lens Make", ("LensMake",), "type"),
        ],
    ),
    (
        "Advanced Exposure",
        [
            ("Exposure Mode", ("ExposureMode",), "sliders"),
            ("Exposure Bias", ("ExposureBiasValue",), "sun"),
            ("Max Aperture", ("MaxApertureValue",), "aperture"),
            ("Subject Distance", ("SubjectDistance",), "focus"),
            ("Digital Zoom", ("DigitalZoomRatio",), "image"),
            ("Gain Control", ("GainControl",), "zap"),
        ],
    ),
]

GENERATION_SETTINGS_TITLE = "Generation Settings"


def collapse_group(title: str, items: Iterable[GridItem]) -> DisplayGroup | None:
    """Keep items whose raw tag resolves, in order; None when nothing survives."""
    kept: list[DisplayItem] = []
    for item in items:
        value = resolve(item.raw_tag)
        if value is not None:
            kept.append(DisplayItem(item.label, value, item.icon))
    if not kept:
        return None
    return DisplayGroup(title=title, items=kept)


def _first_present(bag: MetadataBag | None, names: tuple[str, ...]) -> Any:
    for name in names:
        tag = get_tag(bag, name)
        if tag_is_present(tag):
            return tag
    return None


def build_metadata_groups(bag: MetadataBag | None, headline: str | None = None) -> list[DisplayGroup]:
    """Build the standard grid sections for `bag`.

    The Headline row of the Editorial section is hidden when it repeats the
    page `headline`.
    """
    if not bag:
        return []
    groups: list[DisplayGroup] = []
    for title, rows in METADATA_SECTIONS:
        items: list[GridItem] = []
        for label, names, icon in rows:
            raw_tag = _first_present(bag, names)
            if label == "Headline" and resolve(raw_tag) == headline:
                raw_tag = None
            items.append(GridItem(label, raw_tag, icon))
        group = collapse_group(title, items)
        if group is not None:
            groups.append(group)
    return groups


def settings_group(ai_data: AIGenerationData | None) -> DisplayGroup | None:
    """AI generation settings through the same collapse rule."""
    if ai_data is None:
        return None
    items = [GridItem(key, value, "settings") for key, value in ai_data.settings.items()]
    return collapse_group(GENERATION_SETTINGS_TITLE, items)
