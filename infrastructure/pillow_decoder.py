"""Pillow-backed metadata decoder.

Reads the base IFD, the Exif and GPS sub-IFDs and PNG text chunks of an
image and returns a MetadataBag of ``{"value": ..., "description": ...}``
records, the shape the core services consume. Optional pillow-heif support
enables HEIC/HEIF files.
"""

from __future__ import annotations

from fractions import Fraction
from numbers import Rational
from typing import Any

from loguru import logger
from PIL import ExifTags, Image

from core.models import MetadataBag
from core.services.interfaces import IMetadataDecoder
from core.services.tag_resolver import stringify

try:  # pragma: no cover - optional dependency
    from pillow_heif import register_heif_opener  # type: ignore

    register_heif_opener()
    PIL_HEIF_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    PIL_HEIF_AVAILABLE = False

EXIF_IFD_POINTER = 0x8769
GPS_IFD_POINTER = 0x8825

# Binary blobs with no text rendering.
SKIPPED_TAGS = {"MakerNote", "PrintImageMatching"}

# Pillow tag names that differ from the names the display layer expects.
TAG_ALIASES = {
    "ExifImageWidth": "PixelXDimension",
    "ExifImageHeight": "PixelYDimension",
}

# Enumerated EXIF values rendered as text.
VALUE_DESCRIPTIONS: dict[str, dict[int, str]] = {
    "ExposureProgram": {
        0: "Not defined",
        1: "Manual",
        2: "Normal program",
        3: "Aperture priority",
        4: "Shutter priority",
        5: "Creative program",
        6: "Action program",
        7: "Portrait mode",
        8: "Landscape mode",
    },
    "MeteringMode": {
        0: "Unknown",
        1: "Average",
        2: "Center-weighted",
        3: "Spot",
        4: "Multi-spot",
        5: "Pattern",
        6: "Partial",
    },
    "WhiteBalance": {0: "Auto", 1: "Manual"},
    "ExposureMode": {0: "Auto", 1: "Manual", 2: "Auto bracket"},
    "ColorSpace": {1: "sRGB", 2: "Adobe RGB", 65535: "Uncalibrated"},
    "SceneCaptureType": {0: "Standard", 1: "Landscape", 2: "Portrait", 3: "Night scene"},
    "Contrast": {0: "Normal", 1: "Low", 2: "High"},
    "Saturation": {0: "Normal", 1: "Low", 2: "High"},
    "Sharpness": {0: "Normal", 1: "Soft", 2: "Hard"},
    "CustomRendered": {0: "Normal process", 1: "Custom process"},
    "GainControl": {0: "None", 1: "Low gain up", 2: "High gain up", 3: "Low gain down", 4: "High gain down"},
    "SensingMethod": {
        1: "Not defined",
        2: "One-chip color area",
        3: "Two-chip color area",
        4: "Three-chip color area",
        5: "Color sequential area",
        7: "Trilinear",
        8: "Color sequential linear",
    },
}


def decode_bytes(data: bytes) -> str:
    """Decode a byte value, honoring the EXIF UserComment charset prefix."""
    if data.startswith(b"UNICODE\x00"):
        payload = data[8:]
        try:
            return payload.decode("utf-16-be")
        except UnicodeDecodeError:
            return payload.decode("utf-16-le", errors="ignore")
    if data.startswith(b"ASCII\x00\x00\x00"):
        data = data[8:]
    return data.decode("utf-8", errors="ignore")


def _clean_text(text: str) -> str:
    return text.replace("\x00", "").strip()


def _describe_rational(name: str, value: Rational) -> str:
    numerator, denominator = int(value.numerator), int(value.denominator)
    if denominator == 0:
        return "0"
    if name == "ExposureTime" and 0 < numerator < denominator:
        reduced = Fraction(numerator, denominator)
        if reduced.numerator == 1:
            return f"1/{reduced.denominator}"
    return stringify(round(numerator / denominator, 4))


def _to_record(name: str, value: Any) -> dict[str, Any] | None:
    """Convert one Pillow tag value into a tag record; None to skip it."""
    if isinstance(value, bytes):
        text = _clean_text(decode_bytes(value))
        return {"value": text, "description": text} if text else None
    if isinstance(value, str):
        text = _clean_text(value)
        return {"value": text, "description": text}
    if isinstance(value, Rational) and not isinstance(value, int):
        return {
            "value": [int(value.numerator), int(value.denominator)],
            "description": _describe_rational(name, value),
        }
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        described = VALUE_DESCRIPTIONS.get(name, {}).get(int(value)) if isinstance(value, int) else None
        return {"value": value, "description": described or stringify(value)}
    if isinstance(value, tuple):
        items: list[Any] = []
        descriptions: list[str] = []
        for element in value:
            record = _to_record(name, element)
            if record is None:
                continue
            items.append(record["value"])
            descriptions.append(str(record["description"]))
        return {"value": items, "description": ", ".join(descriptions)}
    return None


class PillowMetadataDecoder(IMetadataDecoder):
    """Decode image metadata with Pillow."""

    def decode(self, path: str) -> MetadataBag:
        """Return the MetadataBag of the image at `path`.

        Raises:
            OSError: If Pillow cannot open the file (includes
                `PIL.UnidentifiedImageError`).
        """
        bag: dict[str, Any] = {}
        with Image.open(path) as im:
            bag["Image Width"] = {"value": im.width, "description": str(im.width)}
            bag["Image Height"] = {"value": im.height, "description": str(im.height)}
            self._add_text_chunks(bag, im.info)
            self._add_exif(bag, im.getexif())
        logger.debug("Decoded {} tags from {}", len(bag), path)
        return bag

    @staticmethod
    def _add_text_chunks(bag: dict[str, Any], info: dict[str, Any]) -> None:
        for key, value in info.items():
            if isinstance(value, str) and value.strip():
                bag[key] = {"value": value, "description": value}

    def _add_exif(self, bag: dict[str, Any], exif: Image.Exif) -> None:
        self._add_ifd(bag, dict(exif), ExifTags.TAGS)
        try:
            self._add_ifd(bag, exif.get_ifd(EXIF_IFD_POINTER), ExifTags.TAGS)
            self._add_ifd(bag, exif.get_ifd(GPS_IFD_POINTER), ExifTags.GPSTAGS)
        except (KeyError, ValueError, TypeError) as ex:
            logger.warning("Sub-IFD read failed: {}", ex)

    @staticmethod
    def _add_ifd(bag: dict[str, Any], ifd: dict[int, Any], names: dict[int, str]) -> None:
        for tag_id, value in ifd.items():
            if tag_id in (EXIF_IFD_POINTER, GPS_IFD_POINTER):
                continue
            name = names.get(tag_id)
            if name is None or name in SKIPPED_TAGS:
                continue
            name = TAG_ALIASES.get(name, name)
            record = _to_record(name, value)
            if record is not None:
                bag[name] = record
