"""View model exposing derived display fields for one loaded file."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import cached_property

from core.models import (
    AIGenerationData,
    CameraInfo,
    DerivedDisplayFields,
    DescriptionInfo,
    DisplayGroup,
    DisplayItem,
    FileInfo,
    GPSCoordinate,
    MetadataBag,
    StatItem,
)
from core.services import display_service
from core.services.ai_parameter_service import DEFAULT_PARAMETER_TAGS, find_ai_parameters
from core.services.gps_service import gps_display_items, maps_url, reconstruct_gps
from core.services.group_service import settings_group
from infrastructure.raw_export import to_raw_json


@dataclass
class MetadataVM:
    """Expose convenient properties for presentation code.

    Projections are computed lazily from the immutable bag and cached for the
    lifetime of this object, which lives no longer than one loaded file.
    """

    metadata: MetadataBag | None
    file: FileInfo | None = None
    ai_tags: Iterable[str] = field(default=DEFAULT_PARAMETER_TAGS)

    @cached_property
    def fields(self) -> DerivedDisplayFields:
        return display_service.build_display_fields(self.metadata, self.file)

    @property
    def headline(self) -> str:
        return self.fields.headline

    @property
    def camera_info(self) -> CameraInfo:
        return self.fields.camera_info

    @property
    def stats(self) -> list[StatItem]:
        return self.fields.stats

    @property
    def technical_specs(self) -> str:
        return self.fields.technical_specs

    @property
    def capture_string(self) -> str | None:
        return self.fields.capture_string

    @property
    def edit_string(self) -> str | None:
        return self.fields.edit_string

    @property
    def description_info(self) -> DescriptionInfo:
        return self.fields.description_info

    @property
    def groups(self) -> list[DisplayGroup]:
        """Grid sections that have at least one value."""
        return self.fields.groups

    @cached_property
    def gps(self) -> GPSCoordinate | None:
        return reconstruct_gps(self.metadata)

    @property
    def gps_items(self) -> list[DisplayItem]:
        return gps_display_items(self.gps, self.metadata)

    @property
    def maps_url(self) -> str | None:
        return maps_url(self.gps) if self.gps else None

    @cached_property
    def ai_data(self) -> AIGenerationData | None:
        return find_ai_parameters(self.metadata, self.ai_tags)

    @property
    def ai_settings_group(self) -> DisplayGroup | None:
        return settings_group(self.ai_data)

    @property
    def has_context(self) -> bool:
        """True when the "Image Context" block has anything to show."""
        return bool(self.capture_string or self.technical_specs or self.edit_string)

    @property
    def raw_json(self) -> str:
        return to_raw_json(self.metadata)
