"""ViewModel owning the application state for the currently loaded image."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from app.viewmodels.metadata_vm import MetadataVM
from core.models import FileInfo, MetadataBag
from core.services.ai_parameter_service import DEFAULT_PARAMETER_TAGS, has_ai_metadata
from core.services.interfaces import IMetadataDecoder
from infrastructure.file_info import get_file_info, is_image

VIEW_MODES = ("formatted", "raw", "ai")

INVALID_FILE_ERROR = "Please select a valid image file (JPEG, PNG, TIFF)."
NO_METADATA_ERROR = "No EXIF metadata found."
LOAD_FAILED_ERROR = "Failed to load EXIF data: {}"


@dataclass
class AppState:
    """Everything the presentation layer needs to know about the session."""

    file: FileInfo | None = None
    source_path: str | None = None
    metadata: MetadataBag | None = None
    loading: bool = False
    error: str | None = None
    view_mode: str = "formatted"
    is_detail_view: bool = False


class MainVM:
    """Main application view-model.

    Mediates between a decoder producing MetadataBags and the presentation
    layer. State is owned by the instance and replaced wholesale on each load.
    """

    def __init__(
        self,
        decoder: IMetadataDecoder,
        ai_tags: Iterable[str] | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            decoder: Decoder with a `decode(path)` method.
            ai_tags: Raw tag names searched for AI generation parameters.
        """
        self._decoder = decoder
        self._ai_tags = tuple(ai_tags) if ai_tags else DEFAULT_PARAMETER_TAGS
        self.state = AppState()

    def process_file(self, path: str) -> bool:
        """Load `path` and update the state. Returns True when metadata was loaded."""
        try:
            file = get_file_info(path)
        except OSError as ex:
            logger.warning("Cannot stat {}: {}", path, ex)
            self.state = AppState(error=LOAD_FAILED_ERROR.format(ex))
            return False

        if not is_image(file):
            logger.info("Rejected non-image file {} ({})", path, file.type or "unknown type")
            self.state = AppState(error=INVALID_FILE_ERROR)
            return False

        self.state = AppState(file=file, source_path=path, loading=True)
        try:
            tags = self._decoder.decode(path)
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.error("Metadata decode failed for {}: {}", path, ex)
            self.state.loading = False
            self.state.error = LOAD_FAILED_ERROR.format(ex)
            return False

        self.state.loading = False
        self.state.metadata = tags
        self.state.error = None if tags else NO_METADATA_ERROR
        self.state.view_mode = "ai" if has_ai_metadata(tags, self._ai_tags) else "formatted"
        logger.info(
            "Loaded {} tags from {} (view: {})", len(tags or {}), file.name, self.state.view_mode
        )
        return bool(tags)

    def reset(self) -> None:
        """Clear the current file and all derived state."""
        self.state = AppState()

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        self.state.view_mode = mode

    def toggle_detail_view(self) -> bool:
        self.state.is_detail_view = not self.state.is_detail_view
        return self.state.is_detail_view

    def current_view(self) -> MetadataVM | None:
        """Projection of the loaded metadata, or None when nothing is loaded."""
        if self.state.metadata is None:
            return None
        return MetadataVM(self.state.metadata, self.state.file, self._ai_tags)

    @property
    def has_metadata(self) -> bool:
        return bool(self.state.metadata)
