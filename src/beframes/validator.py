"""
Domain validation of job settings.

Types are assumed correct (the submission layer checks them); this only
enforces the rules of each job type. Runs before any path or task work.
"""
import logging
from typing import Any

from .errors import (
    InvalidSettingError,
    MissingRequiredSettingError,
    UnsupportedFormatError,
)
from .models import JobSettings, JobType, MAX_PATH_COMPONENTS

logger = logging.getLogger(__name__)

VIDEO_FORMATS = frozenset({"FFMPEG", "AVI_RAW", "AVI_JPEG"})


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def _require(settings: JobSettings, key: str, message: str = "") -> None:
    if _is_blank(getattr(settings, key)):
        raise MissingRequiredSettingError(key, message)


def validate_settings(settings: JobSettings) -> None:
    """
    Raise the first violated rule for this job, or return None.

    Order: output format, required settings, path component count.
    """
    if settings.format in VIDEO_FORMATS:
        raise UnsupportedFormatError(settings.format)

    _require(settings, "format")
    _require(settings, "frames")
    _require(settings, "blendfile")

    if settings.job_type is JobType.ROOT_BASED:
        _require(
            settings,
            "render_output_root",
            "Render Output Root is required for the RootBased job type.",
        )
        _require(settings, "job_name", "A job name is required for the RootBased job type.")
    else:
        _require(
            settings,
            "scene_output_path",
            "The scene output path is required for the BlenderPath job type.",
        )

    if not 0 <= settings.add_path_components <= MAX_PATH_COMPONENTS:
        raise InvalidSettingError(
            f"add_path_components must be between 0 and {MAX_PATH_COMPONENTS}, "
            f"got {settings.add_path_components}"
        )

    logger.debug("Settings valid for %s job", settings.job_type.value)
