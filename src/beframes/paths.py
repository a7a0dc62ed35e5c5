"""
Render output path resolution.

Both job types build a path template first and resolve its placeholders
second:

    Blender path, stable:   <scene output dir>/<prefix>_######
    Blender path, versioned: <scene output dir>/{timestamp}/<prefix>_######
    Root based, stable:     <root>/<last N blend dirs>/<job name>/<prefix>_######
    Root based, versioned:  <root>/<last N blend dirs>/<job name>/{timestamp}/<prefix>_######

The "######" token is Blender's frame number padding and is left alone.
Paths are handled as pure paths only; nothing here touches the filesystem.
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Dict, Tuple, Type

from .models import JobSettings, JobType

logger = logging.getLogger(__name__)

FRAME_PADDING = "######"
DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d_%H%M%S"
BLENDER_RELATIVE_PREFIX = "//"

_PLACEHOLDER_RE = re.compile(r"{([^}]+)}")
_WINDOWS_PATH_RE = re.compile(r"^(?:[A-Za-z]:[\\/]|\\\\)")


class Placeholder(str, Enum):
    """Placeholders understood in render output path templates"""
    TIMESTAMP = "timestamp"

    @property
    def token(self) -> str:
        return "{" + self.value + "}"


@dataclass(frozen=True)
class ResolvedOutput:
    """Render output path of a job, before and after placeholder resolution"""
    template: str
    path: str
    directory: str

    @property
    def filename(self) -> str:
        return _flavor_for(self.path)(self.path).name


def _flavor_for(path_text: str) -> Type[PurePath]:
    """Windows semantics for drive letter and UNC paths, POSIX for the rest."""
    if _WINDOWS_PATH_RE.match(path_text or ""):
        return PureWindowsPath
    return PurePosixPath


def _has_trailing_separator(path_text: str) -> bool:
    return path_text.endswith(("/", "\\"))


def split_scene_output(output_path: str) -> Tuple[PurePath, str]:
    """
    Split Blender's scene output path into (directory, filename prefix).

    "/proj/render/Anim03" -> ("/proj/render", "Anim03"). A trailing separator
    means the whole path is a directory and the prefix is empty.
    """
    if output_path.startswith(BLENDER_RELATIVE_PREFIX):
        output_path = output_path.replace("\\", "/")
    path = _flavor_for(output_path)(output_path)
    if _has_trailing_separator(output_path):
        return path, ""
    return path.parent, path.name


def last_n_dir_parts(blendfile: str, n: int) -> Tuple[str, ...]:
    """Last n folder names of the directory holding the blend file, in order."""
    if n <= 0:
        return ()
    parent = _flavor_for(blendfile)(blendfile).parent
    parts = [p for p in parent.parts if p != parent.anchor]
    return tuple(parts[-n:])


def absolute_root(root: str, blendfile: str) -> PurePath:
    """Resolve a Blender-relative ("//") root against the blend file's folder."""
    root = root.strip()
    if root.startswith(BLENDER_RELATIVE_PREFIX):
        blend_dir = _flavor_for(blendfile)(blendfile).parent
        return blend_dir.joinpath(*re.split(r"[\\/]+", root[len(BLENDER_RELATIVE_PREFIX):]))
    return _flavor_for(root)(root)


def build_output_template(settings: JobSettings) -> str:
    """Build the render output path template for a job."""
    scene_dir, prefix = split_scene_output(settings.scene_output_path)

    if settings.job_type is JobType.ROOT_BASED:
        base = absolute_root(settings.render_output_root, settings.blendfile)
        base = base.joinpath(
            *last_n_dir_parts(settings.blendfile, settings.add_path_components)
        )
        base = base / settings.job_name
    else:
        base = scene_dir

    if not settings.stable_directory:
        base = base / Placeholder.TIMESTAMP.token

    return str(base / f"{prefix}_{FRAME_PADDING}")


def format_timestamp(created: datetime, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Format a job creation time in local time."""
    if created.tzinfo is not None:
        created = created.astimezone()
    return created.strftime(fmt)


def resolve_template(template: str, values: Dict[Placeholder, str]) -> str:
    """
    Replace known placeholders in a template.

    Unknown placeholders such as "{shot}" are kept verbatim.
    """
    known = {p.value: v for p, v in values.items()}

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key in known:
            return known[key]
        return match.group(0)

    return _PLACEHOLDER_RE.sub(_replace, template)


def resolve_output_path(
    settings: JobSettings,
    created: datetime,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> ResolvedOutput:
    """
    Compute the job's final render output path.

    created is the job creation time; every task of the job shares it, so all
    chunks land in the same directory.
    """
    template = build_output_template(settings)
    path = resolve_template(
        template,
        {Placeholder.TIMESTAMP: format_timestamp(created, timestamp_format)},
    )
    directory = str(_flavor_for(path)(path).parent)

    logger.info("Render output for %s job: %s", settings.job_type.value, path)
    return ResolvedOutput(template=template, path=path, directory=directory)
