"""
BeFrames job compiler.

Two job types share one engine:

- blender-path: render into the scene's own output directory
- root-based: render under a central farm output root

Use compile_job() to turn JobSettings into a CompiledJob.
"""

from .. import __version__
from .compiler import compile_job
from .errors import (
    InvalidChunkSizeError,
    InvalidSettingError,
    JobCompileError,
    MalformedFrameRangeError,
    MissingRequiredSettingError,
    UnsupportedFormatError,
)
from .models import (
    Chunk,
    CommandDescriptor,
    CompiledJob,
    JobSettings,
    JobType,
    SceneContext,
    TaskDescriptor,
)

__all__ = [
    "__version__",
    "compile_job",
    "Chunk",
    "CommandDescriptor",
    "CompiledJob",
    "JobSettings",
    "JobType",
    "SceneContext",
    "TaskDescriptor",
    "InvalidChunkSizeError",
    "InvalidSettingError",
    "JobCompileError",
    "MalformedFrameRangeError",
    "MissingRequiredSettingError",
    "UnsupportedFormatError",
]
