"""
Data models for BeFrames job compilation.

Everything here is an immutable value built fresh for each compile call and
handed to the scheduler right after; nothing is persisted or mutated later.
"""
import logging
from dataclasses import dataclass, field, fields, asdict, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidSettingError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 20
MAX_PATH_COMPONENTS = 32


class JobType(str, Enum):
    """Output addressing mode of a job"""
    BLENDER_PATH = "blender-path"  # Render into the scene's own output directory
    ROOT_BASED = "root-based"      # Render under a central farm output root

    @property
    def label(self) -> str:
        return {
            JobType.BLENDER_PATH: "BeFrames_BlenderPath_v8",
            JobType.ROOT_BASED: "BeFrames_RootBased_v8",
        }[self]

    @property
    def description(self) -> str:
        return {
            JobType.BLENDER_PATH: "Render to Blender Output Path (best for Resolve overwrite workflow)",
            JobType.ROOT_BASED: "Render to a central Render Output Root (classic farm output layout)",
        }[self]

    def defaults(self) -> Dict[str, Any]:
        """Submission defaults for settings the user usually leaves alone"""
        if self is JobType.BLENDER_PATH:
            return {
                "chunk_size": DEFAULT_CHUNK_SIZE,
                "force_overwrite": True,
                "stable_directory": True,
            }
        return {
            "chunk_size": DEFAULT_CHUNK_SIZE,
            "force_overwrite": False,
            "stable_directory": False,
            "add_path_components": 0,
        }


@dataclass(frozen=True)
class SceneContext:
    """
    Values read from the open Blender scene at submission time.

    The host (the Blender add-on) fills this in; the compiler never talks to
    Blender itself.
    """
    frame_start: int
    frame_end: int
    output_path: str
    image_format: str
    name: str = ""
    file_extension: str = ""
    fps: float = 24.0
    fps_base: float = 1.0

    def __post_init__(self) -> None:
        if self.fps_base <= 0:
            raise InvalidSettingError(f"fps_base must be positive, got {self.fps_base}")

    @property
    def frames(self) -> str:
        return f"{self.frame_start}-{self.frame_end}"

    @property
    def effective_fps(self) -> float:
        return self.fps / self.fps_base


@dataclass(frozen=True)
class JobSettings:
    """
    Settings of one job submission.

    render_output_path is empty until the path resolver fills it in; the
    compiler returns a copy carrying the resolved value.
    """
    job_type: JobType
    frames: str = ""
    blendfile: str = ""
    format: str = ""
    chunk_size: int = DEFAULT_CHUNK_SIZE
    force_overwrite: bool = False
    stable_directory: bool = False
    scene: str = ""
    scene_output_path: str = ""
    render_output_root: str = ""
    add_path_components: int = 0
    job_name: str = ""
    image_file_extension: str = ""
    fps: Optional[float] = None
    render_output_path: str = ""

    @classmethod
    def create(cls, job_type: JobType, **values: Any) -> "JobSettings":
        """Create settings with the job type's submission defaults applied"""
        job_type = JobType(job_type)
        merged = {**job_type.defaults(), **values}
        return cls(job_type=job_type, **merged)

    @classmethod
    def from_scene(
        cls,
        job_type: JobType,
        scene: SceneContext,
        blendfile: str,
        **overrides: Any,
    ) -> "JobSettings":
        """Derive settings from the scene, then apply user overrides"""
        derived = {
            "frames": scene.frames,
            "blendfile": blendfile,
            "format": scene.image_format,
            "scene": scene.name,
            "scene_output_path": scene.output_path,
            "image_file_extension": scene.file_extension,
            "fps": scene.effective_fps,
        }
        derived.update(overrides)
        return cls.create(job_type, **derived)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        job_type: Optional[JobType] = None,
    ) -> "JobSettings":
        """
        Build settings from a submission mapping (JSON file, HTTP body).

        A "job_type" key in the mapping is used unless job_type is given.
        Unknown keys are ignored.
        """
        values = dict(data)
        document_type = values.pop("job_type", None)
        chosen = job_type or document_type or JobType.BLENDER_PATH

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.debug("Ignoring unknown job settings: %s", ", ".join(unknown))

        return cls.create(chosen, **{k: v for k, v in values.items() if k in known})

    def with_render_output_path(self, render_output_path: str) -> "JobSettings":
        return replace(self, render_output_path=render_output_path)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["job_type"] = self.job_type.value
        return d


@dataclass(frozen=True)
class Chunk:
    """A run of frames rendered by one task"""
    frames: Tuple[int, ...]
    range_text: str  # Display form, e.g. "1-3,7"

    @property
    def count(self) -> int:
        return len(self.frames)

    @property
    def renderer_range(self) -> str:
        """Range in Blender's --render-frame syntax ("1..3,7")"""
        return self.range_text.replace("-", "..")


@dataclass(frozen=True)
class CommandDescriptor:
    """
    One command executed by a worker.

    exe and exe_args are variables expanded by the farm manager from its own
    configuration; they are never resolved here.
    """
    blendfile: str
    args: Tuple[str, ...]
    name: str = "blender-render"
    exe: str = "{blender}"
    exe_args: str = "{blenderArgs}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": {
                "exe": self.exe,
                "exeArgs": self.exe_args,
                "blendfile": self.blendfile,
                "args": list(self.args),
            },
        }


@dataclass(frozen=True)
class TaskDescriptor:
    """A schedulable unit of work carrying exactly one command"""
    name: str
    frame_count: int
    command: CommandDescriptor
    task_type: str = "blender"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.task_type,
            "frame_count": self.frame_count,
            "commands": [self.command.to_dict()],
        }


@dataclass(frozen=True)
class CompiledJob:
    """Result of compiling a job: resolved settings plus its ordered tasks"""
    settings: JobSettings
    created: datetime
    render_output_dir: str
    tasks: Tuple[TaskDescriptor, ...] = field(default_factory=tuple)

    @property
    def total_frames(self) -> int:
        return sum(t.frame_count for t in self.tasks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_type": self.settings.job_type.value,
            "label": self.settings.job_type.label,
            "name": self.settings.job_name,
            "created": self.created.isoformat(),
            "settings": self.settings.to_dict(),
            "render_output_path": self.settings.render_output_path,
            "render_output_dir": self.render_output_dir,
            "total_frames": self.total_frames,
            "tasks": [t.to_dict() for t in self.tasks],
        }
