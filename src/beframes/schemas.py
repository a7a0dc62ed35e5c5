"""
Typed submission schemas.

Submission documents come from JSON files and HTTP bodies, so setting types
are checked here before anything reaches the compiler. Models are strict:
"2" is not accepted where an int is expected.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import DEFAULT_CHUNK_SIZE, SceneContext


class SceneContextModel(BaseModel):
    """Scene values read by the Blender add-on"""
    model_config = ConfigDict(strict=True)

    frame_start: int
    frame_end: int
    output_path: str
    image_format: str
    name: str = ""
    file_extension: str = ""
    fps: float = Field(default=24.0, gt=0)
    fps_base: float = Field(default=1.0, gt=0)

    def to_scene(self) -> SceneContext:
        return SceneContext(**self.model_dump())


class SettingsModel(BaseModel):
    """
    Job settings as submitted.

    Every field is optional; missing required settings are reported by the
    validator for the job type. Unknown keys are ignored.
    """
    model_config = ConfigDict(strict=True, extra="ignore")

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

    def to_values(self) -> Dict[str, Any]:
        """Only the settings that were submitted, so job type defaults still apply"""
        return self.model_dump(exclude_unset=True)
