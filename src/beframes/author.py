"""
Task authoring: one Blender render task per frame chunk.
"""
import logging
from typing import List, Sequence

from .models import Chunk, CommandDescriptor, JobSettings, TaskDescriptor
from .paths import ResolvedOutput

logger = logging.getLogger(__name__)

# Executed by Blender after the blend file is loaded and before --render-frame
# starts rendering. Workers run headless, so existing frames must be
# overwritten explicitly instead of being skipped.
FORCE_OVERWRITE_SCRIPT = (
    "import bpy\n"
    "for s in bpy.data.scenes:\n"
    "    s.render.use_overwrite = True\n"
    "    s.render.use_placeholder = False\n"
)


def task_name(chunk: Chunk) -> str:
    return f"render-{chunk.range_text}"


def build_render_args(settings: JobSettings, output: ResolvedOutput, chunk: Chunk) -> List[str]:
    """Blender CLI arguments for one chunk; order matters to Blender."""
    args: List[str] = []
    if settings.scene:
        args += ["--scene", settings.scene]
    if settings.force_overwrite:
        args += ["--python-expr", FORCE_OVERWRITE_SCRIPT]
    args += [
        "--render-output", output.path,
        "--render-format", settings.format,
        "--render-frame", chunk.renderer_range,
    ]
    return args


def author_render_tasks(
    settings: JobSettings,
    output: ResolvedOutput,
    chunks: Sequence[Chunk],
) -> List[TaskDescriptor]:
    """Build the job's tasks in chunk order."""
    tasks = []
    for chunk in chunks:
        command = CommandDescriptor(
            blendfile=settings.blendfile,
            args=tuple(build_render_args(settings, output, chunk)),
        )
        tasks.append(
            TaskDescriptor(
                name=task_name(chunk),
                frame_count=chunk.count,
                command=command,
            )
        )

    logger.info("Authored %d render tasks", len(tasks))
    return tasks
