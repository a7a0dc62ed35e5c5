"""
Job compilation pipeline.

    validate -> resolve output path -> chunk frames -> author tasks

Each stage takes values and returns new ones. Any stage may raise a
JobCompileError, in which case no tasks are produced at all.
"""
import logging
from datetime import datetime
from typing import Optional

from .author import author_render_tasks
from .frames import MAX_FRAMES, chunk_frames
from .models import CompiledJob, JobSettings
from .paths import DEFAULT_TIMESTAMP_FORMAT, resolve_output_path
from .validator import validate_settings

logger = logging.getLogger(__name__)


def compile_job(
    settings: JobSettings,
    created: Optional[datetime] = None,
    strict_frame_ranges: bool = False,
    max_frames: int = MAX_FRAMES,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> CompiledJob:
    """
    Compile job settings into an ordered list of render tasks.

    Args:
        settings: Submitted job settings
        created: Job creation time; sampled now if not given. It is the only
            time source used, so all tasks share one timestamp directory.
        strict_frame_ranges: Reject overlapping or unsorted frame ranges
        max_frames: Largest frame count a job may span
        timestamp_format: strftime format of the {timestamp} folder

    Returns:
        CompiledJob with the resolved render_output_path and its tasks

    Raises:
        JobCompileError: On the first violated rule
    """
    if created is None:
        created = datetime.now().astimezone()

    logger.info(
        "Compiling %s job %r (frames %s, chunk size %s)",
        settings.job_type.value, settings.job_name, settings.frames, settings.chunk_size,
    )

    validate_settings(settings)

    output = resolve_output_path(settings, created, timestamp_format)
    resolved = settings.with_render_output_path(output.path)

    chunks = chunk_frames(
        resolved.frames,
        resolved.chunk_size,
        strict=strict_frame_ranges,
        max_frames=max_frames,
    )
    tasks = author_render_tasks(resolved, output, chunks)

    job = CompiledJob(
        settings=resolved,
        created=created,
        render_output_dir=output.directory,
        tasks=tuple(tasks),
    )
    logger.info("Created %d tasks (%d frames) for job %r", len(tasks), job.total_frames, settings.job_name)
    return job
