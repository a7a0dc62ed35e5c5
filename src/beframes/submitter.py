"""
Submission helpers shared by the CLI and the compile service.

A submission document is either a flat settings mapping:

    {"job_type": "root-based", "frames": "1-250", "blendfile": "...", ...}

or a scene-derived one, where the settings are computed from the scene and
the "settings" section overrides them:

    {
        "job_type": "blender-path",
        "blendfile": "/studio/shotA/scene.blend",
        "scene_context": {"frame_start": 1, "frame_end": 250, ...},
        "settings": {"chunk_size": 10}
    }
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from .client import SchedulerClient
from .compiler import compile_job
from .config import CompilerConfig
from .errors import JobCompileError
from .models import CompiledJob, JobSettings, JobType
from .schemas import SceneContextModel, SettingsModel

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Result of a compile or submit attempt."""
    ok: bool
    job: Optional[CompiledJob] = None
    scheduler_job: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d: Dict[str, Any] = {"ok": self.ok}
        if self.ok:
            if self.job is not None:
                d["job"] = self.job.to_dict()
            if self.scheduler_job is not None:
                d["scheduler_job"] = self.scheduler_job
        else:
            if self.error:
                d["error"] = self.error
            if self.hint:
                d["hint"] = self.hint
        return d


def load_settings(
    document: Dict[str, Any],
    config: CompilerConfig,
    job_type: Optional[str] = None,
    job_name: Optional[str] = None,
) -> JobSettings:
    """
    Build JobSettings from a submission document.

    Raises:
        ValidationError: If a setting has the wrong type
        ValueError: On an unknown job type or a bad scene context
    """
    chosen = JobType(job_type or document.get("job_type") or JobType.BLENDER_PATH)

    if "scene_context" in document:
        overrides = SettingsModel.model_validate(document.get("settings") or {}).to_values()
        overrides.setdefault("chunk_size", config.default_chunk_size)
        if document.get("job_name"):
            overrides.setdefault("job_name", document["job_name"])
        if job_name:
            overrides["job_name"] = job_name
        scene = SceneContextModel.model_validate(document["scene_context"]).to_scene()
        return JobSettings.from_scene(chosen, scene, document.get("blendfile", ""), **overrides)

    values = SettingsModel.model_validate(document).to_values()
    values.setdefault("chunk_size", config.default_chunk_size)
    if job_name:
        values["job_name"] = job_name
    return JobSettings.from_dict(values, job_type=chosen)


def _describe_validation_error(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'document'}: {err['msg']}"
        for err in error.errors()
    )


def compile_document(
    document: Dict[str, Any],
    config: CompilerConfig,
    job_type: Optional[str] = None,
    job_name: Optional[str] = None,
    created: Optional[datetime] = None,
) -> CompileResult:
    """Compile a submission document, reporting failures in the result."""
    try:
        settings = load_settings(document, config, job_type=job_type, job_name=job_name)
    except ValidationError as e:
        return CompileResult(
            ok=False,
            error=f"Invalid setting types: {_describe_validation_error(e)}",
            hint="Check the settings file against the job type's settings.",
        )
    except (TypeError, ValueError) as e:
        return CompileResult(
            ok=False,
            error=f"Invalid submission: {e}",
            hint="Check the settings file against the job type's settings.",
        )

    try:
        job = compile_job(
            settings,
            created=created,
            strict_frame_ranges=config.strict_frame_ranges,
            max_frames=config.max_frames,
            timestamp_format=config.timestamp_format,
        )
    except JobCompileError as e:
        logger.error("Job compilation failed: %s", e)
        return CompileResult(ok=False, error=str(e), hint=e.hint)

    return CompileResult(ok=True, job=job)


def submit_document(
    document: Dict[str, Any],
    config: CompilerConfig,
    client: Optional[SchedulerClient] = None,
    job_type: Optional[str] = None,
    job_name: Optional[str] = None,
) -> CompileResult:
    """Compile a submission document and hand the job to the scheduler."""
    result = compile_document(document, config, job_type=job_type, job_name=job_name)
    if not result.ok:
        return result

    client = client or SchedulerClient(config.scheduler_url, timeout=config.request_timeout)
    try:
        result.scheduler_job = client.submit_job(result.job)
    except requests.RequestException as e:
        logger.exception("Failed to submit job to scheduler")
        return CompileResult(
            ok=False,
            error=f"Failed to submit job to {client.base_url}: {e}",
            hint="Check scheduler connectivity and SCHEDULER_URL.",
        )

    return result
