"""End-to-end tests for compile_job."""
from dataclasses import replace

import pytest

from src.beframes import (
    InvalidChunkSizeError,
    MalformedFrameRangeError,
    MissingRequiredSettingError,
    UnsupportedFormatError,
    compile_job,
)
from src.beframes.paths import FRAME_PADDING

from .conftest import CREATED, STAMP


class TestCompileJob:
    """Tests for the compile pipeline."""

    def test_blender_path_job(self, blender_path_settings):
        job = compile_job(blender_path_settings, created=CREATED)

        assert job.settings.render_output_path == "/proj/shot010/render/Anim03_######"
        assert job.render_output_dir == "/proj/shot010/render"
        assert [t.name for t in job.tasks] == ["render-1-2", "render-3-4", "render-5"]
        assert job.total_frames == 5

    def test_root_based_job_shares_one_timestamp(self, root_based_settings):
        settings = replace(root_based_settings, frames="1-100", chunk_size=7)
        job = compile_job(settings, created=CREATED)

        outputs = {t.command.args[t.command.args.index("--render-output") + 1] for t in job.tasks}
        assert outputs == {f"/farm/projects/shotA/MyJob/{STAMP}/Anim03_{FRAME_PADDING}"}
        assert job.render_output_dir == f"/farm/projects/shotA/MyJob/{STAMP}"

    def test_timestamp_placeholder_never_leaks(self, root_based_settings):
        job = compile_job(root_based_settings)

        assert "{timestamp}" not in job.settings.render_output_path
        for task in job.tasks:
            assert not any("{timestamp}" in arg for arg in task.command.args)

    def test_input_settings_unchanged(self, root_based_settings):
        compile_job(root_based_settings, created=CREATED)
        assert root_based_settings.render_output_path == ""

    def test_tasks_in_ascending_frame_order(self, blender_path_settings):
        settings = replace(blender_path_settings, frames="40-45, 1-3", chunk_size=4)
        job = compile_job(settings, created=CREATED)

        assert [t.name for t in job.tasks] == ["render-1-3,40", "render-41-44", "render-45"]

    def test_strict_frame_ranges(self, blender_path_settings):
        settings = replace(blender_path_settings, frames="40-45, 1-3")
        with pytest.raises(MalformedFrameRangeError):
            compile_job(settings, created=CREATED, strict_frame_ranges=True)

    def test_custom_timestamp_format(self, root_based_settings):
        job = compile_job(root_based_settings, created=CREATED, timestamp_format="%Y%m%d")
        assert job.render_output_dir.endswith("/MyJob/20251218")

    def test_to_dict(self, root_based_settings):
        d = compile_job(root_based_settings, created=CREATED).to_dict()

        assert d["job_type"] == "root-based"
        assert d["label"] == "BeFrames_RootBased_v8"
        assert d["name"] == "MyJob"
        assert d["created"] == CREATED.isoformat()
        assert d["settings"]["render_output_path"] == d["render_output_path"]
        assert d["total_frames"] == 5
        assert len(d["tasks"]) == 3


class TestCompileErrors:
    """Failures abort compilation before any task is produced."""

    def test_video_format(self, blender_path_settings):
        with pytest.raises(UnsupportedFormatError):
            compile_job(replace(blender_path_settings, format="FFMPEG"), created=CREATED)

    def test_video_format_wins_over_bad_frames(self, blender_path_settings):
        settings = replace(blender_path_settings, format="AVI_JPEG", frames="x")
        with pytest.raises(UnsupportedFormatError):
            compile_job(settings, created=CREATED)

    def test_missing_root(self, root_based_settings):
        with pytest.raises(MissingRequiredSettingError):
            compile_job(replace(root_based_settings, render_output_root=""), created=CREATED)

    def test_malformed_frames(self, blender_path_settings):
        with pytest.raises(MalformedFrameRangeError):
            compile_job(replace(blender_path_settings, frames="1-5, six"), created=CREATED)

    def test_invalid_chunk_size(self, blender_path_settings):
        with pytest.raises(InvalidChunkSizeError):
            compile_job(replace(blender_path_settings, chunk_size=0), created=CREATED)

    def test_errors_are_value_errors(self, blender_path_settings):
        with pytest.raises(ValueError):
            compile_job(replace(blender_path_settings, chunk_size=-3), created=CREATED)
