"""Shared fixtures for the BeFrames test suite."""
from datetime import datetime

import pytest

from src.beframes.config import reset_config
from src.beframes.models import JobSettings, JobType

CREATED = datetime(2025, 12, 18, 10, 12, 33)
STAMP = "2025-12-18_101233"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the global config and log files inside the test's tmp dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LOG_ROOT", str(tmp_path / "logs"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def blender_path_settings():
    return JobSettings.create(
        JobType.BLENDER_PATH,
        frames="1-5",
        chunk_size=2,
        blendfile="/proj/shot010/shot010.blend",
        format="OPEN_EXR",
        scene="Scene",
        scene_output_path="/proj/shot010/render/Anim03",
    )


@pytest.fixture
def root_based_settings():
    return JobSettings.create(
        JobType.ROOT_BASED,
        frames="1-5",
        chunk_size=2,
        blendfile="/studio/projects/shotA/scene.blend",
        format="PNG",
        scene="Scene",
        scene_output_path="//render/Anim03",
        render_output_root="/farm",
        add_path_components=2,
        job_name="MyJob",
    )
