"""Tests for the CLI."""
import json
from unittest.mock import MagicMock, patch

import pytest

from src.beframes.cli import main


def _last_json(capsys):
    out = capsys.readouterr().out.strip().splitlines()
    return json.loads(out[-1])


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(json.dumps({
        "job_type": "root-based",
        "job_name": "MyJob",
        "blendfile": "/studio/projects/shotA/scene.blend",
        "scene_context": {
            "frame_start": 1,
            "frame_end": 5,
            "output_path": "//render/Anim03",
            "image_format": "PNG",
            "name": "Scene",
        },
        "settings": {
            "chunk_size": 2,
            "render_output_root": "/farm",
            "add_path_components": 2,
        },
    }))
    return path


class TestCompileCommand:
    """Tests for 'compile'."""

    def test_compile(self, settings_file, capsys):
        code = main(["compile", "--settings", str(settings_file), "--created", "2025-12-18T10:12:33"])
        result = _last_json(capsys)

        assert code == 0
        assert result["ok"] is True
        assert result["job"]["render_output_dir"] == "/farm/projects/shotA/MyJob/2025-12-18_101233"
        assert [t["name"] for t in result["job"]["tasks"]] == ["render-1-2", "render-3-4", "render-5"]

    def test_job_type_override(self, settings_file, capsys):
        code = main(["compile", "--settings", str(settings_file), "--job-type", "blender-path"])
        result = _last_json(capsys)

        assert code == 0
        assert result["job"]["job_type"] == "blender-path"
        assert result["job"]["render_output_path"] == "//render/Anim03_######"

    def test_job_name_override(self, settings_file, capsys):
        main(["compile", "--settings", str(settings_file), "--job-name", "Other", "--created", "2025-12-18T10:12:33"])
        result = _last_json(capsys)

        assert "/Other/" in result["job"]["render_output_path"]

    def test_missing_file(self, tmp_path, capsys):
        code = main(["compile", "--settings", str(tmp_path / "nope.json")])
        result = _last_json(capsys)

        assert code == 1
        assert result["ok"] is False
        assert "not found" in result["error"]

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        assert main(["compile", "--settings", str(path)]) == 1
        assert "Invalid JSON" in _last_json(capsys)["error"]

    def test_invalid_created(self, settings_file, capsys):
        assert main(["compile", "--settings", str(settings_file), "--created", "yesterday"]) == 1
        assert "--created" in _last_json(capsys)["error"]

    def test_compile_error_reported(self, tmp_path, capsys):
        path = tmp_path / "video.json"
        path.write_text(json.dumps({
            "frames": "1-10",
            "blendfile": "/a/b.blend",
            "format": "FFMPEG",
            "scene_output_path": "/a/render/x",
        }))

        code = main(["compile", "--settings", str(path)])
        result = _last_json(capsys)

        assert code == 1
        assert "Video formats are not supported" in result["error"]
        assert result["hint"]

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestSubmitCommand:
    """Tests for 'submit'."""

    def test_submit(self, settings_file, capsys):
        with patch("src.beframes.submitter.SchedulerClient") as client_cls:
            client = MagicMock()
            client.submit_job.return_value = {"id": "job-1"}
            client_cls.return_value = client

            code = main(["submit", "--settings", str(settings_file), "--scheduler-url", "http://manager/api/v3/"])

        result = _last_json(capsys)
        assert code == 0
        assert result["scheduler_job"] == {"id": "job-1"}
        client_cls.assert_called_once_with("http://manager/api/v3/", timeout=30.0)
        submitted = client.submit_job.call_args[0][0]
        assert len(submitted.tasks) == 3


class TestInvalidDocuments:
    """Bad documents still end with a JSON result line."""

    def test_wrongly_typed_chunk_size(self, tmp_path, capsys):
        path = tmp_path / "job.json"
        path.write_text(json.dumps({
            "frames": "1-10",
            "chunk_size": "2",
            "blendfile": "/a/b.blend",
            "format": "PNG",
            "scene_output_path": "/a/render/x",
        }))

        code = main(["compile", "--settings", str(path)])
        result = _last_json(capsys)

        assert code == 1
        assert result["ok"] is False
        assert "chunk_size" in result["error"]

    def test_not_an_object(self, tmp_path, capsys):
        path = tmp_path / "job.json"
        path.write_text("[1, 2]")

        assert main(["compile", "--settings", str(path)]) == 1
        assert "JSON object" in _last_json(capsys)["error"]
