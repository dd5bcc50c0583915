"""Tests for the command line entry point."""

import json

from PIL import Image
from PIL.PngImagePlugin import PngInfo
import pytest

import main


@pytest.fixture
def settings_path(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logging": {"level": "WARNING", "dir": str(tmp_path / "logs")}}))
    return str(path)


@pytest.fixture
def png_path(tmp_path, a1111_text):
    path = tmp_path / "gen.png"
    info = PngInfo()
    info.add_text("parameters", a1111_text)
    Image.new("RGB", (8, 8)).save(path, pnginfo=info)
    return str(path)


class TestMain:
    def test_renders_ai_view(self, png_path, settings_path, capsys):
        assert main.main([png_path, "--settings", settings_path]) == 0
        out = capsys.readouterr().out
        assert "NEGATIVE PROMPT" in out
        assert "blurry, lowres" in out

    def test_forced_mode_and_export(self, png_path, settings_path, tmp_path, capsys):
        export_dir = tmp_path / "export"
        export_dir.mkdir()
        code = main.main([png_path, "--mode", "formatted", "--export", str(export_dir), "--settings", settings_path])
        assert code == 0
        assert capsys.readouterr().out.startswith("gen.png")
        exported = json.loads((export_dir / "exif-data.json").read_text(encoding="utf-8"))
        assert "parameters" in exported

    def test_failure_exit_code(self, tmp_path, settings_path, capsys):
        bad = tmp_path / "notes.txt"
        bad.write_text("x")
        assert main.main([str(bad), "--settings", settings_path]) == 1
        assert "Please select a valid image file" in capsys.readouterr().err
