"""
Tests for the hillshade command line entry point.
"""

import json

import pytest
import numpy as np
import rasterio
import yaml
from PIL import Image

from hillshade.cli import main, parse_args, run
from hillshade.config import ConfigError
from hillshade.data_loading import InputFormatError


def _write_height_map(path, data):
    with rasterio.open(
        path, "w", driver="GTiff", height=data.shape[0], width=data.shape[1], count=1, dtype=data.dtype
    ) as dst:
        dst.write(data, 1)
    return path


def _write_settings(path, **overrides):
    settings = {
        "imagePath": "dem.tif",
        "outPath": "out/relief.png",
        "minHeight": 0,
        "maxHeight": 3000,
        "heightPixelRatio": 30,
        "lightPitch": 45,
        "lightYaw": 315,
        "noLightUnderWater": True,
        "waterHeight": 100,
        "heightColorStops": [
            {"height": 0, "color": [30, 70, 150]},
            {"height": 500, "color": "#3a7d44"},
            {"height": 2500, "color": "white"},
        ],
    }
    settings.update(overrides)
    path.write_text(json.dumps(settings))
    return path


@pytest.fixture
def workspace(tmp_path, sample_raw):
    _write_height_map(tmp_path / "dem.tif", sample_raw)
    return tmp_path


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.settings == "hillshade_settings.json"
        assert args.workers == 1
        assert args.log_level == "INFO"
        assert args.progress is False

    def test_options(self):
        args = parse_args(["conf.json", "--workers", "3", "--log-level", "DEBUG", "--progress"])
        assert (args.settings, args.workers, args.log_level, args.progress) == (
            "conf.json",
            3,
            "DEBUG",
            True,
        )

    def test_rejects_zero_workers(self):
        with pytest.raises(SystemExit):
            parse_args(["--workers", "0"])


class TestRun:
    def test_writes_relief(self, workspace, sample_raw):
        settings_path = _write_settings(workspace / "settings.json")

        out_path = run(settings_path, workers=2)

        assert out_path == workspace / "out" / "relief.png"
        with Image.open(out_path) as img:
            assert img.mode == "RGBA"
            assert img.size == (sample_raw.shape[1], sample_raw.shape[0])

    def test_out_scale_resizes(self, workspace, sample_raw):
        settings_path = _write_settings(workspace / "settings.json", outScale=2.0)

        out_path = run(settings_path)

        with Image.open(out_path) as img:
            assert img.size == (sample_raw.shape[1] * 2, sample_raw.shape[0] * 2)

    def test_yaml_settings(self, workspace, sample_raw):
        """Settings files in the YAML format render the same way."""
        settings = json.loads(_write_settings(workspace / "settings.json").read_text())
        yaml_path = workspace / "hillshade_settings.yaml"
        yaml_path.write_text(yaml.safe_dump(settings))

        out_path = run(yaml_path)

        with Image.open(out_path) as img:
            assert img.size == (sample_raw.shape[1], sample_raw.shape[0])

    def test_missing_out_path(self, workspace):
        settings = json.loads(_write_settings(workspace / "settings.json").read_text())
        del settings["outPath"]
        (workspace / "settings.json").write_text(json.dumps(settings))
        with pytest.raises(ConfigError, match="outPath"):
            run(workspace / "settings.json")

    def test_tiny_raster_is_input_error(self, tmp_path):
        _write_height_map(tmp_path / "dem.tif", np.zeros((2, 2), dtype=np.uint16))
        settings_path = _write_settings(tmp_path / "settings.json")
        with pytest.raises(InputFormatError):
            run(settings_path)
        assert not (tmp_path / "out" / "relief.png").exists()

    def test_scale_to_nothing_is_input_error(self, workspace):
        """An outScale that leaves no pixels is reported as an input problem."""
        settings_path = _write_settings(workspace / "settings.json", outScale=0.01)
        with pytest.raises(InputFormatError, match="resize"):
            run(settings_path)

    def test_render_errors_are_not_relabeled(self, workspace, monkeypatch):
        """A ValueError from rendering itself propagates unchanged."""

        def broken_render(*args, **kwargs):
            raise ValueError("band_rows must be at least 1")

        monkeypatch.setattr("hillshade.cli.render_relief", broken_render)
        settings_path = _write_settings(workspace / "settings.json")

        with pytest.raises(ValueError, match="band_rows") as excinfo:
            run(settings_path)
        assert not isinstance(excinfo.value, InputFormatError)
        assert not (workspace / "out" / "relief.png").exists()


class TestMain:
    def test_success(self, workspace):
        settings_path = _write_settings(workspace / "settings.json")
        assert main([str(settings_path), "--log-level", "WARNING"]) == 0
        assert (workspace / "out" / "relief.png").exists()

    def test_config_error_exit_status(self, tmp_path):
        settings_path = tmp_path / "settings.json"
        settings_path.write_text("{}")
        assert main([str(settings_path)]) == 1

    def test_wrong_dtype_exit_status(self, tmp_path):
        _write_height_map(tmp_path / "dem.tif", np.zeros((5, 5), dtype=np.float32))
        settings_path = _write_settings(tmp_path / "settings.json")
        assert main([str(settings_path)]) == 1
        assert not (tmp_path / "out" / "relief.png").exists()

    def test_missing_height_map_exit_status(self, tmp_path):
        settings_path = _write_settings(tmp_path / "settings.json")
        assert main([str(settings_path)]) == 1
