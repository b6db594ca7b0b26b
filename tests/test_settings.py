import json

import pytest

from mandelcanvas.renderer import RenderConfig
from mandelcanvas.settings import DEFAULTS, config_from_settings, load_settings


def test_packaged_settings_match_defaults():
    assert load_settings() == DEFAULTS


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"max_iterations": 250, "palette": "Grayscale", "unknown": 1}))
    settings = load_settings(str(path))
    assert settings["max_iterations"] == 250
    assert settings["palette"] == "Grayscale"
    assert settings["height"] == DEFAULTS["height"]
    assert "unknown" not in settings


def test_missing_file_falls_back_to_defaults(tmp_path, capsys):
    settings = load_settings(str(tmp_path / "nope.json"))
    assert settings == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_malformed_file_falls_back_to_defaults(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_non_object_file_is_ignored(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2, 3]")
    assert load_settings(str(path)) == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_config_from_settings():
    config = config_from_settings(DEFAULTS)
    assert config == RenderConfig(width=1024, height=1024, max_iterations=100,
                                  palette="RGB", strategy="parallel", tile_rows=64)


def test_invalid_settings_raise():
    with pytest.raises(ValueError):
        config_from_settings(dict(DEFAULTS, height=0))
