"""Tests for editor settings."""

import json

import pytest

from models.editor_config import DEFAULT_API_URL, EditorConfig, load_config
from models.tools import ToolType


def test_defaults():
    config = EditorConfig()
    assert config.mask_opacity == 0.4
    assert config.mask_color == "#9ACC59"
    assert config.tool is ToolType.BRUSH


def test_json_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    config = EditorConfig(default_tool="eraser", default_brush_size=7, viewport_width=320)
    config.save_json(str(path))
    loaded = EditorConfig.load_json(str(path))
    assert loaded == config
    assert loaded.tool is ToolType.ERASER


def test_unknown_keys_are_ignored():
    config = EditorConfig.from_dict({"poll_interval_sec": 2.5, "theme": "dark"})
    assert config.poll_interval_sec == 2.5


def test_api_url_from_environment(monkeypatch):
    monkeypatch.setenv("MASK_PAINTER_API_URL", "http://gen.local:9000")
    assert EditorConfig().generation_url == "http://gen.local:9000"
    monkeypatch.delenv("MASK_PAINTER_API_URL")
    assert EditorConfig().generation_url == DEFAULT_API_URL


def test_load_config_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("MASK_PAINTER_CONFIG", raising=False)
    assert load_config(str(tmp_path / "nope.json")) == EditorConfig()


def test_load_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"max_poll_attempts": 3}), encoding="utf-8")
    monkeypatch.setenv("MASK_PAINTER_CONFIG", str(path))
    assert load_config().max_poll_attempts == 3


def test_save_config_flag_writes_effective_settings(tmp_path, monkeypatch):
    pytest.importorskip("tkinter")
    import mask_editor_app

    monkeypatch.setenv("MASK_PAINTER_API_URL", "http://gen.local:9000")
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"default_brush_size": 12}), encoding="utf-8")
    target = tmp_path / "out.json"

    mask_editor_app.main(["--config", str(source), "--save-config", str(target)])

    saved = EditorConfig.load_json(str(target))
    assert saved.default_brush_size == 12
    assert saved.generation_url == "http://gen.local:9000"
