import json
import logging
import os

from secretmaker.config import DEFAULTS, config_path, load_config

def test_defaults_when_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRETMAKER_HOME", str(tmp_path))
    assert config_path() == os.path.join(str(tmp_path), "config.json")
    assert load_config() == DEFAULTS
    # loading must not create anything
    assert list(tmp_path.iterdir()) == []

def test_file_overrides_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRETMAKER_HOME", str(tmp_path))
    (tmp_path / "config.json").write_text(json.dumps({"default_length": 24, "unknown": 1}), encoding="utf-8")
    cfg = load_config()
    assert cfg["default_length"] == 24
    assert cfg["default_count"] == DEFAULTS["default_count"]
    assert "unknown" not in cfg

def test_bad_values_fall_back(tmp_path, caplog):
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"default_count": "lots", "log_level": 3, "default_length": True}), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="secretmaker.config"):
        cfg = load_config(str(p))
    assert cfg == DEFAULTS
    assert "default_count" in caplog.text

def test_malformed_file_warns(tmp_path, caplog):
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="secretmaker.config"):
        cfg = load_config(str(p))
    assert cfg == DEFAULTS
    assert "unreadable" in caplog.text

def test_non_object_ignored(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(p)) == DEFAULTS

def test_appdata_fallback(monkeypatch, tmp_path):
    monkeypatch.delenv("SECRETMAKER_HOME", raising=False)
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert config_path() == os.path.join(str(tmp_path), "SecretMaker", "config.json")
