# tests/test_config.py

import json

import pytest

from history_heatmap.utils.config_manager import DEFAULTS, Config, ConfigError


def test_missing_file_gives_defaults_and_writes_nothing(tmp_path):
    p = tmp_path / "cfg" / "config.json"
    cfg = Config(p)
    assert cfg.data == DEFAULTS
    assert not p.exists()


def test_values_loaded_and_unknown_keys_ignored(tmp_path):
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"count": 5, "mode": "exact", "colour": "red"}), encoding="utf8")
    cfg = Config(p)
    assert cfg["count"] == 5
    assert cfg["mode"] == "exact"
    assert "colour" not in cfg.data


def test_env_var_selects_file(tmp_path, monkeypatch):
    p = tmp_path / "env.json"
    p.write_text(json.dumps({"bar_width": 12}), encoding="utf8")
    monkeypatch.setenv("HISTORY_HEATMAP_CONFIG", str(p))
    assert Config()["bar_width"] == 12


def test_malformed_json(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("{not json", encoding="utf8")
    with pytest.raises(ConfigError):
        Config(p)


def test_non_object_json(tmp_path):
    p = tmp_path / "config.json"
    p.write_text("[1, 2]", encoding="utf8")
    with pytest.raises(ConfigError):
        Config(p)


def test_set_coerces_and_saves(tmp_path):
    p = tmp_path / "sub" / "config.json"
    cfg = Config(p)
    cfg.set("count", "7")
    assert cfg["count"] == 7
    assert json.loads(p.read_text(encoding="utf8"))["count"] == 7
    cfg.set("flavor", "zsh")
    assert Config(p)["flavor"] == "zsh"


def test_set_rejects_bad_values(tmp_path):
    cfg = Config(tmp_path / "config.json")
    with pytest.raises(ConfigError):
        cfg.set("nope", 1)
    with pytest.raises(ConfigError):
        cfg.set("count", "many")
    with pytest.raises(ConfigError):
        cfg.set("count", -3, save=False)


@pytest.mark.parametrize(
    "key, val",
    [
        ("flavor", 5),
        ("history_file", 5),
        ("history_file", ["~/.zsh_history"]),
        ("mode", 3),
        ("count", True),
        ("count", 3.7),
        ("bar_width", None),
    ],
)
def test_set_rejects_wrong_types(tmp_path, key, val):
    cfg = Config(tmp_path / "config.json")
    with pytest.raises(ConfigError):
        cfg.set(key, val, save=False)


def test_mistyped_file_value(tmp_path):
    p = tmp_path / "config.json"
    p.write_text(json.dumps({"flavor": 5}), encoding="utf8")
    with pytest.raises(ConfigError, match="flavor"):
        Config(p)


def test_optional_keys_accept_null_and_strings(tmp_path):
    cfg = Config(tmp_path / "config.json")
    cfg.set("history_file", "~/.bash_history", save=False)
    cfg.set("flavor", None, save=False)
    assert cfg["history_file"] == "~/.bash_history"
    assert cfg["flavor"] is None
