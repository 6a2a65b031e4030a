import json

import pytest

from Struct_Replay.config import Config, load_config


def test_default_step_delays():
    assert Config.delay_for("tree") == 0.5
    assert Config.delay_for("graph") == 0.7
    assert Config.delay_for("hash") == 0.6
    assert Config.delay_for("heap") == 0.8


def test_load_json_merges_nested_dicts(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"step_delay": {"tree": 0.1}, "hash_table_size": 7}))
    Config.load_from_file(str(cfg))
    assert Config.delay_for("tree") == 0.1
    assert Config.delay_for("heap") == 0.8
    assert Config.hash_table_size == 7
    assert Config.config_file == str(cfg)


def test_load_yaml_ignores_unknown_keys(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("viewport_width: 1000\nnot_a_setting: 3\n_private: 1\n")
    data = load_config(str(cfg))
    assert Config.viewport_width == 1000
    assert not hasattr(Config, "not_a_setting")
    assert data["not_a_setting"] == 3


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(str(tmp_path / "missing.json"))


def test_non_mapping_rejected(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text("[1, 2]")
    with pytest.raises(ValueError):
        Config.load_from_file(str(cfg))


def test_methods_are_not_overwritten(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("delay_for: 1\nload_from_file: 2\nviewport_height: 500\n")
    Config.load_from_file(str(cfg))
    assert Config.delay_for("tree") == 0.5
    assert callable(Config.load_from_file)
    assert Config.viewport_height == 500
