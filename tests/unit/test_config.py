"""
Runtime Configuration Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config import (
    RuntimeConfig,
    get_default_config,
    load_runtime_config,
    set_default_config,
)


class TestRuntimeConfig:
    def test_defaults(self):
        config = RuntimeConfig()
        assert config.anchor.operator == "operator"
        assert config.anchor.path_limit == 4
        assert config.storage.ledger_path is None
        assert config.storage.snapshot_dir is None
        assert config.log_level == "INFO"

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"anchor": {"path_limit": 7}, "log_level": "debug"})
        assert config.anchor.path_limit == 7
        assert config.anchor.operator == "operator"
        assert config.log_level == "DEBUG"

    def test_from_dict_unknown_key(self):
        with pytest.raises(TypeError):
            RuntimeConfig.from_dict({"anchor": {"bogus": 1}})

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({
            "anchor": {"operator": "ops", "path_limit": 2},
            "storage": {"ledger_path": "r.jsonl", "snapshot_dir": "snaps"},
        })
        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestConfigFiles:
    def test_from_yaml(self, tmp_path):
        path = tmp_path / "anchor.yaml"
        path.write_text("anchor:\n  operator: ops\n  path_limit: 6\nstorage:\n  snapshot_dir: snaps\n")

        config = RuntimeConfig.from_file(path)
        assert config.anchor.operator == "ops"
        assert config.anchor.path_limit == 6
        assert config.storage.snapshot_dir == "snaps"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "anchor.yml"
        path.write_text("")
        assert RuntimeConfig.from_file(path) == RuntimeConfig()

    def test_from_json(self, tmp_path):
        path = tmp_path / "anchor.json"
        path.write_text(json.dumps({"storage": {"ledger_path": "receipts.jsonl"}}))
        assert RuntimeConfig.from_file(path).storage.ledger_path == "receipts.jsonl"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")
        with pytest.raises(FileNotFoundError):
            load_runtime_config(tmp_path / "nope.json")


class TestEnvOverrides:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ANCHOR_OPERATOR", "env-ops")
        monkeypatch.setenv("ANCHOR_PATH_LIMIT", "9")
        monkeypatch.setenv("ANCHOR_LOG_LEVEL", "warning")

        config = RuntimeConfig.from_env()
        assert config.anchor.operator == "env-ops"
        assert config.anchor.path_limit == 9
        assert config.log_level == "WARNING"

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = tmp_path / "anchor.yaml"
        path.write_text("anchor:\n  operator: file-ops\n  path_limit: 3\n")
        monkeypatch.setenv("ANCHOR_OPERATOR", "env-ops")
        monkeypatch.setenv("ANCHOR_SNAPSHOT_DIR", str(tmp_path / "snaps"))

        config = load_runtime_config(path)
        assert config.anchor.operator == "env-ops"
        assert config.anchor.path_limit == 3
        assert config.storage.snapshot_dir == str(tmp_path / "snaps")

    def test_overrides_do_not_mutate(self, monkeypatch):
        base = RuntimeConfig()
        monkeypatch.setenv("ANCHOR_LEDGER_PATH", "x.jsonl")
        overridden = base.with_env_overrides()

        assert overridden.storage.ledger_path == "x.jsonl"
        assert base.storage.ledger_path is None

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config


class TestDefaultSearch:
    def test_picks_up_cwd_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "anchor.json").write_text(json.dumps({"anchor": {"operator": "cwd-ops"}}))
        assert load_runtime_config().anchor.operator == "cwd-ops"

    def test_default_config_setter(self):
        previous = get_default_config()
        try:
            custom = RuntimeConfig.from_dict({"anchor": {"operator": "custom"}})
            set_default_config(custom)
            assert get_default_config() is custom
        finally:
            set_default_config(previous)
