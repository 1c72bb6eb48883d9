"""Tests for revtrack_core.config — models and YAML loader."""

import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from revtrack_core.config.models import RevtrackConfig, StateConfig, WatchConfig
from revtrack_core.config.loader import DEFAULT_CONFIG_TEMPLATE, load_config, _expand_env_vars


# ── RevtrackConfig defaults ─────────────────────────────────────────


class TestRevtrackConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_policy(self, sample_config):
        assert sample_config.watch.policy == "auto"

    def test_default_state_location(self, sample_config):
        assert sample_config.state.directory == ".revtrack"
        assert sample_config.state.filename == "state.json"

    def test_default_alternates_empty(self, sample_config):
        assert sample_config.alternates == {}

    def test_template_parses_to_defaults(self):
        import yaml

        raw = yaml.safe_load(DEFAULT_CONFIG_TEMPLATE)
        assert RevtrackConfig(**raw) == RevtrackConfig()


# ── Individual config model validations ─────────────────────────────


class TestWatchConfig:
    def test_defaults(self):
        cfg = WatchConfig()
        assert cfg.poll_interval == 1.0
        assert cfg.include == ["*.py"]
        assert ".revtrack" in cfg.ignore_patterns

    def test_invalid_policy_rejected(self):
        with pytest.raises(ValidationError):
            WatchConfig(policy="precise")

    def test_zero_interval_rejected(self):
        with pytest.raises(ValidationError):
            WatchConfig(poll_interval=0)

    def test_separate_list_instances(self):
        a = WatchConfig()
        b = WatchConfig()
        a.include.append("*.jl")
        assert b.include == ["*.py"]


class TestStateConfig:
    def test_empty_directory_rejected(self):
        with pytest.raises(ValidationError):
            StateConfig(directory="")


# ── _expand_env_vars ────────────────────────────────────────────────


class TestExpandEnvVars:
    def test_expands_string_variable(self):
        with patch.dict(os.environ, {"MY_ROOT": "/srv/app"}):
            assert _expand_env_vars("${MY_ROOT}") == "/srv/app"

    def test_missing_var_becomes_empty(self):
        os.environ.pop("REVTRACK_TEST_UNSET", None)
        assert _expand_env_vars("${REVTRACK_TEST_UNSET}") == ""

    def test_expands_nested_structures(self):
        with patch.dict(os.environ, {"A": "alpha", "B": "beta"}):
            result = _expand_env_vars({"outer": {"inner": "${A}"}, "list": ["${B}"]})
            assert result == {"outer": {"inner": "alpha"}, "list": ["beta"]}

    def test_non_string_passthrough(self):
        assert _expand_env_vars(42) == 42
        assert _expand_env_vars(True) is True
        assert _expand_env_vars(None) is None


# ── load_config ─────────────────────────────────────────────────────


class TestLoadConfig:
    def test_returns_defaults_when_no_file_exists(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = load_config()
        assert config == RevtrackConfig()

    def test_loads_valid_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text(
            "watch:\n  policy: coarse\n  poll_interval: 2.5\nlog_level: debug\n"
        )
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = load_config()
        assert config.watch.policy == "coarse"
        assert config.watch.poll_interval == 2.5
        assert config.log_level == "debug"

    def test_raises_on_invalid_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("  bad:\nyaml: [unterminated")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config()

    def test_raises_on_invalid_config_values(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("watch:\n  policy: sloppy\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config()

    def test_raises_on_non_mapping(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("- just\n- a list\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="expected a mapping.*got list"):
            load_config()

    def test_cli_path_takes_priority(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("watch:\n  policy: default\n")
        cli_file = tmp_path / "custom.yaml"
        cli_file.write_text("watch:\n  policy: coarse\n")
        config = load_config(cli_path=str(cli_file))
        assert config.watch.policy == "coarse"

    def test_user_global_config_used_as_fallback(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        fake_home = tmp_path / "fakehome"
        (fake_home / ".revtrack").mkdir(parents=True)
        (fake_home / ".revtrack" / "config.yaml").write_text("log_level: debug\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: fake_home)
        assert load_config().log_level == "debug"

    def test_env_vars_expanded_in_alternates(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("RELOCATED", "/mnt/new")
        (tmp_path / "revtrack.yaml").write_text(
            'alternates:\n  "/opt/app/a.py": "${RELOCATED}/a.py"\n'
        )
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = load_config()
        assert config.alternates == {"/opt/app/a.py": "/mnt/new/a.py"}

    def test_empty_yaml_file_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        assert load_config() == RevtrackConfig()

    def test_scalar_root_rejected(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "revtrack.yaml").write_text("just a string\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="expected a mapping.*got str"):
            load_config()
