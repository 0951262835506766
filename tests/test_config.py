"""Tests for figsync.config: models and YAML loader."""

import os
from pathlib import Path
import pytest
from unittest.mock import patch
from pydantic import ValidationError

from figsync.config.models import (
    ExportConfig,
    FigmaConfig,
    FigsyncConfig,
    ScanConfig,
    SpecsConfig,
)
from figsync.config.loader import (
    DEFAULT_CONFIG_TEMPLATE,
    config_search_paths,
    expand_env_vars,
    load_config,
)


# ── FigsyncConfig defaults ─────────────────────────────────────────


class TestFigsyncConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_token_env(self, sample_config):
        assert sample_config.figma.token_env == "FIGMA_API_TOKEN"

    def test_default_scan_pattern(self, sample_config):
        assert sample_config.scan.pattern == "**/*.mdx"


# ── Individual config model validations ─────────────────────────────


class TestExportConfig:
    def test_defaults(self):
        cfg = ExportConfig()
        assert cfg.scale == 2
        assert cfg.format == "png"
        assert cfg.screenshot_dir == "figma-screenshots"
        assert cfg.embed_image_link is False

    @pytest.mark.parametrize("scale", [0, 5])
    def test_scale_out_of_range(self, scale):
        with pytest.raises(ValidationError):
            ExportConfig(scale=scale)

    def test_invalid_format_rejected(self):
        with pytest.raises(ValidationError):
            ExportConfig(format="gif")


class TestSpecsConfig:
    def test_defaults(self):
        cfg = SpecsConfig()
        assert cfg.extract_size is True
        assert cfg.extract_colors is True
        assert cfg.extract_typography is True
        assert cfg.extract_spacing is False


class TestScanConfig:
    def test_default_excludes(self):
        cfg = ScanConfig()
        assert "node_modules" in cfg.exclude
        assert ".git" in cfg.exclude

    def test_excludes_not_shared(self):
        a, b = ScanConfig(), ScanConfig()
        a.exclude.append("tmp")
        assert "tmp" not in b.exclude


class TestFigmaConfig:
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            FigmaConfig(timeout=0)


class TestLogSettings:
    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            FigsyncConfig(log_level="verbose")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            FigsyncConfig(log_format="xml")


# ── expand_env_vars ───────────────────────────────────────────────


class TestExpandEnvVars:
    @patch.dict(os.environ, {"MY_TOKEN": "secret"})
    def test_string(self):
        assert expand_env_vars("${MY_TOKEN}") == "secret"

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_var_becomes_empty(self):
        assert expand_env_vars("x${NOPE}y") == "xy"

    @patch.dict(os.environ, {"DIR": "docs"})
    def test_nested(self):
        assert expand_env_vars({"scan": {"exclude": ["${DIR}"]}}) == {"scan": {"exclude": ["docs"]}}

    def test_non_string_untouched(self):
        assert expand_env_vars(3) == 3

    @patch.dict(os.environ, {}, clear=True)
    def test_fallback_when_unset(self):
        assert expand_env_vars("${SHOTS:-img}/x") == "img/x"

    @patch.dict(os.environ, {"SHOTS": "out"})
    def test_fallback_ignored_when_set(self):
        assert expand_env_vars("${SHOTS:-img}") == "out"


class TestConfigSearchPaths:
    def test_order_without_cli_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_search_paths() == [
            Path("figsync.yaml"),
            tmp_path / ".figsync" / "config.yaml",
        ]

    def test_cli_path_first(self):
        assert config_search_paths("ci.yaml")[0] == Path("ci.yaml")


# ── load_config ────────────────────────────────────────────────────


class TestLoadConfig:
    def test_defaults_without_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = load_config()
        assert cfg == FigsyncConfig()

    def test_cli_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("export:\n  scale: 3\n  format: jpg\n")
        cfg = load_config(str(path))
        assert cfg.export.scale == 3
        assert cfg.export.format == "jpg"

    def test_project_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "figsync.yaml").write_text("log_level: debug\n")
        assert load_config().log_level == "debug"

    def test_missing_cli_path_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_config(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("export: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(path))

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("export:\n  scale: 10\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="expected a mapping"):
            load_config(str(path))

    def test_empty_file_falls_through(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == FigsyncConfig()

    @patch.dict(os.environ, {"TOKEN_VAR_NAME": "CUSTOM_FIGMA_TOKEN"})
    def test_env_expansion(self, tmp_path):
        path = tmp_path / "env.yaml"
        path.write_text('figma:\n  token_env: "${TOKEN_VAR_NAME}"\n')
        assert load_config(str(path)).figma.token_env == "CUSTOM_FIGMA_TOKEN"

    def test_default_template_is_valid(self, tmp_path):
        path = tmp_path / "figsync.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        assert load_config(str(path)) == FigsyncConfig()
