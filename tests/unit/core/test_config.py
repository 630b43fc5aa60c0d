"""Unit tests for cleaner configuration.

Tests for the SweepConfig model and config file I/O.
"""

import tomllib
from pathlib import Path

import pytest
from m2sweep.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    SweepConfig,
    config_to_dict,
    load_config,
    load_config_or_default,
    save_config,
)
from m2sweep.core.paths import REPOSITORY_ENV_VAR
from pydantic import ValidationError


class TestSweepConfig:
    """Tests for the SweepConfig model."""

    def test_defaults(self) -> None:
        """SweepConfig has conservative defaults."""
        config = SweepConfig()
        assert config.repository is None
        assert config.execution_probability == 1.0
        assert config.delete_builds is False
        assert config.delete_versions is False
        assert config.whitelist == []
        assert config.preserve_latest == []
        assert config.blacklist == []

    def test_probability_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SweepConfig(execution_probability=1.5)
        with pytest.raises(ValidationError):
            SweepConfig(execution_probability=-0.1)

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            SweepConfig(unknown=True)  # type: ignore[call-arg]

    def test_invalid_filter_entry(self) -> None:
        """Filter entries are validated against the grammar."""
        with pytest.raises(ValidationError, match="not matched by"):
            SweepConfig(blacklist=["a:b:c:d"])

    def test_compiled_filters(self) -> None:
        config = SweepConfig(
            whitelist=["com.example:app:1.0"],
            preserve_latest=["*-SNAPSHOT", "1.*"],
            blacklist=["0.*"],
        )
        assert [str(f) for f in config.compiled_whitelist()] == ["com.example:app:1.0"]
        assert len(config.compiled_preserve_latest()) == 2
        assert config.compiled_blacklist()[0].matches("g", "a", "0.9") is True

    def test_effective_repository_configured(self, tmp_path: Path) -> None:
        assert SweepConfig(repository=tmp_path).effective_repository == tmp_path

    def test_effective_repository_default(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv(REPOSITORY_ENV_VAR, str(tmp_path))
        assert SweepConfig().effective_repository == tmp_path


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            'repository = "/data/m2"\n'
            "execution_probability = 0.1\n"
            "delete_versions = true\n"
            'preserve_latest = ["*-SNAPSHOT"]\n'
        )

        config = load_config(path)

        assert config.repository == Path("/data/m2")
        assert config.execution_probability == 0.1
        assert config.delete_versions is True
        assert config.delete_builds is False
        assert config.preserve_latest == ["*-SNAPSHOT"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("delete_versions = [")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('whitelist = ["a:b:c:d"]\n')

        with pytest.raises(ConfigValidationError, match="Invalid config content"):
            load_config(path)

    def test_errors_share_base(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.toml")


class TestLoadConfigOrDefault:
    """Tests for load_config_or_default."""

    def test_default_path_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A missing default config falls back to defaults."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert load_config_or_default() == SweepConfig()

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config_or_default(tmp_path / "missing.toml")

    def test_default_path_present(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "m2sweep").mkdir()
        (tmp_path / "m2sweep" / "config.toml").write_text("delete_builds = true\n")

        assert load_config_or_default().delete_builds is True


class TestSaveConfig:
    """Tests for save_config and config_to_dict."""

    def test_roundtrip(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        config = SweepConfig(
            repository=tmp_path / "repo",
            execution_probability=0.05,
            delete_builds=True,
            whitelist=["com.example:app:1.0"],
        )

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        save_config(SweepConfig(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_unset_repository_omitted(self, tmp_path: Path) -> None:
        path = save_config(SweepConfig(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert "repository" not in data
        assert data["execution_probability"] == 1.0

    def test_config_to_dict(self, tmp_path: Path) -> None:
        data = config_to_dict(SweepConfig(repository=tmp_path, blacklist=["1.*"]))

        assert data["repository"] == str(tmp_path)
        assert data["blacklist"] == ["1.*"]
        assert data["delete_versions"] is False
