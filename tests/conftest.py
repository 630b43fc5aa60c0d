"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

MakeVersion = Callable[..., Path]


@pytest.fixture
def repository(tmp_path: Path) -> Path:
    """Empty local repository root."""
    root = tmp_path / "repository"
    root.mkdir()
    return root


@pytest.fixture
def make_version(repository: Path) -> MakeVersion:
    """Factory creating a version directory with its canonical files.

    Usage: make_version("com.example", "app", "1.0", extra=["app-1.0-sources.jar"])
    Every file is written with ``size`` bytes of content.
    """

    def _make(
        group: str,
        artifact: str,
        version: str,
        *,
        extra: list[str] | None = None,
        pom: bool = True,
        size: int = 10,
    ) -> Path:
        directory = repository.joinpath(*group.split("."), artifact, version)
        directory.mkdir(parents=True, exist_ok=True)
        names = [f"{artifact}-{version}.jar"]
        if pom:
            names.append(f"{artifact}-{version}.pom")
        names.extend(extra or [])
        for name in names:
            (directory / name).write_bytes(b"x" * size)
        return directory

    return _make


@pytest.fixture
def snapshot_builds() -> list[str]:
    """Timestamped build files of app 1.0-SNAPSHOT (two builds)."""
    return [
        "app-1.0-20230101.120000-1.jar",
        "app-1.0-20230101.120000-1.pom",
        "app-1.0-20230101.120000-1.jar.sha1",
        "app-1.0-20230101.130000-2.jar",
    ]


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at an empty location and unset the repository override.

    Returns the path of the (not yet existing) default config file.
    """
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("M2SWEEP_REPOSITORY", raising=False)
    return config_home / "m2sweep" / "config.toml"
