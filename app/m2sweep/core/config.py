"""Cleaner configuration and settings.

This module provides the configuration model and I/O functions for the
repository cleaner: which repository to clean, whether deletions are
enabled, how often a run actually executes, and the whitelist,
preserve-latest and blacklist filter entries.

Configuration is stored in ~/.config/m2sweep/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from m2sweep.cleaner.filters import Filter, FilterSyntaxError, compile_filter, compile_filters
from m2sweep.core.paths import get_config_path, get_default_repository

logger = logging.getLogger(__name__)


class SweepConfig(BaseModel):
    """Configuration for a repository cleanup run.

    Attributes:
        repository: Local repository root. If None, uses the default repository.
        execution_probability: Chance that a gated run actually executes (0.0-1.0).
        delete_builds: Delete stale timestamped builds.
        delete_versions: Delete superseded version directories.
        whitelist: Entries of versions that are never removed.
        preserve_latest: Entries whose newest matching version is kept.
        blacklist: Entries of versions that are always designated for removal.
    """

    model_config = ConfigDict(extra="forbid")

    repository: Annotated[
        Path | None,
        Field(description="Local repository root (None = ~/.m2/repository)"),
    ] = None
    execution_probability: Annotated[
        float,
        Field(ge=0.0, le=1.0, description="Probability that a gated run executes"),
    ] = 1.0
    delete_builds: Annotated[bool, Field(description="Delete stale builds")] = False
    delete_versions: Annotated[bool, Field(description="Delete superseded versions")] = False
    whitelist: Annotated[
        list[str],
        Field(default_factory=list, description="Versions never removed"),
    ]
    preserve_latest: Annotated[
        list[str],
        Field(default_factory=list, description="Filters whose latest version is kept"),
    ]
    blacklist: Annotated[
        list[str],
        Field(default_factory=list, description="Versions always designated for removal"),
    ]

    @field_validator("whitelist", "preserve_latest", "blacklist")
    @classmethod
    def validate_filter_entries(cls, entries: list[str]) -> list[str]:
        """Validate that every entry follows the filter grammar."""
        for entry in entries:
            try:
                compile_filter(entry)
            except FilterSyntaxError as e:
                raise ValueError(str(e)) from e
        return entries

    @property
    def effective_repository(self) -> Path:
        """Get the repository to clean.

        Returns the configured repository if set, otherwise the default
        local repository.
        """
        if self.repository is not None:
            return self.repository.expanduser()
        return get_default_repository()

    def compiled_whitelist(self) -> tuple[Filter, ...]:
        return compile_filters(self.whitelist)

    def compiled_preserve_latest(self) -> tuple[Filter, ...]:
        return compile_filters(self.preserve_latest)

    def compiled_blacklist(self) -> tuple[Filter, ...]:
        return compile_filters(self.blacklist)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def load_config(path: Path | None = None) -> SweepConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated SweepConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return SweepConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> SweepConfig:
    """Load configuration, falling back to defaults when the file is absent.

    An explicitly given path must exist.

    Raises:
        ConfigError: If the file exists but is invalid, or an explicit
            path does not exist.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        if path is not None:
            raise
        logger.debug("No config file found, using defaults")
        return SweepConfig()


def save_config(config: SweepConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The SweepConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: SweepConfig) -> dict[str, object]:
    """Convert SweepConfig to a dictionary for TOML serialization.

    TOML has no null value, so an unset repository is omitted.
    """
    result: dict[str, object] = {}

    if config.repository is not None:
        result["repository"] = str(config.repository)

    result["execution_probability"] = config.execution_probability
    result["delete_builds"] = config.delete_builds
    result["delete_versions"] = config.delete_versions
    result["whitelist"] = list(config.whitelist)
    result["preserve_latest"] = list(config.preserve_latest)
    result["blacklist"] = list(config.blacklist)

    return result
