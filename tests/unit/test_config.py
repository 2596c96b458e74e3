"""Test cases for the configuration system."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from loaderchain.config import (
    ResolverConfig,
    _load_from_env,
    _load_from_pyproject_toml,
    load_config,
)


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory so no real pyproject.toml is picked up."""
    workdir = tmp_path / "project"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir


class TestResolverConfig:
    """Test cases for the ResolverConfig model."""

    def test_default_values(self) -> None:
        config = ResolverConfig()

        assert config.log_level == "INFO"
        assert config.empty_resources_fall_through is True
        assert config.rich_logging is True

    def test_numeric_level(self) -> None:
        assert ResolverConfig(log_level="DEBUG").level == logging.DEBUG
        assert ResolverConfig(log_level="WARNING").level == logging.WARNING

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ResolverConfig(log_level="LOUD")  # type: ignore[arg-type]

        assert any(e["loc"] == ("log_level",) for e in exc_info.value.errors())

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(cache=True)  # type: ignore[call-arg]


class TestLoadFromEnv:
    """Test cases for LOADERCHAIN_* environment variables."""

    @patch.dict(
        os.environ,
        {
            "LOADERCHAIN_LOG_LEVEL": "debug",
            "LOADERCHAIN_EMPTY_RESOURCES_FALL_THROUGH": "no",
            "LOADERCHAIN_RICH_LOGGING": "1",
        },
    )
    def test_all_variables(self) -> None:
        assert _load_from_env() == {
            "log_level": "DEBUG",
            "empty_resources_fall_through": False,
            "rich_logging": True,
        }

    @patch.dict(os.environ, {}, clear=True)
    def test_no_variables(self) -> None:
        assert _load_from_env() == {}


class TestLoadFromPyproject:
    """Test cases for [tool.loaderchain] in pyproject.toml."""

    def test_section_found_in_parent(self, isolated_cwd: Path) -> None:
        (isolated_cwd.parent / "pyproject.toml").write_text(
            '[tool.loaderchain]\nlog_level = "WARNING"\n'
        )
        nested = isolated_cwd / "sub"
        nested.mkdir()
        os.chdir(nested)

        assert _load_from_pyproject_toml() == {"log_level": "WARNING"}

    def test_nearest_file_without_section_is_skipped(
        self, isolated_cwd: Path
    ) -> None:
        (isolated_cwd / "pyproject.toml").write_text('[project]\nname = "x"\n')
        (isolated_cwd.parent / "pyproject.toml").write_text(
            "[tool.loaderchain]\nrich_logging = false\n"
        )

        assert _load_from_pyproject_toml() == {"rich_logging": False}

    def test_invalid_toml_is_ignored(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "pyproject.toml").write_text("[tool.loaderchain\n")

        assert _load_from_pyproject_toml() == {}


class TestLoadConfig:
    """Test cases for merged configuration."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self, isolated_cwd: Path) -> None:
        assert load_config() == ResolverConfig()

    @patch.dict(os.environ, {"LOADERCHAIN_LOG_LEVEL": "ERROR"}, clear=True)
    def test_env_overrides_file(self, isolated_cwd: Path) -> None:
        (isolated_cwd / "pyproject.toml").write_text(
            '[tool.loaderchain]\nlog_level = "DEBUG"\nrich_logging = false\n'
        )

        config = load_config()

        assert config.log_level == "ERROR"
        assert config.rich_logging is False

    @patch.dict(os.environ, {"LOADERCHAIN_LOG_LEVEL": "ERROR"}, clear=True)
    def test_runtime_overrides_env(self, isolated_cwd: Path) -> None:
        config = load_config(log_level="debug", empty_resources_fall_through=False)

        assert config.log_level == "DEBUG"
        assert config.empty_resources_fall_through is False
