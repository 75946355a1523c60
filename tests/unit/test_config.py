"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from bumper.config.loader import (
    extract_bumper_config,
    find_pyproject_toml,
    load_config,
    load_pyproject_toml,
)
from bumper.config.models import (
    BumperConfig,
    ChangelogConfig,
    CommitsConfig,
    GitHubConfig,
    PublishConfig,
    VersionConfig,
)
from bumper.exceptions import ConfigNotFoundError, ConfigValidationError


class TestBumperConfig:
    """Tests for BumperConfig model."""

    def test_default_config(self):
        """Default configuration has sensible values."""
        config = BumperConfig()

        assert config.default_branch == "main"
        assert config.release_branches == ["main", "master"]
        assert config.allow_dirty is False
        assert config.remote == "origin"
        assert config.effective_tag_prefix == "v"
        assert config.effective_changelog_path == Path("CHANGELOG.md")

    def test_nested_defaults(self):
        """Nested configurations have defaults."""
        config = BumperConfig()

        assert config.commits.max_subject_length == 72
        assert config.changelog.enabled is True
        assert config.version.version_files == []
        assert config.github.release_title == "Release v{version}"
        assert config.publish.tool == "uv"

    def test_tag_for(self):
        """tag_for applies the configured prefix."""
        assert BumperConfig().tag_for("1.2.3") == "v1.2.3"

        config = BumperConfig(version=VersionConfig(tag_prefix="release-"))
        assert config.tag_for("1.2.3") == "release-1.2.3"

    def test_allowed_release_branches(self):
        """The default branch leads the allowed release branches."""
        assert BumperConfig().allowed_release_branches == ["main", "master"]

        config = BumperConfig(default_branch="develop")
        assert config.allowed_release_branches == ["develop", "main", "master"]

    def test_unknown_keys_rejected(self):
        """Typos in the configuration are reported."""
        with pytest.raises(ValidationError):
            BumperConfig.model_validate({"default_brnach": "main"})

    def test_empty_release_branches_rejected(self):
        """At least one release branch is required."""
        with pytest.raises(ValidationError):
            BumperConfig(release_branches=[])

    def test_frozen(self):
        """Configuration objects are immutable."""
        config = BumperConfig()
        with pytest.raises(ValidationError):
            config.default_branch = "develop"


class TestCommitsConfig:
    """Tests for CommitsConfig model."""

    def test_default_skip_patterns(self):
        """Default skip release patterns are configured."""
        config = CommitsConfig()

        assert "[skip release]" in config.skip_release_patterns
        assert "[release skip]" in config.skip_release_patterns
        assert "[no release]" in config.skip_release_patterns

    def test_custom_skip_patterns(self):
        """Custom skip patterns can be configured."""
        config = CommitsConfig(skip_release_patterns=["[skip ci]", "[wip]"])

        assert config.skip_release_patterns == ["[skip ci]", "[wip]"]

    def test_max_subject_length_positive(self):
        """The subject length limit must be positive."""
        with pytest.raises(ValidationError):
            CommitsConfig(max_subject_length=0)


class TestSectionDefaults:
    """Tests for the smaller section models."""

    def test_changelog_defaults(self):
        """Default changelog configuration."""
        config = ChangelogConfig()

        assert config.enabled is True
        assert config.path == Path("CHANGELOG.md")

    def test_publish_defaults(self):
        """Default publish configuration."""
        config = PublishConfig()

        assert config.enabled is True
        assert config.tool == "uv"
        assert config.extra_args == []

    def test_publish_tool_restricted(self):
        """Only known publishing tools are accepted."""
        with pytest.raises(ValidationError):
            PublishConfig(tool="flit")

    def test_github_defaults(self):
        """Default GitHub configuration."""
        assert GitHubConfig().create_release is True


class TestLoadPyprojectToml:
    """Tests for load_pyproject_toml()."""

    def test_load_valid_toml(self, temp_project: Path):
        """Load a valid pyproject.toml."""
        data = load_pyproject_toml(temp_project / "pyproject.toml")

        assert data["project"]["name"] == "test-project"

    def test_load_nonexistent_raises(self, tmp_path: Path):
        """Loading nonexistent file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_pyproject_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path):
        """Broken TOML raises ConfigValidationError."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project\nname = ")

        with pytest.raises(ConfigValidationError):
            load_pyproject_toml(pyproject)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml()."""

    def test_find_in_current_dir(self, temp_project: Path):
        """Find pyproject.toml in current directory."""
        assert find_pyproject_toml(temp_project) == (temp_project / "pyproject.toml").resolve()

    def test_find_in_parent_dir(self, temp_project: Path):
        """Find pyproject.toml in parent directory."""
        subdir = temp_project / "src" / "package"
        subdir.mkdir(parents=True)

        assert find_pyproject_toml(subdir).name == "pyproject.toml"

    def test_not_found_raises(self, tmp_path: Path):
        """Raises ConfigNotFoundError when not found."""
        with pytest.raises(ConfigNotFoundError):
            find_pyproject_toml(tmp_path)


class TestExtractBumperConfig:
    """Tests for extract_bumper_config()."""

    def test_extract_existing_config(self):
        """Extract existing bumper config."""
        pyproject = {"tool": {"bumper": {"default_branch": "develop"}}}

        assert extract_bumper_config(pyproject) == {"default_branch": "develop"}

    def test_extract_missing_config(self):
        """Extract returns empty dict when config missing."""
        assert extract_bumper_config({"project": {"name": "test"}}) == {}


class TestLoadConfig:
    """Tests for load_config()."""

    def test_load_with_config(self, temp_project: Path):
        """Load configuration from pyproject.toml."""
        config = load_config(temp_project)

        assert isinstance(config, BumperConfig)
        assert config.default_branch == "main"

    def test_load_nested_sections(self, tmp_path: Path):
        """Nested tables map onto section models."""
        (tmp_path / "pyproject.toml").write_text(
            """\
[project]
name = "test"
version = "1.0.0"

[tool.bumper]
allow_dirty = true

[tool.bumper.version]
tag_prefix = ""

[tool.bumper.publish]
tool = "twine"
"""
        )
        config = load_config(tmp_path)

        assert config.allow_dirty is True
        assert config.tag_for("1.0.0") == "1.0.0"
        assert config.publish.tool == "twine"

    def test_load_defaults_when_no_config(self, tmp_path: Path):
        """Load defaults when no [tool.bumper] section."""
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "test"\nversion = "1.0.0"\n')

        assert load_config(tmp_path) == BumperConfig()

    def test_invalid_config_raises(self, tmp_path: Path):
        """Invalid settings raise ConfigValidationError."""
        (tmp_path / "pyproject.toml").write_text("[tool.bumper]\nallow_dirty = 'maybe'\n")

        with pytest.raises(ConfigValidationError):
            load_config(tmp_path)
