"""
Tests for build settings.
"""

import tempfile
from pathlib import Path

import pytest

from backend.skillpack.config import BuildSettings, load_config_file
from backend.skillpack.errors import ConfigError


class TestBuildSettings:
    """Tests for BuildSettings validation."""

    def test_defaults(self):
        """Test default values."""
        settings = BuildSettings()
        assert settings.output_dir == Path("dist")
        assert settings.build_version is None
        assert settings.manifest_file == "plugin.json"
        assert settings.skills_dir == "skills"
        assert settings.definition_file == "SKILL.md"
        assert settings.resource_dirs == ["resources"]
        assert settings.jobs == 1

    def test_empty_version_is_absent(self):
        """Test that an empty override is treated as unset."""
        assert BuildSettings(build_version="").build_version is None

    def test_whitespace_only_version_rejected(self):
        """Test that a whitespace-only override is not silently dropped."""
        with pytest.raises(ValueError):
            BuildSettings(build_version="   ")

    @pytest.mark.parametrize("version", ["a/b", "a\\b", "..", "has space"])
    def test_unsafe_version_rejected(self, version):
        """Test that versions must be safe file name parts."""
        with pytest.raises(ValueError):
            BuildSettings(build_version=version)

    def test_jobs_must_be_positive(self):
        """Test jobs lower bound."""
        with pytest.raises(ValueError):
            BuildSettings(jobs=0)

    def test_nested_definition_name_rejected(self):
        """Test that file names must be single components."""
        with pytest.raises(ValueError):
            BuildSettings(definition_file="docs/SKILL.md")


class TestLoad:
    """Tests for layered loading."""

    def test_env_version(self):
        """Test BUILD_VERSION from the environment mapping."""
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = BuildSettings.load(root=Path(tmpdir), env={"BUILD_VERSION": "v-env"})
            assert settings.build_version == "v-env"

    def test_explicit_overrides_env(self):
        """Test that explicit values win over the environment."""
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = BuildSettings.load(
                root=Path(tmpdir),
                env={"BUILD_VERSION": "v-env"},
                build_version="v-cli",
            )
            assert settings.build_version == "v-cli"

    def test_none_overrides_ignored(self):
        """Test that unset command-line values keep lower layers."""
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = BuildSettings.load(root=Path(tmpdir), output_dir=None, jobs=None)
            assert settings.output_dir == Path("dist")
            assert settings.jobs == 1

    def test_config_file_in_root(self):
        """Test skillpack.yaml discovery in the root."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "skillpack.yaml").write_text(
                "build:\n  output_dir: out\n  resource_dirs: [resources, scripts]\n  build_version: v-file\n",
                encoding="utf-8",
            )
            settings = BuildSettings.load(root=root, env={"BUILD_VERSION": "v-env"})
            assert settings.output_dir == Path("out")
            assert settings.resource_dirs == ["resources", "scripts"]
            assert settings.build_version == "v-env"
            assert settings.root == root

    def test_config_file_cannot_move_root(self):
        """Test that the config file does not override the root."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "skillpack.yaml").write_text("build:\n  root: /elsewhere\n", encoding="utf-8")
            assert BuildSettings.load(root=root).root == root

    def test_explicit_config_missing(self):
        """Test a --config path that does not exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError, match="not found"):
                BuildSettings.load(root=Path(tmpdir), config_path=Path(tmpdir) / "nope.yaml")

    def test_whitespace_env_version_rejected(self):
        """Test that a whitespace-only BUILD_VERSION is a config error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                BuildSettings.load(root=Path(tmpdir), env={"BUILD_VERSION": "  "})

    def test_invalid_value_wrapped(self):
        """Test that validation failures surface as ConfigError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                BuildSettings.load(root=Path(tmpdir), env={"BUILD_VERSION": "bad/version"})


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_invalid_yaml(self):
        """Test malformed YAML."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "skillpack.yaml"
            path.write_text("build: [unclosed\n", encoding="utf-8")
            with pytest.raises(ConfigError, match="Invalid YAML"):
                load_config_file(path)

    def test_non_mapping_document(self):
        """Test a YAML list document."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "skillpack.yaml"
            path.write_text("- one\n- two\n", encoding="utf-8")
            with pytest.raises(ConfigError, match="mapping"):
                load_config_file(path)

    def test_empty_file(self):
        """Test an empty config file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "skillpack.yaml"
            path.write_text("", encoding="utf-8")
            assert load_config_file(path) == {}
