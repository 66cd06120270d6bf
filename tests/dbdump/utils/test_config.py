"""Unit tests for configuration management."""

from pathlib import Path
from tempfile import TemporaryDirectory

from dbdump.utils.config import ConfigSettings, find_config_file, load_config


class TestConfigSettings:
    """Tests for ConfigSettings Pydantic model."""

    def test_empty_config_settings(self):
        """Test creating empty ConfigSettings with all None values."""
        config = ConfigSettings()
        assert config.url is None
        assert config.schema_name is None
        assert config.batch_size is None
        assert config.no_data is None

    def test_partial_config_settings(self):
        """Test ConfigSettings with some fields set."""
        config = ConfigSettings(schema_name="shop", jobs=4)
        assert config.schema_name == "shop"
        assert config.jobs == 4
        assert config.ordering is None

    def test_unknown_fields_ignored(self):
        """Test that unknown fields are ignored (forward compatibility)."""
        config = ConfigSettings(schema_name="shop", unknown_field="value")
        assert config.schema_name == "shop"
        assert not hasattr(config, "unknown_field")


class TestFindConfigFile:
    """Tests for finding config files."""

    def test_find_config_in_cwd(self):
        """Test finding config file in current working directory."""
        with TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            config_file = tmppath / "dbdump.toml"
            config_file.write_text("[dbdump]\n")

            result = find_config_file(tmppath)
            assert result == config_file

    def test_config_not_found(self):
        """Test when config file doesn't exist."""
        with TemporaryDirectory() as tmpdir:
            assert find_config_file(Path(tmpdir)) is None

    def test_config_is_directory(self):
        """Test when dbdump.toml is a directory (not a file)."""
        with TemporaryDirectory() as tmpdir:
            tmppath = Path(tmpdir)
            (tmppath / "dbdump.toml").mkdir()

            assert find_config_file(tmppath) is None


class TestLoadConfig:
    """Tests for loading configuration from TOML files."""

    def test_load_valid_config(self):
        """Test loading a valid config with dump settings."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text(
                """
[dbdump]
url = "mysql://root@localhost:3306"
schema_name = "shop"
no_data = true
batch_size = 250
jobs = 4
ordering = "topological"
view_references = "parse"
log_level = "info"
"""
            )

            config = load_config(config_file)
            assert config.url == "mysql://root@localhost:3306"
            assert config.schema_name == "shop"
            assert config.no_data is True
            assert config.batch_size == 250
            assert config.jobs == 4
            assert config.ordering == "topological"
            assert config.view_references == "parse"
            assert config.log_level == "info"
            assert config.single_row_inserts is None

    def test_load_empty_config_file(self):
        """Test loading an empty config file."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text("")

            config = load_config(config_file)
            assert config == ConfigSettings()

    def test_load_config_with_extra_sections(self):
        """Test that extra TOML sections don't cause errors."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text(
                """
[dbdump]
schema_name = "shop"

[other_tool]
setting = "value"
"""
            )

            config = load_config(config_file)
            assert config.schema_name == "shop"

    def test_load_malformed_toml(self, capsys):
        """Test loading a malformed TOML file returns empty config with warning."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text(
                """
[dbdump
schema_name = "shop"  # Missing closing bracket
"""
            )

            config = load_config(config_file)
            assert config.schema_name is None
            assert "Warning:" in capsys.readouterr().err

    def test_load_config_file_not_found(self):
        """Test loading non-existent config file returns empty config."""
        with TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir) / "nonexistent.toml")
            assert config == ConfigSettings()

    def test_load_config_invalid_value_types(self):
        """Test that invalid value types are handled gracefully."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text(
                """
[dbdump]
batch_size = [1, 2]
"""
            )

            config = load_config(config_file)
            assert config.batch_size is None

    def test_load_config_section_not_a_table(self, capsys):
        """Test that a non-table dbdump key falls back to defaults."""
        with TemporaryDirectory() as tmpdir:
            config_file = Path(tmpdir) / "dbdump.toml"
            config_file.write_text('dbdump = "oops"\n')

            config = load_config(config_file)
            assert config == ConfigSettings()
            err = capsys.readouterr().err
            assert "Warning:" in err
            assert "must be a table" in err

    def test_load_from_cwd(self, tmp_path, monkeypatch):
        """Test that dbdump.toml in the working directory is found."""
        (tmp_path / "dbdump.toml").write_text('[dbdump]\nschema_name = "cwd"\n')
        monkeypatch.chdir(tmp_path)

        assert load_config().schema_name == "cwd"
