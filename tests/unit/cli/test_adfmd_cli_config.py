#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for CLI configuration loading and discovery."""

import logging

import pytest

from adfmd.cli.config import (
    CliConfig,
    build_cli_config,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    resolve_cli_config,
)
from adfmd.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test reading configuration files of each format."""

    def test_toml(self, tmp_path) -> None:
        """Test TOML tables load as nested dicts."""
        path = tmp_path / "c.toml"
        path.write_text('[read_view]\nrule_width = 60\n\n[read_view.theme]\nmuted = "#888888"\n', encoding="utf-8")
        assert load_config_file(path) == {"read_view": {"rule_width": 60, "theme": {"muted": "#888888"}}}

    def test_yaml(self, tmp_path) -> None:
        """Test YAML files."""
        path = tmp_path / "c.yml"
        path.write_text("parser:\n  parse_tables: false\n", encoding="utf-8")
        assert load_config_file(path) == {"parser": {"parse_tables": False}}

    def test_empty_yaml(self, tmp_path) -> None:
        """Test an empty YAML file is an empty config."""
        path = tmp_path / "c.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path) -> None:
        """Test JSON files."""
        path = tmp_path / "c.json"
        path.write_text('{"markdown": {"bullet_marker": "*"}}', encoding="utf-8")
        assert load_config_file(path) == {"markdown": {"bullet_marker": "*"}}

    def test_pyproject_section(self, tmp_path) -> None:
        """Test pyproject.toml contributes only its tool table."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.adfmd.markdown]\nbullet_marker = "*"\n', encoding="utf-8")
        assert load_config_file(path) == {"markdown": {"bullet_marker": "*"}}

    def test_missing_file(self, tmp_path) -> None:
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path / "none.toml")
        assert exc_info.value.config_path is not None

    def test_unsupported_extension(self, tmp_path) -> None:
        """Test unknown extensions are rejected."""
        path = tmp_path / "c.ini"
        path.write_text("[markdown]\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Unsupported"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "name,content",
        [("c.toml", "[markdown\n"), ("c.json", "{bad"), ("c.yaml", "a: [1, 2")],
    )
    def test_malformed(self, tmp_path, name: str, content: str) -> None:
        """Test parse failures are wrapped in ConfigError."""
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_root_must_be_table(self, tmp_path) -> None:
        """Test a list at the root is rejected."""
        path = tmp_path / "c.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="table"):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestDiscovery:
    """Test configuration discovery."""

    def test_found_in_parent(self, isolated_cwd) -> None:
        """Test files in parent directories are found."""
        config = isolated_cwd / ".adfmd.yaml"
        config.write_text("{}", encoding="utf-8")
        nested = isolated_cwd / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_filename_precedence(self, isolated_cwd) -> None:
        """Test TOML wins over YAML in the same directory."""
        (isolated_cwd / ".adfmd.yaml").write_text("{}", encoding="utf-8")
        (isolated_cwd / ".adfmd.toml").write_text("", encoding="utf-8")
        assert find_config_in_parents(isolated_cwd).name == ".adfmd.toml"

    def test_pyproject_without_section_skipped(self, isolated_cwd) -> None:
        """Test a pyproject.toml without [tool.adfmd] is not a config file."""
        (isolated_cwd / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert find_config_in_parents(isolated_cwd) is None

    def test_pyproject_with_section(self, isolated_cwd) -> None:
        """Test a pyproject.toml with [tool.adfmd] is used."""
        path = isolated_cwd / "pyproject.toml"
        path.write_text('[tool.adfmd.parser]\nparse_tables = false\n', encoding="utf-8")
        assert find_config_in_parents(isolated_cwd) == path.resolve()

    def test_home_fallback(self, isolated_cwd, tmp_path_factory, monkeypatch) -> None:
        """Test the home directory is checked last."""
        home = tmp_path_factory.mktemp("home")
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.setenv("USERPROFILE", str(home))
        config = home / ".adfmd.json"
        config.write_text("{}", encoding="utf-8")
        assert discover_config_file(isolated_cwd) == config

    def test_nothing_found(self, isolated_cwd) -> None:
        """Test defaults are used without a config file."""
        assert resolve_cli_config() == CliConfig()


@pytest.mark.unit
@pytest.mark.cli
class TestBuildCliConfig:
    """Test building option objects from configuration tables."""

    def test_all_sections(self, tmp_path) -> None:
        """Test every section maps to its option class."""
        config = build_cli_config(
            {
                "markdown": {"bullet_marker": "*"},
                "parser": {"parse_task_lists": False},
                "read_view": {"bullet_symbol": "-", "theme": {"link": "#0000ff"}},
            },
            source=tmp_path / "c.toml",
        )
        assert config.markdown.bullet_marker == "*"
        assert config.parser.parse_task_lists is False
        assert config.read_view.bullet_symbol == "-"
        assert config.read_view.theme.link == "#0000ff"
        assert config.source == tmp_path / "c.toml"

    def test_unknown_section_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test unknown sections are ignored with a warning."""
        with caplog.at_level(logging.WARNING):
            config = build_cli_config({"render": {}})
        assert config == CliConfig()
        assert any("render" in record.message for record in caplog.records)

    def test_unknown_option(self) -> None:
        """Test unknown option names are configuration errors."""
        with pytest.raises(ConfigError, match="Unknown option 'wrap'"):
            build_cli_config({"markdown": {"wrap": 80}})

    def test_section_not_table(self) -> None:
        """Test sections must be tables."""
        with pytest.raises(ConfigError, match="must be a table"):
            build_cli_config({"parser": True})

    def test_invalid_value(self) -> None:
        """Test values rejected by option validation."""
        with pytest.raises(ConfigError):
            build_cli_config({"read_view": {"rule_width": -5}})

    def test_resolve_explicit_path(self, tmp_path) -> None:
        """Test an explicit path is loaded and recorded."""
        path = tmp_path / "c.json"
        path.write_text('{"markdown": {"list_indent_width": 4}}', encoding="utf-8")
        config = resolve_cli_config(path)
        assert config.markdown.list_indent_width == 4
        assert config.source == path
