"""Unit tests for configuration parsers."""

import io
from pathlib import Path

import pytest

from confaudit.parser import (
    ConfigurationParser,
    DotenvParser,
    INIParser,
    JSONParser,
    ParserRegistry,
    TOMLParser,
    YAMLParser,
    get_default_registry,
)
from confaudit.utils.errors import ParserError, UnknownParserError


class TestBackends:
    """Tests for the individual format backends."""

    def test_yaml_single_document(self):
        assert YAMLParser().unmarshal(b"a: 1\nb: [x, y]\n") == {"a": 1, "b": ["x", "y"]}

    def test_yaml_multiple_documents(self):
        content = b"kind: Service\n---\nkind: Deployment\n---\n"
        assert YAMLParser().unmarshal(content) == [{"kind": "Service"}, {"kind": "Deployment"}]

    def test_yaml_empty(self):
        assert YAMLParser().unmarshal(b"") is None

    def test_yaml_invalid(self):
        with pytest.raises(ValueError):
            YAMLParser().unmarshal(b"a: [1, 2\n")

    def test_json(self):
        assert JSONParser().unmarshal(b'{"a": [1, 2]}') == {"a": [1, 2]}

    def test_json_invalid(self):
        with pytest.raises(ValueError):
            JSONParser().unmarshal(b"{nope}")

    def test_toml(self):
        content = b'title = "x"\n[server]\nport = 8080\nstarted = 2024-01-15\n'
        assert TOMLParser().unmarshal(content) == {
            "title": "x",
            "server": {"port": 8080, "started": "2024-01-15"},
        }

    def test_toml_invalid(self):
        with pytest.raises(ValueError):
            TOMLParser().unmarshal(b"title = \n")

    def test_ini(self):
        content = b"[DEFAULT]\nregion = eu\n[Server]\nHost = example.com\nport = 80\n"
        data = INIParser().unmarshal(content)

        assert data["DEFAULT"] == {"region": "eu"}
        assert data["Server"] == {"region": "eu", "Host": "example.com", "port": "80"}

    def test_ini_invalid(self):
        with pytest.raises(ValueError):
            INIParser().unmarshal(b"no section header\n")

    def test_dotenv(self):
        content = b'# comment\n\nPORT=8000\nexport NAME="app"\nQUOTED=\'x y\'\nEMPTY=\n'
        assert DotenvParser().unmarshal(content) == {
            "PORT": "8000",
            "NAME": "app",
            "QUOTED": "x y",
            "EMPTY": "",
        }

    def test_dotenv_invalid_line(self):
        with pytest.raises(ValueError, match="line 2"):
            DotenvParser().unmarshal(b"A=1\nnot a pair\n")


class TestParserRegistry:
    """Tests for ParserRegistry."""

    def test_default_registry(self):
        registry = get_default_registry()
        assert registry.names == ["yaml", "json", "toml", "ini", "dotenv"]
        assert len(registry) == 5

    def test_register_duplicate(self):
        registry = ParserRegistry()
        registry.register(YAMLParser())
        with pytest.raises(ValueError):
            registry.register(YAMLParser())

    def test_unregister(self):
        registry = get_default_registry()
        registry.unregister("ini")
        assert "ini" not in registry
        with pytest.raises(KeyError):
            registry.unregister("ini")

    def test_getitem_unknown(self):
        with pytest.raises(UnknownParserError):
            ParserRegistry()["yaml"]

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("deploy/app.yaml", "yaml"),
            ("deploy/APP.YML", "yaml"),
            ("package.json", "json"),
            ("pyproject.toml", "toml"),
            ("setup.cfg", "ini"),
            ("service/.env", "dotenv"),
            ("prod.env", "dotenv"),
        ],
    )
    def test_for_path(self, path, expected):
        assert get_default_registry().for_path(path).name == expected

    @pytest.mark.parametrize("path", ["README.md", "Makefile", "main.py"])
    def test_for_path_unsupported(self, path):
        assert get_default_registry().for_path(path) is None


class TestConfigurationParser:
    """Tests for ConfigurationParser."""

    def test_is_supported(self):
        parser = ConfigurationParser()
        assert parser.is_supported("a/b.yaml")
        assert not parser.is_supported("a/b.txt")

    def test_parse_auto_detects(self, tmp_path: Path):
        yaml_file = tmp_path / "a.yaml"
        yaml_file.write_text("a: 1")
        json_file = tmp_path / "b.json"
        json_file.write_text('{"b": 2}')

        configs = ConfigurationParser().parse([str(yaml_file), str(json_file)])
        assert configs == {str(yaml_file): {"a": 1}, str(json_file): {"b": 2}}

    def test_parse_unknown_extension(self, tmp_path: Path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with pytest.raises(UnknownParserError) as exc_info:
            ConfigurationParser().parse([str(path)])
        assert exc_info.value.name == ".txt"

    def test_parse_as(self, tmp_path: Path):
        path = tmp_path / "settings.txt"
        path.write_text("[main]\nkey = value\n")

        configs = ConfigurationParser().parse_as([str(path)], "ini")
        assert configs == {str(path): {"main": {"key": "value"}}}

    def test_parse_as_unknown(self, tmp_path: Path):
        with pytest.raises(UnknownParserError):
            ConfigurationParser().parse_as([str(tmp_path / "x.yaml")], "hcl9")

    def test_parse_invalid_content(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{")

        with pytest.raises(ParserError) as exc_info:
            ConfigurationParser().parse([str(path)])
        assert exc_info.value.path == str(path)

    def test_parse_missing_file(self, tmp_path: Path):
        with pytest.raises(ParserError):
            ConfigurationParser().parse([str(tmp_path / "gone.yaml")])

    def test_stdin_parsed_as_yaml(self):
        parser = ConfigurationParser(stdin=io.StringIO("user: root\n"))
        assert parser.parse(["-"]) == {"-": {"user": "root"}}

    def test_stdin_with_forced_parser(self):
        parser = ConfigurationParser(stdin=io.StringIO('{"a": 1}'))
        assert parser.parse_as(["-"], "json") == {"-": {"a": 1}}
