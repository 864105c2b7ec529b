"""Configuration parsers.

Built-in backends: yaml, json, toml, ini, dotenv.
"""

from confaudit.parser.base import Parser
from confaudit.parser.registry import ParserRegistry
from confaudit.parser.yaml_parser import YAMLParser
from confaudit.parser.json_parser import JSONParser
from confaudit.parser.toml_parser import TOMLParser
from confaudit.parser.ini_parser import INIParser
from confaudit.parser.dotenv_parser import DotenvParser
from confaudit.parser.configuration import STDIN_MARKER, ConfigurationParser

__all__ = [
    "Parser",
    "ParserRegistry",
    "YAMLParser",
    "JSONParser",
    "TOMLParser",
    "INIParser",
    "DotenvParser",
    "ConfigurationParser",
    "STDIN_MARKER",
    "get_default_registry",
]


def get_default_registry() -> ParserRegistry:
    """Create a registry holding the built-in backends.

    Returns:
        A new ParserRegistry with every built-in backend registered
    """
    registry = ParserRegistry()
    for parser in (YAMLParser(), JSONParser(), TOMLParser(), INIParser(), DotenvParser()):
        registry.register(parser)
    return registry
