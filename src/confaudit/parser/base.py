"""Base parser protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Parser(Protocol):
    """Protocol for configuration format backends.

    A backend turns the raw bytes of one file into a JSON-like value
    (dicts, lists and scalars).

    To implement a custom backend:
    1. Create a class that implements this protocol
    2. Register it with ParserRegistry

    Example:
        class PropertiesParser:
            name = "properties"
            extensions = (".properties",)
            filenames = ()

            def unmarshal(self, content: bytes) -> Any:
                ...
    """

    @property
    def name(self) -> str:
        """Unique name used by ``--parser``."""
        ...

    @property
    def extensions(self) -> tuple[str, ...]:
        """Lower-case file extensions (with dot) this backend handles."""
        ...

    @property
    def filenames(self) -> tuple[str, ...]:
        """Exact lower-case file names this backend handles (e.g. ``.env``)."""
        ...

    def unmarshal(self, content: bytes) -> Any:
        """Parse file content.

        Args:
            content: Raw file bytes

        Returns:
            The parsed value

        Raises:
            ValueError: If the content is not valid for this format
        """
        ...
