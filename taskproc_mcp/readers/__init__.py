"""Task file readers and the registry that selects between them."""

from pathlib import Path

from taskproc_mcp.readers.base import TaskReader
from taskproc_mcp.readers.csv_reader import CSVReader
from taskproc_mcp.readers.json_reader import JSONReader


class ReaderRegistry:
    """Ordered list of readers; the first one that can handle a path wins."""

    def __init__(self, readers: list[TaskReader] | None = None):
        self._readers: list[TaskReader] = list(readers or [])

    def register(self, reader: TaskReader) -> None:
        self._readers.append(reader)

    def select(self, path: str | Path) -> TaskReader | None:
        for reader in self._readers:
            if reader.can_handle(path):
                return reader
        return None


def default_registry() -> ReaderRegistry:
    """Registry with the built-in CSV and JSON readers."""
    return ReaderRegistry([CSVReader(), JSONReader()])


__all__ = [
    "TaskReader",
    "CSVReader",
    "JSONReader",
    "ReaderRegistry",
    "default_registry",
]
