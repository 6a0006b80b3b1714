"""Exception types raised by TaskProc MCP."""


class TaskProcError(Exception):
    """Base class for all recoverable TaskProc errors."""


class ParseError(TaskProcError, ValueError):
    """A filter or sort expression could not be compiled."""


class SourceError(TaskProcError):
    """The task source file could not be selected, opened or parsed."""


class StorageError(TaskProcError):
    """The durable action log could not be read or written."""


class StaleViewError(TaskProcError):
    """A view was read after the store it points into was reloaded."""
