"""FastMCP server initialization for TaskProc MCP."""

from mcp.server.fastmcp import FastMCP

from taskproc_mcp.config import get_settings
from taskproc_mcp.core.manager import DataManager
from taskproc_mcp.logging_setup import setup_logging

# Initialize the MCP server
mcp = FastMCP("taskproc_mcp")

_manager: DataManager | None = None


def get_manager() -> DataManager:
    """Return the process-wide DataManager, restoring the saved view on first use."""
    global _manager
    if _manager is None:
        _manager = DataManager(get_settings().storage_path)
    return _manager


def set_manager(manager: DataManager | None) -> None:
    """Replace the process-wide DataManager (None rebuilds it on next use)."""
    global _manager
    _manager = manager


def run() -> None:
    """Run the MCP server."""
    import taskproc_mcp.tools  # noqa: F401  (registers the tools on `mcp`)

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    set_manager(DataManager(settings.storage_path))
    mcp.run()
