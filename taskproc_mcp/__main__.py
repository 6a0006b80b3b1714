"""Entry point for ``python -m taskproc_mcp``."""

from taskproc_mcp.server import run

run()
