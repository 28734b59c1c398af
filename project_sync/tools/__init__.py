"""MCP tools for project-sync."""

from project_sync.tools.sync import register_sync_tools
from project_sync.tools.project import register_project_tools

__all__ = [
    "register_sync_tools",
    "register_project_tools",
]
