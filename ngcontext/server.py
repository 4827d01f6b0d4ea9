"""MCP server exposing project scans as tools over stdio.

Register with an MCP host, for example::

    {
        "mcpServers": {
            "ngcontext": {
                "command": "ngcontext",
                "args": ["--root", "/path/to/angular-app", "mcp"]
            }
        }
    }
"""

from __future__ import annotations

from typing import List, Literal, Optional

from fastmcp import FastMCP

from .config import ProjectConfig
from .logging import get_logger
from .tools import ProjectTools

SERVER_NAME = "ngcontext"

_logger = get_logger("server")


def create_server(config: ProjectConfig) -> FastMCP:
    """Build an MCP server bound to the project described by ``config``."""
    tools = ProjectTools(config)
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool()
    def search_codebase(
        query: str,
        file_types: Optional[List[str]] = None,
        directory: Optional[str] = None,
    ) -> str:
        """
        Search project files for a literal, case-insensitive text pattern.

        Args:
            query: Text to search for.
            file_types: Extensions to search (e.g. [".ts", ".html"]). Defaults to all allowed types.
            directory: Directory to search within, relative to the project root.

        Returns:
            Markdown with up to 50 line hits, excerpts and a pattern distribution.
        """
        return tools.search_report(query, file_types, directory)

    @mcp.tool()
    def read_file(file_path: str) -> str:
        """
        Read a project file by its path relative to the project root
        (e.g. "src/app/app.component.ts").
        """
        return tools.read_file_report(file_path)

    @mcp.tool()
    def analyze_component_usage(
        component: str = "",
        include_context: bool = True,
        group_by: Literal["component", "file", "category"] = "component",
        show_unused: bool = False,
    ) -> str:
        """
        Analyze where components are used: template tags, TypeScript imports
        and standalone `imports: [...]` arrays.

        Args:
            component: Optional name or selector filter (e.g. "ButtonComponent", "app-button").
            include_context: Include code context around each usage.
            group_by: Group results by component, file, or category.
            show_unused: Include components that are not used anywhere.
        """
        return tools.component_usage_report(
            component or None,
            include_context=include_context,
            group_by=group_by,
            show_unused=show_unused,
        )

    @mcp.tool()
    def extract_file_structure(
        file_path: str,
        kind: Literal["component", "service", "typescript", "template", "interface"] = "typescript",
    ) -> str:
        """
        List imports, exports, interfaces, methods, injected dependencies and
        component references found in a single file.
        """
        return tools.file_structure_report(file_path, kind)

    @mcp.tool()
    def analyze_architecture(
        focus_area: Literal["components", "services", "all"] = "all",
    ) -> str:
        """
        Inventory component and service files with their detected features,
        patterns and dependency kinds.
        """
        return tools.architecture_report(focus_area)

    return mcp


def run_stdio(config: ProjectConfig) -> None:  # pragma: no cover - integration path
    _logger.info("Starting MCP server for %s", config.root)
    _logger.info("Allowed file types: %s", ", ".join(config.allowed_extensions))
    create_server(config).run()


__all__ = ["SERVER_NAME", "create_server", "run_stdio"]
