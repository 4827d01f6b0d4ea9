"""FastAPI application exposing the project scans over HTTP."""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Literal, Optional, TypeVar

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import (
    AccessError,
    DirectoryUnavailableError,
    DisallowedTypeError,
    NotAccessibleError,
    OutOfScopeError,
)
from ..tools import ProjectTools

_T = TypeVar("_T")

_STATUS_BY_ERROR = {
    OutOfScopeError: 403,
    DisallowedTypeError: 415,
    NotAccessibleError: 404,
    DirectoryUnavailableError: 404,
}


class SearchRequest(BaseModel):
    query: str
    file_types: Optional[List[str]] = None
    directory: Optional[str] = None


class ReadFileRequest(BaseModel):
    file_path: str


class UsageRequest(BaseModel):
    component: Optional[str] = None
    include_context: bool = True
    show_unused: bool = False


class StructureRequest(BaseModel):
    file_path: str
    kind: str = "typescript"


class InventoryRequest(BaseModel):
    focus: Literal["components", "services", "all"] = "all"


class HealthResponse(BaseModel):
    status: str
    root: str


async def _run_blocking(func: Callable[[], _T]) -> _T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(tools_factory: Callable[[], ProjectTools]) -> FastAPI:
    """Create the FastAPI application exposing ngcontext operations."""

    app = FastAPI(title="ngcontext Service", version="1.0.0")

    async def get_tools() -> ProjectTools:
        return tools_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health(tools: ProjectTools = Depends(get_tools)) -> HealthResponse:
        return HealthResponse(status="ok", root=str(tools.root))

    @app.post("/search")
    async def search(payload: SearchRequest, tools: ProjectTools = Depends(get_tools)) -> Dict[str, Any]:
        outcome = await _run_blocking(
            lambda: tools.search_codebase(payload.query, payload.file_types, payload.directory)
        )
        result = asdict(outcome)
        result["matched_files"] = outcome.matched_files
        return result

    @app.post("/read-file")
    async def read_file(payload: ReadFileRequest, tools: ProjectTools = Depends(get_tools)) -> Dict[str, Any]:
        file = await _run_blocking(lambda: tools.read_file(payload.file_path))
        return asdict(file)

    @app.post("/component-usage")
    async def component_usage(payload: UsageRequest, tools: ProjectTools = Depends(get_tools)) -> Dict[str, Any]:
        analysis = await _run_blocking(
            lambda: tools.analyze_component_usage(
                payload.component, include_context=payload.include_context
            )
        )
        components = analysis.components
        if not payload.show_unused:
            components = [item for item in components if item.total_usages > 0]
        skipped = analysis.discovery.skipped + analysis.usage_scan.skipped
        return {
            "components": [item.to_dict() for item in components],
            "skipped": [asdict(entry) for entry in skipped],
        }

    @app.post("/file-structure")
    async def file_structure(payload: StructureRequest, tools: ProjectTools = Depends(get_tools)) -> Dict[str, Any]:
        summary = await _run_blocking(
            lambda: tools.extract_file_structure(payload.file_path, payload.kind)
        )
        return asdict(summary)

    @app.post("/inventory")
    async def inventory(payload: InventoryRequest, tools: ProjectTools = Depends(get_tools)) -> Dict[str, Any]:
        result = await _run_blocking(lambda: tools.inventory(payload.focus))
        return asdict(result)

    @app.exception_handler(AccessError)
    async def access_error_handler(_: Request, exc: AccessError) -> JSONResponse:
        status = _STATUS_BY_ERROR.get(type(exc), 400)
        return JSONResponse(status_code=status, content={"detail": str(exc), "kind": exc.kind})

    return app


def run_service(
    tools_factory: Callable[[], ProjectTools], host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(tools_factory)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
