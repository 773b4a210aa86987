"""Tool API endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from recontools.core.exceptions import ScanError, ValidationError
from recontools.core.logging import get_logger
from recontools.scanners import ScannerRegistry
from recontools.tools import Tool, run_tool

router = APIRouter()
logger = get_logger(__name__)


class ToolInfo(BaseModel):
    """Description of an available tool."""

    name: str
    description: str
    capabilities: list[str]


@router.get("/tools", response_model=list[ToolInfo])
async def list_tools() -> list[ToolInfo]:
    """List the available reconnaissance tools."""
    tools = []
    for name in ScannerRegistry.list_all():
        scanner = ScannerRegistry.get_instance(name)
        if scanner is None:
            continue
        tools.append(
            ToolInfo(
                name=scanner.name,
                description=scanner.description,
                capabilities=scanner.get_capabilities(),
            )
        )
    return tools


@router.get("/tools/{tool}")
async def run(
    tool: Tool,
    target: str = Query(..., description="Target URL or hostname", examples=["example.com"]),
) -> dict[str, Any]:
    """
    Run one tool against a target.

    Invalid targets answer 400; upstream failures answer 502.
    """
    try:
        result = await run_tool(tool, target)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message) from None
    except ScanError as e:
        logger.warning("tool_request_failed", tool=tool.value, target=target, error=e.message)
        raise HTTPException(status_code=502, detail=e.message) from None

    return result.model_dump(mode="json")
