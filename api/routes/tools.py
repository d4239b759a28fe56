"""Tool listing and invocation endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException, Request
from pydantic import BaseModel

from tools.registry import get_categories, to_category


router = APIRouter()


class CategoryInfo(BaseModel):
    """A category and how many of its tools are enabled."""
    name: str
    enabled_tools: int


@router.get("")
async def list_tools(request: Request, category: Optional[str] = None) -> List[Dict[str, Any]]:
    """List enabled tools in wire format, optionally for one category."""
    dispatcher = request.app.state.dispatcher
    if category is None:
        return dispatcher.to_wire_format()

    try:
        wanted = to_category(category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return [tool.to_wire_format() for tool in dispatcher.list_tools() if tool.category == wanted]


@router.get("/categories", response_model=List[CategoryInfo])
async def list_categories(request: Request) -> List[CategoryInfo]:
    """All known categories with their enabled tool counts."""
    counts: Dict[str, int] = {name: 0 for name in get_categories()}
    for tool in request.app.state.dispatcher.list_tools():
        counts[tool.category.value] += 1
    return [CategoryInfo(name=name, enabled_tools=count) for name, count in counts.items()]


@router.post("/{name}")
async def call_tool(
    name: str,
    request: Request,
    arguments: Optional[Dict[str, Any]] = Body(None),
) -> Any:
    """Invoke a tool. The JSON body is the argument object.

    Errors are mapped by the application's exception handlers.
    """
    request_id = request.headers.get("X-Request-ID")
    return await request.app.state.dispatcher.execute(name, arguments, request_id=request_id)
