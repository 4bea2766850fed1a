"""MCP server exposing filing-system search, browsing and quick-add tools."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from jdfind.config import resolve_data_directory
from jdfind.core.edit.editor import DuplicateIdError, NodeNotFoundError, find_system
from jdfind.core.edit.quick_add import quick_add
from jdfind.core.export.json_writer import system_to_dict
from jdfind.core.importer.json_reader import ValidationError
from jdfind.core.search.highlight import highlight
from jdfind.core.search.ranker import search_system
from jdfind.core.store.json_store import SystemStore
from jdfind.core.tree.markdown import render_system_as_markdown
from jdfind.models.hierarchy import ScoredResult, System
from jdfind.protocols import SystemStoreProtocol


def _serialize_result(r: ScoredResult, *, highlight_matches: bool) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "kind": r.kind.value,
        "node_id": r.node_id,
        "name": r.name,
        "path": r.path,
        "area": f"{r.area.id} {r.area.name}",
        "score": round(r.score, 4),
        "matched_terms": list(r.matched_terms),
    }
    if r.category is not None and r.item is not None:
        entry["category"] = f"{r.category.id} {r.category.name}"
    if highlight_matches:
        entry["highlighted"] = highlight(r.name, r.matched_terms)
    return entry


# --- Core functions (testable without MCP context) ---


def jd_search(
    systems: list[System],
    *,
    query: str = "",
    system: str | None = None,
    limit: int = 20,
    offset: int = 0,
    deep: bool = False,
    highlight_matches: bool = True,
) -> dict[str, Any]:
    """Find where to file something: rank areas, categories and items by BM25.

    Terms match any word containing them ("doc" matches "Documents"),
    case-insensitively.

    Args:
        query: Free-text search.
        system: System name or index (default: the first system).
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        deep: Let ancestor descriptions and tags match nested nodes.
        highlight_matches: Add a name with matched terms wrapped in ``**``.
    """
    if not query.strip():
        return {"error": "No search query provided.", "results": [], "count": 0, "total": 0}

    limit = max(1, min(limit, 50))
    offset = max(0, offset)

    try:
        target = find_system(systems, system)
    except NodeNotFoundError as e:
        return {"error": str(e), "results": [], "count": 0, "total": 0}

    results = search_system(target, query, include_ancestor_details=deep)
    total = len(results)
    page = results[offset : offset + limit]

    output: dict[str, Any] = {
        "system": target.name,
        "results": [_serialize_result(r, highlight_matches=highlight_matches) for r in page],
        "count": len(page),
        "total": total,
        "has_more": offset + len(page) < total,
    }
    if output["has_more"]:
        output["next_offset"] = offset + limit
    return output


def jd_list_systems(systems: list[System]) -> dict[str, Any]:
    """List all stored systems with their size."""
    return {
        "systems": [
            {"index": i, "name": s.name, "areas": len(s.areas), "node_count": s.node_count()}
            for i, s in enumerate(systems)
        ],
        "count": len(systems),
    }


def jd_read_system(
    systems: list[System],
    *,
    system: str | None = None,
    max_depth: int | None = None,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Read a whole system as a markdown outline or as JSON.

    Args:
        system: System name or index.
        max_depth: 1 = areas, 2 = categories, None = everything (markdown only).
        output_format: "markdown" or "json".
    """
    try:
        target = find_system(systems, system)
    except NodeNotFoundError as e:
        return {"error": str(e)}

    if output_format == "json":
        return {"system": system_to_dict(target)}
    return {
        "name": target.name,
        "content": render_system_as_markdown(target, max_depth=max_depth),
    }


def jd_quick_add(
    store: SystemStoreProtocol,
    *,
    area_id: str,
    text: str,
    category_id: str | None = None,
    system: str | None = None,
) -> dict[str, Any]:
    """Apply quick-add text to an area or category and save the result.

    ``Name [NN]`` lines add a category (on an area) or an item (on a category),
    ``#word`` adds a tag, anything else is appended to the description.
    """
    systems = store.load()
    try:
        target = find_system(systems, system)
        result = quick_add(target, area_id=area_id, category_id=category_id, text=text)
    except (NodeNotFoundError, DuplicateIdError) as e:
        return {"success": False, "error": str(e)}

    store.save(systems)
    return {
        "success": True,
        "description": result.description,
        "items_added": [{"id": i.id, "name": i.name} for i in result.items_added],
        "categories_added": [{"id": c.id, "name": c.name} for c in result.categories_added],
        "tags_added": list(result.tags_added),
    }


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    store: SystemStoreProtocol
    data_dir: Path
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Open the store on startup."""
    data_dir = resolve_data_directory()
    store = SystemStore(data_dir)
    try:
        logger.info("Serving {} system(s) from {}", len(store.load()), data_dir)
    except ValidationError:
        logger.warning("Store at {} is invalid; tools will report errors", data_dir)
    yield ServerContext(store=store, data_dir=data_dir)


mcp_server = FastMCP(
    "jdfind",
    instructions="""\
A Johnny-Decimal filing system: areas (e.g. "10-19 Administration") contain
categories ("11 HR Documents") which contain items ("11.01 Contracts").

## Finding where to file something

1. Call jd_search_tool with a few descriptive words.
2. The best match comes first; its `path` is the id chain to file under.
3. Use jd_read_system_tool with max_depth=2 for an overview of all areas
   and categories when no result fits.

Set deep=true to let area and category descriptions and tags also match
their children.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


def _load(ctx: ServerContext) -> list[System] | dict[str, Any]:
    try:
        return ctx.store.load()
    except ValidationError as e:
        return {"error": f"Store is invalid: {e}"}


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def jd_search_tool(
    ctx: Context,
    query: str,
    system: str | None = None,
    limit: int = 20,
    offset: int = 0,
    deep: bool = False,
) -> dict[str, Any]:
    """Search areas, categories and items of a filing system.

    Results are ranked by BM25 relevance. Terms match any word that contains
    them, case-insensitively.

    Pagination: When has_more is true, use next_offset in a follow-up call.

    Args:
        query: Search text.
        system: System name or index (default: first system).
        limit: Max results (1-50, default 20).
        offset: Pagination offset.
        deep: Let ancestor descriptions and tags match nested nodes.
    """
    systems = _load(_ctx(ctx))
    if isinstance(systems, dict):
        return systems
    return jd_search(
        systems, query=query, system=system, limit=limit, offset=offset, deep=deep
    )


@mcp_server.tool()
async def jd_list_systems_tool(ctx: Context) -> dict[str, Any]:
    """List all stored filing systems."""
    systems = _load(_ctx(ctx))
    if isinstance(systems, dict):
        return systems
    return jd_list_systems(systems)


@mcp_server.tool()
async def jd_read_system_tool(
    ctx: Context,
    system: str | None = None,
    max_depth: int | None = None,
    output_format: str = "markdown",
) -> dict[str, Any]:
    """Read a filing system as a markdown outline or structured JSON.

    Args:
        system: System name or index (default: first system).
        max_depth: 1 = areas only, 2 = with categories, None = everything.
        output_format: "markdown" (human-readable) or "json" (structured).
    """
    systems = _load(_ctx(ctx))
    if isinstance(systems, dict):
        return systems
    return jd_read_system(systems, system=system, max_depth=max_depth, output_format=output_format)


@mcp_server.tool()
async def jd_quick_add_tool(
    ctx: Context,
    area_id: str,
    text: str,
    category_id: str | None = None,
    system: str | None = None,
) -> dict[str, Any]:
    """Add categories, items, tags or description text with quick-add syntax.

    "Name [NN]" lines add a category to an area, or an item to a category.
    "#word" adds a tag. Other text is appended to the description.

    Args:
        area_id: Target area id, e.g. "10-19".
        text: Quick-add text.
        category_id: Target category id inside the area, e.g. "11".
        system: System name or index (default: first system).
    """
    server_ctx = _ctx(ctx)
    async with server_ctx.write_lock:
        try:
            return jd_quick_add(
                server_ctx.store,
                area_id=area_id,
                text=text,
                category_id=category_id,
                system=system,
            )
        except ValidationError as e:
            return {"success": False, "error": f"Store is invalid: {e}"}


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from jdfind.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
