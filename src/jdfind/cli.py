"""CLI for jdfind (import, browse, search, edit, MCP server)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from jdfind.config import MAX_DOMAINS, resolve_data_directory
from jdfind.core.edit.editor import (
    DuplicateIdError,
    NodeNotFoundError,
    add_tag,
    find_system,
    get_area,
    get_category,
    update_area,
    update_category,
    upsert_system,
)
from jdfind.core.edit.quick_add import quick_add
from jdfind.core.export.json_writer import export_system
from jdfind.core.importer.json_reader import ValidationError
from jdfind.core.importer.loader import read_systems_file
from jdfind.core.search.highlight import highlight
from jdfind.core.search.ranker import search_system
from jdfind.core.store.json_store import SystemStore
from jdfind.core.tree.markdown import render_system_as_markdown
from jdfind.logging_config import configure_logging
from jdfind.models.hierarchy import Area, Category, System

app = typer.Typer(help="jdfind: find where to file things in your Johnny-Decimal systems.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Directory holding systems.json"),
]
SystemOption = Annotated[
    str | None,
    typer.Option("--system", "-s", help="System name or index (default: first)"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _open_store(data_dir: Path | None) -> SystemStore:
    return SystemStore(data_dir or resolve_data_directory())


def _load(store: SystemStore) -> list[System]:
    try:
        return store.load()
    except ValidationError as e:
        logger.error("Store {} is invalid: {}", store.path, e)
        raise typer.Exit(1) from e


def _select(systems: list[System], system: str | None) -> System:
    try:
        return find_system(systems, system)
    except NodeNotFoundError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _target(system: System, area_id: str, category_id: str | None) -> Area | Category:
    try:
        if category_id:
            return get_category(system, area_id, category_id)
        return get_area(system, area_id)
    except NodeNotFoundError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


@app.command(name="import")
def import_cmd(
    file: Path = typer.Argument(..., help="JSON file: a system or a {domains: [...]} wrapper"),
    data_dir: DataDirOption = None,
) -> None:
    """Import systems from a JSON file, replacing stored systems with the same name."""
    if not file.exists():
        logger.error("File not found: {}", file)
        raise typer.Exit(1)

    try:
        imported = read_systems_file(file)
    except ValidationError as e:
        logger.error("Import failed: {}", e)
        raise typer.Exit(1) from e

    store = _open_store(data_dir)
    systems = _load(store)
    for system in imported:
        upsert_system(systems, system)
    if len(systems) > MAX_DOMAINS:
        logger.error("Import failed: maximum {} systems can be stored", MAX_DOMAINS)
        raise typer.Exit(1)
    store.save(systems)

    for system in imported:
        typer.echo(f'Loaded "{system.name}" with {len(system.areas)} areas')


@app.command()
def export(
    system: SystemOption = None,
    out: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output directory (default: current directory)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Export a system to <name>.json."""
    target = _select(_load(_open_store(data_dir)), system)
    out_dir = out or Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = export_system(target, out_dir)
    typer.echo(f"Exported {target.name} to {path}")


@app.command()
def systems(
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List stored systems."""
    stored = _load(_open_store(data_dir))
    if output_json:
        from jdfind.mcp.server import jd_list_systems

        typer.echo(json.dumps(jd_list_systems(stored), indent=2))
        return

    typer.echo(f"{len(stored)} systems:\n")
    for i, s in enumerate(stored):
        typer.echo(f"  [{i}] {s.name} - {len(s.areas)} areas, {s.node_count()} nodes")


@app.command()
def show(
    system: SystemOption = None,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="1 = areas, 2 = categories"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show a system as an outline."""
    target = _select(_load(_open_store(data_dir)), system)
    typer.echo(render_system_as_markdown(target, max_depth=max_depth), nl=False)


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    system: SystemOption = None,
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Max results"),
    deep: bool = typer.Option(
        False, "--deep", help="Let ancestor descriptions and tags match nested nodes"
    ),
    data_dir: DataDirOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search a system for the best place to file something."""
    target = _select(_load(_open_store(data_dir)), system)
    results = search_system(target, query, include_ancestor_details=deep)
    shown = results[:limit]

    if output_json:
        data = {
            "results": [
                {
                    "kind": r.kind.value,
                    "node_id": r.node_id,
                    "name": r.name,
                    "path": r.path,
                    "score": round(r.score, 4),
                    "matched_terms": list(r.matched_terms),
                }
                for r in shown
            ],
            "total": len(results),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Found {len(results)} results (showing {len(shown)}):\n")
    for r in shown:
        typer.echo(f"  {r.path}  {highlight(r.name, r.matched_terms)}  ({r.score:.2f})")
        if r.category is not None:
            typer.echo(f"    in {r.area.id} {r.area.name}")
        typer.echo()


@app.command()
def describe(
    area_id: str = typer.Argument(..., help="Area id"),
    text: str = typer.Argument(..., help="New description"),
    category_id: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Category id inside the area"),
    ] = None,
    system: SystemOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Replace the description of an area or category."""
    store = _open_store(data_dir)
    stored = _load(store)
    target = _select(stored, system)
    node: Area | Category
    try:
        if category_id:
            node = update_category(target, area_id, category_id, description=text)
        else:
            node = update_area(target, area_id, description=text)
    except NodeNotFoundError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    store.save(stored)
    typer.echo(f"Updated {node.id} {node.name}")


@app.command()
def tag(
    area_id: str = typer.Argument(..., help="Area id"),
    tags: list[str] = typer.Argument(..., help="Tags to add"),
    category_id: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Category id inside the area"),
    ] = None,
    system: SystemOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Add tags to an area or category."""
    store = _open_store(data_dir)
    stored = _load(store)
    node = _target(_select(stored, system), area_id, category_id)
    added = [t for t in tags if add_tag(node, t)]
    store.save(stored)
    typer.echo(f"{node.id} {node.name}: " + " ".join(f"#{t}" for t in node.tags))
    if not added:
        typer.echo("No new tags.")


@app.command()
def add(
    area_id: str = typer.Argument(..., help="Area id"),
    text: str = typer.Argument(..., help='Quick-add text: "Name [NN]" lines, #tags, notes'),
    category_id: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Category id inside the area"),
    ] = None,
    system: SystemOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Quick-add categories, items, tags and notes."""
    store = _open_store(data_dir)
    stored = _load(store)
    target = _select(stored, system)
    try:
        result = quick_add(target, area_id=area_id, category_id=category_id, text=text)
    except (NodeNotFoundError, DuplicateIdError) as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    store.save(stored)

    for category in result.categories_added:
        typer.echo(f"Added category {category.id} {category.name}")
    for item in result.items_added:
        typer.echo(f"Added item {item.id} {item.name}")
    if result.tags_added:
        typer.echo("Added tags: " + " ".join(f"#{t}" for t in result.tags_added))


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from jdfind.mcp.server import run_mcp_server

    run_mcp_server()
