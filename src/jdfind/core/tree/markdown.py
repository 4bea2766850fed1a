"""Render a system as an indented markdown outline."""

import io

from jdfind.models.hierarchy import Area, Category, System


def _child_count(node: Area | Category) -> int:
    if isinstance(node, Area):
        return len(node.categories)
    return len(node.items or ())


def _write_details(out: io.StringIO, node: Area | Category, indent: str) -> None:
    for line in node.description.split("\n") if node.description else ():
        out.write(f"{indent}  > {line}\n")
    if node.tags:
        out.write(f"{indent}  " + " ".join(f"#{t}" for t in node.tags) + "\n")


def _write_truncation(out: io.StringIO, node: Area | Category, indent: str) -> None:
    count = _child_count(node)
    if count:
        noun = "child" if count == 1 else "children"
        out.write(f"{indent}    - ... ({count} more {noun}, id={node.id})\n")


def render_system_as_markdown(
    system: System,
    *,
    max_depth: int | None = None,
    include_details: bool = True,
) -> str:
    """Render areas, categories and items as a bullet-list hierarchy.

    Args:
        system: The system to render.
        max_depth: Levels to include (1 = areas only, None = unlimited).
        include_details: Whether to include descriptions and tags.

    Returns:
        Markdown string headed by the system name. Items are sorted by name.
    """
    out = io.StringIO()
    out.write(f"# {system.name}\n\n")

    for area in system.areas:
        out.write(f"- {area.id} {area.name}\n")
        if include_details:
            _write_details(out, area, "")
        if max_depth is not None and max_depth <= 1:
            _write_truncation(out, area, "")
            continue

        for category in area.categories:
            indent = "    "
            out.write(f"{indent}- {category.id} {category.name}\n")
            if include_details:
                _write_details(out, category, indent)
            if max_depth is not None and max_depth <= 2:
                _write_truncation(out, category, indent)
                continue

            for item in sorted(category.items or (), key=lambda i: i.name.casefold()):
                out.write(f"{indent}    - {item.id} {item.name}\n")

    return out.getvalue()
