"""Quick-add parsing: ``Name [NN]`` lines become nodes, ``#word`` becomes a tag.

Typing into an area's description::

    Taxes [12]
    yearly paperwork #finance

adds category ``12 Taxes`` to the area, tags the area with ``finance`` and
appends ``yearly paperwork`` to its description. On a category the same
``Name [NN]`` line adds item ``<prefix>.<category>.NN``.
"""

import re
from dataclasses import dataclass

from loguru import logger

from jdfind.core.edit.editor import (
    DuplicateIdError,
    add_category,
    add_item,
    add_tag,
    get_area,
    get_category,
)
from jdfind.models.hierarchy import Area, Category, Item, System

_SYSTEM_PREFIX_RE = re.compile(r"^([a-zA-Z]\d+)")
_ITEM_PATTERN_RE = re.compile(r"^(.+?)\s*\[(\d+)\]$")
_HASHTAG_RE = re.compile(r"(?<!\S)#(\w+)(?!\S)")


@dataclass(frozen=True)
class ItemPattern:
    """A parsed ``Name [NN]`` line."""

    name: str
    number: str


@dataclass(frozen=True)
class QuickAddResult:
    """What a quick-add changed on its target node."""

    description: str
    items_added: tuple[Item, ...] = ()
    categories_added: tuple[Category, ...] = ()
    tags_added: tuple[str, ...] = ()


def extract_system_prefix(system_name: str) -> str:
    """Leading letter+digits of a system name (``"d1-Prive"`` -> ``"d1"``), else ``""``."""
    match = _SYSTEM_PREFIX_RE.match(system_name)
    return match.group(1) if match else ""


def parse_item_pattern(line: str) -> ItemPattern | None:
    match = _ITEM_PATTERN_RE.match(line.strip())
    if not match:
        return None
    return ItemPattern(name=match.group(1).strip(), number=match.group(2))


def build_item_id(system_prefix: str, category_id: str, number: str) -> str:
    padded = number.zfill(2)
    if system_prefix:
        return f"{system_prefix}.{category_id}.{padded}"
    return f"{category_id}.{padded}"


def extract_hashtags(text: str) -> tuple[list[str], str]:
    """Pull ``#word`` tags out of ``text``.

    Returns:
        Tuple of (lowercased unique tags in order, text with the tags removed).
    """
    tags: list[str] = []
    for match in _HASHTAG_RE.finditer(text):
        tag = match.group(1).lower()
        if tag not in tags:
            tags.append(tag)
    stripped = _HASHTAG_RE.sub("", text)
    lines = [re.sub(r"[ \t]{2,}", " ", line).strip() for line in stripped.split("\n")]
    return tags, "\n".join(lines)


def quick_add(
    system: System,
    *,
    area_id: str,
    category_id: str | None = None,
    text: str,
) -> QuickAddResult:
    """Apply quick-add text to an area (or to a category when ``category_id`` is given).

    Args:
        system: System to modify in place.
        area_id: Target area id.
        category_id: Target category id inside the area, if any.
        text: Free text, possibly spanning several lines.

    Returns:
        QuickAddResult with the added nodes and tags and the target's new description.

    Raises:
        NodeNotFoundError: If the target does not exist.
        DuplicateIdError: If a parsed node id is already taken.
    """
    target: Area | Category = (
        get_category(system, area_id, category_id) if category_id else get_area(system, area_id)
    )
    prefix = extract_system_prefix(system.name)

    items: list[Item] = []
    categories: list[Category] = []
    kept_lines: list[str] = []
    for line in text.split("\n"):
        parsed = parse_item_pattern(line)
        if parsed is None:
            kept_lines.append(line)
        elif category_id:
            items.append(
                Item(id=build_item_id(prefix, category_id, parsed.number), name=parsed.name)
            )
        else:
            categories.append(Category(id=parsed.number.zfill(2), name=parsed.name, items=[]))

    # Check every new id before touching the system so a failure changes nothing.
    if isinstance(target, Category):
        taken = {i.id for i in target.items or ()}
        new_ids = [i.id for i in items]
        where = f"category '{category_id}'"
    else:
        taken = {c.id for c in target.categories}
        new_ids = [c.id for c in categories]
        where = f"area '{area_id}'"
    for node_id in new_ids:
        if node_id in taken:
            msg = f"'{node_id}' already exists in {where}."
            raise DuplicateIdError(msg)
        taken.add(node_id)

    for item in items:
        add_item(system, area_id, target.id, item)
    for category in categories:
        add_category(system, area_id, category)

    tags, remaining = extract_hashtags("\n".join(kept_lines))
    tags_added = tuple(tag for tag in tags if add_tag(target, tag))

    remaining = remaining.strip()
    if remaining:
        target.description = (
            f"{target.description.rstrip()}\n{remaining}" if target.description else remaining
        )

    logger.debug(
        "Quick-add on {}: {} items, {} categories, {} tags",
        target.id, len(items), len(categories), len(tags_added),
    )
    return QuickAddResult(
        description=target.description,
        items_added=tuple(items),
        categories_added=tuple(categories),
        tags_added=tags_added,
    )
