"""In-place edits of a system: descriptions, tags, categories and items."""

from loguru import logger

from jdfind.models.hierarchy import Area, Category, Item, System


class NodeNotFoundError(LookupError):
    """Raised when an area, category or item id does not exist."""


class DuplicateIdError(ValueError):
    """Raised when adding a node whose id is already taken by a sibling."""


def upsert_system(systems: list[System], system: System) -> int:
    """Replace the system with the same name, or append it. Returns its index."""
    for i, existing in enumerate(systems):
        if existing.name == system.name:
            systems[i] = system
            logger.debug("Replaced system {!r}", system.name)
            return i
    systems.append(system)
    logger.debug("Added system {!r}", system.name)
    return len(systems) - 1


def find_system(systems: list[System], selector: str | None = None) -> System:
    """Find a system by name or position; the first system when ``selector`` is None.

    Raises:
        NodeNotFoundError: If nothing matches.
    """
    if not systems:
        msg = "No systems stored. Import one first."
        raise NodeNotFoundError(msg)
    if selector is None:
        return systems[0]
    for system in systems:
        if system.name == selector:
            return system
    if selector.isdigit() and int(selector) < len(systems):
        return systems[int(selector)]
    msg = f"System '{selector}' not found."
    raise NodeNotFoundError(msg)


def get_area(system: System, area_id: str) -> Area:
    for area in system.areas:
        if area.id == area_id:
            return area
    msg = f"Area '{area_id}' not found."
    raise NodeNotFoundError(msg)


def get_category(system: System, area_id: str, category_id: str) -> Category:
    for category in get_area(system, area_id).categories:
        if category.id == category_id:
            return category
    msg = f"Category '{category_id}' not found in area '{area_id}'."
    raise NodeNotFoundError(msg)


def get_item(system: System, area_id: str, category_id: str, item_id: str) -> Item:
    for item in get_category(system, area_id, category_id).items or ():
        if item.id == item_id:
            return item
    msg = f"Item '{item_id}' not found in category '{category_id}'."
    raise NodeNotFoundError(msg)


def update_area(
    system: System,
    area_id: str,
    *,
    description: str | None = None,
    tags: list[str] | None = None,
) -> Area:
    """Set an area's description and/or tags."""
    area = get_area(system, area_id)
    if description is not None:
        area.description = description
    if tags is not None:
        area.tags = list(tags)
    return area


def update_category(
    system: System,
    area_id: str,
    category_id: str,
    *,
    description: str | None = None,
    tags: list[str] | None = None,
) -> Category:
    """Set a category's description and/or tags."""
    category = get_category(system, area_id, category_id)
    if description is not None:
        category.description = description
    if tags is not None:
        category.tags = list(tags)
    return category


def add_tag(node: Area | Category, tag: str) -> bool:
    """Add a lowercased tag unless already present. Returns True if added."""
    tag = tag.strip().lower()
    if not tag or tag in node.tags:
        return False
    node.tags.append(tag)
    return True


def add_category(system: System, area_id: str, category: Category) -> Category:
    area = get_area(system, area_id)
    if any(c.id == category.id for c in area.categories):
        msg = f"Category '{category.id}' already exists in area '{area_id}'."
        raise DuplicateIdError(msg)
    area.categories.append(category)
    logger.debug("Added category {} to area {}", category.id, area_id)
    return category


def add_item(system: System, area_id: str, category_id: str, item: Item) -> Item:
    category = get_category(system, area_id, category_id)
    if category.items is None:
        category.items = []
    if any(i.id == item.id for i in category.items):
        msg = f"Item '{item.id}' already exists in category '{category_id}'."
        raise DuplicateIdError(msg)
    category.items.append(item)
    logger.debug("Added item {} to category {}", item.id, category_id)
    return item


def rename_item(system: System, area_id: str, category_id: str, item_id: str, name: str) -> Item:
    item = get_item(system, area_id, category_id, item_id)
    item.name = name
    return item


def remove_item(system: System, area_id: str, category_id: str, item_id: str) -> Item:
    category = get_category(system, area_id, category_id)
    items = category.items or []
    for i, item in enumerate(items):
        if item.id == item_id:
            del items[i]
            logger.debug("Removed item {} from category {}", item_id, category_id)
            return item
    msg = f"Item '{item_id}' not found in category '{category_id}'."
    raise NodeNotFoundError(msg)
