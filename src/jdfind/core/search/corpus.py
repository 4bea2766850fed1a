"""Flatten a system into scorable documents, one per area, category and item."""

from jdfind.models.hierarchy import Area, Category, Document, Item, NodeKind, System


def _join(*parts: str) -> str:
    return " ".join(part for part in parts if part)


def _own_text(node: Area | Category) -> str:
    return _join(node.name, node.description, " ".join(node.tags))


def _ancestor_text(node: Area | Category, *, include_details: bool) -> str:
    return _own_text(node) if include_details else node.name


def area_text(area: Area) -> str:
    return _own_text(area)


def category_text(area: Area, category: Category, *, include_ancestor_details: bool = False) -> str:
    return _join(
        _own_text(category),
        _ancestor_text(area, include_details=include_ancestor_details),
    )


def item_text(
    area: Area,
    category: Category,
    item: Item,
    *,
    include_ancestor_details: bool = False,
) -> str:
    return _join(
        item.name,
        item.id,
        _ancestor_text(category, include_details=include_ancestor_details),
        _ancestor_text(area, include_details=include_ancestor_details),
    )


def build_corpus(system: System, *, include_ancestor_details: bool = False) -> list[Document]:
    """Build the search corpus for a system.

    Documents are emitted area first, then each of its categories followed
    immediately by that category's items. By default ancestors contribute only
    their name to a child's text; ``include_ancestor_details`` adds their
    description and tags as well, so an area-level tag reaches every nested
    category and item.

    Args:
        system: The hierarchy to flatten. It is read, never modified.
        include_ancestor_details: Denormalize ancestor description and tags.

    Returns:
        Documents in emission order (empty for a system without areas).
    """
    docs: list[Document] = []
    for area in system.areas:
        docs.append(Document(kind=NodeKind.AREA, area=area, text=area_text(area)))

        for category in area.categories:
            docs.append(
                Document(
                    kind=NodeKind.CATEGORY,
                    area=area,
                    category=category,
                    text=category_text(
                        area, category, include_ancestor_details=include_ancestor_details
                    ),
                )
            )

            for item in category.items or ():
                docs.append(
                    Document(
                        kind=NodeKind.ITEM,
                        area=area,
                        category=category,
                        item=item,
                        text=item_text(
                            area,
                            category,
                            item,
                            include_ancestor_details=include_ancestor_details,
                        ),
                    )
                )
    return docs
