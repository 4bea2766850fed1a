"""Tests for markdown rendering of systems."""

from jdfind.core.tree.markdown import render_system_as_markdown
from jdfind.models.hierarchy import Item, System


def test_render_full_system(home_system: System) -> None:
    md = render_system_as_markdown(home_system)
    assert md.startswith("# d1-Home\n\n")
    assert "- 10-19 Finance\n  > Money matters\n  #legal #money\n" in md
    assert "    - 11 Banking\n      > Accounts and cards\n      #bank\n" in md
    assert "        - d1.11.01 Checking account\n" in md
    assert "... (" not in md


def test_render_sorts_items_by_name(home_system: System) -> None:
    banking = home_system.areas[0].categories[0]
    assert banking.items is not None
    banking.items.append(Item(id="d1.11.03", name="atm receipts"))
    md = render_system_as_markdown(home_system)
    assert md.index("atm receipts") < md.index("Checking account") < md.index("Credit cards")


def test_render_areas_only_shows_truncation(home_system: System) -> None:
    md = render_system_as_markdown(home_system, max_depth=1)
    assert "11 Banking" not in md
    assert "    - ... (2 more children, id=10-19)\n" in md


def test_render_categories_truncates_only_nonempty(home_system: System) -> None:
    md = render_system_as_markdown(home_system, max_depth=2)
    assert "    - 12 Taxes\n" in md
    assert "Checking account" not in md
    assert "(2 more children, id=11)" in md
    assert "id=12)" not in md
    assert "id=21)" not in md


def test_render_without_details(home_system: System) -> None:
    md = render_system_as_markdown(home_system, include_details=False)
    assert "Money matters" not in md
    assert "#legal" not in md
    assert "- 20-29 House\n    - 21 Documents\n" in md
