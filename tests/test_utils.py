from __future__ import annotations

from squee.utils import remove_from_list


def test_remove_from_list_strips_every_occurrence() -> None:
    item = object()
    other = object()
    items = [item, other, item, item]

    assert remove_from_list(items, item) is True
    assert items == [other]


def test_remove_from_list_uses_identity_not_equality() -> None:
    items = [[1], [1]]
    target = items[1]

    assert remove_from_list(items, [1]) is False
    assert remove_from_list(items, target) is True
    assert len(items) == 1
    assert items[0] is not target


def test_remove_from_list_keeps_list_object() -> None:
    items = ["a", "b"]
    same = items

    assert remove_from_list(items, "missing") is False
    remove_from_list(items, items[0])
    assert same is items
    assert items == ["b"]
