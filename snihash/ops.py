"""Whole-table operations: stable merge sort and selection into a new table."""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from snihash.table import HashTable

__all__ = ["merge_sort", "sort_table", "select"]

T = TypeVar("T")


def _merge(left: list[T], right: list[T], cmp: Callable[[T, T], int]) -> list[T]:
    merged: list[T] = []
    li = ri = 0
    while li < len(left) and ri < len(right):
        # Ties go to the left run, which keeps the sort stable.
        if cmp(left[li], right[ri]) <= 0:
            merged.append(left[li])
            li += 1
        else:
            merged.append(right[ri])
            ri += 1
    merged.extend(left[li:])
    merged.extend(right[ri:])
    return merged


def merge_sort(items: Iterable[T], cmp: Callable[[T, T], int]) -> list[T]:
    """Return ``items`` sorted by ``cmp`` with a stable bottom-up merge sort.

    ``cmp(a, b)`` returns a negative number, zero or a positive number when
    ``a`` sorts before, equal to or after ``b``.
    """
    runs = [[item] for item in items]
    if not runs:
        return []
    while len(runs) > 1:
        paired = [
            _merge(runs[index], runs[index + 1], cmp)
            for index in range(0, len(runs) - 1, 2)
        ]
        if len(runs) % 2:
            paired.append(runs[-1])
        runs = paired
    return runs[0]


def sort_table(
    table: HashTable, cmp: Callable[[tuple[Any, Any], tuple[Any, Any]], int]
) -> None:
    """Sort the application order of ``table`` in place.

    ``cmp`` receives two ``(key, value)`` pairs. Entries that share a key keep
    their relative order among the positions their key is sorted into.
    """
    ordered = merge_sort(table.items(), cmp)
    table.reorder(key for key, _ in ordered)


def select(table: HashTable, predicate: Callable[[Any, Any], bool]) -> HashTable:
    """Return a new table holding the entries for which ``predicate(key, value)``
    is true.

    The new table uses the same hash function as ``table``; entries are added
    in the source's bucket order, and ``table`` itself is left unchanged.
    """
    selected = HashTable(table._hash)
    for bucket in table._buckets:
        for entry in bucket.chain:
            if predicate(entry.key, entry.value):
                selected.add(entry.key, entry.value)
    return selected