"""A chained hash table that keeps insertion (application) order.

Entries live in one bucket chain each, chosen by the low bits of a 32-bit
hash of the key, and in a separate application-order list. Buckets double
when a chain grows past its threshold. If doubling twice in a row leaves
more than half the entries in over-long chains, expansion stops for good.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Optional

from snihash.hashes import Key, _as_bytes, hash_jen

__all__ = ["HashTable"]

_MASK = 0xFFFFFFFF
INITIAL_NUM_BUCKETS = 32
INITIAL_NUM_BUCKETS_LOG2 = 5
BUCKET_CAPACITY_THRESHOLD = 10

HashFunction = Callable[[bytes], int]
Comparator = Callable[[tuple[Any, Any], tuple[Any, Any]], int]


@dataclass(eq=False)
class _Entry:
    key: Any
    raw: bytes
    hashv: int
    value: Any


@dataclass(eq=False)
class _Bucket:
    chain: deque = field(default_factory=deque)
    expand_mult: int = 0


class HashTable:
    """Hash table with bucket chaining, ordered iteration and duplicate keys.

    ``add`` does not look for an existing entry with the same key; use
    ``replace`` for that. Lookups return the most recently added match.
    """

    def __init__(self, hash_function: HashFunction = hash_jen) -> None:
        self._hash = hash_function
        self._reset()

    def _reset(self) -> None:
        self._order: list[_Entry] = []
        self._buckets: list[_Bucket] = []
        self._log2 = 0
        self._ineff_expands = 0
        self._noexpand = False

    def _make_table(self) -> None:
        self._buckets = [_Bucket() for _ in range(INITIAL_NUM_BUCKETS)]
        self._log2 = INITIAL_NUM_BUCKETS_LOG2
        self._ineff_expands = 0
        self._noexpand = False

    def _entry_for(self, key: Key, value: Any) -> _Entry:
        raw = _as_bytes(key)
        return _Entry(key, raw, self._hash(raw) & _MASK, value)

    def _bucket_of(self, hashv: int) -> _Bucket:
        return self._buckets[hashv & (len(self._buckets) - 1)]

    def _insert(self, entry: _Entry, position: Optional[int] = None) -> None:
        if not self._order:
            self._make_table()
        if position is None:
            self._order.append(entry)
        else:
            self._order.insert(position, entry)
        bucket = self._bucket_of(entry.hashv)
        bucket.chain.appendleft(entry)
        limit = (bucket.expand_mult + 1) * BUCKET_CAPACITY_THRESHOLD
        if len(bucket.chain) >= limit and not self._noexpand:
            self._expand()

    def _expand(self) -> None:
        old = self._buckets
        doubled = len(old) * 2
        new = [_Bucket() for _ in range(doubled)]
        count = len(self._order)
        ideal = (count >> (self._log2 + 1)) + (1 if count & (doubled - 1) else 0)
        nonideal = 0
        for bucket in old:
            for entry in bucket.chain:
                target = new[entry.hashv & (doubled - 1)]
                target.chain.appendleft(entry)
                if len(target.chain) > ideal:
                    nonideal += 1
                    target.expand_mult = len(target.chain) // ideal
        self._buckets = new
        self._log2 += 1
        self._ineff_expands = self._ineff_expands + 1 if nonideal > (count >> 1) else 0
        if self._ineff_expands > 1:
            self._noexpand = True

    def _lookup(self, key: Key) -> Optional[_Entry]:
        if not self._order:
            return None
        raw = _as_bytes(key)
        hashv = self._hash(raw) & _MASK
        for entry in self._bucket_of(hashv).chain:
            if entry.hashv == hashv and entry.raw == raw:
                return entry
        return None

    def _remove(self, entry: _Entry) -> None:
        if len(self._order) == 1:
            self._reset()
            return
        self._order.remove(entry)
        self._bucket_of(entry.hashv).chain.remove(entry)

    def add(self, key: Key, value: Any) -> None:
        """Append an entry at the end of the application order."""
        self._insert(self._entry_for(key, value))

    def add_inorder(self, key: Key, value: Any, cmp: Comparator) -> None:
        """Insert before the first entry that ``cmp`` ranks after the new one.

        ``cmp`` receives two ``(key, value)`` pairs and returns a negative,
        zero or positive number.
        """
        entry = self._entry_for(key, value)
        new_pair = (key, value)
        position = next(
            (
                index
                for index, existing in enumerate(self._order)
                if cmp((existing.key, existing.value), new_pair) > 0
            ),
            len(self._order),
        )
        self._insert(entry, position)

    def find(self, key: Key) -> Any:
        """Return the value stored under ``key``, or None if there is none."""
        entry = self._lookup(key)
        return None if entry is None else entry.value

    def replace(self, key: Key, value: Any) -> Any:
        """Remove any entry for ``key``, append the new one, return the old value."""
        old = self._lookup(key)
        previous = None
        if old is not None:
            previous = old.value
            self._remove(old)
        self.add(key, value)
        return previous

    def delete(self, key: Key) -> Any:
        """Remove the entry for ``key`` and return its value."""
        entry = self._lookup(key)
        if entry is None:
            raise KeyError(key)
        self._remove(entry)
        return entry.value

    def clear(self) -> None:
        """Drop every entry and the bucket array."""
        self._reset()

    def items(self) -> list[tuple[Any, Any]]:
        """Return ``(key, value)`` pairs in application order."""
        return [(entry.key, entry.value) for entry in self._order]

    def reorder(self, keys: Iterable[Key]) -> None:
        """Rearrange the application order to follow ``keys``.

        ``keys`` must name every entry exactly once; entries sharing a key are
        taken in their current order.
        """
        pending: dict[bytes, deque] = {}
        for entry in self._order:
            pending.setdefault(entry.raw, deque()).append(entry)
        ordered = []
        for key in keys:
            queue = pending.get(_as_bytes(key))
            if not queue:
                raise ValueError(f"key {key!r} is not in the table or is repeated")
            ordered.append(queue.popleft())
        if len(ordered) != len(self._order):
            raise ValueError("reorder must list every entry of the table")
        self._order = ordered

    def num_buckets(self) -> int:
        """Number of buckets currently allocated (0 for an empty table)."""
        return len(self._buckets)

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Any]:
        return iter([entry.key for entry in self._order])

    def __contains__(self, key: object) -> bool:
        try:
            return self._lookup(key) is not None  # type: ignore[arg-type]
        except TypeError:
            return False