"""
Indexed binary min-heap with decrease-key.

The priority of an entry is captured when it is pushed or decreased, never
read back from shared state at comparison time. Each key appears at most
once. Ties are broken by first-insertion order so results are reproducible.
"""

from typing import Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class IndexedMinHeap(Generic[K, V]):
    """
    Min-heap keyed by a hashable, supporting O(log n) decrease-key.

    Example:
        >>> heap = IndexedMinHeap()
        >>> heap.push("a", 5.0, "payload-a")
        >>> heap.push("b", 3.0, "payload-b")
        >>> heap.decrease_key("a", 1.0)
        >>> heap.pop()
        ('a', 1.0, 'payload-a')
    """

    __slots__ = ("_entries", "_positions", "_values", "_counter")

    def __init__(self) -> None:
        # Each slot is [priority, sequence, key]
        self._entries: List[list] = []
        self._positions: Dict[K, int] = {}
        self._values: Dict[K, V] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._positions

    def priority_of(self, key: K) -> float:
        return self._entries[self._positions[key]][0]

    def value_of(self, key: K) -> V:
        return self._values[key]

    def push(self, key: K, priority: float, value: Optional[V] = None) -> None:
        """Insert a new key. Raises KeyError if the key is already queued."""
        if key in self._positions:
            raise KeyError(f"Key already in heap: {key!r}")
        entry = [priority, self._counter, key]
        self._counter += 1
        self._entries.append(entry)
        self._positions[key] = len(self._entries) - 1
        self._values[key] = value
        self._sift_up(len(self._entries) - 1)

    def decrease_key(self, key: K, priority: float, value: Optional[V] = None) -> None:
        """
        Lower the priority of a queued key, optionally replacing its value.

        Raises:
            KeyError: If the key is not queued.
            ValueError: If ``priority`` is greater than the current one.
        """
        pos = self._positions[key]
        entry = self._entries[pos]
        if priority > entry[0]:
            raise ValueError(
                f"New priority {priority} is greater than current {entry[0]} for {key!r}"
            )
        entry[0] = priority
        if value is not None:
            self._values[key] = value
        self._sift_up(pos)

    def push_or_decrease(self, key: K, priority: float, value: Optional[V] = None) -> bool:
        """
        Push ``key`` or lower its priority if already queued.

        Returns:
            True if the heap changed, False if the key was queued with a
            priority that is already lower or equal.
        """
        if key not in self._positions:
            self.push(key, priority, value)
            return True
        if priority < self.priority_of(key):
            self.decrease_key(key, priority, value)
            return True
        return False

    def peek(self) -> Tuple[K, float, V]:
        if not self._entries:
            raise IndexError("peek from empty heap")
        priority, _, key = self._entries[0]
        return key, priority, self._values[key]

    def pop(self) -> Tuple[K, float, V]:
        """Remove and return (key, priority, value) with the lowest priority."""
        if not self._entries:
            raise IndexError("pop from empty heap")
        last = self._entries.pop()
        if self._entries:
            top = self._entries[0]
            self._entries[0] = last
            self._positions[last[2]] = 0
            self._sift_down(0)
        else:
            top = last

        priority, _, key = top
        del self._positions[key]
        return key, priority, self._values.pop(key)

    # -------------------------
    # Internals
    # -------------------------

    @staticmethod
    def _less(a: list, b: list) -> bool:
        return (a[0], a[1]) < (b[0], b[1])

    def _swap(self, i: int, j: int) -> None:
        entries = self._entries
        entries[i], entries[j] = entries[j], entries[i]
        self._positions[entries[i][2]] = i
        self._positions[entries[j][2]] = j

    def _sift_up(self, pos: int) -> None:
        entries = self._entries
        while pos > 0:
            parent = (pos - 1) // 2
            if not self._less(entries[pos], entries[parent]):
                break
            self._swap(pos, parent)
            pos = parent

    def _sift_down(self, pos: int) -> None:
        entries = self._entries
        n = len(entries)
        while True:
            left = 2 * pos + 1
            if left >= n:
                break
            smallest = left
            right = left + 1
            if right < n and self._less(entries[right], entries[left]):
                smallest = right
            if not self._less(entries[smallest], entries[pos]):
                break
            self._swap(pos, smallest)
            pos = smallest
