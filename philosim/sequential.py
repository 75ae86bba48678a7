"""Ordered queue of philosophers with a movable cursor."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("item", "next")

    def __init__(self, item: T) -> None:
        self.item = item
        self.next: Optional[_Node[T]] = None


class Sequential(Generic[T]):
    """A singly linked order of items with a cursor.

    The cursor points at the *current* item. It can be advanced, moved back
    to the front, used to send the current item to the back of the order,
    or used to remove the current item.
    """

    def __init__(self, items: Iterable[T]) -> None:
        self._begin: Optional[_Node[T]] = None
        self._end: Optional[_Node[T]] = None
        self._before: Optional[_Node[T]] = None
        self._current: Optional[_Node[T]] = None
        for item in items:
            node = _Node(item)
            if self._end is None:
                self._begin = node
            else:
                self._end.next = node
            self._end = node
        self.move_current_to_begin()

    def _nodes(self) -> Iterator[_Node[T]]:
        node = self._begin
        while node is not None:
            yield node
            node = node.next

    def __len__(self) -> int:
        return sum(1 for _ in self._nodes())

    def __iter__(self) -> Iterator[T]:
        return (node.item for node in self._nodes())

    def current(self) -> Optional[T]:
        """Return the item under the cursor, or None past the end."""
        return None if self._current is None else self._current.item

    def next(self) -> Optional[T]:
        """Advance the cursor and return the new current item.

        Returns None when the cursor has moved past the last item or was
        already there.
        """
        if self._current is None:
            return None
        self._before = self._current
        self._current = self._current.next
        return self.current()

    def is_end(self) -> bool:
        """True when the cursor is on the last item (or both are absent)."""
        return self._current is self._end

    def move_current_to_begin(self) -> None:
        """Put the cursor back on the first item."""
        self._current = self._begin
        self._before = None

    def _require_current(self) -> _Node[T]:
        if self._current is None:
            raise IndexError("no current item")
        return self._current

    def move_end(self) -> None:
        """Move the current item to the back and rewind the cursor."""
        current = self._require_current()
        if current is not self._end:
            if self._before is not None:
                self._before.next = current.next
            else:
                self._begin = current.next
            assert self._end is not None
            self._end.next = current
            self._end = current
            current.next = None
        self.move_current_to_begin()

    def erase(self) -> None:
        """Remove the current item; the cursor moves to the item after it."""
        current = self._require_current()
        following = current.next
        if current is self._end:
            self._end = self._before
        if self._before is not None:
            self._before.next = following
        else:
            self._begin = following
        current.next = None
        self._current = following