"""A singly linked list with cursors for insertion and removal after a node."""

from __future__ import annotations

from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")

_EMPTY = object()


class _Node:
    __slots__ = ("value", "next")

    def __init__(self, value: Any, next_node: Optional[_Node] = None) -> None:
        self.value = value
        self.next = next_node


class Cursor(Generic[T]):
    """A position in a :class:`SinglyLinkedList`.

    A cursor past the last element is falsy; reading its value raises IndexError.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Optional[_Node]) -> None:
        self._node = node

    @property
    def value(self) -> T:
        if self._node is None or self._node.value is _EMPTY:
            raise IndexError("cursor does not point at an element")
        return self._node.value

    @value.setter
    def value(self, new_value: T) -> None:
        if self._node is None or self._node.value is _EMPTY:
            raise IndexError("cursor does not point at an element")
        self._node.value = new_value

    def advance(self) -> Cursor[T]:
        """Move to the next position and return this cursor."""
        if self._node is None:
            raise IndexError("cannot advance past the end")
        self._node = self._node.next
        return self

    def __bool__(self) -> bool:
        return self._node is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._node is other._node

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._node is None:
            return "Cursor(<end>)"
        if self._node.value is _EMPTY:
            return "Cursor(<before begin>)"
        return f"Cursor({self._node.value!r})"


class SinglyLinkedList(Generic[T]):
    """A forward-only linked list."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        self._head = _Node(_EMPTY)
        self._size = 0
        tail = self._head
        for value in values:
            tail.next = _Node(value)
            tail = tail.next
            self._size += 1

    def before_begin(self) -> Cursor[T]:
        """A cursor positioned before the first element."""
        return Cursor(self._head)

    def begin(self) -> Cursor[T]:
        """A cursor at the first element (falsy when the list is empty)."""
        return Cursor(self._head.next)

    def _owns(self, node: Optional[_Node]) -> bool:
        current: Optional[_Node] = self._head
        while current is not None:
            if current is node:
                return True
            current = current.next
        return False

    def insert_after(self, position: Cursor[T], value: T) -> Cursor[T]:
        """Insert ``value`` after ``position`` and return a cursor at it."""
        node = position._node
        if node is None or not self._owns(node):
            raise ValueError("position does not belong to this list")
        node.next = _Node(value, node.next)
        self._size += 1
        return Cursor(node.next)

    def erase_after(self, position: Cursor[T]) -> Cursor[T]:
        """Remove the element after ``position``; return a cursor at the one following it."""
        node = position._node
        if node is None or not self._owns(node):
            raise ValueError("position does not belong to this list")
        if node.next is None:
            raise IndexError("no element after position")
        node.next = node.next.next
        self._size -= 1
        return Cursor(node.next)

    def push_front(self, value: T) -> None:
        self._head.next = _Node(value, self._head.next)
        self._size += 1

    def pop_front(self) -> None:
        """Remove the first element; does nothing on an empty list."""
        if self._head.next is not None:
            self._head.next = self._head.next.next
            self._size -= 1

    def clear(self) -> None:
        self._head.next = None
        self._size = 0

    def swap(self, other: SinglyLinkedList[T]) -> None:
        """Exchange contents with ``other``."""
        self._head.next, other._head.next = other._head.next, self._head.next
        self._size, other._size = other._size, self._size

    def copy(self) -> SinglyLinkedList[T]:
        return SinglyLinkedList(self)

    __copy__ = copy

    def __iter__(self) -> Iterator[T]:
        node = self._head.next
        while node is not None:
            yield node.value
            node = node.next

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return len(self) == len(other) and list(self) == list(other)

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: SinglyLinkedList[T]) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return list(self) < list(other)

    def __le__(self, other: SinglyLinkedList[T]) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return list(self) <= list(other)

    def __gt__(self, other: SinglyLinkedList[T]) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return list(self) > list(other)

    def __ge__(self, other: SinglyLinkedList[T]) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return list(self) >= list(other)

    def __repr__(self) -> str:
        return f"SinglyLinkedList({list(self)!r})"