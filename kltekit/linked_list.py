"""A doubly ended list: items go in at the head and come out at the tail."""

from __future__ import annotations

import enum
import logging
from collections import deque
from typing import Any, Callable, Iterator, Optional

_log = logging.getLogger(__name__)

Dealloc = Callable[[Any], object]


class LinkedListStatus(enum.IntEnum):
    """Result codes of list operations."""

    SUCCESS = 0
    FAILURE_GENERAL = -1
    INVALID_PARAMETER = -2
    INVALID_HANDLE = -3
    UNAVAILABLE_RESOURCE = -4
    INSUFFICIENT_BUFFER = -5


class LinkedListError(Exception):
    """A list operation failed; ``status`` tells why."""

    def __init__(self, message: str, status: LinkedListStatus = LinkedListStatus.FAILURE_GENERAL):
        super().__init__(message)
        self.status = status


class EmptyListError(LinkedListError, LookupError):
    """The list holds no elements."""

    def __init__(self, message: str = "list is empty"):
        super().__init__(message, LinkedListStatus.UNAVAILABLE_RESOURCE)


class LinkedList:
    """List that adds at the head and removes from the tail, first in first out.

    Each element may carry a ``dealloc`` callable, which is invoked on the
    element's data when the list is flushed, or when a search removes the
    element without handing its data back.
    """

    def __init__(self) -> None:
        # Left end is the head, right end is the tail.
        self._items: deque[tuple[Any, Optional[Dealloc]]] = deque()

    def add(self, data: Any, dealloc: Optional[Dealloc] = None) -> None:
        """Add ``data`` at the head of the list."""
        _log.debug("Adding to list data_obj = %r", data)
        if data is None:
            raise LinkedListError("data must not be None", LinkedListStatus.INVALID_PARAMETER)
        self._items.appendleft((data, dealloc))

    def remove(self) -> Any:
        """Remove and return the data at the tail; its dealloc is not called."""
        _log.debug("Removing from list")
        if not self._items:
            raise EmptyListError()
        data, _ = self._items.pop()
        return data

    def is_empty(self) -> bool:
        """Tell whether the list holds no elements."""
        return not self._items

    def flush(self) -> None:
        """Remove every element, head first, calling each element's dealloc."""
        while self._items:
            data, dealloc = self._items.popleft()
            if dealloc is not None:
                dealloc(data)

    def search(
        self,
        equal: Callable[[Any, Any], bool],
        data_0: Any = None,
        remove_if_found: bool = False,
        copy_out: bool = True,
    ) -> Any:
        """Find the first element, from the head, for which ``equal(data_0, data)`` holds.

        Returns the element's data when ``copy_out`` is true, otherwise None.
        With ``remove_if_found`` the element is taken out of the list; if its
        data is not handed back, its dealloc is called on it.
        """
        _log.debug("Search the list")
        if equal is None:
            raise LinkedListError("equal must not be None", LinkedListStatus.INVALID_HANDLE)
        if not self._items:
            raise EmptyListError()

        for index, (data, dealloc) in enumerate(self._items):
            if not equal(data_0, data):
                continue
            if remove_if_found:
                del self._items[index]
                if not copy_out and dealloc is not None:
                    dealloc(data)
            return data if copy_out else None
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        """Yield the data in the order ``remove`` would return it, oldest first."""
        return (data for data, _ in reversed(self._items))