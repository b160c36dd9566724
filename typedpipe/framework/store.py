"""Module for storing values of a single declared type under text keys.

Lookups of absent keys always raise a :code:`NotFoundError`, there is no default value
fallback.

.. code-block:: python

    >>> from typedpipe.framework.store import TypedStore
    >>> store = TypedStore[int]()
    >>> _ = store.set("a", 1)
    >>> store.get("a")
    1
"""

import datetime
import logging
import threading
from collections import OrderedDict
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

from attrs import define, field, validators

from typedpipe.abc.exceptions import TypedpipeException
from typedpipe.util.time import TimeParser
from typedpipe.util.typing import N

logger = logging.getLogger("TypedStore")

T = TypeVar("T")


class NotFoundError(TypedpipeException):
    """Raise if a key is not present in a store."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key '{key}' not found")


@define(frozen=True)
class Entry(Generic[T]):
    """A stored value along with the key and the time it was stored."""

    key: str = field(validator=validators.instance_of(str))
    value: T
    timestamp: datetime.datetime = field(factory=TimeParser.now)


class TypedStore(Generic[T]):
    """Holds values of the declared type :code:`T` under text keys.

    Entries are replaced on re-insert, the last write wins. All operations are guarded by a
    single lock, so a store can be shared between threads.

    Parameters
    ----------
    max_items : Optional[int]
        Maximum number of entries. If an insert exceeds it, the least recently written
        entry is evicted. Defaults to unbounded.
    max_age : Optional[datetime.timedelta]
        Entries older than this are treated as absent. A zero or missing age means entries
        never expire.
    """

    def __init__(
        self,
        max_items: Optional[int] = None,
        max_age: Optional[datetime.timedelta] = None,
    ):
        if max_items is not None and max_items < 1:
            raise ValueError(f"max_items must be positive, got {max_items}")
        self._max_items = max_items
        self._max_age = max_age if max_age else None
        self._entries: "OrderedDict[str, Entry[T]]" = OrderedDict()
        self._lock = threading.RLock()

    def set(self, key: str, value: T) -> Entry[T]:
        """Insert or overwrite the entry for key.

        Parameters
        ----------
        key : str
            Key to store the value under.
        value : T
            The value to store.

        Returns
        -------
        Entry
            The newly created entry.
        """
        if not isinstance(key, str):
            raise TypeError(f"key must be str, got {type(key).__name__}")
        entry = Entry(key, value, TimeParser.now())
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = entry
            if self._max_items is not None and len(self._entries) > self._max_items:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted key '%s'", evicted)
        return entry

    def get(self, key: str) -> T:
        """Return the value stored under key.

        Raises
        ------
        NotFoundError
            If key is absent or expired.
        """
        return self.get_entry(key).value

    def get_entry(self, key: str) -> Entry[T]:
        """Return the entry stored under key.

        Raises
        ------
        NotFoundError
            If key is absent or expired.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise NotFoundError(key)
            if self._is_expired(entry):
                del self._entries[key]
                logger.debug("Key '%s' expired", key)
                raise NotFoundError(key)
            return entry

    def remove(self, key: str) -> T:
        """Remove key and return its value.

        Raises
        ------
        NotFoundError
            If key is absent or expired.
        """
        with self._lock:
            entry = self.get_entry(key)
            del self._entries[key]
            return entry.value

    def contains(self, key: str) -> bool:
        """Check if a live entry exists for key."""
        try:
            self.get_entry(key)
        except NotFoundError:
            return False
        return True

    def keys(self) -> List[str]:
        """Return the keys of all live entries in insertion order."""
        return [key for key, _ in self.items()]

    def items(self) -> List[Tuple[str, T]]:
        """Return key value pairs of all live entries in insertion order."""
        with self._lock:
            self._drop_expired()
            return [(key, entry.value) for key, entry in self._entries.items()]

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        with self._lock:
            self._drop_expired()
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def _is_expired(self, entry: Entry[T]) -> bool:
        if self._max_age is None:
            return False
        return TimeParser.age(entry.timestamp) > self._max_age

    def _drop_expired(self) -> None:
        if self._max_age is None:
            return
        expired = [key for key, entry in self._entries.items() if self._is_expired(entry)]
        for key in expired:
            del self._entries[key]


class NumericStore(TypedStore[N]):
    """A store restricted to numeric values.

    The value type is bound to :code:`int`, :code:`float`, :code:`Decimal` and
    :code:`Fraction`, so :code:`NumericStore[str]` is rejected by static type checkers.
    """

    def total(self) -> N:
        """Return the sum of all live values, 0 for an empty store."""
        return sum(value for _, value in self.items())
