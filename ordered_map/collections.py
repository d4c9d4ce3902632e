import bisect
from collections import abc
import functools
import itertools
import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple
from ordered_map.config import OrderedMapConfig
from ordered_map.errors import InvalidArgumentError


LOGGER = logging.getLogger(__name__)

# Marks an optional argument the caller did not pass, so that `None` stays a valid value.
_UNSET = object()


class KeysView(abc.Sequence):
    """
    Read-only, live sequence over the keys of an `OrderedMap`.

    The view follows the map: keys set or deleted after the view was created
    show up in it. It exposes no way to reorder or mutate the map.
    """

    __slots__ = ("_map",)

    def __init__(self, owner: "OrderedMap"):
        self._map = owner

    def __getitem__(self, index):
        # Slices come back as plain lists
        return self._map._keys[index]

    def __len__(self):
        return len(self._map._keys)

    def __eq__(self, other):
        if isinstance(other, (KeysView, list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self):
        return f"KeysView({self._map._keys!r})"


class OrderedMap:
    """
    An insertion-ordered key/value container with the surface of the ES6 `Map`.

    Keys keep the position of their first insertion. Setting an existing key
    replaces its value in place, deleting it drops it from the order.
    Any hashable value can be a key.
    """

    def __init__(self, entries=None, *, config: Optional[OrderedMapConfig] = None):
        self.config = config or OrderedMapConfig()
        self._keys: List[Hashable] = []
        # Insertion stamp of each key in `_keys`, strictly increasing
        self._stamps: List[int] = []
        self._values: Dict[Hashable, Any] = {}
        self._counter = itertools.count()
        if entries is None:
            return
        if isinstance(entries, abc.Mapping):
            entries = entries.items()
        for item in entries:
            try:
                key, value = item
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(
                    f"Entry {item!r} is not a key/value pair"
                ) from e
            self.set(key, value)

    @property
    def size(self) -> int:
        return len(self._keys)

    def set(self, key, value) -> "OrderedMap":
        """
        Associate `value` with `key` and return the map itself.

        A new key is appended to the order, an existing key keeps its position.
        """
        if not self.has(key):
            LOGGER.debug("Appending key %r at position %d", key, len(self._keys))
            self._keys.append(key)
            self._stamps.append(next(self._counter))
        self._values[key] = value
        return self

    def get(self, key, default=None):
        if self.has(key):
            return self._values[key]
        return default

    def has(self, key) -> bool:
        return key in self._values

    def delete(self, key) -> bool:
        """
        Remove `key` and its value.

        Returns:
            Whether the key was present before the call.
        """
        if not self.has(key):
            return False
        index = self._keys.index(key)
        del self._keys[index]
        del self._stamps[index]
        del self._values[key]
        LOGGER.debug("Deleted key %r, %d keys left", key, len(self._keys))
        return True

    def clear(self) -> None:
        LOGGER.debug("Clearing %d keys", len(self._keys))
        # In place, so that live key views see the map empty
        self._keys.clear()
        self._stamps.clear()
        self._values.clear()

    def keys(self):
        """
        Keys in insertion order.

        With the default `keys_view="copy"` config this is a new list the caller
        owns. With `keys_view="view"` it is a `KeysView` that tracks the map.
        """
        if self.config.keys_view == "view":
            return KeysView(self)
        return list(self._keys)

    def values(self) -> List[Any]:
        return [self._values[key] for key in self._keys]

    def entries(self) -> List[Tuple[Hashable, Any]]:
        return [(key, self._values[key]) for key in self._keys]

    def for_each(self, callback: Callable, this_arg=_UNSET) -> None:
        """
        Call `callback(value, key, map)` once per entry, in insertion order.

        If `this_arg` is given, it is passed as the first argument:
        `callback(this_arg, value, key, map)`, `None` included.

        The walk follows the map as the callback mutates it. Keys deleted
        before their turn are skipped, keys added (or deleted then set again)
        are visited after the ones already in place.

        Raises:
            InvalidArgumentError: `callback` is not callable.
        """
        if not callable(callback):
            raise InvalidArgumentError(f"{callback!r} is not callable")

        if this_arg is not _UNSET:
            callback = functools.partial(callback, this_arg)

        last_stamp = -1
        while True:
            index = bisect.bisect_right(self._stamps, last_stamp)
            if index >= len(self._keys):
                break
            key = self._keys[index]
            last_stamp = self._stamps[index]
            callback(self._values[key], key, self)

    def copy(self) -> "OrderedMap":
        return OrderedMap(self.entries(), config=self.config)

    def __contains__(self, key):
        return self.has(key)

    def __len__(self):
        return self.size

    def __repr__(self):
        content = ", ".join(f"{k!r}: {v!r}" for (k, v) in self.entries())
        return f"OrderedMap({{{content}}})"
