"""Process-wide cache of reflected stored-procedure parameter shapes."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Mapping
from dataclasses import is_dataclass
from typing import Any, Hashable, Optional, Tuple

from ..config import get_parameter_cache_size
from .parameters import NamedParameter, ParameterShape, bind_parameters

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024

ParameterNames = Tuple[str, ...]


class ParameterCache:
    """Thread-safe LRU map from a parameter object's structure to its parameter names.

    Only the ordered parameter names are cached. Values are read from the
    object on every call, so a hit never returns a value from an earlier
    call. The key is the object's type plus, where names vary per instance,
    its key or attribute names; keys compare by equality. Objects without a
    cheap structural key are bound directly and never stored.

    Args:
        max_entries: Upper bound on stored entries; least recently used entries
            are evicted first. `None` keeps every entry for the process lifetime.
    """

    def __init__(self, max_entries: Optional[int] = DEFAULT_MAX_ENTRIES):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1 or None.")
        self._max_entries = max_entries
        self._entries: OrderedDict[Hashable, ParameterNames] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @property
    def max_entries(self) -> Optional[int]:
        return self._max_entries

    def get_or_compute(self, obj: Any) -> ParameterShape:
        """Return parameters for `obj`, reflecting names only on a cache miss."""

        if obj is None:
            return ()

        key = structural_key(obj)
        if key is None:
            return bind_parameters(obj)

        with self._lock:
            names = self._entries.get(key)
            if names is not None:
                self._entries.move_to_end(key)
                self.hits += 1
            else:
                self.misses += 1

        if names is not None:
            return read_parameters(obj, names)

        logger.debug("Parameter cache miss for %s", type(obj).__name__)
        shape = bind_parameters(obj)

        with self._lock:
            if key not in self._entries:
                self._entries[key] = tuple(p.name for p in shape)
                if self._max_entries is not None and len(self._entries) > self._max_entries:
                    self._entries.popitem(last=False)
        return shape

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, obj: Any) -> bool:
        key = structural_key(obj)
        if key is None:
            return False
        with self._lock:
            return key in self._entries


def structural_key(obj: Any) -> Optional[Hashable]:
    """Build an equality-comparable key identifying which names `obj` binds.

    Dataclasses and named tuples bind a fixed name set per type. Mappings and
    plain objects add their key or `__dict__` names. Returns `None` for
    builder output, sequences, scalars, and slots-based objects, which are
    bound directly.
    """

    if isinstance(obj, Mapping):
        return (type(obj), tuple(obj.keys()))
    if is_dataclass(obj) and not isinstance(obj, type):
        return (type(obj),)
    if isinstance(obj, tuple) and hasattr(obj, "_asdict"):
        return (type(obj),)
    if isinstance(obj, (str, bytes, bytearray, tuple, list, set, frozenset)):
        return None
    state = getattr(obj, "__dict__", None)
    if state is None or getattr(type(obj), "__slots__", None):
        return None
    return (type(obj), tuple(state))


def read_parameters(obj: Any, names: ParameterNames) -> ParameterShape:
    """Read the current value of each name from `obj`, once."""

    if isinstance(obj, Mapping):
        return tuple(NamedParameter(name, obj[name]) for name in names)
    return tuple(NamedParameter(name, getattr(obj, name)) for name in names)


_default_cache: Optional[ParameterCache] = None
_default_cache_lock = threading.Lock()


def default_parameter_cache() -> ParameterCache:
    """Return the process-wide parameter cache, creating it on first use."""

    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = ParameterCache(max_entries=get_parameter_cache_size())
            logger.debug(
                "Created process-wide parameter cache (max_entries=%s)",
                _default_cache.max_entries,
            )
        return _default_cache
