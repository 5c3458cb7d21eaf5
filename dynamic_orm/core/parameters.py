"""Reflection of plain objects into named stored-procedure parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, is_dataclass
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class NamedParameter:
    """One `(name, value)` pair bound into a stored-procedure call."""

    name: str
    value: Any


ParameterShape = Tuple[NamedParameter, ...]

_SCALAR_TYPES = (str, bytes, bytearray, memoryview, int, float, complex, Decimal, bool)


def bind_parameters(obj: Any) -> ParameterShape:
    """Produce named parameters from the public instance state of `obj`.

    Args:
        obj: Mapping, dataclass instance, named tuple, plain object, the output
            of `ParameterBuilder.build()`, or `None`.

    Returns:
        Tuple of `NamedParameter` in reflection order. Values are read once and
        passed through without coercion.

    Raises:
        TypeError: If `obj` is a scalar or a mapping with non-string keys.
        ValueError: If a parameter name occurs more than once.
    """

    if obj is None:
        return ()
    if _is_parameter_sequence(obj):
        return _unique(tuple(obj))
    if isinstance(obj, Mapping):
        return _unique(tuple(_mapping_items(obj)))
    if isinstance(obj, _SCALAR_TYPES):
        raise TypeError(
            f"Cannot bind parameters from scalar {type(obj).__name__}; "
            "pass an object, dataclass, or mapping."
        )
    if isinstance(obj, (list, set, frozenset)) or (
        isinstance(obj, tuple) and not hasattr(obj, "_asdict")
    ):
        raise TypeError(
            f"Cannot bind parameters from {type(obj).__name__} of values; "
            "pass a mapping or NamedParameter items."
        )
    if is_dataclass(obj) and not isinstance(obj, type):
        return tuple(
            NamedParameter(f.name, getattr(obj, f.name))
            for f in fields(obj)
            if _is_public(f.name)
        )
    if isinstance(obj, tuple) and hasattr(obj, "_asdict"):
        return tuple(
            NamedParameter(name, value)
            for name, value in obj._asdict().items()
            if _is_public(name)
        )
    return tuple(
        NamedParameter(name, getattr(obj, name)) for name in public_attribute_names(obj)
    )


def public_attribute_names(obj: Any) -> List[str]:
    """Return readable public instance attribute names of a plain object.

    Instance attributes (`__dict__` then `__slots__`) come first, followed by
    `property` descriptors declared on the class hierarchy. Class-level data,
    methods, and underscore-prefixed names are excluded.
    """

    names: Dict[str, None] = {}
    for name in getattr(obj, "__dict__", {}):
        if _is_public(name):
            names[name] = None

    cls = type(obj)
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if _is_public(name) and hasattr(obj, name):
                names.setdefault(name, None)

    for klass in reversed(cls.__mro__):
        for name, member in klass.__dict__.items():
            if isinstance(member, property) and member.fget is not None and _is_public(name):
                names.setdefault(name, None)

    return list(names)


class ParameterBuilder:
    """Explicit, introspection-free way to assemble named parameters.

    Usage:
        params = ParameterBuilder().with_parameter("Name", "Dave").build()
    """

    def __init__(self) -> None:
        self._items: Dict[str, Any] = {}

    def with_parameter(self, name: str, value: Any) -> ParameterBuilder:
        if not isinstance(name, str) or not name:
            raise TypeError("Parameter name must be a non-empty string.")
        if name in self._items:
            raise ValueError(f"Parameter {name!r} is already defined.")
        self._items[name] = value
        return self

    def build(self) -> ParameterShape:
        return tuple(NamedParameter(name, value) for name, value in self._items.items())

    def __len__(self) -> int:
        return len(self._items)


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _is_parameter_sequence(obj: Any) -> bool:
    if not isinstance(obj, (tuple, list)) or hasattr(obj, "_asdict"):
        return False
    return all(isinstance(item, NamedParameter) for item in obj)


def _mapping_items(obj: Mapping[Any, Any]) -> Iterator[NamedParameter]:
    for name, value in obj.items():
        if not isinstance(name, str):
            raise TypeError(
                f"Parameter mapping keys must be strings, got {type(name).__name__}."
            )
        yield NamedParameter(name, value)


def _unique(parameters: Sequence[NamedParameter]) -> ParameterShape:
    seen: set[str] = set()
    for parameter in parameters:
        if parameter.name in seen:
            raise ValueError(f"Duplicate parameter name {parameter.name!r}.")
        seen.add(parameter.name)
    return tuple(parameters)
