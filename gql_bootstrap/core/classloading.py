"""Class registry mapping runtime-type identifiers to Python types.

The schema model refers to runtime classes by identifier strings such as
"builtins.int" or "shop.models.Widget". The registry is an explicit lookup
table: nothing is imported on demand.

Example usage:
    registry = ClassRegistry()
    registry.register(Widget)                  # "shop.models.Widget"
    registry.register(Widget, "Widget")        # extra alias

    registry.load_class("shop.models.Widget")  # -> Widget
    registry.collection_type("typing.Sequence")  # -> list
"""

import collections.abc
import datetime
import decimal
import numbers
import typing
import uuid
from typing import Any

from .errors import ClassNotFoundError
from .model import Field


def class_name_of(cls: type) -> str:
    """Return the identifier used for a class, e.g. 'shop.models.Widget'."""
    return f"{cls.__module__}.{cls.__qualname__}"


_BUILTIN_TYPES = (
    str, int, float, bool, bytes, list, dict, set, frozenset, tuple, object,
)

_STDLIB_TYPES = (
    decimal.Decimal, datetime.datetime, datetime.date, datetime.time, uuid.UUID,
)

# Abstract collection identifier -> concrete implementation
_DEFAULT_COLLECTIONS: dict[str, type] = {
    "list": list,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "typing.List": list,
    "typing.Sequence": list,
    "typing.MutableSequence": list,
    "typing.Collection": list,
    "typing.Iterable": list,
    "typing.Set": set,
    "typing.AbstractSet": set,
    "typing.MutableSet": set,
    "typing.FrozenSet": frozenset,
    "typing.Tuple": tuple,
    "collections.abc.Sequence": list,
    "collections.abc.MutableSequence": list,
    "collections.abc.Collection": list,
    "collections.abc.Iterable": list,
    "collections.abc.Set": set,
    "collections.abc.MutableSet": set,
}


class ClassRegistry:
    """Registry of runtime classes keyed by identifier.

    Built-in and common standard library types are registered by default,
    both under their qualified name and (for builtins) their short name.
    """

    def __init__(self):
        self._classes: dict[str, type] = {}
        self._collections: dict[str, type] = dict(_DEFAULT_COLLECTIONS)
        self._register_defaults()

    def _register_defaults(self):
        for cls in _BUILTIN_TYPES:
            self.register(cls)
            self.register(cls, cls.__name__)
        for cls in _STDLIB_TYPES:
            self.register(cls)
        self.register(typing.Any, "typing.Any")

    def register(self, cls: Any, name: str | None = None) -> "ClassRegistry":
        """Register a class under its qualified name or the given alias."""
        self._classes[name or class_name_of(cls)] = cls
        return self

    def register_collection(self, name: str, concrete: type) -> "ClassRegistry":
        """Register the concrete collection used for an abstract one."""
        self._collections[name] = concrete
        return self

    def has(self, name: str) -> bool:
        return name in self._classes or name in self._collections

    def get(self, name: str | None) -> Any | None:
        """Return the class for an identifier, or None."""
        if not name:
            return None
        if name in self._classes:
            return self._classes[name]
        return self._collections.get(name)

    def load_class(self, name: str) -> Any:
        """Return the class for an identifier.

        Raises:
            ClassNotFoundError: If the identifier is not registered
        """
        cls = self.get(name)
        if cls is None:
            raise ClassNotFoundError(name)
        return cls

    def collection_type(self, name: str) -> type:
        """Return the concrete collection class for a collection identifier.

        Concrete classes map to themselves; abstract ones (Sequence, Set, ...)
        map to the implementation registered for them. Unknown identifiers
        fall back to list.
        """
        if name in self._collections:
            return self._collections[name]
        cls = self.get(name)
        if isinstance(cls, type) and issubclass(cls, collections.abc.Set):
            return set
        return list

    def is_number_like(self, name: str | None) -> bool:
        cls = self.get(name)
        return (
            isinstance(cls, type)
            and issubclass(cls, numbers.Number)
            and not issubclass(cls, bool)
        )

    def is_boolean(self, name: str | None) -> bool:
        return self.get(name) is bool

    def runtime_type(self, field: Field) -> Any | None:
        """Return the Python type a field's value has at runtime.

        Collection fields produce the concrete collection parametrised with
        the element class, nested once per array depth (e.g. list[list[int]]).
        Returns None when the element class is unknown.
        """
        element = self.get(field.reference.class_name)
        if element is None:
            return None
        if not field.has_array:
            return element
        collection = self.collection_type(field.array.class_name)
        result = element
        for _ in range(max(field.array.depth, 1)):
            result = collection[result]
        return result
