"""Structured literal codec backed by pydantic.

The codec turns JSON text into typed values (default values declared in the
model) and converts engine-provided input values (dicts, enum names) into the
runtime types business methods declare.

Example usage:
    codec = LiteralCodec()
    codec.decode('{"name": "x"}', Widget)  # -> Widget(name="x")
    codec.coerce({"name": "x"}, Widget)    # -> Widget(name="x")
"""

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import PydanticSchemaGenerationError, TypeAdapter


@runtime_checkable
class StructuredLiteralDecoder(Protocol):
    """Protocol for decoders of structured default-value literals."""

    def decode(self, text: str, target: Any) -> Any:
        """Parse text into a value of the target type.

        Raises:
            ValueError: If the text is not valid for the target
        """
        ...


class LiteralCodec:
    """Decodes JSON literals and coerces input values with pydantic.

    TypeAdapters are built once per target type and cached.
    """

    def __init__(self):
        self._adapters: dict[Any, TypeAdapter | None] = {}

    def _adapter(self, target: Any) -> TypeAdapter | None:
        if target is None:
            target = Any
        try:
            return self._adapters[target]
        except KeyError:
            pass
        except TypeError:
            # unhashable target, build without caching
            return self._build_adapter(target)
        adapter = self._build_adapter(target)
        self._adapters[target] = adapter
        return adapter

    @staticmethod
    def _build_adapter(target: Any) -> TypeAdapter | None:
        try:
            return TypeAdapter(target)
        except PydanticSchemaGenerationError:
            return None

    def decode(self, text: str, target: Any) -> Any:
        """Strictly parse JSON text into the target type.

        Raises:
            ValueError: If the text is not JSON or does not fit the target
        """
        adapter = self._adapter(target)
        if adapter is None:
            adapter = self._adapter(Any)
        return adapter.validate_json(text)

    def coerce(self, value: Any, target: Any) -> Any:
        """Convert an engine-provided value into the target type.

        Values the target cannot be built from raise ValueError. Targets
        pydantic cannot describe are passed through unchanged.
        """
        if value is None or target is None or target is Any or target is object:
            return value
        if isinstance(target, type) and issubclass(target, Enum):
            if isinstance(value, target):
                return value
            if isinstance(value, str) and value in target.__members__:
                return target[value]
        adapter = self._adapter(target)
        if adapter is None:
            return value
        return adapter.validate_python(value)

    def to_plain(self, value: Any, target: Any) -> Any:
        """Dump a decoded value back to dicts and lists.

        Input object defaults must stay plain data so the engine can print
        them in SDL and introspection. Enum members and scalars are kept.
        """
        adapter = self._adapter(target)
        if adapter is None:
            adapter = self._adapter(Any)
        return adapter.dump_python(value)
