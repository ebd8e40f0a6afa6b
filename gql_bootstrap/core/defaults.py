"""Default value coercion.

Default values arrive in the model as literal strings. They are turned into
typed runtime values in this order:

1. absent or empty literal: no default
2. literal containing '{' or '[' that decodes as structured data for the
   target type: the decoded value, dumped back to dicts for input objects
3. numeric target: Decimal
4. boolean target: True for a case-insensitive "true", otherwise False
5. enum target with a member of that name: the member
6. anything else: the literal itself
"""

import logging
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from graphql.pyutils import Undefined

from .classloading import ClassRegistry
from .codec import LiteralCodec, StructuredLiteralDecoder
from .model import Field, ReferenceType
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)


def looks_structured(literal: str) -> bool:
    return "{" in literal or "[" in literal


class DefaultValueCoercer:
    """Coerces default-value literals of fields and arguments."""

    def __init__(
        self,
        class_registry: ClassRegistry | None = None,
        decoder: StructuredLiteralDecoder | None = None,
    ):
        self.class_registry = class_registry or ClassRegistry()
        self.decoder = decoder or LiteralCodec()
        self._plain = self.decoder if isinstance(self.decoder, LiteralCodec) else LiteralCodec()

    def coerce(self, field: Field) -> Any:
        """Return the typed default for a field, or Undefined if it has none."""
        literal = field.default_value
        if literal is None or literal == "":
            return Undefined

        if looks_structured(literal):
            target = self.class_registry.runtime_type(field)
            try:
                decoded = self.decoder.decode(literal, target)
            except (ValueError, TypeError) as e:
                logger.debug(f"Default for '{field.name}' is not structured data: {e}")
            else:
                if field.reference.type == ReferenceType.INPUT:
                    return self._plain.to_plain(decoded, target)
                return decoded

        reference = field.reference
        if self._is_number_like(field):
            try:
                return Decimal(literal)
            except InvalidOperation:
                logger.debug(f"Default for '{field.name}' is not a number: {literal!r}")
                return literal

        if self._is_boolean(field):
            return literal.strip().lower() == "true"

        if reference.type == ReferenceType.ENUM:
            enum_cls = self.class_registry.get(reference.class_name)
            if isinstance(enum_cls, type) and issubclass(enum_cls, Enum):
                if literal in enum_cls.__members__:
                    return enum_cls[literal]

        return literal

    def _is_number_like(self, field: Field) -> bool:
        reference = field.reference
        if self.class_registry.is_number_like(reference.graphql_class_name or reference.class_name):
            return True
        return reference.type == ReferenceType.SCALAR and ScalarRegistry.is_number_like(reference.name)

    def _is_boolean(self, field: Field) -> bool:
        reference = field.reference
        if self.class_registry.is_boolean(reference.graphql_class_name or reference.class_name):
            return True
        return reference.type == ReferenceType.SCALAR and ScalarRegistry.is_boolean(reference.name)
