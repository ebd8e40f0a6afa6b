"""Scalar types for compiled schemas.

Maps scalar names used in the schema model to graphql-core scalar types.
Custom scalars are described by handlers that know how to serialize and
deserialize their Python values.

Example usage:
    from gql_bootstrap.core.scalars import ScalarHandler, ScalarRegistry

    class MoneyHandler:
        description = "Amount with currency precision"

        def serialize(self, value):
            return str(value)

        def deserialize(self, value):
            from decimal import Decimal
            return Decimal(value)

    registry = ScalarRegistry()
    registry.register("Money", MoneyHandler())
    registry.get("Money")  # -> GraphQLScalarType named "Money"
"""

import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

logger = logging.getLogger(__name__)

# Scalar names whose values are numbers on the wire
NUMBER_SCALARS = {"Int", "Float", "BigDecimal", "BigInteger", "Long"}
BOOLEAN_SCALARS = {"Boolean"}


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Attributes:
        description: Description shown in introspection
    """

    description: str

    def serialize(self, value: Any) -> Any:
        """Convert Python value to a JSON-serializable result value."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert an input value to the Python type."""
        ...


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    description = "ISO 8601 date and time"

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> datetime:
        """Parse ISO 8601 string to datetime."""
        return datetime.fromisoformat(value.replace("Z", "+00:00"))


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    description = "ISO 8601 date"

    def serialize(self, value: date) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> date:
        return date.fromisoformat(value)


class TimeHandler:
    """Handler for Time scalars using ISO 8601 time format."""

    description = "ISO 8601 time"

    def serialize(self, value: time) -> str:
        return value.isoformat()

    def deserialize(self, value: str) -> time:
        return time.fromisoformat(value)


class UUIDHandler:
    """Handler for UUID scalars."""

    description = "UUID in canonical string form"

    def serialize(self, value: UUID) -> str:
        return str(value)

    def deserialize(self, value: str) -> UUID:
        return UUID(str(value))


class JSONHandler:
    """Handler for JSON scalars (pass-through)."""

    description = "Arbitrary JSON value"

    def serialize(self, value: Any) -> Any:
        return value

    def deserialize(self, value: Any) -> Any:
        return value


class BigDecimalHandler:
    """Handler for arbitrary-precision decimals, sent as strings."""

    description = "Arbitrary-precision decimal number"

    def serialize(self, value: Any) -> str:
        return str(Decimal(str(value)))

    def deserialize(self, value: Any) -> Decimal:
        return Decimal(str(value))


class BigIntegerHandler:
    """Handler for integers outside the 32-bit Int range."""

    description = "Arbitrary-size integer"

    def serialize(self, value: Any) -> int:
        return int(value)

    def deserialize(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Cannot represent boolean as integer: {value!r}")
        return int(value)


def scalar_from_handler(name: str, handler: ScalarHandler) -> GraphQLScalarType:
    """Build a graphql-core scalar type from a handler."""
    return GraphQLScalarType(
        name=name,
        description=getattr(handler, "description", None),
        serialize=handler.serialize,
        parse_value=handler.deserialize,
    )


class ScalarRegistry:
    """Registry of scalar types by GraphQL name.

    The five built-in GraphQL scalars plus DateTime, Date, Time, UUID, JSON,
    BigDecimal, BigInteger and Long are registered by default.
    """

    def __init__(self):
        self._scalars: dict[str, GraphQLScalarType] = {}
        self._register_defaults()

    def _register_defaults(self):
        for scalar in (GraphQLString, GraphQLInt, GraphQLFloat, GraphQLBoolean, GraphQLID):
            self._scalars[scalar.name] = scalar
        self.register("DateTime", DateTimeHandler())
        self.register("Date", DateHandler())
        self.register("Time", TimeHandler())
        self.register("UUID", UUIDHandler())
        self.register("JSON", JSONHandler())
        self.register("BigDecimal", BigDecimalHandler())
        self.register("BigInteger", BigIntegerHandler())
        self.register("Long", BigIntegerHandler())

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._scalars[scalar_name] = scalar_from_handler(scalar_name, handler)

    def register_type(self, scalar: GraphQLScalarType):
        """Register a ready-made graphql-core scalar type."""
        self._scalars[scalar.name] = scalar

    def get(self, scalar_name: str) -> GraphQLScalarType:
        """Get the scalar type for a name.

        Unknown names fall back to String so a model with an unexpected
        scalar still compiles.
        """
        scalar = self._scalars.get(scalar_name)
        if scalar is None:
            logger.warning(f"Unknown scalar '{scalar_name}', using String")
            return GraphQLString
        return scalar

    def has(self, scalar_name: str) -> bool:
        return scalar_name in self._scalars

    @staticmethod
    def is_number_like(scalar_name: str) -> bool:
        return scalar_name in NUMBER_SCALARS

    @staticmethod
    def is_boolean(scalar_name: str) -> bool:
        return scalar_name in BOOLEAN_SCALARS
