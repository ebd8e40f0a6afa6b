"""Schema builder and code registry.

The SchemaBuilder is the arena of named types a schema is assembled from.
Field definitions are compiled eagerly but turned into graphql-core fields
lazily, when graphql-core first reads a type's fields while building the
schema. At that point every TypeReference is swapped for the type of that
name in the builder, so types may reference each other in any order.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLDirective,
    GraphQLField,
    GraphQLInputField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    specified_directives,
)
from graphql.pyutils import Undefined

from .model import Array
from .wrapping import TypeReference, wrap_type

logger = logging.getLogger(__name__)

Resolver = Callable[..., Any]


@dataclass
class FieldDefinition:
    """A field, input field or argument waiting for its types to resolve."""
    name: str
    base: GraphQLNamedType
    array: Array | None = None
    not_null: bool = False
    description: str | None = None
    default_value: Any = Undefined
    arguments: list["FieldDefinition"] = field(default_factory=list)

    def type_in(self, builder: "SchemaBuilder") -> GraphQLType:
        return wrap_type(builder.resolve(self.base), self.array, self.not_null)


class CodeRegistry:
    """Resolvers keyed by (type name, field name) coordinates."""

    def __init__(self):
        self._fetchers: dict[tuple[str, str], Resolver] = {}

    def register(self, type_name: str, field_name: str, fetcher: Resolver) -> bool:
        """Bind a resolver; a coordinate that is already bound keeps its first one."""
        coordinate = (type_name, field_name)
        if coordinate in self._fetchers:
            logger.warning(f"Data fetcher for {type_name}.{field_name} already registered, ignoring")
            return False
        self._fetchers[coordinate] = fetcher
        logger.debug(f"Registered {fetcher!r} for {type_name}.{field_name}")
        return True

    def register_if_absent(self, type_name: str, field_name: str, fetcher: Resolver) -> bool:
        coordinate = (type_name, field_name)
        if coordinate in self._fetchers:
            return False
        self._fetchers[coordinate] = fetcher
        return True

    def get(self, type_name: str, field_name: str) -> Resolver | None:
        return self._fetchers.get((type_name, field_name))

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self._fetchers

    def __len__(self) -> int:
        return len(self._fetchers)


class SchemaBuilder:
    """Collects root types, additional types and directives for a schema."""

    def __init__(self):
        self.query: GraphQLObjectType | None = None
        self.mutation: GraphQLObjectType | None = None
        self.description: str | None = None
        self.types: dict[str, GraphQLNamedType] = {}
        self.directives: list[GraphQLDirective] = []

    def additional_type(self, type_: GraphQLNamedType) -> "SchemaBuilder":
        """Add a named type; a name that is already taken keeps its first type."""
        if type_.name in self.types:
            logger.warning(f"Type '{type_.name}' already added to schema, ignoring")
            return self
        self.types[type_.name] = type_
        return self

    def additional_types(self, types: Iterable[GraphQLNamedType]) -> "SchemaBuilder":
        for type_ in types:
            self.additional_type(type_)
        return self

    def remove_type(self, name: str) -> "SchemaBuilder":
        self.types.pop(name, None)
        return self

    def directive(self, directive: GraphQLDirective) -> "SchemaBuilder":
        self.directives.append(directive)
        return self

    def get_type(self, name: str) -> GraphQLNamedType | None:
        """Look up a type by name among roots and additional types."""
        for root in (self.query, self.mutation):
            if root is not None and root.name == name:
                return root
        return self.types.get(name)

    def resolve(self, type_: GraphQLNamedType) -> GraphQLNamedType:
        """Swap a TypeReference for the type of that name, if there is one."""
        if isinstance(type_, TypeReference):
            resolved = self.get_type(type_.name)
            if resolved is None or isinstance(resolved, TypeReference):
                logger.debug(f"Type reference '{type_.name}' left unresolved")
                return type_
            return resolved
        return type_

    def build(self) -> GraphQLSchema:
        directives = None
        if self.directives:
            directives = [*specified_directives, *self.directives]
        return GraphQLSchema(
            query=self.query,
            mutation=self.mutation,
            types=list(self.types.values()),
            directives=directives,
            description=self.description,
        )


def output_fields(
    owner: str,
    definitions: list[FieldDefinition],
    code_registry: CodeRegistry,
    arena: Callable[[], SchemaBuilder],
) -> Callable[[], dict[str, GraphQLField]]:
    """Return a thunk building the graphql-core fields of an output type.

    arena returns the builder that is current when the thunk runs, which is
    the builder the schema is finally built from.
    """

    def thunk() -> dict[str, GraphQLField]:
        builder = arena()
        return {
            d.name: GraphQLField(
                d.type_in(builder),
                args={a.name: _argument(a, builder) for a in d.arguments},
                resolve=code_registry.get(owner, d.name),
                description=d.description,
            )
            for d in definitions
        }

    return thunk


def input_fields(
    definitions: list[FieldDefinition],
    arena: Callable[[], SchemaBuilder],
) -> Callable[[], dict[str, GraphQLInputField]]:
    """Return a thunk building the fields of an input object type."""

    def thunk() -> dict[str, GraphQLInputField]:
        builder = arena()
        return {
            d.name: GraphQLInputField(
                d.type_in(builder),
                default_value=d.default_value,
                description=d.description,
            )
            for d in definitions
        }

    return thunk


def _argument(definition: FieldDefinition, builder: SchemaBuilder) -> GraphQLArgument:
    return GraphQLArgument(
        definition.type_in(builder),
        default_value=definition.default_value,
        description=definition.description,
    )
