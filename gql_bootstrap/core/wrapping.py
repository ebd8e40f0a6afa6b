"""Type references and the list/non-null wrapping algorithm."""

from graphql import GraphQLList, GraphQLNamedType, GraphQLNonNull, GraphQLType

from .model import Array, Field, Reference


class TypeReference(GraphQLNamedType):
    """Placeholder for a named type that is looked up when the schema is built.

    Allows types to reference each other regardless of construction order.
    A reference left unresolved after build is reported by graphql-core's
    schema validation.
    """

    def __init__(self, name: str):
        super().__init__(name=name)

    def __repr__(self) -> str:
        return f"<TypeReference {self.name!r}>"


def field_reference(field: Field) -> Reference:
    """Return the reference a field's type is compiled from.

    A mapping on the reference itself applies everywhere the type is used
    and wins over a mapping declared on the field.
    """
    if field.reference.has_mapping:
        return field.reference.mapping.reference
    if field.has_mapping:
        return field.mapping.reference
    return field.reference


def wrap_type(base: GraphQLType, array: Array | None, not_null: bool) -> GraphQLType:
    """Wrap a base type according to collection metadata and nullability.

    The element is made non-null first, then wrapped in one list per depth,
    then the whole type is made non-null. [[T!]]! for depth 2 with both
    flags set.
    """
    result = base
    if array is not None:
        if array.not_empty:
            result = GraphQLNonNull(result)
        for _ in range(array.depth):
            result = GraphQLList(result)
    if not_null and not isinstance(result, GraphQLNonNull):
        result = GraphQLNonNull(result)
    return result
