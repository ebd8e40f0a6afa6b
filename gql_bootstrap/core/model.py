"""Schema model for executable GraphQL schemas.

This module defines dataclasses that describe the data shapes and operations
of an API in a fully-resolved, declarative way. A model is read once by the
bootstrap compiler and never mutated by it.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import TypeAdapter


class ReferenceType(str, Enum):
    """The closed set of kinds a value-type reference can have."""
    SCALAR = "SCALAR"
    ENUM = "ENUM"
    TYPE = "TYPE"
    INTERFACE = "INTERFACE"
    INPUT = "INPUT"


@dataclass
class Reference:
    """Describes the value type of a field, argument or operation.

    class_name identifies the runtime class, name is the GraphQL name.
    graphql_class_name is the class the value has on the wire, which differs
    from class_name when the value is mapped (e.g. a Money object sent as a
    BigDecimal).
    """
    name: str
    class_name: str
    type: ReferenceType = ReferenceType.SCALAR
    graphql_class_name: str = ""
    mapping: "MappingInfo | None" = None

    def __post_init__(self):
        if not self.graphql_class_name:
            self.graphql_class_name = self.class_name

    @property
    def has_mapping(self) -> bool:
        return self.mapping is not None and self.mapping.reference is not None


@dataclass
class MappingInfo:
    """Points a declared value type at a different wire type."""
    reference: Reference | None = None


@dataclass
class Array:
    """Collection metadata for a field, argument or operation return."""
    class_name: str = "list"
    depth: int = 1
    # True when the elements of the collection may not be null
    not_empty: bool = False


@dataclass
class Field:
    """Represents a field in a type, interface or input."""
    name: str
    reference: Reference
    description: str | None = None
    array: Array | None = None
    not_null: bool = False
    default_value: str | None = None
    mapping: MappingInfo | None = None
    # Attribute read on the parent value, defaults to name
    method_name: str | None = None

    @property
    def has_array(self) -> bool:
        return self.array is not None

    @property
    def has_mapping(self) -> bool:
        return self.mapping is not None and self.mapping.reference is not None


@dataclass
class Argument(Field):
    """Represents an argument to an operation.

    A source argument is filled from the parent value and never appears in
    the generated argument list.
    """
    source_argument: bool = False


@dataclass
class Operation(Field):
    """Represents a query, mutation or type-local operation.

    class_name and method_name locate the business method that answers the
    operation. For type-local operations, source_field_on is the owning type.
    """
    class_name: str = ""
    method_name: str | None = None
    arguments: list[Argument] = field(default_factory=list)
    operation_type: str = "query"  # 'query', 'mutation' or 'source'
    source_field_on: Reference | None = None

    @property
    def has_arguments(self) -> bool:
        return bool(self.arguments)


@dataclass(frozen=True)
class Group:
    """Namespaces a set of root operations under one synthetic field."""
    name: str
    description: str | None = None


@dataclass
class EnumType:
    """Represents a GraphQL enum type."""
    name: str
    class_name: str
    values: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class InterfaceType:
    """Represents a GraphQL interface type."""
    name: str
    class_name: str
    fields: dict[str, Field] = field(default_factory=dict)
    interfaces: list[Reference] = field(default_factory=list)
    description: str | None = None


@dataclass
class InputType:
    """Represents a GraphQL input object type."""
    name: str
    class_name: str
    fields: dict[str, Field] = field(default_factory=dict)
    description: str | None = None


@dataclass
class Type:
    """Represents a GraphQL object type.

    operations and batch_operations are type-local operations (fields whose
    value is computed by a business method that receives the parent value).
    """
    name: str
    class_name: str
    fields: dict[str, Field] = field(default_factory=dict)
    operations: list[Operation] = field(default_factory=list)
    batch_operations: list[Operation] = field(default_factory=list)
    interfaces: list[Reference] = field(default_factory=list)
    description: str | None = None

    def has_batch_operation(self, name: str) -> bool:
        """Check if a batch operation with this name is declared."""
        return any(op.name == name for op in self.batch_operations)


@dataclass
class ErrorInfo:
    """Maps an exception class to the error code reported to clients."""
    class_name: str
    error_code: str


@dataclass
class SchemaModel:
    """Complete declarative description of an API."""
    queries: list[Operation] = field(default_factory=list)
    grouped_queries: dict[Group, list[Operation]] = field(default_factory=dict)
    mutations: list[Operation] = field(default_factory=list)
    grouped_mutations: dict[Group, list[Operation]] = field(default_factory=dict)
    types: dict[str, Type] = field(default_factory=dict)
    interfaces: dict[str, InterfaceType] = field(default_factory=dict)
    inputs: dict[str, InputType] = field(default_factory=dict)
    enums: dict[str, EnumType] = field(default_factory=dict)
    errors: dict[str, ErrorInfo] = field(default_factory=dict)

    def has_operations(self) -> bool:
        """Check if the model declares at least one root operation."""
        return bool(
            self.queries
            or self.mutations
            or any(self.grouped_queries.values())
            or any(self.grouped_mutations.values())
        )

    @property
    def all_operations(self) -> list[Operation]:
        """Return all root operations, grouped ones included."""
        operations = self.queries + self.mutations
        for grouped in (self.grouped_queries, self.grouped_mutations):
            for group_operations in grouped.values():
                operations.extend(group_operations)
        return operations

    @classmethod
    def from_json(cls, text: str | bytes) -> "SchemaModel":
        """Load a model from its JSON form.

        Grouped operations are written as a list of
        {"group": {...}, "operations": [...]} objects since JSON keys
        cannot be objects.
        """
        data = _RAW_MODEL.validate_json(text)
        for key in ("grouped_queries", "grouped_mutations"):
            entries = data.get(key) or []
            data[key] = {
                Group(**entry["group"]): entry.get("operations", [])
                for entry in entries
            }
        return _MODEL.validate_python(data)


_RAW_MODEL = TypeAdapter(dict)
_MODEL = TypeAdapter(SchemaModel)
