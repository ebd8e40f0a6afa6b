"""Compiles a schema model into an executable graphql-core schema.

Types are created leaves first: enums, interfaces, object types, inputs.
Root Query and Mutation types are assembled once every named type exists,
the extension hooks may then change the builder, and the schema is built.

Example usage:
    from gql_bootstrap.core import Bootstrap, ClassRegistry

    registry = ClassRegistry().register(WidgetService)
    result = Bootstrap.bootstrap(model, class_registry=registry)
    if not result.is_empty:
        print(print_schema(result.schema))
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from graphql import (
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
)

from .batch import BatchDataFetcher, BatchLoaderRegistry
from .builder import CodeRegistry, FieldDefinition, SchemaBuilder, input_fields, output_fields
from .classloading import ClassRegistry
from .codec import LiteralCodec
from .config import Config
from .defaults import DefaultValueCoercer
from .errors import ErrorInfoMap
from .fetchers import GroupDataFetcher, OperationInvoker, PropertyDataFetcher, ReflectionDataFetcher
from .hooks import EventEmitter
from .model import (
    Argument,
    EnumType,
    Field,
    Group,
    InputType,
    InterfaceType,
    Operation,
    Reference,
    ReferenceType,
    SchemaModel,
    Type,
)
from .resolver import InterfaceOutputRegistry, InterfaceResolver
from .scalars import ScalarRegistry
from .visibility import FieldVisibility
from .wrapping import TypeReference, field_reference

logger = logging.getLogger(__name__)

QUERY = "Query"
QUERY_DESCRIPTION = "Query root"

MUTATION = "Mutation"
MUTATION_DESCRIPTION = "Mutation root"

CompileOperation = Callable[[str, Operation], FieldDefinition]


@dataclass
class BootstrapResult:
    """Everything the execution side needs from a compile.

    schema is None when the model had nothing to compile.
    """
    schema: GraphQLSchema | None = None
    batch_loaders: BatchLoaderRegistry = field(default_factory=BatchLoaderRegistry)
    field_visibility: FieldVisibility = field(default_factory=FieldVisibility)
    error_info: ErrorInfoMap = field(default_factory=ErrorInfoMap)

    @classmethod
    def empty(cls) -> "BootstrapResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.schema is None


class Bootstrap:
    """Builds a graphql-core schema from a SchemaModel.

    One instance compiles one model, once. Use Bootstrap.bootstrap().
    """

    def __init__(
        self,
        model: SchemaModel,
        config: Config | None = None,
        *,
        class_registry: ClassRegistry | None = None,
        codec: LiteralCodec | None = None,
        scalars: ScalarRegistry | None = None,
        event_emitter: EventEmitter | None = None,
        lookup: Callable[[type], Any] | None = None,
    ):
        self.model = model
        self.config = config or Config()
        self.class_registry = class_registry or ClassRegistry()
        self.codec = codec or LiteralCodec()
        self.scalars = scalars or ScalarRegistry()
        self.event_emitter = event_emitter or EventEmitter()
        self.lookup = lookup
        self.coercer = DefaultValueCoercer(self.class_registry, self.codec)

        # Enums are keyed by class name, the rest by GraphQL name
        self.enum_map: dict[str, GraphQLEnumType] = {}
        self.interface_map: dict[str, GraphQLInterfaceType] = {}
        self.input_map: dict[str, GraphQLInputObjectType] = {}
        self.type_map: dict[str, GraphQLObjectType] = {}

        self.code_registry = CodeRegistry()
        self.batch_loaders = BatchLoaderRegistry()
        self.interface_outputs = InterfaceOutputRegistry()
        self.schema_builder = SchemaBuilder()
        self._references: dict[str, TypeReference] = {}

    @classmethod
    def bootstrap(
        cls,
        model: SchemaModel | None,
        config: Config | None = None,
        **kwargs: Any,
    ) -> BootstrapResult:
        """Compile a model; models without operations give an empty result."""
        if model is None or not model.has_operations():
            logger.info("Schema model is empty or null, no GraphQL schema created")
            return BootstrapResult.empty()
        return cls(model, config, **kwargs).generate()

    def generate(self) -> BootstrapResult:
        builder = SchemaBuilder()
        self.schema_builder = builder

        self._create_enum_types()
        self._create_interface_types()
        self._create_object_types()
        self._create_input_types()

        self._add_queries(builder)
        self._add_mutations(builder)

        builder.additional_types(self.enum_map.values())
        builder.additional_types(self.interface_map.values())
        builder.additional_types(self.type_map.values())
        builder.additional_types(self.input_map.values())

        self.schema_builder = self.event_emitter.fire_before_schema_build(builder)
        schema = self.schema_builder.build()

        logger.info(
            f"Compiled GraphQL schema: {len(self.type_map)} types, "
            f"{len(self.interface_map)} interfaces, {len(self.input_map)} inputs, "
            f"{len(self.enum_map)} enums, {len(self.batch_loaders)} batch loaders"
        )
        return BootstrapResult(
            schema=schema,
            batch_loaders=self.batch_loaders,
            field_visibility=FieldVisibility.from_config(self.config),
            error_info=ErrorInfoMap(self.model.errors),
        )

    def _arena(self) -> SchemaBuilder:
        return self.schema_builder

    # Roots

    def _add_queries(self, builder: SchemaBuilder):
        definitions = self._root_definitions(QUERY, self.model.queries, self.model.grouped_queries)
        builder.query = GraphQLObjectType(
            QUERY,
            output_fields(QUERY, definitions, self.code_registry, self._arena),
            description=QUERY_DESCRIPTION,
        )

    def _add_mutations(self, builder: SchemaBuilder):
        definitions = self._root_definitions(MUTATION, self.model.mutations, self.model.grouped_mutations)
        if not definitions:
            logger.debug("No mutations declared, schema has no Mutation type")
            return
        builder.mutation = GraphQLObjectType(
            MUTATION,
            output_fields(MUTATION, definitions, self.code_registry, self._arena),
            description=MUTATION_DESCRIPTION,
        )

    def _root_definitions(
        self,
        root_name: str,
        operations: list[Operation],
        grouped: dict[Group, list[Operation]],
    ) -> list[FieldDefinition]:
        definitions: list[FieldDefinition] = []
        self._add_operations(root_name, definitions, operations, self._operation_definition)
        for group, group_operations in grouped.items():
            if any(d.name == group.name for d in definitions):
                logger.warning(f"Duplicate field '{group.name}' on '{root_name}', ignoring group")
                continue
            group_type = self._create_group_type(root_name, group, group_operations)
            self.code_registry.register_if_absent(
                root_name, group.name, GroupDataFetcher(group_type.name)
            )
            definitions.append(
                FieldDefinition(group.name, base=group_type, description=group.description)
            )
        return definitions

    def _create_group_type(
        self, root_name: str, group: Group, operations: list[Operation]
    ) -> GraphQLObjectType:
        type_name = group.name + root_name
        definitions: list[FieldDefinition] = []
        self._add_operations(type_name, definitions, operations, self._operation_definition)
        return GraphQLObjectType(
            type_name,
            output_fields(type_name, definitions, self.code_registry, self._arena),
            description=group.description,
        )

    def _add_operations(
        self,
        owner: str,
        definitions: list[FieldDefinition],
        operations: Iterable[Operation],
        compile_operation: CompileOperation,
    ):
        """Compile operations onto an owner; a name already taken keeps its first field."""
        names = {d.name for d in definitions}
        for operation in operations:
            operation = self.event_emitter.fire_create_operation(operation)
            if operation.name in names:
                logger.warning(f"Duplicate operation '{operation.name}' on '{owner}', keeping the first")
                continue
            names.add(operation.name)
            definitions.append(compile_operation(owner, operation))

    # Named types

    def _create_enum_types(self):
        for enum_type in self.model.enums.values():
            self._create_enum_type(enum_type)

    def _create_enum_type(self, enum_type: EnumType):
        enum_cls = self.class_registry.get(enum_type.class_name)
        if not (isinstance(enum_cls, type) and issubclass(enum_cls, Enum)):
            enum_cls = None
        values = {}
        for value in enum_type.values:
            if enum_cls is not None and value in enum_cls.__members__:
                values[value] = GraphQLEnumValue(enum_cls[value])
            else:
                values[value] = GraphQLEnumValue(value)
        self.enum_map[enum_type.class_name] = GraphQLEnumType(
            enum_type.name, values, description=enum_type.description
        )

    def _create_interface_types(self):
        for interface_type in self.model.interfaces.values():
            self._create_interface_type(interface_type)

    def _create_interface_type(self, interface_type: InterfaceType):
        name = interface_type.name
        definitions = self._field_definitions(name, interface_type.fields.values())
        parents = [self._type_reference(i.name) for i in interface_type.interfaces]
        self.interface_map[name] = GraphQLInterfaceType(
            name,
            output_fields(name, definitions, self.code_registry, self._arena),
            interfaces=lambda: [self.schema_builder.resolve(p) for p in parents],
            resolve_type=InterfaceResolver(name, self.interface_outputs),
            description=interface_type.description,
        )

    def _create_object_types(self):
        for type_ in self.model.types.values():
            self._create_object_type(type_)

    def _create_object_type(self, type_: Type):
        name = type_.name
        definitions = self._field_definitions(name, type_.fields.values())

        operations = []
        for operation in type_.operations:
            if type_.has_batch_operation(operation.name):
                logger.warning(
                    f"Operation '{operation.name}' on '{name}' is also a batch operation, "
                    f"keeping the batch operation"
                )
                continue
            operations.append(operation)
        self._add_operations(name, definitions, operations, self._operation_definition)

        batch_operations = [self._owned_by(type_, op) for op in type_.batch_operations]
        self._add_operations(name, definitions, batch_operations, self._batch_operation_definition)

        interfaces = [
            self.interface_map[i.name] for i in type_.interfaces if i.name in self.interface_map
        ]
        object_type = GraphQLObjectType(
            name,
            output_fields(name, definitions, self.code_registry, self._arena),
            interfaces=interfaces,
            description=type_.description,
        )
        self.type_map[name] = object_type
        self.interface_outputs.register(type_, object_type)

    @staticmethod
    def _owned_by(type_: Type, operation: Operation) -> Operation:
        if operation.source_field_on is not None:
            return operation
        owner = Reference(type_.name, type_.class_name, ReferenceType.TYPE)
        return replace(operation, source_field_on=owner)

    def _create_input_types(self):
        for input_type in self.model.inputs.values():
            self._create_input_type(input_type)

    def _create_input_type(self, input_type: InputType):
        definitions = [self._input_definition(f) for f in input_type.fields.values()]
        self.input_map[input_type.name] = GraphQLInputObjectType(
            input_type.name,
            input_fields(definitions, self._arena),
            description=input_type.description,
        )

    # Fields

    def _field_definitions(self, owner: str, fields: Iterable[Field]) -> list[FieldDefinition]:
        definitions = []
        for field_ in fields:
            definitions.append(self._definition(field_))
            self.code_registry.register(owner, field_.name, PropertyDataFetcher(field_))
        return definitions

    def _operation_definition(self, owner: str, operation: Operation) -> FieldDefinition:
        definition = self._definition(operation)
        definition.arguments = self._argument_definitions(operation.arguments)
        self.code_registry.register(
            owner, operation.name, ReflectionDataFetcher(self._invoker(operation))
        )
        return definition

    def _batch_operation_definition(self, owner: str, operation: Operation) -> FieldDefinition:
        definition = self._definition(operation)
        definition.arguments = self._argument_definitions(operation.arguments)
        self.batch_loaders.register_operation(
            operation, self._invoker(operation), self.config.batch_max_size
        )
        self.code_registry.register(owner, operation.name, BatchDataFetcher(operation))
        return definition

    def _argument_definitions(self, arguments: list[Argument]) -> list[FieldDefinition]:
        return [self._input_definition(a) for a in arguments if not a.source_argument]

    def _input_definition(self, field_: Field) -> FieldDefinition:
        definition = self._definition(field_)
        definition.default_value = self.coercer.coerce(field_)
        return definition

    def _definition(self, field_: Field) -> FieldDefinition:
        return FieldDefinition(
            name=field_.name,
            base=self._reference_type(field_),
            array=field_.array,
            not_null=field_.not_null,
            description=field_.description,
        )

    def _reference_type(self, field_: Field) -> GraphQLNamedType:
        """Return the named type of a field: a scalar, an enum or a TypeReference."""
        reference = field_reference(field_)
        kind = reference.type
        if kind == ReferenceType.SCALAR:
            return self.scalars.get(reference.name)
        if kind == ReferenceType.ENUM:
            enum_type = self.enum_map.get(reference.class_name)
            if enum_type is not None:
                return enum_type
            return self._type_reference(reference.name)
        if kind in (ReferenceType.TYPE, ReferenceType.INTERFACE, ReferenceType.INPUT):
            return self._type_reference(reference.name)
        logger.warning(f"Unknown reference kind {kind!r} for '{reference.name}'")
        return self._type_reference(reference.name)

    def _type_reference(self, name: str) -> TypeReference:
        # one placeholder per name, so an unresolved name appears once in the schema
        if name not in self._references:
            self._references[name] = TypeReference(name)
        return self._references[name]

    def _invoker(self, operation: Operation) -> OperationInvoker:
        return OperationInvoker(
            operation,
            self.class_registry,
            self.codec,
            self.coercer,
            lookup=self.lookup,
            config=self.config,
        )
