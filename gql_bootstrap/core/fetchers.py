"""Data fetchers bound to schema coordinates.

A data fetcher is a graphql-core resolver: called with the parent value, the
resolve info and the field arguments. Three kinds are used:

- PropertyDataFetcher reads a property off the parent value
- ReflectionDataFetcher invokes the business method behind an operation
- GroupDataFetcher returns a constant so the engine descends into a group
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any

from graphql import GraphQLResolveInfo
from graphql.pyutils import Undefined

from .classloading import ClassRegistry
from .codec import LiteralCodec
from .config import Config
from .context import ExecutionContext, execution_context
from .defaults import DefaultValueCoercer
from .model import Field, Operation

logger = logging.getLogger(__name__)


def default_lookup(cls: type) -> Any:
    """Create the instance an operation method is called on."""
    return cls()


class PropertyDataFetcher:
    """Reads a field's property from the parent value.

    Mappings are read by key, other values by attribute. A bound method
    found under the name is called without arguments.
    """

    def __init__(self, field: Field):
        self.field = field
        self.property_name = field.method_name or field.name

    def __call__(self, source: Any, info: GraphQLResolveInfo, **arguments: Any) -> Any:
        if source is None:
            return None
        if isinstance(source, Mapping):
            value = source.get(self.property_name)
        else:
            value = getattr(source, self.property_name, None)
        if inspect.ismethod(value):
            value = value()
        return value

    def __repr__(self) -> str:
        return f"PropertyDataFetcher({self.property_name!r})"


class GroupDataFetcher:
    """Returns the group type's name; never inspected for data."""

    def __init__(self, type_name: str):
        self.type_name = type_name

    def __call__(self, source: Any, info: GraphQLResolveInfo, **arguments: Any) -> str:
        return self.type_name


class OperationInvoker:
    """Calls the business method behind an operation.

    The class named by the operation is loaded from the class registry. A
    registered class is instantiated through lookup; any other registered
    object (a module, a ready-made service instance) is used as is. With no
    method_name the registered object itself is called.

    Arguments are passed positionally in declaration order. Source arguments
    receive the parent value (or, for batches, the list of parent values);
    the others are coerced to the runtime type they declare.
    """

    def __init__(
        self,
        operation: Operation,
        class_registry: ClassRegistry,
        codec: LiteralCodec,
        coercer: DefaultValueCoercer,
        lookup: Callable[[type], Any] | None = None,
        config: Config | None = None,
    ):
        self.operation = operation
        self.class_registry = class_registry
        self.codec = codec
        self.lookup = lookup or default_lookup
        self.config = config or Config()
        self._targets = [class_registry.runtime_type(arg) for arg in operation.arguments]
        self._defaults = {
            arg.name: coercer.coerce(arg)
            for arg in operation.arguments
            if not arg.source_argument
        }

    def resolve_method(self) -> Callable[..., Any]:
        target = self.class_registry.load_class(self.operation.class_name)
        if isinstance(target, type):
            target = self.lookup(target)
        if self.operation.method_name:
            return getattr(target, self.operation.method_name)
        return target

    def argument_values(self, source: Any, arguments: Mapping[str, Any]) -> list[Any]:
        values = []
        for argument, target in zip(self.operation.arguments, self._targets):
            if argument.source_argument:
                values.append(source)
                continue
            value = arguments.get(argument.name, Undefined)
            if value is Undefined:
                value = self._defaults.get(argument.name, Undefined)
            if value is Undefined:
                value = None
            values.append(self.codec.coerce(value, target))
        return values

    def invoke(
        self,
        source: Any,
        arguments: Mapping[str, Any],
        info: GraphQLResolveInfo | None = None,
    ) -> Any:
        """Invoke the method; awaitable results are returned as coroutines."""
        context = ExecutionContext(
            operation=self.operation,
            arguments=dict(arguments),
            source=source,
            info=info,
        )
        try:
            method = self.resolve_method()
            values = self.argument_values(source, arguments)
            with execution_context(context):
                result = method(*values)
        except Exception:
            self._report()
            raise
        if inspect.isawaitable(result):
            return self._await(result, context)
        return result

    async def _await(self, result: Any, context: ExecutionContext) -> Any:
        try:
            with execution_context(context):
                return await result
        except Exception:
            self._report()
            raise

    def _report(self):
        if self.config.print_data_fetcher_exception:
            logger.exception(f"Data fetcher for '{self.operation.name}' failed")


class ReflectionDataFetcher:
    """Resolves a root or type-local operation by invoking its method."""

    def __init__(self, invoker: OperationInvoker):
        self.invoker = invoker
        self.operation = invoker.operation

    def __call__(self, source: Any, info: GraphQLResolveInfo, **arguments: Any) -> Any:
        return self.invoker.invoke(source, arguments, info)

    def __repr__(self) -> str:
        return f"ReflectionDataFetcher({self.operation.class_name}.{self.operation.method_name})"
