"""Extension hooks for customizing schema compilation.

Provides protocols for hooks that can adjust each operation before it is
compiled, or change the schema builder right before the schema is built.

Example usage:
    from gql_bootstrap.core.hooks import EventEmitter

    # Hook adding a directive to every schema
    class AddAuthDirective:
        def before_schema_build(self, builder):
            return builder.directive(auth_directive)

    # Hook prefixing operation descriptions
    class MarkBeta:
        def create_operation(self, operation):
            operation.description = f"(beta) {operation.description or ''}"
            return operation

    emitter = EventEmitter([AddAuthDirective(), MarkBeta()])
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Protocol, runtime_checkable

from graphql import GraphQLNamedType

from .builder import SchemaBuilder
from .model import Operation

logger = logging.getLogger(__name__)


@runtime_checkable
class BeforeSchemaBuildHook(Protocol):
    """Protocol for hooks run once, right before the schema is built.

    The builder returned by the hook is the one the schema is built from.

    Example:
        class AddAuditType(BeforeSchemaBuildHook):
            def before_schema_build(self, builder: SchemaBuilder) -> SchemaBuilder:
                return builder.additional_type(audit_type)
    """

    def before_schema_build(self, builder: SchemaBuilder) -> SchemaBuilder:
        """Called with the complete builder.

        Args:
            builder: Builder holding roots, types and directives

        Returns:
            The (possibly modified) builder to build the schema from
        """
        ...


@runtime_checkable
class CreateOperationHook(Protocol):
    """Protocol for hooks run for every operation before it is compiled."""

    def create_operation(self, operation: Operation) -> Operation:
        """Called with each operation.

        Args:
            operation: The operation from the schema model

        Returns:
            The (possibly modified) operation to compile
        """
        ...


class AddTypesHook:
    """Built-in hook adding extra named types to the schema.

    Example:
        hook = AddTypesHook([GraphQLObjectType("Audit", {...})])
    """

    def __init__(self, types: Iterable[GraphQLNamedType]):
        self.types = list(types)

    def before_schema_build(self, builder: SchemaBuilder) -> SchemaBuilder:
        return builder.additional_types(self.types)


class FilterTypesHook:
    """Built-in hook dropping additional types by name prefix/suffix.

    Fields are resolved against the builder after hooks run, so a dropped
    type that a field still returns leaves a dangling reference and the
    schema fails validation. Names in `keep` are never dropped.

    Example:
        # Remove all types starting with underscore
        hook = FilterTypesHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
        keep: Iterable[str] = (),
    ):
        self.keep = set(keep)
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        if name in self.keep:
            return True
        excluded = (self.exclude_prefix and name.startswith(self.exclude_prefix)) or (
            self.exclude_suffix and name.endswith(self.exclude_suffix)
        )
        wanted = name.startswith(self.include_prefix or "") and name.endswith(
            self.include_suffix or ""
        )
        return wanted and not excluded

    def before_schema_build(self, builder: SchemaBuilder) -> SchemaBuilder:
        for name in list(builder.types):
            if not self._should_include(name):
                logger.debug(f"Filtered type '{name}' from schema")
                builder.remove_type(name)
        return builder


class EventEmitter:
    """Runs registered hooks in order.

    A hook object may implement either protocol or both.
    """

    def __init__(self, hooks: Iterable[object] = ()):
        self.before_schema_build_hooks: list[BeforeSchemaBuildHook] = []
        self.create_operation_hooks: list[CreateOperationHook] = []
        for hook in hooks:
            self.add_hook(hook)

    def add_hook(self, hook: object):
        """Add a hook; it is registered for every protocol it implements."""
        matched = False
        if isinstance(hook, BeforeSchemaBuildHook):
            self.before_schema_build_hooks.append(hook)
            matched = True
        if isinstance(hook, CreateOperationHook):
            self.create_operation_hooks.append(hook)
            matched = True
        if not matched:
            raise TypeError(f"{type(hook).__name__} implements no schema hook")

    def fire_before_schema_build(self, builder: SchemaBuilder) -> SchemaBuilder:
        """Run all before-build hooks; each receives the previous one's result."""
        for hook in self.before_schema_build_hooks:
            builder = hook.before_schema_build(builder)
        return builder

    def fire_create_operation(self, operation: Operation) -> Operation:
        """Run all create-operation hooks on a copy of the operation."""
        if not self.create_operation_hooks:
            return operation
        operation = replace(operation)
        for hook in self.create_operation_hooks:
            operation = hook.create_operation(operation)
        return operation
