"""Executes GraphQL requests against a compiled schema.

Wires the per-request pieces a BootstrapResult needs around graphql-core:
fresh batch loaders, the field visibility middleware and validation rules,
and error codes for declared error kinds.
"""

import inspect
import logging
from collections.abc import Mapping
from typing import Any

from graphql import (
    ExecutionResult,
    GraphQLError,
    execute,
    parse,
    specified_rules,
    validate,
    validate_schema,
)

from .batch import LOADERS_KEY
from .bootstrap import BootstrapResult
from .errors import BootstrapError, ExecutionError

logger = logging.getLogger(__name__)


class SchemaExecutor:
    """Executes operations against a compiled schema.

    Examples:
        executor = SchemaExecutor(Bootstrap.bootstrap(model, class_registry=registry))
        result = await executor.execute("{ widget(id: 1) { name } }")
        data = await executor.execute_or_raise("{ widget(id: 1) { name } }")
    """

    def __init__(self, result: BootstrapResult, root_value: Any = None):
        if result.is_empty:
            raise BootstrapError("Cannot execute against an empty schema")
        self.result = result
        self.schema = result.schema
        self.root_value = root_value
        self._rules = [*specified_rules, *result.field_visibility.validation_rules()]
        self._middleware = [] if result.field_visibility.is_default else [result.field_visibility]

    def create_context(self, context: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Build the request context with a fresh set of batch loaders."""
        request_context = dict(context or {})
        request_context[LOADERS_KEY] = self.result.batch_loaders.create_loaders()
        return request_context

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """Parse, validate and execute one request.

        Args:
            query: GraphQL query string
            variables: Query variables
            operation_name: Operation to run when the document has several
            context: Extra request context entries for business methods

        Returns:
            graphql-core ExecutionResult; errors carry an extensions.code
            when their exception class is a declared error kind
        """
        schema_errors = validate_schema(self.schema)
        if schema_errors:
            return ExecutionResult(data=None, errors=list(schema_errors))

        try:
            document = parse(query)
        except GraphQLError as error:
            return ExecutionResult(data=None, errors=[error])

        validation_errors = validate(self.schema, document, self._rules)
        if validation_errors:
            return ExecutionResult(data=None, errors=validation_errors)

        result = execute(
            self.schema,
            document,
            root_value=self.root_value,
            context_value=self.create_context(context),
            variable_values=variables,
            operation_name=operation_name,
            middleware=self._middleware or None,
        )
        if inspect.isawaitable(result):
            result = await result
        self._add_error_codes(result)
        return result

    async def execute_or_raise(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a request and return its data.

        Raises:
            ExecutionError: If the result contains errors
        """
        result = await self.execute(query, variables, operation_name, context)
        if result.errors:
            formatted = [error.formatted for error in result.errors]
            error_messages = "; ".join(e.get("message", str(e)) for e in formatted)
            raise ExecutionError(f"GraphQL errors: {error_messages}", formatted)
        return result.data or {}

    def _add_error_codes(self, result: ExecutionResult):
        for error in result.errors or []:
            code = self.result.error_info.get_error_code(error.original_error)
            if code is not None:
                error.extensions = {**(error.extensions or {}), "code": code}
            elif error.original_error is not None:
                logger.debug(f"Unmapped error at {error.path}: {error.original_error!r}")
