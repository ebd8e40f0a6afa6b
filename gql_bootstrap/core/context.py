"""Request-scoped execution context for business methods.

While an operation's business method runs, the context describing the call
is available through get_execution_context():

    def orders(self, customer_id):
        ctx = get_execution_context()
        user = ctx.request_context["user"]
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from graphql import GraphQLResolveInfo

from .errors import BootstrapError
from .model import Operation


@dataclass(frozen=True)
class ExecutionContext:
    """Describes the operation call currently being executed."""
    operation: Operation
    arguments: dict[str, Any] = field(default_factory=dict)
    source: Any = None
    info: GraphQLResolveInfo | None = None

    @property
    def request_context(self) -> Any:
        """The context value the request was executed with."""
        return self.info.context if self.info is not None else None

    @property
    def path(self) -> list[str | int]:
        return self.info.path.as_list() if self.info is not None else []


_current: ContextVar[ExecutionContext | None] = ContextVar(
    "gql_bootstrap_execution_context", default=None
)


def get_execution_context() -> ExecutionContext:
    """Return the context of the operation being executed.

    Raises:
        BootstrapError: If called outside an operation call
    """
    context = _current.get()
    if context is None:
        raise BootstrapError("No operation is being executed")
    return context


def current_execution_context() -> ExecutionContext | None:
    """Return the context of the operation being executed, or None."""
    return _current.get()


@contextmanager
def execution_context(context: ExecutionContext) -> Iterator[ExecutionContext]:
    """Make a context current for the duration of the block."""
    token = _current.set(context)
    try:
        yield context
    finally:
        _current.reset(token)
