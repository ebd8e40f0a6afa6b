"""Batch loading of type-local operations.

A batch operation is answered for many parent values in one call. At
compile time a loader factory is registered under a stable name per
operation; every request creates its own loaders from those factories, and
the BatchDataFetcher hands each parent value to the request's loader. The
loader collects the keys requested during one event loop tick and invokes
the business method once with all of them.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from graphql import GraphQLResolveInfo

from .errors import BatchLoadError, BootstrapError
from .fetchers import OperationInvoker
from .model import Operation

logger = logging.getLogger(__name__)

LOADERS_KEY = "batch_loaders"


def batch_loader_name(operation: Operation) -> str:
    """Return the stable loader name, e.g. 'Pet_owners'."""
    if operation.source_field_on is not None:
        return f"{operation.source_field_on.name}_{operation.name}"
    return operation.name


def cache_key(key: Any) -> Any:
    """Hashable keys dedupe by value, other keys by identity."""
    try:
        hash(key)
    except TypeError:
        return id(key)
    return key


def loaders_from(context: Any) -> Mapping[str, "DataLoader"]:
    """Return the per-request loaders carried by a request context."""
    if isinstance(context, Mapping):
        loaders = context.get(LOADERS_KEY)
    else:
        loaders = getattr(context, LOADERS_KEY, None)
    if loaders is None:
        raise BootstrapError("Request context carries no batch loaders")
    return loaders


class DataLoader:
    """Coalesces the loads of one event loop tick into batch calls.

    Subclasses implement batch_load_fn, which receives the keys in request
    order and returns one result per key. A result that is an exception is
    raised to the caller waiting on that key. Loaded keys are cached for the
    lifetime of the loader, so a loader must serve a single request.

    Example:
        class UserLoader(DataLoader):
            async def batch_load_fn(self, keys):
                return await fetch_users(keys)

        user = await UserLoader().load(42)
    """

    def __init__(
        self,
        name: str = "",
        max_batch_size: int | None = None,
        get_cache_key: Callable[[Any], Any] = cache_key,
    ):
        self.name = name or type(self).__name__
        self.max_batch_size = max_batch_size
        self.get_cache_key = get_cache_key
        self._cache: dict[Any, asyncio.Future] = {}
        self._queue: list[tuple[Any, asyncio.Future]] = []
        self._tasks: set[asyncio.Task] = set()

    async def batch_load_fn(self, keys: list[Any]) -> list[Any]:
        raise NotImplementedError

    def load(self, key: Any) -> asyncio.Future:
        """Schedule a key for the next batch and return its future.

        Must be called while an event loop is running.
        """
        loop = asyncio.get_running_loop()
        cached = self._cache.get(self.get_cache_key(key))
        if cached is not None:
            return cached

        future = loop.create_future()
        self._cache[self.get_cache_key(key)] = future
        self._queue.append((key, future))
        if len(self._queue) == 1:
            loop.call_soon(self._dispatch)
        return future

    def load_many(self, keys: Iterable[Any]) -> Awaitable[list[Any]]:
        return asyncio.gather(*(self.load(key) for key in keys))

    def clear(self, key: Any) -> "DataLoader":
        self._cache.pop(self.get_cache_key(key), None)
        return self

    def _dispatch(self):
        queue, self._queue = self._queue, []
        size = self.max_batch_size or len(queue)
        for start in range(0, len(queue), size):
            task = asyncio.ensure_future(self._load_batch(queue[start:start + size]))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _load_batch(self, batch: list[tuple[Any, asyncio.Future]]):
        keys = [key for key, _ in batch]
        logger.debug(f"Batch '{self.name}' loading {len(keys)} keys")
        try:
            results = list(await self.batch_load_fn(keys))
        except Exception as e:
            logger.warning(f"Batch '{self.name}' failed: {e}")
            results = [e for _ in keys]

        if len(results) != len(keys):
            error = BatchLoadError(self.name, f"returned {len(results)} results for {len(keys)} keys")
            logger.warning(str(error))
            results = [error for _ in keys]

        for (_, future), result in zip(batch, results):
            if future.done():
                continue
            if isinstance(result, Exception):
                future.set_exception(result)
            else:
                future.set_result(result)


class SourceBatchLoader(DataLoader):
    """Loads a batch operation's result for many parent values at once.

    The arguments and resolve info of the first load in a request are used
    for the whole batch.
    """

    def __init__(self, name: str, invoker: OperationInvoker, max_batch_size: int | None = None):
        super().__init__(name, max_batch_size=max_batch_size)
        self.invoker = invoker
        self.arguments: dict[str, Any] = {}
        self.info: GraphQLResolveInfo | None = None

    def bind(self, arguments: Mapping[str, Any], info: GraphQLResolveInfo | None):
        """Record the call arguments unless an earlier load already did."""
        if self.info is None:
            self.arguments = dict(arguments)
            self.info = info

    async def batch_load_fn(self, keys: list[Any]) -> list[Any]:
        results = self.invoker.invoke(keys, self.arguments, self.info)
        if inspect.isawaitable(results):
            results = await results
        return list(results) if results is not None else []


class BatchDataFetcher:
    """Resolves a batch operation through the request's loader."""

    def __init__(self, operation: Operation):
        self.operation = operation
        self.name = batch_loader_name(operation)

    def __call__(self, source: Any, info: GraphQLResolveInfo, **arguments: Any) -> Any:
        loader = loaders_from(info.context)[self.name]
        if isinstance(loader, SourceBatchLoader):
            loader.bind(arguments, info)
        return loader.load(source)

    def __repr__(self) -> str:
        return f"BatchDataFetcher({self.name!r})"


class BatchLoaderRegistry:
    """Named loader factories registered while compiling a schema.

    Example:
        loaders = registry.create_loaders()
        owner = await loaders["Pet_owners"].load(pet)
    """

    def __init__(self):
        self._factories: dict[str, Callable[[], DataLoader]] = {}

    def register(self, name: str, factory: Callable[[], DataLoader]):
        """Register a loader factory; the first registration of a name wins."""
        if name in self._factories:
            logger.warning(f"Batch loader '{name}' already registered, ignoring")
            return
        self._factories[name] = factory
        logger.debug(f"Registered batch loader '{name}'")

    def register_operation(
        self,
        operation: Operation,
        invoker: OperationInvoker,
        max_batch_size: int | None = None,
    ) -> str:
        """Register a SourceBatchLoader factory for a batch operation."""
        name = batch_loader_name(operation)
        self.register(name, lambda: SourceBatchLoader(name, invoker, max_batch_size))
        return name

    def create_loaders(self) -> dict[str, DataLoader]:
        """Create a fresh loader per name for one request."""
        return {name: factory() for name, factory in self._factories.items()}

    @property
    def names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)
