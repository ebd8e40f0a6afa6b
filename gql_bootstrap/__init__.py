"""Compile declarative schema models into executable GraphQL schemas."""

from .core import (
    Bootstrap,
    BootstrapResult,
    ClassRegistry,
    Config,
    EventEmitter,
    SchemaExecutor,
    SchemaModel,
)

__version__ = "0.1.0"

__all__ = [
    "Bootstrap",
    "BootstrapResult",
    "ClassRegistry",
    "Config",
    "EventEmitter",
    "SchemaExecutor",
    "SchemaModel",
]
