"""Core modules for compiling schema models into executable schemas."""

from .batch import (
    BatchDataFetcher,
    DataLoader,
    BatchLoaderRegistry,
    SourceBatchLoader,
    batch_loader_name,
)
from .bootstrap import Bootstrap, BootstrapResult
from .builder import CodeRegistry, FieldDefinition, SchemaBuilder
from .classloading import ClassRegistry, class_name_of
from .codec import LiteralCodec, StructuredLiteralDecoder
from .config import FIELD_VISIBILITY_DEFAULT, FIELD_VISIBILITY_NO_INTROSPECTION, Config
from .context import ExecutionContext, current_execution_context, get_execution_context
from .defaults import DefaultValueCoercer
from .errors import (
    BatchLoadError,
    BootstrapError,
    ClassNotFoundError,
    ErrorInfoMap,
    ExecutionError,
)
from .executor import SchemaExecutor
from .fetchers import (
    GroupDataFetcher,
    OperationInvoker,
    PropertyDataFetcher,
    ReflectionDataFetcher,
)
from .hooks import (
    AddTypesHook,
    BeforeSchemaBuildHook,
    CreateOperationHook,
    EventEmitter,
    FilterTypesHook,
)
from .model import (
    Argument,
    Array,
    EnumType,
    ErrorInfo,
    Field,
    Group,
    InputType,
    InterfaceType,
    MappingInfo,
    Operation,
    Reference,
    ReferenceType,
    SchemaModel,
    Type,
)
from .resolver import InterfaceOutputRegistry, InterfaceResolver
from .scalars import ScalarHandler, ScalarRegistry
from .visibility import FieldVisibility
from .wrapping import TypeReference, field_reference, wrap_type

__all__ = [
    # Model
    "Argument",
    "Array",
    "EnumType",
    "ErrorInfo",
    "Field",
    "Group",
    "InputType",
    "InterfaceType",
    "MappingInfo",
    "Operation",
    "Reference",
    "ReferenceType",
    "SchemaModel",
    "Type",
    # Bootstrap
    "Bootstrap",
    "BootstrapResult",
    "SchemaBuilder",
    "CodeRegistry",
    "FieldDefinition",
    "TypeReference",
    "field_reference",
    "wrap_type",
    # Capabilities
    "ClassRegistry",
    "class_name_of",
    "LiteralCodec",
    "StructuredLiteralDecoder",
    "DefaultValueCoercer",
    "ScalarHandler",
    "ScalarRegistry",
    # Config
    "Config",
    "FIELD_VISIBILITY_DEFAULT",
    "FIELD_VISIBILITY_NO_INTROSPECTION",
    "FieldVisibility",
    # Fetchers
    "PropertyDataFetcher",
    "ReflectionDataFetcher",
    "GroupDataFetcher",
    "OperationInvoker",
    "BatchDataFetcher",
    "BatchLoaderRegistry",
    "DataLoader",
    "SourceBatchLoader",
    "batch_loader_name",
    "InterfaceOutputRegistry",
    "InterfaceResolver",
    "ExecutionContext",
    "get_execution_context",
    "current_execution_context",
    # Hooks
    "BeforeSchemaBuildHook",
    "CreateOperationHook",
    "AddTypesHook",
    "FilterTypesHook",
    "EventEmitter",
    # Execution
    "SchemaExecutor",
    # Errors
    "BootstrapError",
    "ClassNotFoundError",
    "BatchLoadError",
    "ExecutionError",
    "ErrorInfoMap",
]
