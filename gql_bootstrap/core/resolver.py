"""Runtime resolution of interface values to concrete object types."""

import logging
from collections.abc import Mapping
from typing import Any

from graphql import GraphQLAbstractType, GraphQLObjectType, GraphQLResolveInfo

from .classloading import class_name_of
from .model import Type

logger = logging.getLogger(__name__)


class InterfaceOutputRegistry:
    """Records which object type serializes which runtime class.

    Filled while object types are compiled: every type that implements
    interfaces is registered under each of them, keyed by its class name.
    """

    def __init__(self):
        self._outputs: dict[str, dict[str, GraphQLObjectType]] = {}
        self._by_class: dict[str, GraphQLObjectType] = {}

    def register(self, type_: Type, object_type: GraphQLObjectType):
        if not type_.interfaces:
            return
        for interface in type_.interfaces:
            self._outputs.setdefault(interface.name, {})[type_.class_name] = object_type
        self._by_class.setdefault(type_.class_name, object_type)

    def get(self, interface_name: str, value: Any) -> GraphQLObjectType | None:
        """Return the object type for a runtime value returned as an interface.

        The value's class and then its base classes are looked up among the
        implementations of this interface first, so a subclass of a registered
        class resolves to the registered type. Types registered under other
        interfaces are only consulted when nothing implements this one.
        """
        outputs = self._outputs.get(interface_name, {})
        mro = [class_name_of(cls) for cls in type(value).__mro__]
        for name in mro:
            if name in outputs:
                return outputs[name]
        for name in mro:
            if name in self._by_class:
                return self._by_class[name]
        return None

    def __len__(self) -> int:
        return len(self._by_class)


class InterfaceResolver:
    """graphql-core resolve_type for one interface.

    Mappings carrying a __typename key resolve to that name.
    """

    def __init__(self, interface_name: str, outputs: InterfaceOutputRegistry):
        self.interface_name = interface_name
        self.outputs = outputs

    def resolve(self, value: Any) -> GraphQLObjectType | None:
        return self.outputs.get(self.interface_name, value)

    def __call__(
        self,
        value: Any,
        info: GraphQLResolveInfo,
        abstract_type: GraphQLAbstractType,
    ) -> str | None:
        if isinstance(value, Mapping) and "__typename" in value:
            return value["__typename"]
        object_type = self.resolve(value)
        if object_type is None:
            logger.warning(
                f"No type implementing '{self.interface_name}' for {class_name_of(type(value))}"
            )
            return None
        return object_type.name
