"""Field visibility policy.

Controls which fields introspection lists. Hidden fields stay executable
for clients that already know about them; only discovery is affected.
"""

import inspect
import re
from typing import Any

from graphql import GraphQLResolveInfo, NoSchemaIntrospectionCustomRule

from .config import FIELD_VISIBILITY_DEFAULT, FIELD_VISIBILITY_NO_INTROSPECTION, Config

# Introspection fields that list the fields of a type
_LISTING_FIELDS = {"fields", "inputFields"}


class FieldVisibility:
    """Visibility policy built from the field_visibility setting.

    Use the instance as graphql-core middleware to filter introspection
    listings, and add validation_rules() to query validation.

    Example:
        visibility = FieldVisibility.from_config(Config(field_visibility="secret.*"))
        visibility.is_blocked("User", "secretToken")  # True
    """

    def __init__(self, introspection: bool = True, patterns: list[str] | None = None):
        self.introspection = introspection
        self.patterns = [re.compile(p) for p in (patterns or [])]

    @classmethod
    def from_config(cls, config: Config | None) -> "FieldVisibility":
        setting = (config.field_visibility if config else None) or ""
        setting = setting.strip()
        if not setting or setting == FIELD_VISIBILITY_DEFAULT:
            return cls()
        if setting == FIELD_VISIBILITY_NO_INTROSPECTION:
            return cls(introspection=False)
        patterns = [p.strip() for p in setting.split(",") if p.strip()]
        return cls(patterns=patterns)

    @property
    def is_default(self) -> bool:
        return self.introspection and not self.patterns

    def is_blocked(self, type_name: str, field_name: str) -> bool:
        """Check if a field is hidden from introspection.

        A pattern hides a field when it matches all of 'Type.field' or all
        of the bare field name.
        """
        coordinate = f"{type_name}.{field_name}"
        return any(
            p.fullmatch(coordinate) or p.fullmatch(field_name)
            for p in self.patterns
        )

    def validation_rules(self) -> list[type]:
        """Extra validation rules for queries against the schema."""
        if not self.introspection:
            return [NoSchemaIntrospectionCustomRule]
        return []

    def resolve(self, next_, root: Any, info: GraphQLResolveInfo, **arguments: Any) -> Any:
        """Middleware hook that filters introspection field listings."""
        result = next_(root, info, **arguments)
        if not self.patterns or info.parent_type.name != "__Type":
            return result
        if info.field_name not in _LISTING_FIELDS:
            return result
        if inspect.isawaitable(result):
            return self._filter_async(root, result)
        return self._filter(root, result)

    async def _filter_async(self, owner: Any, result: Any) -> Any:
        return self._filter(owner, await result)

    def _filter(self, owner: Any, items: Any) -> Any:
        if items is None:
            return None
        type_name = getattr(owner, "name", "")
        return [item for item in items if not self.is_blocked(type_name, _item_name(item))]


def _item_name(item: Any) -> str:
    # graphql-core lists fields as (name, field) pairs
    if isinstance(item, tuple):
        return item[0]
    return getattr(item, "name", "")
