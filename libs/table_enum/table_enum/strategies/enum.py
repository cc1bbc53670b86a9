from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar

from common.exceptions import ConfigurationError
from table_enum.schemas import import_enum_class
from table_enum.strategies.base import MemberStrategy


def model_enum_classes(model: type[Any]) -> list[type[Enum]]:
    """``Enum`` types declared as attributes of ``model`` (base classes first)."""
    found: dict[str, type[Enum]] = {}
    for klass in reversed(model.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if isinstance(value, type) and issubclass(value, Enum):
                found[name] = value
    return list(found.values())


class EnumStrategy(MemberStrategy):
    """Reads members of ``Enum`` types.

    Uses ``enum_class`` from the group config when given, otherwise every enum
    type nested in the model. Member names carry the prefix
    (``ArticleStatus.ARTICLE_STATUS_DRAFT``).
    """

    name: ClassVar[str] = "enum"

    def _enum_classes(self, config: Mapping[str, Any] | None) -> list[type[Enum]]:
        enum_class = (config or {}).get("enum_class")
        if enum_class is None:
            return model_enum_classes(self.target.model)

        try:
            enum_class = import_enum_class(enum_class)
        except ValueError as e:
            raise ConfigurationError(str(e), group=self.alias) from e
        if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
            raise ConfigurationError(f"enum_class must be an Enum type, got {enum_class!r}", group=self.alias)
        return [enum_class]

    def members(self, config: Mapping[str, Any] | None = None) -> dict[str, Any]:
        members: dict[str, Any] = {}
        for enum_class in self._enum_classes(config):
            for member in enum_class:
                members.setdefault(member.name, member.value)
        return members
