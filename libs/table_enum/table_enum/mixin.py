from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from table_enum.behavior import EnumBehavior
from table_enum.events import install_rules
from table_enum.schemas import EnumBehaviorConfig
from table_enum.store import LookupStore
from table_enum.strategies.base import EnumMapping
from table_enum.strategies.registry import StrategyRegistry


class EnumMixin:
    """Declares enumeration groups on a declarative model.

    Usage:
        class Article(EnumMixin, Base):
            __tablename__ = "articles"
            __enum_behavior__ = {"groups": ["priority", "status"]}
            __enum_validate__ = True

            PRIORITY_HIGH = "High"
            ...

        Article.enum("priority", lookup_store=SessionLookupStore(session))
    """

    __enum_behavior__: ClassVar[EnumBehaviorConfig | Mapping[str, Any]] = {}
    __enum_alias__: ClassVar[str | None] = None
    __enum_validate__: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("__enum_validate__") and not cls.__dict__.get("__abstract__", False):
            install_rules(cls)

    @classmethod
    def enum_behavior(
        cls,
        lookup_store: LookupStore | None = None,
        alias: str | None = None,
        strategies: StrategyRegistry | None = None,
    ) -> EnumBehavior:
        return EnumBehavior.attach(
            cls,
            cls.__enum_behavior__,
            alias=alias or cls.__enum_alias__,
            lookup_store=lookup_store,
            strategies=strategies,
        )

    @classmethod
    def enum(cls, group: str, lookup_store: LookupStore | None = None) -> EnumMapping:
        return cls.enum_behavior(lookup_store).enum(group)
