from __future__ import annotations

from collections.abc import Iterable

from common.exceptions import ConfigurationError, UnsupportedStrategyError
from common.utils.utils import cached_classmethod
from table_enum.strategies.base import AbstractStrategy, EnumTarget
from table_enum.strategies.const import ConstStrategy
from table_enum.strategies.enum import EnumStrategy
from table_enum.strategies.lookup import LookupStrategy


class StrategyRegistry:
    """Maps strategy names to strategy classes."""

    _registry: dict[str, type[AbstractStrategy]]

    def __init__(self, strategies: Iterable[type[AbstractStrategy]] = ()) -> None:
        self._registry = {}
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy_class: type[AbstractStrategy], name: str | None = None) -> None:
        """Register ``strategy_class`` under ``name`` (defaults to its ``name`` attribute)."""
        if not (isinstance(strategy_class, type) and issubclass(strategy_class, AbstractStrategy)):
            raise ConfigurationError(f"{strategy_class!r} is not an AbstractStrategy subclass")
        self._registry[name or strategy_class.name] = strategy_class

    def get(self, name: str) -> type[AbstractStrategy]:
        try:
            return self._registry[name]
        except KeyError:
            raise UnsupportedStrategyError(name, supported_strategies=self._registry) from None

    def create(self, name: str, alias: str, target: EnumTarget) -> AbstractStrategy:
        """Create the strategy registered as ``name`` for group ``alias``.

        Raises:
            UnsupportedStrategyError: If ``name`` is not registered
        """
        try:
            strategy_class = self.get(name)
        except UnsupportedStrategyError as e:
            raise UnsupportedStrategyError(name, group=alias, supported_strategies=e.supported_strategies) from None
        return strategy_class(alias, target)

    def names(self) -> list[str]:
        return list(self._registry)

    def copy(self) -> StrategyRegistry:
        registry = StrategyRegistry()
        registry._registry = dict(self._registry)
        return registry

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    @cached_classmethod
    def instance(cls) -> StrategyRegistry:
        return StrategyRegistry([LookupStrategy, ConstStrategy, EnumStrategy])
