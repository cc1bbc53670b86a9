"""Enumeration lists attached to a model.

An ``EnumBehavior`` normalizes the declared groups, keeps one strategy per
group and answers ``enum(group)`` by asking that strategy. Groups are declared
in any of three shapes::

    groups = [
        "priority",                          # prefix derived from the source
        {"status": "article_status"},        # explicit prefix, upper-cased
        {"category": {"strategy": "const"}}, # explicit config
    ]

A ``{name: prefix | config}`` mapping is accepted in place of the list.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from functools import partial
from typing import Any

from pydantic import ValidationError

from common.core.config_service import EnumSettings, get_config_service
from common.exceptions import ConfigurationError, UnknownGroupAttributeError, UnknownGroupError
from common.utils.inflector import classify, underscore
from common.utils.utils import get_logger
from table_enum.rules import EnumRule, RulesSink
from table_enum.schemas import EnumBehaviorConfig, EnumGroupConfig
from table_enum.store import LookupStore
from table_enum.strategies.base import AbstractStrategy, EnumMapping, EnumTarget, coerce_group_config
from table_enum.strategies.registry import StrategyRegistry

logger = get_logger(__name__)

RULE_PREFIX = "isValid"
PREDICATE_PREFIX = "is_valid_"

StrategySpec = str | type[AbstractStrategy] | AbstractStrategy


def rule_name(group: str) -> str:
    """``article_status`` -> ``isValidArticleStatus``."""
    return f"{RULE_PREFIX}{classify(group)}"


class EnumBehavior:
    """Enumeration groups of one model.

    Normalization runs on construction; every group's strategy is created then
    and reused for the lifetime of the behavior.
    """

    target: EnumTarget
    default_strategy: str
    implemented_methods_config: dict[str, str]

    def __init__(
        self,
        target: EnumTarget,
        config: EnumBehaviorConfig | Mapping[str, Any] | None = None,
        strategies: StrategyRegistry | None = None,
        settings: EnumSettings | None = None,
    ) -> None:
        self.target = target
        self._strategy_registry = strategies or StrategyRegistry.instance()
        self._settings = settings or get_config_service().settings
        self._strategies: dict[str, AbstractStrategy] = {}
        self._groups: dict[str, EnumGroupConfig] = {}

        try:
            behavior_config = config if isinstance(config, EnumBehaviorConfig) else EnumBehaviorConfig.model_validate(config or {})
        except ValidationError as e:
            raise ConfigurationError(f"invalid enum behavior configuration for {target.alias}: {e}") from e
        self.default_strategy = behavior_config.default_strategy or self._settings.default_strategy
        self.implemented_methods_config = dict(behavior_config.implemented_methods)

        self._normalize_config(behavior_config.groups)
        self._check_implemented_methods()

        logger.info("Attached enum behavior", target=target.alias, groups=list(self._groups))

    @classmethod
    def attach(
        cls,
        model: type[Any],
        config: EnumBehaviorConfig | Mapping[str, Any] | None = None,
        *,
        alias: str | None = None,
        lookup_store: LookupStore | None = None,
        strategies: StrategyRegistry | None = None,
        settings: EnumSettings | None = None,
    ) -> EnumBehavior:
        """Create a behavior for ``model``. ``alias`` defaults to the class name."""
        target = EnumTarget.for_model(model, alias=alias, lookup_store=lookup_store)
        return cls(target, config, strategies=strategies, settings=settings)

    def strategy(self, alias: str, strategy: StrategySpec | None = None) -> AbstractStrategy:
        """Get the strategy of group ``alias``, creating it on first use.

        Args:
            alias: Group name
            strategy: A registered strategy name, a strategy class or a ready instance

        Raises:
            ConfigurationError: If the strategy name is not registered or the argument is invalid
        """
        existing = self._strategies.get(alias)
        if existing is not None:
            return existing

        if strategy is None:
            strategy = self.default_strategy

        if isinstance(strategy, AbstractStrategy):
            instance = strategy
        elif isinstance(strategy, type) and issubclass(strategy, AbstractStrategy):
            instance = strategy(alias, self.target)
        elif isinstance(strategy, str):
            instance = self._strategy_registry.create(strategy, alias, self.target)
        else:
            raise ConfigurationError(f"invalid strategy {strategy!r}", group=alias)

        logger.debug("Resolved enum strategy", group=alias, strategy=instance.name)
        self._strategies[alias] = instance
        return instance

    def _normalize_config(self, groups: list[Any] | Mapping[str, Any]) -> None:
        """Resolve every declared group through its strategy and store the result."""
        for alias, entry in self._iter_group_entries(groups):
            if alias in self._groups:
                raise ConfigurationError("group is declared more than once", group=alias)
            clashing = next((name for name in self._groups if rule_name(name) == rule_name(alias)), None)
            if clashing is not None:
                raise ConfigurationError(f"rule name {rule_name(alias)} is already used by group '{clashing}'", group=alias)

            config = coerce_group_config(entry, alias)
            requested = config.pop("strategy", None) or self.default_strategy
            strategy = self.strategy(alias, requested)
            # Keep the registered name so a config() dump attaches again
            config["strategy"] = requested if isinstance(requested, str) else strategy.name

            self._groups[alias] = strategy.initialize(config, default_error_message=self._settings.error_message)

    @staticmethod
    def _iter_group_entries(groups: list[Any] | Mapping[str, Any]) -> Iterator[tuple[str, Any]]:
        items: list[Any] = [groups] if isinstance(groups, Mapping) else list(groups)
        for item in items:
            if isinstance(item, str):
                yield item, None
            elif isinstance(item, Mapping):
                for alias, entry in item.items():
                    if not isinstance(alias, str) or not alias:
                        raise ConfigurationError(f"group names must be non-empty strings, got {alias!r}")
                    yield alias, entry
            else:
                raise ConfigurationError(f"invalid group declaration {item!r}")

    def _check_implemented_methods(self) -> None:
        for exposed, method in self.implemented_methods_config.items():
            if method.startswith("_") or not callable(getattr(type(self), method, None)):
                raise ConfigurationError(f"implemented method '{exposed}' points to unknown method '{method}'")

    @property
    def groups(self) -> dict[str, EnumGroupConfig]:
        """Resolved configuration per group, in declaration order."""
        return dict(self._groups)

    def group(self, name: str) -> EnumGroupConfig:
        config = self._groups.get(name)
        if config is None:
            raise UnknownGroupError(name, self._groups)
        return config

    def config(self) -> dict[str, Any]:
        """The resolved configuration as plain data."""
        return {
            "default_strategy": self.default_strategy,
            "implemented_methods": dict(self.implemented_methods_config),
            "groups": {name: config.to_dict() for name, config in self._groups.items()},
        }

    def enum(self, name: str) -> EnumMapping:
        """Get ``{symbolic_key: label}`` for group ``name``.

        The mapping is read from the backing source on every call.

        Raises:
            UnknownGroupError: If ``name`` is not a declared group
        """
        config = self.group(name)
        return self.strategy(name, config.strategy).enum(config)

    def is_valid(self, name: str, value: Any) -> bool:
        """Check whether ``value`` is a key of ``enum(name)``."""
        config = self.group(name)
        if value is None and config.allow_none:
            return True
        return value in self.enum(name)

    def generate_validators(self) -> dict[str, EnumRule]:
        """One rule per group, keyed by rule name (``isValidStatus``)."""
        rules: dict[str, EnumRule] = {}
        for name, config in self._groups.items():
            rule = EnumRule(
                name=rule_name(name),
                group=name,
                error_field=config.field,
                message=config.error_message,
                predicate=partial(self.is_valid, name),
            )
            rules[rule.name] = rule
        return rules

    def build_rules(self, rules: RulesSink) -> RulesSink:
        """Register every generated rule with ``rules`` and return it."""
        for rule in self.generate_validators().values():
            rules.add(rule, rule.name, rule.options)
        return rules

    def implemented_methods(self) -> dict[str, Callable[..., Any]]:
        """Exposed method name -> bound method, as configured by ``implemented_methods``."""
        return {exposed: getattr(self, method) for exposed, method in self.implemented_methods_config.items()}

    def __getattr__(self, name: str) -> Callable[..., bool]:
        """Resolve ``is_valid_<group>(value)`` and ``isValid<Group>(entity)``."""
        if name.startswith("_"):
            raise AttributeError(name)

        if name.startswith(PREDICATE_PREFIX):
            group = name[len(PREDICATE_PREFIX) :]
        elif name.startswith(RULE_PREFIX) and len(name) > len(RULE_PREFIX):
            group = underscore(name[len(RULE_PREFIX) :])
        else:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

        rule = self.generate_validators().get(rule_name(group))
        if rule is None:
            raise UnknownGroupAttributeError(group, self._groups)
        return rule.is_valid if name.startswith(PREDICATE_PREFIX) else rule

    def __repr__(self) -> str:
        return f"<EnumBehavior(target={self.target.alias}, groups={list(self._groups)})>"
