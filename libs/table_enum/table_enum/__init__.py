from .behavior import EnumBehavior, rule_name
from .events import install_rules, remove_rules
from .mixin import EnumMixin
from .rules import EnumRule, RulesChecker, RulesSink
from .schemas import EnumBehaviorConfig, EnumGroupConfig, load_behavior_config
from .store import ConnectionLookupStore, LookupStore, SessionLookupStore
from .strategies import (
    AbstractStrategy,
    ConstStrategy,
    EnumMapping,
    EnumStrategy,
    EnumTarget,
    LookupStrategy,
    MemberStrategy,
    StrategyRegistry,
)

__all__ = [
    "AbstractStrategy",
    "ConnectionLookupStore",
    "ConstStrategy",
    "EnumBehavior",
    "EnumBehaviorConfig",
    "EnumGroupConfig",
    "EnumMapping",
    "EnumMixin",
    "EnumRule",
    "EnumStrategy",
    "EnumTarget",
    "LookupStore",
    "LookupStrategy",
    "MemberStrategy",
    "RulesChecker",
    "RulesSink",
    "SessionLookupStore",
    "StrategyRegistry",
    "install_rules",
    "load_behavior_config",
    "remove_rules",
    "rule_name",
]
