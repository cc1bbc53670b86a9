from .base import AbstractStrategy, EnumMapping, EnumTarget, MemberStrategy
from .const import ConstStrategy
from .enum import EnumStrategy
from .lookup import LookupStrategy
from .registry import StrategyRegistry

__all__ = [
    "AbstractStrategy",
    "ConstStrategy",
    "EnumMapping",
    "EnumStrategy",
    "EnumTarget",
    "LookupStrategy",
    "MemberStrategy",
    "StrategyRegistry",
]
