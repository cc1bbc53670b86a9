from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from table_enum.strategies.base import MemberStrategy

_CONSTANT_TYPES = (str, int, float)


def model_constants(model: type[Any]) -> dict[str, Any]:
    """Upper-case scalar class attributes of ``model`` in declaration order.

    Base classes come first; a subclass redefining a constant keeps the base position.
    """
    constants: dict[str, Any] = {}
    for klass in reversed(model.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or not name.isupper():
                continue
            if isinstance(value, _CONSTANT_TYPES):
                constants[name] = value
    return constants


class ConstStrategy(MemberStrategy):
    """Reads class constants such as ``Article.ARTICLE_STATUS_DRAFT = "Drafted"``."""

    name: ClassVar[str] = "const"

    def members(self, config: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return model_constants(self.target.model)
