"""Validation rules generated from enumeration groups."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from common.utils.utils import get_logger

logger = get_logger(__name__)


class RulesSink(Protocol):
    """Protocol for collaborators that receive generated rules."""

    def add(self, rule: Callable[..., bool], name: str, options: Mapping[str, Any]) -> Any:
        """Register ``rule`` under ``name`` with ``error_field``/``message`` options."""
        ...


@dataclass(frozen=True)
class EnumRule:
    """Predicate checking that a value is a member of one group.

    Calling the rule with an entity reads ``entity.<error_field>``; use
    ``is_valid`` to check a bare value.
    """

    name: str
    group: str
    error_field: str
    message: str
    predicate: Callable[[Any], bool] = field(repr=False, compare=False)

    def is_valid(self, value: Any) -> bool:
        return self.predicate(value)

    def __call__(self, entity: Any, options: Mapping[str, Any] | None = None) -> bool:
        return self.predicate(getattr(entity, self.error_field, None))

    @property
    def options(self) -> dict[str, str]:
        return {"error_field": self.error_field, "message": self.message}


class RulesChecker:
    """Collects named rules and reports failing fields for an entity."""

    def __init__(self) -> None:
        self._rules: dict[str, tuple[Callable[..., bool], dict[str, Any]]] = {}

    def add(self, rule: Callable[..., bool], name: str, options: Mapping[str, Any] | None = None) -> RulesChecker:
        self._rules[name] = (rule, dict(options or {}))
        return self

    def remove(self, name: str) -> RulesChecker:
        self._rules.pop(name, None)
        return self

    def names(self) -> list[str]:
        return list(self._rules)

    def get(self, name: str) -> Callable[..., bool] | None:
        entry = self._rules.get(name)
        return entry[0] if entry else None

    def check(self, entity: Any) -> dict[str, list[str]]:
        """Run every rule against ``entity``.

        Returns:
            Failing ``error_field`` -> messages. Empty when the entity is valid.
        """
        errors: dict[str, list[str]] = {}
        for name, (rule, options) in self._rules.items():
            if rule(entity, options):
                continue
            error_field = options.get("error_field", name)
            errors.setdefault(error_field, []).append(options.get("message", name))
            logger.debug("Rule failed", rule=name, field=error_field)
        return errors

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules
