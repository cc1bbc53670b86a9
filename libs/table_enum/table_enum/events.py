"""Run generated enumeration rules from SQLAlchemy mapper events."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import Connection, event
from sqlalchemy.orm import Mapper

from common.exceptions import EnumValidationError
from common.utils.utils import get_logger
from table_enum.behavior import EnumBehavior
from table_enum.rules import RulesChecker
from table_enum.schemas import EnumBehaviorConfig
from table_enum.store import ConnectionLookupStore
from table_enum.strategies.registry import StrategyRegistry

logger = get_logger(__name__)

RULE_EVENTS = ("before_insert", "before_update")

Listener = Callable[[Mapper[Any], Connection, Any], None]


def install_rules(
    model: type[Any],
    config: EnumBehaviorConfig | Mapping[str, Any] | None = None,
    *,
    alias: str | None = None,
    strategies: StrategyRegistry | None = None,
) -> Listener:
    """Reject inserts and updates of ``model`` whose enum fields hold unknown keys.

    Lookup groups read the reference table through the flushing connection.
    ``config`` defaults to the model's ``__enum_behavior__``.

    Returns:
        The registered listener, for use with ``remove_rules``
    """
    behavior_config = config if config is not None else getattr(model, "__enum_behavior__", None)
    if behavior_config is None:
        raise ValueError(f"{model.__name__} declares no enum behavior")

    # Groups are normalized once per flushing connection; rows are still read per check
    store = ConnectionLookupStore()
    built: tuple[Connection, RulesChecker] | None = None

    def _rules_for(connection: Connection) -> RulesChecker:
        nonlocal built
        if built is None or built[0] is not connection:
            behavior = EnumBehavior.attach(
                model,
                behavior_config,
                alias=alias or getattr(model, "__enum_alias__", None),
                lookup_store=store,
                strategies=strategies,
            )
            built = (connection, behavior.build_rules(RulesChecker()))
            logger.debug("Built enum rules for connection", model=model.__name__)
        return built[1]

    def _check_enum_rules(mapper: Mapper[Any], connection: Connection, target: Any) -> None:
        with store.bind(connection):
            errors = _rules_for(connection).check(target)

        if errors:
            logger.info("Rejected entity with invalid enum values", model=model.__name__, errors=errors)
            raise EnumValidationError(errors, entity=target)

    for event_name in RULE_EVENTS:
        event.listen(model, event_name, _check_enum_rules, propagate=True)
    return _check_enum_rules


def remove_rules(model: type[Any], listener: Listener) -> None:
    for event_name in RULE_EVENTS:
        if event.contains(model, event_name, listener):
            event.remove(model, event_name, listener)
