from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from common.exceptions import ConfigurationError
from common.utils.utils import get_logger
from table_enum.schemas import EnumGroupConfig
from table_enum.strategies.base import AbstractStrategy, EnumMapping

if TYPE_CHECKING:
    from table_enum.store import LookupStore

logger = get_logger(__name__)


class LookupStrategy(AbstractStrategy):
    """Reads members from a reference table through the target's ``LookupStore``."""

    name: ClassVar[str] = "lookup"

    @property
    def store(self) -> LookupStore:
        store = self.target.lookup_store
        if store is None:
            raise ConfigurationError(
                f"the lookup strategy needs a lookup store but none was given for {self.target.alias}",
                group=self.alias,
            )
        return store

    def has_prefix(self, prefix: str, config: Mapping[str, Any] | None = None) -> bool:
        return self.store.has_prefix(prefix)

    def enum(self, config: EnumGroupConfig | None = None) -> EnumMapping:
        config = config or self.config
        members = self.store.fetch_by_prefix(config.prefix)
        if not members:
            logger.warning("No lookup members found", group=self.alias, prefix=config.prefix)
        return dict(members)
