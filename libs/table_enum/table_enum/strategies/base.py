from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from common.core.config_service import get_config_service
from common.exceptions import AmbiguousPrefixError, ConfigurationError
from common.utils.inflector import singularize, underscore
from common.utils.utils import get_logger
from table_enum.schemas import EnumGroupConfig

if TYPE_CHECKING:
    from table_enum.store import LookupStore

logger = get_logger(__name__)

EnumMapping = dict[str, str]


def coerce_group_config(config: Any, group: str | None = None) -> dict[str, Any]:
    """Turn a raw group entry into a mutable config dict.

    A bare string is a prefix and is upper-cased. Mapping keys may be camelCase (``errorMessage``).
    """
    if config is None:
        return {}
    if isinstance(config, str):
        return {"prefix": config.upper()}
    if isinstance(config, EnumGroupConfig):
        return config.model_dump()
    if isinstance(config, Mapping):
        return {underscore(str(key)): value for key, value in config.items()}
    raise ConfigurationError(f"invalid group configuration {config!r}", group=group)


@dataclass(frozen=True)
class EnumTarget:
    """The model an enumeration behavior is attached to.

    ``alias`` names the model for prefix derivation (``Articles`` -> ``ARTICLE_``).
    """

    model: type[Any]
    alias: str
    lookup_store: LookupStore | None = None

    @classmethod
    def for_model(cls, model: type[Any], alias: str | None = None, lookup_store: LookupStore | None = None) -> EnumTarget:
        return cls(model=model, alias=alias or model.__name__, lookup_store=lookup_store)


class AbstractStrategy(ABC):
    """Abstract base class for enumeration sources.

    A strategy instance serves exactly one group. ``initialize`` resolves the
    group's defaults against the backing source and ``enum`` reads the members.
    """

    name: ClassVar[str] = "custom"

    alias: str
    target: EnumTarget

    def __init__(self, alias: str, target: EnumTarget) -> None:
        self.alias = alias
        self.target = target
        self._config: EnumGroupConfig | None = None

    @property
    def config(self) -> EnumGroupConfig:
        if self._config is None:
            raise ConfigurationError("strategy has not been initialized", group=self.alias)
        return self._config

    def initialize(
        self,
        config: str | Mapping[str, Any] | EnumGroupConfig | None = None,
        default_error_message: str | None = None,
    ) -> EnumGroupConfig:
        """Fill in ``prefix``, ``field`` and ``error_message`` and store the result.

        Args:
            config: A bare prefix, a (partial) config mapping or a config model
            default_error_message: Message used when the config has none

        Returns:
            The resolved group configuration

        Raises:
            AmbiguousPrefixError: If no prefix is given and none can be derived
        """
        raw = coerce_group_config(config, self.alias)
        raw["name"] = self.alias
        if not raw.get("strategy"):
            raw["strategy"] = self.name

        if not raw.get("prefix"):
            raw["prefix"] = self._generate_prefix(raw)

        if not raw.get("field"):
            raw["field"] = underscore(singularize(self.alias))

        if not raw.get("error_message"):
            raw["error_message"] = default_error_message or get_config_service().settings.error_message

        try:
            self._config = EnumGroupConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"invalid group configuration: {e}", group=self.alias) from e
        logger.debug("Initialized enum strategy", group=self.alias, strategy=self.name, prefix=self._config.prefix)
        return self._config

    def _generate_prefix(self, config: Mapping[str, Any]) -> str:
        """Derive the prefix, trying ``<MODEL>_<GROUP>`` before ``<GROUP>``."""
        candidates = [
            f"{underscore(singularize(self.target.alias))}_{self.alias}".upper(),
            self.alias.upper(),
        ]
        for candidate in candidates:
            if self.has_prefix(candidate, config):
                logger.debug("Derived enum prefix", group=self.alias, prefix=candidate)
                return candidate

        raise AmbiguousPrefixError(self.alias, candidates)

    @abstractmethod
    def has_prefix(self, prefix: str, config: Mapping[str, Any] | None = None) -> bool:
        """Check whether the backing source defines members under ``prefix``."""
        ...

    @abstractmethod
    def enum(self, config: EnumGroupConfig | None = None) -> EnumMapping:
        """Read ``{symbolic_key: label}`` for the group in source order.

        Args:
            config: Resolved configuration, defaults to the one stored by ``initialize``
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(alias={self.alias}, target={self.target.alias})>"


class MemberStrategy(AbstractStrategy):
    """Base for strategies that filter in-memory ``(name, value)`` members by prefix."""

    @abstractmethod
    def members(self, config: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """All candidate members in declaration order."""
        ...

    def has_prefix(self, prefix: str, config: Mapping[str, Any] | None = None) -> bool:
        return any(key.startswith(f"{prefix}_") for key in self.members(config))

    def enum(self, config: EnumGroupConfig | None = None) -> EnumMapping:
        config = config or self.config
        prefix = f"{config.prefix}_"
        return {key: str(value) for key, value in self.members(config.model_dump()).items() if key.startswith(prefix)}
