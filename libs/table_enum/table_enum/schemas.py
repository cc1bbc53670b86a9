"""Pydantic schemas for enumeration list configuration."""

from __future__ import annotations

import importlib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from common.core.config_service import load_yaml_file
from common.exceptions import ConfigurationError
from common.utils.json_model import JsonModel

GroupEntry = str | dict[str, Any]
"""A raw group declaration: a bare name or a ``{name: prefix | config}`` mapping."""


def import_enum_class(value: Any) -> Any:
    """Resolve a dotted import path (``package.module.EnumName``) used in YAML configs.

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    module_name, _, attr = value.rpartition(".")
    if not module_name:
        raise ValueError(f"enum_class must be a dotted path, got '{value}'")
    try:
        return getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot import enum_class '{value}': {e}") from e


class EnumGroupConfig(JsonModel):
    """Fully resolved configuration of one enumeration group.

    Extra keys are kept so custom strategies can read their own options.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    name: str
    strategy: str
    prefix: str
    field: str
    error_message: str
    allow_none: bool = Field(default=False, description="Treat None as a valid value in generated rules")
    enum_class: type[Enum] | None = Field(default=None, description="Enum type read by the enum strategy")

    @field_validator("enum_class", mode="before")
    @classmethod
    def _import_enum_class(cls, value: Any) -> Any:
        return import_enum_class(value)


class EnumBehaviorConfig(JsonModel):
    """Declarative configuration attached to a model.

    ``groups`` also accepts the ``lists`` key used by older configurations.
    """

    default_strategy: str | None = None
    implemented_methods: dict[str, str] = Field(default_factory=lambda: {"enum": "enum"})
    groups: list[GroupEntry] | dict[str, Any] = Field(
        default_factory=list,
        validation_alias=AliasChoices("groups", "lists"),
    )


def load_behavior_config(path: str | Path) -> EnumBehaviorConfig:
    """Load an ``EnumBehaviorConfig`` from a YAML document.

    The document is either the config itself or nests it under a ``table_enum`` key.
    """
    data = load_yaml_file(path)
    section = data.get("table_enum", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'table_enum' section in {path} must be a mapping")
    return EnumBehaviorConfig.model_validate(section)
