"""Tests for EnumBehavior configuration normalization and enum retrieval."""

from typing import Any

import pytest
from enum_test_models import (
    ARTICLE_CATEGORY_MEMBERS,
    ARTICLE_STATUS_MEMBERS,
    PRIORITY_MEMBERS,
    Article,
    InMemoryLookupStore,
)

from common.core.config_service import EnumSettings
from common.exceptions import (
    AmbiguousPrefixError,
    ConfigurationError,
    UnknownGroupError,
    UnsupportedStrategyError,
)
from table_enum.behavior import EnumBehavior, rule_name
from table_enum.schemas import EnumBehaviorConfig, EnumGroupConfig
from table_enum.store import SessionLookupStore
from table_enum.strategies.base import EnumTarget
from table_enum.strategies.lookup import LookupStrategy


def attach(config: Any, store: Any, settings: EnumSettings, alias: str = "Articles") -> EnumBehavior:
    return EnumBehavior.attach(Article, config, alias=alias, lookup_store=store, settings=settings)


class TestConfigNormalization:
    """Test that every accepted declaration shape resolves to the same group config."""

    EXPECTED_STATUS = EnumGroupConfig(
        name="status",
        strategy="lookup",
        prefix="ARTICLE_STATUS",
        field="status",
        error_message="The provided value is invalid",
    )

    @pytest.mark.parametrize(
        "groups",
        [
            ["status"],
            [{"status": "article_status"}],
            [{"status": "ARTICLE_STATUS"}],
            [{"status": {"prefix": "ARTICLE_STATUS"}}],
            [{"status": {"strategy": "lookup", "field": "status"}}],
            [{"status": None}],
            {"status": "article_status"},
        ],
    )
    def test_input_shapes_are_equivalent(
        self, groups: Any, memory_store: InMemoryLookupStore, settings: EnumSettings
    ) -> None:
        behavior = attach({"groups": groups}, memory_store, settings)

        assert behavior.group("status") == self.EXPECTED_STATUS

    def test_mixed_list_keeps_declaration_order(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        groups = ["priority", {"status": "article_status"}, {"category": {"prefix": "ARTICLE_CATEGORY"}}]
        behavior = attach({"groups": groups}, memory_store, settings)

        assert list(behavior.groups) == ["priority", "status", "category"]

    def test_lists_is_accepted_for_groups(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"lists": ["priority"]}, memory_store, settings)

        assert list(behavior.groups) == ["priority"]

    def test_explicit_config_overrides_defaults(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        groups = [{"status": {"prefix": "ARTICLE_STATUS", "field": "state", "errorMessage": "Pick a status"}}]
        behavior = attach({"groups": groups}, memory_store, settings)

        config = behavior.group("status")
        assert config.field == "state"
        assert config.error_message == "Pick a status"

    def test_field_is_singular_and_underscored(self, settings: EnumSettings) -> None:
        store = InMemoryLookupStore({"ARTICLE_CATEGORY": {"ARTICLE_CATEGORY_OSS": "Open Source Software"}})
        behavior = attach({"groups": [{"categories": "article_category"}]}, store, settings)

        config = behavior.group("categories")
        assert config.field == "category"

    def test_default_error_message_comes_from_settings(self, memory_store: InMemoryLookupStore) -> None:
        settings = EnumSettings(error_message="Nope")
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        assert behavior.group("priority").error_message == "Nope"

    def test_default_strategy_comes_from_settings(self) -> None:
        const_settings = EnumSettings(default_strategy="const")
        behavior = EnumBehavior.attach(Article, {"groups": ["priority"]}, alias="Articles", settings=const_settings)

        assert behavior.group("priority").strategy == "const"

    def test_config_model_is_accepted(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        config = EnumBehaviorConfig(groups=["priority", "status"])
        behavior = attach(config, memory_store, settings)

        assert list(behavior.groups) == ["priority", "status"]

    def test_config_dump(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        dumped = behavior.config()
        assert dumped["default_strategy"] == "lookup"
        assert dumped["implemented_methods"] == {"enum": "enum"}
        assert dumped["groups"]["priority"]["prefix"] == "PRIORITY"
        assert "enum_class" not in dumped["groups"]["priority"]

    def test_duplicate_group_is_rejected(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(ConfigurationError, match="more than once"):
            attach({"groups": ["priority", {"priority": "priority"}]}, memory_store, settings)

    def test_clashing_rule_names_are_rejected(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        store = InMemoryLookupStore({**memory_store.rows, "ARTICLE_STATUSES": {"ARTICLE_STATUSES_X": "X"}})
        with pytest.raises(ConfigurationError, match="isValidStatus"):
            attach({"groups": ["status", {"statuses": "article_statuses"}]}, store, settings)

    def test_malformed_entry_is_rejected(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(ConfigurationError):
            attach({"groups": [42]}, memory_store, settings)


class TestPrefixDerivation:
    """Test the specific-then-generic prefix derivation order."""

    def test_specific_prefix_wins(self, settings: EnumSettings) -> None:
        store = InMemoryLookupStore(
            {
                "ARTICLE_PRIORITY": {"ARTICLE_PRIORITY_LOW": "Low"},
                "PRIORITY": PRIORITY_MEMBERS,
            }
        )
        behavior = attach({"groups": ["priority"]}, store, settings)

        assert behavior.group("priority").prefix == "ARTICLE_PRIORITY"
        assert behavior.enum("priority") == {"ARTICLE_PRIORITY_LOW": "Low"}

    def test_falls_back_to_group_prefix(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        assert behavior.group("priority").prefix == "PRIORITY"

    def test_alias_defaults_to_class_name(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = EnumBehavior.attach(Article, {"groups": ["status"]}, lookup_store=memory_store, settings=settings)

        assert behavior.target.alias == "Article"
        assert behavior.group("status").prefix == "ARTICLE_STATUS"

    def test_ambiguous_prefix(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(AmbiguousPrefixError) as exc_info:
            attach({"groups": ["tags"]}, memory_store, settings)

        assert exc_info.value.group == "tags"
        assert exc_info.value.candidates == ["ARTICLE_TAGS", "TAGS"]

    def test_explicit_prefix_skips_derivation(self, settings: EnumSettings) -> None:
        store = InMemoryLookupStore({})
        behavior = attach({"groups": [{"tags": "article_tag"}]}, store, settings)

        assert behavior.group("tags").prefix == "ARTICLE_TAG"
        assert behavior.enum("tags") == {}

    def test_derivation_without_store(self, settings: EnumSettings) -> None:
        with pytest.raises(ConfigurationError, match="lookup store"):
            attach({"groups": ["priority"]}, None, settings)


class TestEnumRetrieval:
    """Test reading mappings from the enum_lookups table."""

    def test_end_to_end_groups(self, store: SessionLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority", "status", "category"]}, store, settings)

        assert behavior.enum("priority") == PRIORITY_MEMBERS
        assert behavior.enum("status") == ARTICLE_STATUS_MEMBERS
        assert behavior.enum("category") == ARTICLE_CATEGORY_MEMBERS
        assert [len(behavior.enum(name)) for name in behavior.groups] == [3, 3, 2]
        assert [config.field for config in behavior.groups.values()] == ["priority", "status", "category"]

    def test_source_order_is_preserved(self, store: SessionLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, store, settings)

        assert list(behavior.enum("priority")) == ["PRIORITY_URGENT", "PRIORITY_HIGH", "PRIORITY_NORMAL"]
        assert behavior.enum("priority") == behavior.enum("priority")

    def test_unknown_group(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        with pytest.raises(UnknownGroupError) as exc_info:
            behavior.enum("tags")

        assert exc_info.value.known_groups == ["priority"]

    def test_mapping_is_read_on_every_call(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)
        memory_store.fetches.clear()

        behavior.enum("priority")
        memory_store.rows["PRIORITY"]["PRIORITY_LOW"] = "Low"
        mapping = behavior.enum("priority")

        assert memory_store.fetches == ["PRIORITY", "PRIORITY"]
        assert mapping["PRIORITY_LOW"] == "Low"

    def test_empty_prefix_returns_empty_mapping(self, settings: EnumSettings) -> None:
        store = InMemoryLookupStore({"PRIORITY": {"PRIORITY_HIGH": "High"}})
        behavior = attach({"groups": ["priority"]}, store, settings)
        store.rows["PRIORITY"] = {}

        assert behavior.enum("priority") == {}


class TestStrategyResolution:
    """Test strategy lookup and memoization."""

    def test_unknown_strategy(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            attach({"groups": [{"priority": {"strategy": "magic"}}]}, memory_store, settings)

        assert isinstance(exc_info.value, UnsupportedStrategyError)
        assert "Class not found for strategy (magic)" in str(exc_info.value)

    def test_unknown_default_strategy(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(UnsupportedStrategyError):
            attach({"default_strategy": "magic", "groups": ["priority"]}, memory_store, settings)

    def test_strategy_is_memoized(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        strategy = behavior.strategy("priority")
        assert isinstance(strategy, LookupStrategy)
        assert behavior.strategy("priority") is strategy
        assert behavior.strategy("priority", "const") is strategy

    def test_strategy_accepts_instance(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": []}, memory_store, settings)
        strategy = LookupStrategy("tags", EnumTarget.for_model(Article, "Articles", memory_store))

        assert behavior.strategy("tags", strategy) is strategy

    def test_strategy_accepts_class(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": []}, memory_store, settings)

        strategy = behavior.strategy("tags", LookupStrategy)
        assert isinstance(strategy, LookupStrategy)
        assert strategy.target is behavior.target

    def test_invalid_strategy_argument(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": []}, memory_store, settings)

        with pytest.raises(ConfigurationError):
            behavior.strategy("tags", 42)  # type: ignore[arg-type]


class TestImplementedMethods:
    def test_default_exposes_enum(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        behavior = attach({"groups": ["priority"]}, memory_store, settings)

        methods = behavior.implemented_methods()
        assert list(methods) == ["enum"]
        assert methods["enum"]("priority") == PRIORITY_MEMBERS

    def test_renamed_method(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        config = {"implementedMethods": {"choices": "enum"}, "groups": ["priority"]}
        behavior = attach(config, memory_store, settings)

        assert behavior.implemented_methods()["choices"]("priority") == PRIORITY_MEMBERS

    def test_unknown_method(self, memory_store: InMemoryLookupStore, settings: EnumSettings) -> None:
        with pytest.raises(ConfigurationError, match="missing"):
            attach({"implemented_methods": {"enum": "missing"}, "groups": []}, memory_store, settings)


def test_rule_name() -> None:
    assert rule_name("status") == "isValidStatus"
    assert rule_name("article_status") == "isValidArticleStatus"
    assert rule_name("categories") == "isValidCategory"
