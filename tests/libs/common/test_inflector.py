"""Tests for word inflection helpers."""

import pytest

from common.utils.inflector import classify, singularize, underscore


class TestSingularize:
    @pytest.mark.parametrize(
        ("plural", "singular"),
        [
            ("Articles", "Article"),
            ("articles", "article"),
            ("ARTICLES", "ARTICLE"),
            ("categories", "category"),
            ("statuses", "status"),
            ("status", "status"),
            ("addresses", "address"),
            ("boxes", "box"),
            ("people", "person"),
            ("People", "Person"),
            ("news", "news"),
            ("priority", "priority"),
        ],
    )
    def test_words(self, plural: str, singular: str) -> None:
        assert singularize(plural) == singular

    def test_only_last_segment_is_inflected(self) -> None:
        assert singularize("article_categories") == "article_category"
        assert singularize("BlogPosts") == "BlogPost"
        assert singularize("news_items") == "news_item"

    def test_empty(self) -> None:
        assert singularize("") == ""


class TestUnderscore:
    def test_camel_and_pascal(self) -> None:
        assert underscore("ArticleStatus") == "article_status"
        assert underscore("errorMessage") == "error_message"

    def test_already_underscored(self) -> None:
        assert underscore("article_status") == "article_status"
        assert underscore("Article") == "article"


class TestClassify:
    def test_classify(self) -> None:
        assert classify("status") == "Status"
        assert classify("article_status") == "ArticleStatus"
        assert classify("priorities") == "Priority"
        assert classify("ArticleCategories") == "ArticleCategory"
