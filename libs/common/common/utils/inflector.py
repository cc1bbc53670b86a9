"""Word inflection helpers used to derive names from model and group aliases.

``underscore`` and ``classify`` reuse pydantic's alias generators so that names
derived here agree with the casing used by ``JsonModel`` aliases.
"""

import re
from functools import lru_cache

from pydantic.alias_generators import to_pascal, to_snake

_UNCOUNTABLE = frozenset(
    {
        "equipment",
        "information",
        "rice",
        "money",
        "species",
        "series",
        "fish",
        "sheep",
        "news",
        "data",
        "metadata",
        "status",
    }
)

_IRREGULAR = {
    "people": "person",
    "men": "man",
    "women": "woman",
    "children": "child",
    "geese": "goose",
    "feet": "foot",
    "teeth": "tooth",
    "mice": "mouse",
    "criteria": "criterion",
}

# Evaluated in order, first match wins
_SINGULAR_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(quiz)zes$", re.IGNORECASE), r"\1"),
    (re.compile(r"(matr)ices$", re.IGNORECASE), r"\1ix"),
    (re.compile(r"(vert|ind)ices$", re.IGNORECASE), r"\1ex"),
    (re.compile(r"^(ox)en", re.IGNORECASE), r"\1"),
    (re.compile(r"(alias|status|campus)(es)?$", re.IGNORECASE), r"\1"),
    (re.compile(r"(octop|vir)(us|i)$", re.IGNORECASE), r"\1us"),
    (re.compile(r"(cris|ax|test)es$", re.IGNORECASE), r"\1is"),
    (re.compile(r"(shoe)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"(o)es$", re.IGNORECASE), r"\1"),
    (re.compile(r"(bus)(es)?$", re.IGNORECASE), r"\1"),
    (re.compile(r"(m)ovies$", re.IGNORECASE), r"\1ovie"),
    (re.compile(r"(x|ch|ss|sh)es$", re.IGNORECASE), r"\1"),
    (re.compile(r"([^aeiouy]|qu)ies$", re.IGNORECASE), r"\1y"),
    (re.compile(r"([lr])ves$", re.IGNORECASE), r"\1f"),
    (re.compile(r"(tive)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"(hive)s$", re.IGNORECASE), r"\1"),
    (re.compile(r"([^f])ves$", re.IGNORECASE), r"\1fe"),
    (re.compile(r"(analy|ba|diagno|parenthe|progno|synop|the)(sis|ses)$", re.IGNORECASE), r"\1sis"),
    (re.compile(r"([ti])a$", re.IGNORECASE), r"\1um"),
    (re.compile(r"(ss)$", re.IGNORECASE), r"\1"),
    (re.compile(r"s$", re.IGNORECASE), ""),
]


def _match_case(source: str, target: str) -> str:
    if source.isupper():
        return target.upper()
    if source[:1].isupper():
        return target[:1].upper() + target[1:]
    return target


def _singularize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        return _match_case(word, _IRREGULAR[lower])
    for pattern, replacement in _SINGULAR_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


@lru_cache(maxsize=512)
def singularize(word: str) -> str:
    """Return the singular form of ``word``.

    Only the last segment of an underscored or CamelCased word is inflected,
    so ``article_categories`` becomes ``article_category`` and ``BlogPosts``
    becomes ``BlogPost``.
    """
    if not word:
        return word

    match = re.search(r"(.*?)([A-Z]?[a-z]+|[A-Z]+)$", word)
    if match is None:
        return word
    head, tail = match.groups()
    return head + _singularize_word(tail)


def underscore(word: str) -> str:
    """``ArticleStatus`` -> ``article_status``."""
    return to_snake(word).lower()


def classify(word: str) -> str:
    """``article_statuses`` -> ``ArticleStatus``."""
    return to_pascal(singularize(underscore(word)))
