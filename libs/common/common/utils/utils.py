from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Concatenate, ParamSpec, TypeGuard, TypeVar

import structlog

T = TypeVar("T")
R_co = TypeVar("R_co", covariant=True)
P = ParamSpec("P")

if TYPE_CHECKING:
    ClassMethod = classmethod
else:
    ClassMethod = Callable[[Callable[Concatenate[T, P], R_co]], Callable[Concatenate[T, P], R_co]]


def is_dict(obj: Any) -> TypeGuard[dict[str, Any]]:
    return isinstance(obj, dict)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger routed through stdlib logging once ``setup_logging`` ran."""
    return structlog.stdlib.get_logger(name)


def deep_merge(base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` overlaid with ``update``, merging nested dicts key by key.

    Neither argument is modified.
    """
    merged = dict(base)
    for key, value in update.items():
        current = merged.get(key)
        merged[key] = deep_merge(current, value) if is_dict(current) and is_dict(value) else value
    return merged


def cached_classmethod[T, **P, R_co](func: Callable[Concatenate[T, P], R_co]) -> ClassMethod[T, P, R_co]:
    """Classmethod whose result is computed once per class and argument set."""

    def wrapper(cls: T, *args: P.args, **kwargs: P.kwargs) -> R_co:
        cache = cls.__dict__.get("_cache") if isinstance(cls, type) else None
        if cache is None:
            cache = {}
            setattr(cls, "_cache", cache)
        key = (func, args, frozenset(kwargs.items()))
        if key not in cache:
            cache[key] = func(cls, *args, **kwargs)
        return cache[key]

    return classmethod(wrapper)  # type: ignore
