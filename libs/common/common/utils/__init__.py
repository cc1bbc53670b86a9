from .inflector import classify, singularize, underscore
from .json_model import JsonModel
from .msgspec import encode_json, encode_json_str
from .utils import cached_classmethod, deep_merge, get_logger, is_dict

__all__ = [
    "JsonModel",
    "cached_classmethod",
    "classify",
    "deep_merge",
    "encode_json",
    "encode_json_str",
    "get_logger",
    "is_dict",
    "singularize",
    "underscore",
]
