# table_enum/crud/__init__.py

from .lookup import LookupDAO

__all__ = ["LookupDAO"]
