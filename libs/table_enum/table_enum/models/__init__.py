# table_enum/models/__init__.py
"""Import all models so metadata.create_all() and migrations can detect them."""

from table_enum.models.lookup import Lookup

__all__ = [
    "Lookup",
]
