"""Lookup Data Access Object for reference table operations."""

from collections.abc import Iterable

from sqlalchemy import delete, exists, select
from sqlalchemy.orm import Session

from common.utils.utils import get_logger
from table_enum.models.lookup import Lookup

logger = get_logger(__name__)


class LookupDAO:
    """Data Access Object for the ``enum_lookups`` reference table.
    Reads return plain ``dict`` mappings in insertion (``id``) order.
    """

    def __init__(self) -> None:
        pass

    def fetch_by_prefix(self, db: Session, prefix: str) -> dict[str, str]:
        """Get ``{value: label}`` for every member stored under ``prefix``."""
        result = db.execute(select(Lookup.value, Lookup.label).where(Lookup.prefix == prefix).order_by(Lookup.id))
        return {value: label for value, label in result.all()}

    def has_prefix(self, db: Session, prefix: str) -> bool:
        """Check whether at least one member is stored under ``prefix``."""
        return bool(db.scalar(select(exists().where(Lookup.prefix == prefix))))

    def get_prefixes(self, db: Session) -> list[str]:
        """Get the distinct prefixes in first-seen order."""
        result = db.execute(select(Lookup.prefix, Lookup.id).order_by(Lookup.id))
        return list(dict.fromkeys(prefix for prefix, _ in result.all()))

    def create(self, db: Session, *, prefix: str, value: str, label: str) -> Lookup:
        """Add a member. The caller owns the transaction."""
        lookup = Lookup(prefix=prefix, value=value, label=label)
        db.add(lookup)
        db.flush()
        return lookup

    def create_many(self, db: Session, prefix: str, members: Iterable[tuple[str, str]]) -> list[Lookup]:
        """Add ``(value, label)`` members under ``prefix`` preserving their order."""
        lookups = [Lookup(prefix=prefix, value=value, label=label) for value, label in members]
        db.add_all(lookups)
        db.flush()
        logger.debug("Created lookups", prefix=prefix, count=len(lookups))
        return lookups

    def update_label(self, db: Session, prefix: str, value: str, label: str) -> bool:
        """Rename a member. Returns False when the member does not exist."""
        lookup = db.scalar(select(Lookup).where(Lookup.prefix == prefix, Lookup.value == value))
        if lookup is None:
            return False
        lookup.label = label
        db.flush()
        return True

    def delete_by_prefix(self, db: Session, prefix: str) -> int:
        """Remove every member under ``prefix`` and return how many rows were deleted."""
        result = db.execute(delete(Lookup).where(Lookup.prefix == prefix))
        db.flush()
        return result.rowcount or 0
