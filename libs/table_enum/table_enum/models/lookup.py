"""Reference table holding labelled enumeration members."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from table_enum.db import Base


class Lookup(Base):
    """One member of an enumeration list, e.g. ``PRIORITY`` / ``PRIORITY_HIGH`` / ``High``.

    ``value`` holds the full symbolic key. Members are returned in ``id`` order.
    """

    __tablename__ = "enum_lookups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    prefix: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    label: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        # A symbolic key appears once per prefix
        UniqueConstraint("prefix", "value", name="unique_prefix_value"),
    )

    def __repr__(self) -> str:
        return f"<Lookup(id={self.id}, prefix={self.prefix}, value={self.value}, label={self.label})>"
