"""SQLAlchemy model for the people whose work sessions are tracked."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    surname = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    patronymic = Column(Text, nullable=True)
    address = Column(Text, nullable=True)
    # Stored as "<series> <number>"; the business key of a user.
    passport_number = Column(Text, nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, passport_number={self.passport_number!r})"


__all__ = ["User"]
