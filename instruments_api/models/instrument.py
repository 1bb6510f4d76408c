"""SQLAlchemy model for the single ``instruments`` table."""

from __future__ import annotations

from sqlalchemy import Column, Float, Integer, Text

from ..db.session import Base


class Instrument(Base):
    """A musical instrument listing."""

    __tablename__ = "instruments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=False)


__all__ = ["Instrument"]
