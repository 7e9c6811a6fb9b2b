from sqlalchemy import Column, Integer, String

from artshop.db import Base


class Counter(Base):
    """Named monotonic counter; `value` is the last number handed out."""

    __tablename__ = "counters"

    name = Column(String(64), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
