from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import validates

from artshop.db import Base
from artshop.utils.text import fold


def _utcnow():
    return datetime.now(timezone.utc)


class Discount(Base):
    __tablename__ = "discounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(64), unique=True, nullable=False)
    # casefolded code; lookups compare against this
    code_key = Column(String(64), unique=True, index=True, nullable=False)
    discount_percent = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    @validates("code")
    def _fold_code(self, field, value):
        self.code_key = fold(value)
        return value

    def __repr__(self):
        return f"<Discount code={self.code} percent={self.discount_percent}>"
