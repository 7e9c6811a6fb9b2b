from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import validates

from artshop.db import Base
from artshop.utils.text import fold


def _utcnow():
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, unique=True, index=True, nullable=False)
    title = Column(String(256), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(512), nullable=True)
    type = Column(String(128), nullable=True)
    category = Column(String(64), nullable=False)
    description = Column(Text, nullable=True)
    details = Column(JSON, nullable=False, default=list)
    is_available = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    customization_allowed = Column(Boolean, default=False, nullable=False)
    customized_details = Column(Text, nullable=True)
    # list of {key, label, inputType, required, priceDelta, choices}
    customization_options = Column(JSON, nullable=False, default=list)
    is_sale = Column(Boolean, default=False, nullable=False)
    sale_discount = Column(Integer, default=0, nullable=False)
    is_latest = Column(Boolean, default=False, nullable=False)
    most_seller = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # casefolded copies, kept in step with the fields above by _fold_keys
    title_key = Column(String(256), nullable=False)
    type_key = Column(String(128), index=True, nullable=True)
    category_key = Column(String(64), index=True, nullable=False)

    @validates("title", "type", "category")
    def _fold_keys(self, field, value):
        setattr(self, f"{field}_key", fold(value))
        return value

    def __repr__(self):
        return f"<Product product_id={self.product_id} title={self.title}>"


# one live product per title; soft-deleted rows may repeat it
Index(
    "uq_products_live_title_key",
    Product.title_key,
    unique=True,
    sqlite_where=Product.is_deleted == False,
    postgresql_where=Product.is_deleted == False,
)
