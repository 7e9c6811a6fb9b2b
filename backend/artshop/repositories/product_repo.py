from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from artshop.models.product import Product
from artshop.services.query_builder import DESC, ProductFilter, ProductQuery
from artshop.utils.text import fold


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def _live(self) -> Query:
        return self.db.query(Product).filter(Product.is_deleted == False)

    def _apply_filter(self, qry: Query, f: ProductFilter) -> Query:
        if f.categories:
            qry = qry.filter(Product.category_key.in_([fold(c) for c in f.categories]))
        if f.types:
            qry = qry.filter(Product.type_key.in_([fold(t) for t in f.types]))
        if f.title_contains:
            qry = qry.filter(Product.title_key.contains(fold(f.title_contains), autoescape=True))
        if f.price_range is not None:
            low, high = f.price_range
            qry = qry.filter(Product.price >= low, Product.price <= high)
        if f.is_available is not None:
            qry = qry.filter(Product.is_available == f.is_available)
        if f.most_seller is not None:
            qry = qry.filter(Product.most_seller == f.most_seller)
        return qry

    def count(self, f: ProductFilter) -> int:
        return self._apply_filter(self._live(), f).with_entities(func.count()).scalar() or 0

    def find(self, query: ProductQuery) -> List[Product]:
        qry = self._apply_filter(self._live(), query.filter)
        for column, direction in query.ordering:
            col = getattr(Product, column)
            qry = qry.order_by(col.desc() if direction == DESC else col.asc())
        if query.paginated:
            qry = qry.offset(query.offset).limit(query.limit)
        return qry.all()

    def get_by_product_id(self, product_id: int) -> Optional[Product]:
        return self._live().filter(Product.product_id == product_id).first()

    def suggest(self, fragment: str, limit: int) -> List[Product]:
        return (
            self._live()
            .filter(Product.title_key.contains(fold(fragment), autoescape=True))
            .order_by(Product.title_key.asc(), Product.product_id.asc())
            .limit(limit)
            .all()
        )

    def title_taken(self, title: str) -> bool:
        return self._live().filter(Product.title_key == fold(title.strip())).first() is not None

    def product_id_taken(self, product_id: int) -> bool:
        # soft-deleted rows still hold their id
        return self.db.query(Product).filter(Product.product_id == product_id).first() is not None

    def add(self, **fields) -> Product:
        p = Product(**fields)
        self.db.add(p)
        self.db.flush()
        return p
