from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artshop.config import settings
from artshop.models.product import Product
from artshop.repositories.counter_repo import PRODUCT_ID_COUNTER, CounterRepository
from artshop.repositories.product_repo import ProductRepository
from artshop.schemas.product_schema import ProductIn
from artshop.services.query_builder import (
    MAX_SQL_INT,
    PaginationSummary,
    ProductQuery,
    summarize_pagination,
)
from artshop.utils.logs import get_logger

log = get_logger("catalogue")

MIN_SUGGESTION_LENGTH = 2


class CatalogueException(Exception):
    pass


class ProductNotFound(CatalogueException):
    pass


class CatalogueValidationError(CatalogueException):
    def __init__(self, message: str, errors: Optional[List[Dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateProduct(CatalogueException):
    pass


def _validation_errors(exc: ValidationError) -> List[Dict]:
    return [
        {
            "field": ".".join(str(p) for p in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


class CatalogueService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.counters = CounterRepository(db)

    def list_products(self, query: ProductQuery) -> Tuple[List[Product], PaginationSummary]:
        """
        Run a listing query. The total is counted over the whole filtered
        set, independent of the page window.
        """
        total = self.products.count(query.filter)
        items = self.products.find(query)
        return items, summarize_pagination(query, total)

    def get_product(self, product_id) -> Product:
        try:
            pid = int(product_id)
        except (TypeError, ValueError):
            raise ProductNotFound("Product not found")
        if not 1 <= pid <= MAX_SQL_INT:
            raise ProductNotFound("Product not found")
        p = self.products.get_by_product_id(pid)
        if not p:
            raise ProductNotFound("Product not found")
        return p

    def suggest(self, fragment: Optional[str]) -> List[Product]:
        fragment = (fragment or "").strip()
        if len(fragment) < MIN_SUGGESTION_LENGTH:
            raise CatalogueValidationError(
                f"Search term must be at least {MIN_SUGGESTION_LENGTH} characters"
            )
        return self.products.suggest(fragment, settings.SUGGESTION_LIMIT)

    def create_product(self, payload) -> Product:
        if not isinstance(payload, dict):
            raise CatalogueValidationError(
                "Validation failed", [{"field": "body", "message": "Expected a JSON object"}]
            )
        try:
            data = ProductIn.model_validate(payload)
        except ValidationError as e:
            raise CatalogueValidationError("Validation failed", _validation_errors(e))

        if self.products.title_taken(data.title):
            raise DuplicateProduct("A product with this title already exists")

        fields = data.model_dump(exclude={"product_id", "customization_options"})
        fields["customization_options"] = [
            o.model_dump(by_alias=True) for o in data.customization_options
        ]
        if data.customization_allowed is None:
            fields["customization_allowed"] = bool(data.customization_options)

        try:
            if data.product_id is not None:
                if self.products.product_id_taken(data.product_id):
                    raise DuplicateProduct("A product with this productId already exists")
                self.counters.raise_to(PRODUCT_ID_COUNTER, data.product_id)
                product_id = data.product_id
            else:
                product_id = self.counters.next_value(PRODUCT_ID_COUNTER)
            p = self.products.add(product_id=product_id, **fields)
            self.db.commit()
        except IntegrityError:
            # a concurrent create won; the live-title index or the productId
            # constraint rejected this row
            self.db.rollback()
            if self.products.title_taken(data.title):
                raise DuplicateProduct("A product with this title already exists")
            raise DuplicateProduct("A product with this productId already exists")
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(p)
        log.info(f"created product product_id={p.product_id} title={p.title!r}")
        return p
