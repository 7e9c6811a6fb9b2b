"""
Translate the raw query-string parameters of the product listing into a
store-agnostic query descriptor, and compute the pagination summary.

Every input is the optional string exactly as it arrived on the URL. Values
that do not parse (``min=abc``, ``limit=-3``) or overflow a 64-bit SQL integer
are treated as if the parameter had not been sent at all; nothing here raises
on client input.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

SORT_BEST_SELLING = "best-selling"
SORT_LOW_TO_HIGH = "low-to-high"
SORT_HIGH_TO_LOW = "high-to-low"
SORT_NEWEST = "newest"

ASC = "asc"
DESC = "desc"

# ordering per sort mode; product_id asc is appended to all of them
SORT_ORDERINGS = {
    SORT_LOW_TO_HIGH: [("price", ASC)],
    SORT_HIGH_TO_LOW: [("price", DESC)],
    SORT_NEWEST: [("created_at", DESC)],
}
DEFAULT_ORDERING = [("product_id", ASC)]

# largest value a signed 64-bit SQL integer holds
MAX_SQL_INT = 2**63 - 1


@dataclass
class ProductFilter:
    """
    Conjunction of optional constraints. ``None`` means "no constraint".
    Soft-deleted products are always excluded and cannot be switched off.
    """

    categories: Optional[List[str]] = None  # exact, case-insensitive, any-of
    types: Optional[List[str]] = None  # exact, case-insensitive, any-of
    title_contains: Optional[str] = None  # substring, case-insensitive
    price_range: Optional[Tuple[float, float]] = None  # inclusive
    is_available: Optional[bool] = None
    most_seller: Optional[bool] = None
    exclude_deleted: bool = field(default=True, init=False)


@dataclass
class ProductQuery:
    filter: ProductFilter
    ordering: List[Tuple[str, str]]
    page: int = 1
    limit: Optional[int] = None

    @property
    def paginated(self) -> bool:
        return self.limit is not None

    @property
    def offset(self) -> int:
        if not self.paginated:
            return 0
        return min((self.page - 1) * self.limit, MAX_SQL_INT)


@dataclass
class PaginationSummary:
    totalItems: int
    currentPage: int
    pageSize: int
    totalPages: int

    def as_dict(self) -> dict:
        return {
            "totalItems": self.totalItems,
            "currentPage": self.currentPage,
            "pageSize": self.pageSize,
            "totalPages": self.totalPages,
        }


def _split_names(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    names = [part.strip() for part in raw.split(",")]
    names = [n for n in names if n]
    return names or None


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _parse_positive_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    if value < 1 or value > MAX_SQL_INT:
        return None
    return value


def build_filter(
    category: Optional[str] = None,
    title: Optional[str] = None,
    type: Optional[str] = None,
    available: Optional[str] = None,
    min: Optional[str] = None,
    max: Optional[str] = None,
    sort: Optional[str] = None,
) -> ProductFilter:
    f = ProductFilter()
    f.categories = _split_names(category)
    f.types = _split_names(type)
    if title:
        f.title_contains = title

    # single-sided bounds are ignored on purpose
    low, high = _parse_number(min), _parse_number(max)
    if low is not None and high is not None:
        f.price_range = (low, high)

    if available is not None:
        f.is_available = available == "true"

    # best-selling narrows the set, it does not rank
    if sort == SORT_BEST_SELLING:
        f.most_seller = True
    return f


def resolve_ordering(sort: Optional[str]) -> List[Tuple[str, str]]:
    return SORT_ORDERINGS.get(sort, []) + DEFAULT_ORDERING


def build_product_query(
    category: Optional[str] = None,
    title: Optional[str] = None,
    type: Optional[str] = None,
    available: Optional[str] = None,
    min: Optional[str] = None,
    max: Optional[str] = None,
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ProductQuery:
    return ProductQuery(
        filter=build_filter(category, title, type, available, min, max, sort),
        ordering=resolve_ordering(sort),
        page=_parse_positive_int(page) or 1,
        limit=_parse_positive_int(limit),
    )


def summarize_pagination(query: ProductQuery, total_items: int) -> PaginationSummary:
    if query.paginated:
        page_size = query.limit
        total_pages = math.ceil(total_items / query.limit)
    else:
        page_size = total_items
        total_pages = 1
    return PaginationSummary(
        totalItems=total_items,
        currentPage=query.page,
        pageSize=page_size,
        totalPages=total_pages,
    )
