from typing import Dict, List

from sqlalchemy.orm import Session

from artshop.models.discount import Discount
from artshop.repositories.discount_repo import DiscountRepository


class InvalidDiscount(Exception):
    pass


# same message for unknown and inactive codes
INVALID_DISCOUNT_MESSAGE = "Invalid or Inactive Discount code"


class DiscountService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = DiscountRepository(db)

    def list_active(self) -> List[Discount]:
        return self.repo.list_active()

    def validate(self, code) -> Dict:
        """
        Return {code, discountPercent} for an active code matching `code`
        in any letter case, or raise InvalidDiscount.
        """
        if not isinstance(code, str) or not code.strip():
            raise InvalidDiscount(INVALID_DISCOUNT_MESSAGE)
        discount = self.repo.get_active_by_code(code.strip())
        if not discount:
            raise InvalidDiscount(INVALID_DISCOUNT_MESSAGE)
        return {"code": discount.code, "discountPercent": discount.discount_percent}
