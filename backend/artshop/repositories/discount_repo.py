from typing import List, Optional

from sqlalchemy.orm import Session

from artshop.models.discount import Discount
from artshop.utils.text import fold


class DiscountRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> List[Discount]:
        return (
            self.db.query(Discount)
            .filter(Discount.is_active == True)
            .order_by(Discount.code)
            .all()
        )

    def get_active_by_code(self, code: str) -> Optional[Discount]:
        """Exact code match ignoring letter case (casefolded); inactive codes are not returned."""
        return (
            self.db.query(Discount)
            .filter(Discount.code_key == fold(code), Discount.is_active == True)
            .first()
        )

    def create_or_update(self, code: str, discount_percent: int, is_active: bool = True) -> Discount:
        d = self.db.query(Discount).filter(Discount.code_key == fold(code)).first()
        if d:
            d.discount_percent = discount_percent
            d.is_active = is_active
        else:
            d = Discount(code=code, discount_percent=discount_percent, is_active=is_active)
            self.db.add(d)
        self.db.flush()
        return d
