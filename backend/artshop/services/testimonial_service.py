from typing import List

from sqlalchemy.orm import Session

from artshop.models.testimonial import Testimonial
from artshop.repositories.testimonial_repo import TestimonialRepository


class TestimonialService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TestimonialRepository(db)

    def list_newest_first(self) -> List[Testimonial]:
        return self.repo.list_newest_first()
