from typing import List, Optional

from sqlalchemy.orm import Session

from artshop.models.testimonial import Testimonial


class TestimonialRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_newest_first(self) -> List[Testimonial]:
        return (
            self.db.query(Testimonial)
            .order_by(Testimonial.created_at.desc(), Testimonial.id.desc())
            .all()
        )

    def add(
        self,
        name: str,
        message: str,
        rating: Optional[int] = None,
        location: Optional[str] = None,
    ) -> Testimonial:
        t = Testimonial(name=name, message=message, rating=rating, location=location)
        self.db.add(t)
        self.db.flush()
        return t
