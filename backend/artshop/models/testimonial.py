from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from artshop.db import Base


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)
    location = Column(String(128), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
