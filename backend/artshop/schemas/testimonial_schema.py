from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TestimonialOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    id: int
    name: str
    message: str
    rating: Optional[int] = None
    location: Optional[str] = None
    created_at: datetime


def testimonial_to_dict(t) -> dict:
    return TestimonialOut.model_validate(t).model_dump(by_alias=True, mode="json")
