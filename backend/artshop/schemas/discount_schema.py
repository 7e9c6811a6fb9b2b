from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DiscountOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
    code: str
    discount_percent: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


def discount_to_dict(d) -> dict:
    return DiscountOut.model_validate(d).model_dump(by_alias=True, mode="json")
