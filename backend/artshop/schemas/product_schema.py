# backend/artshop/schemas/product_schema.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from artshop.services.query_builder import MAX_SQL_INT

CATEGORIES = ("resin", "painting", "home decor", "crafts")

InputType = Literal["select", "text", "number", "boolean"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class Choice(CamelModel):
    label: str = Field(min_length=1)
    value: str = Field(min_length=1)
    price_delta: float = 0


class CustomizationOption(CamelModel):
    key: str = Field(min_length=1)
    label: str = Field(min_length=1)
    input_type: InputType
    required: bool = False
    price_delta: float = 0
    choices: List[Choice] = []

    @model_validator(mode="after")
    def _select_needs_choices(self):
        if self.input_type == "select" and not self.choices:
            raise ValueError("select options need at least one choice")
        return self


class ProductIn(CamelModel):
    """Payload accepted by the admin create endpoint. All field errors are reported together."""

    product_id: Optional[int] = Field(None, ge=1, le=MAX_SQL_INT)
    title: str = Field(min_length=1, max_length=256)
    price: float = Field(gt=0)
    image: Optional[str] = None
    type: Optional[str] = None
    category: str
    description: Optional[str] = None
    is_available: bool = True
    details: List[str] = []
    customization_allowed: Optional[bool] = None
    customized_details: Optional[str] = None
    customization_options: List[CustomizationOption] = []
    is_sale: bool = False
    sale_discount: int = Field(0, ge=0, le=99)
    is_latest: bool = False
    most_seller: bool = False

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        v = v.lower()
        if v not in CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(CATEGORIES)}")
        return v

    @model_validator(mode="after")
    def _sale_discount_matches_flag(self):
        if self.is_sale and not 1 <= self.sale_discount <= 99:
            raise ValueError("saleDiscount must be between 1 and 99 when isSale is set")
        if not self.is_sale and self.sale_discount != 0:
            raise ValueError("saleDiscount must be 0 unless isSale is set")
        return self


class ProductOut(CamelModel):
    product_id: int
    title: str
    price: float
    image: Optional[str] = None
    type: Optional[str] = None
    category: str
    description: Optional[str] = None
    is_available: bool
    details: List[str] = []
    customization_allowed: bool
    customized_details: Optional[str] = None
    customization_options: List[CustomizationOption] = []
    is_sale: bool
    sale_discount: int
    is_latest: bool
    most_seller: bool
    created_at: datetime
    updated_at: datetime


class ProductSuggestion(CamelModel):
    product_id: int
    title: str
    category: str


def product_to_dict(p) -> dict:
    return ProductOut.model_validate(p).model_dump(by_alias=True, mode="json")


def suggestion_to_dict(p) -> dict:
    return ProductSuggestion.model_validate(p).model_dump(by_alias=True, mode="json")
