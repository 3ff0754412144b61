from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List


class ProductSnapshot(BaseModel):
    """Catalog fields the cart needs; everything else rides along as extra data."""
    id: int
    name: str = Field(..., min_length=1)
    price: int = Field(..., ge=0)
    image: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[str] = None
    is_new: bool = False
    sizes: List[str] = []
    colors: List[str] = []

    @field_validator("sizes", "colors", mode="before")
    @classmethod
    def drop_blank_options(cls, value):
        if value is None:
            return []
        # numeric sizes (38, 40) are kept as text so selections compare as strings
        return [str(option).strip() for option in value if option is not None and str(option).strip()]

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "allow",
    }


class ProductResponse(BaseModel):
    id: int
    name: str
    slug: Optional[str]
    price: int
    formatted_price: str
    image: Optional[str]
    category: Optional[str]
    is_new: bool
    sizes: List[str]
    colors: List[str]


class ProductInquiryResponse(BaseModel):
    product_id: int
    message: str
    whatsapp_url: str
