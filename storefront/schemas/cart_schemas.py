from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from storefront.schemas.book_schemas import Book


class CartItem(BaseModel):
    book: Book
    quantity: int = Field(..., gt=0)


class CartAddRequest(BaseModel):
    book_id: str = Field(..., alias="bookId")
    quantity: int = Field(default=1, gt=0)

    class Config:
        populate_by_name = True


class CartUpdateRequest(BaseModel):
    book_id: str = Field(..., alias="bookId")
    quantity: int

    class Config:
        populate_by_name = True


class AppliedCoupon(BaseModel):
    code: str
    type: Literal["percentage", "fixed"]
    value: float
    discount: float = Field(..., ge=0)
    description: Optional[str] = None

    class Config:
        extra = "allow"


class CouponValidation(BaseModel):
    valid: bool = False
    coupon: Optional[AppliedCoupon] = None
    message: Optional[str] = None


class CartSnapshot(BaseModel):
    items: List[CartItem]
    total: float
    item_count: int
    coupon_discount: float
    applied_coupon: Optional[AppliedCoupon] = None
