from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from storefront.schemas.cart_schemas import AppliedCoupon
from storefront.schemas.shipping_schemas import ShippingInfo


class ShippingAddress(BaseModel):
    name: str
    email: str
    phone: str
    street: str
    landmark: Optional[str] = ""
    city: str
    state: str
    zip_code: str = Field(..., alias="zipCode")
    country: str = "India"

    class Config:
        populate_by_name = True


class OrderLine(BaseModel):
    book_id: str = Field(..., alias="bookId")
    quantity: int = Field(..., gt=0)

    class Config:
        populate_by_name = True


class OrderPayload(BaseModel):
    items: List[OrderLine]
    shipping_address: ShippingAddress = Field(..., alias="shippingAddress")
    payment_method: str = Field(..., alias="paymentMethod")
    total: float
    subtotal: float
    shipping_cost: float = Field(..., alias="shippingCost")
    coupon_discount: float = Field(default=0, alias="couponDiscount")
    applied_coupon: Optional[AppliedCoupon] = Field(default=None, alias="appliedCoupon")

    class Config:
        populate_by_name = True


class Order(BaseModel):
    id: str = Field(..., alias="_id")
    order_number: Optional[str] = Field(default=None, alias="orderNumber")
    total: Optional[float] = None
    subtotal: Optional[float] = None
    shipping_cost: Optional[float] = Field(default=None, alias="shippingCost")
    order_status: Optional[str] = Field(default=None, alias="orderStatus")
    payment_status: Optional[str] = Field(default=None, alias="paymentStatus")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
        extra = "allow"


class GatewayOrder(BaseModel):
    id: str
    amount: int
    currency: str = "INR"


class PaymentIntent(BaseModel):
    key_id: str
    order: GatewayOrder


class CheckoutSummary(BaseModel):
    subtotal: float
    coupon_discount: float
    discounted_subtotal: float
    shipping_cost: int
    total: float
    shipping: ShippingInfo


class OrderList(BaseModel):
    orders: List[Order] = []
    pagination: Dict[str, Any] = {}
