from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class SellerRef(BaseModel):
    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class SellerPayment(BaseModel):
    seller: SellerRef
    items_total: float = Field(..., alias="itemsTotal")
    # None means the global default rate applies
    commission_rate: Optional[float] = Field(default=None, alias="commissionRate")
    admin_commission: float = Field(..., alias="adminCommission")
    shipping_charges: float = Field(default=0, alias="shippingCharges")
    net_amount: float = Field(..., alias="netAmount")
    payment_status: Literal["due", "paid"] = Field(default="due", alias="paymentStatus")
    paid_at: Optional[datetime] = Field(default=None, alias="paidAt")
    notes: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "allow"


class AdminOrder(BaseModel):
    id: str = Field(..., alias="_id")
    order_number: Optional[str] = Field(default=None, alias="orderNumber")
    shipping_cost: float = Field(default=0, alias="shippingCost")
    total: Optional[float] = None
    order_status: Optional[str] = Field(default=None, alias="orderStatus")
    seller_payments: List[SellerPayment] = Field(default_factory=list, alias="sellerPayments")

    class Config:
        populate_by_name = True
        extra = "allow"


class AdminOrderList(BaseModel):
    orders: List[AdminOrder] = []
    pagination: Dict[str, Any] = {}


class SellerPaymentRecord(SellerPayment):
    seller: Optional[SellerRef] = None
    order_number: Optional[str] = Field(default=None, alias="orderNumber")
    order_date: Optional[datetime] = Field(default=None, alias="orderDate")
    delivered_at: Optional[datetime] = Field(default=None, alias="deliveredAt")
    customer: Optional[Dict[str, Any]] = None


class SellerPaymentList(BaseModel):
    payments: List[SellerPaymentRecord] = []
    pagination: Dict[str, Any] = {}


class SettlementFigures(BaseModel):
    items_total: float
    commission_rate: float
    admin_commission: float
    shipping_charges: float
    net_amount: float
