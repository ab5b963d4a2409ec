import logging
from typing import Optional

from storefront.constants.order_status import PAYMENT_PAID
from storefront.exceptions import ValidationFailed
from storefront.schemas.seller_payment_schemas import (
    AdminOrderList,
    SellerPayment,
    SettlementFigures,
)
from storefront.services.api_client import ApiClient
from storefront.services.settlement_service import (
    can_transition,
    compute_settlement,
    figures_match,
    validate_commission_rate,
)
from storefront.utils.pagination import build_query_params

logger = logging.getLogger(__name__)


class AdminPaymentsService:
    """Seller payouts as the admin sees them: shipping, commission, mark paid."""

    def __init__(self, api: ApiClient, default_commission_rate: float = 2.5):
        self.api = api
        self.default_commission_rate = default_commission_rate

    def list_orders(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        status: Optional[str] = None,
    ) -> AdminOrderList:
        params = build_query_params(page, limit, search=search, status=status)
        data = self.api.get(
            "/api/admin/orders",
            params=params,
            error_message="Failed to load orders",
        )
        orders = AdminOrderList.model_validate(data)

        for order in orders.orders:
            for payment in order.seller_payments:
                figures_match(payment, default_rate=self.default_commission_rate)
        return orders

    def update_shipping(self, order_id: str, shipping_cost) -> dict:
        try:
            shipping_cost = float(shipping_cost)
        except (TypeError, ValueError):
            raise ValidationFailed("Please enter a valid shipping amount")

        if shipping_cost < 0:
            raise ValidationFailed("Shipping charges cannot be negative")

        data = self.api.patch(
            f"/api/admin/orders/{order_id}/shipping",
            json={"shippingCost": shipping_cost},
            error_message="Failed to update shipping charges",
        )
        logger.info("Shipping charges updated successfully")
        return data

    def mark_seller_paid(self, order_id: str, payment: SellerPayment, notes: str = "") -> dict:
        if not can_transition(payment.payment_status, PAYMENT_PAID):
            raise ValidationFailed("Payment is already marked as paid")

        data = self.api.patch(
            f"/api/admin/orders/{order_id}/seller-payment/{payment.seller.id}",
            json={"paymentStatus": PAYMENT_PAID, "notes": notes},
            error_message="Failed to update payment status",
        )
        logger.info("Payment status updated successfully")
        return data

    def preview_commission(self, payment: SellerPayment, commission_rate=None) -> SettlementFigures:
        # no rate means the order falls back to the global default
        return compute_settlement(
            payment.items_total,
            commission_rate,
            payment.shipping_charges,
            default_rate=self.default_commission_rate,
        )

    def update_seller_commission(self, order_id: str, seller_id: str, commission_rate) -> dict:
        rate = validate_commission_rate(commission_rate)

        data = self.api.patch(
            f"/api/admin/orders/{order_id}/seller-payment/{seller_id}/commission",
            json={"commissionRate": rate},
            error_message="Failed to update commission rate",
        )
        logger.info("Commission rate updated successfully")
        return data

    def update_default_commission(self, commission_rate) -> dict:
        rate = validate_commission_rate(commission_rate)

        data = self.api.patch(
            "/api/admin/settings/commission",
            json={"commissionRate": rate},
            error_message="Failed to update commission rate",
        )
        self.default_commission_rate = rate
        logger.info("Commission rate updated successfully")
        return data
