import logging
from typing import Optional

from storefront.constants.order_status import ORDER_STATUSES
from storefront.exceptions import ValidationFailed
from storefront.schemas.seller_payment_schemas import AdminOrder
from storefront.services.api_client import ApiClient

logger = logging.getLogger(__name__)


class AdminOrdersService:
    def __init__(self, api: ApiClient):
        self.api = api

    def get_order(self, order_id: str) -> AdminOrder:
        data = self.api.get(
            f"/api/admin/orders/{order_id}",
            error_message="Failed to load order",
        )
        return AdminOrder.model_validate(data.get("order", data))

    def update_status(
        self,
        order_id: str,
        order_status: str,
        tracking_number: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> dict:
        if order_status not in ORDER_STATUSES:
            raise ValidationFailed(f"Unknown order status: {order_status}")

        data = self.api.patch(
            f"/api/admin/orders/{order_id}/status",
            json={
                "orderStatus": order_status,
                "trackingNumber": tracking_number,
                "notes": notes,
            },
            error_message="Failed to update order status",
        )
        logger.info("Order status updated successfully")
        return data

    def process_refund(self, order_id: str, refund_amount, reason: str) -> dict:
        try:
            refund_amount = float(refund_amount)
        except (TypeError, ValueError):
            raise ValidationFailed("Please enter a valid refund amount")

        if refund_amount <= 0:
            raise ValidationFailed("Refund amount must be greater than zero")

        data = self.api.post(
            f"/api/admin/orders/{order_id}/refund",
            json={"refundAmount": refund_amount, "reason": reason},
            error_message="Failed to process refund",
        )
        logger.info("Refund processed successfully")
        return data
