import logging
from typing import Optional

from storefront.exceptions import ValidationFailed
from storefront.schemas.order_schemas import Order, OrderList
from storefront.services.api_client import ApiClient
from storefront.utils.pagination import build_query_params

logger = logging.getLogger(__name__)


class OrderService:
    """The customer's own orders."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list_my_orders(self, page: int = 1, status: Optional[str] = None, limit: int = 10) -> OrderList:
        params = build_query_params(page, limit, status=status)
        data = self.api.get(
            "/api/orders/my-orders",
            params=params,
            error_message="Failed to load orders",
        )
        return OrderList.model_validate(data)

    def get_order(self, order_id: str) -> Order:
        data = self.api.get(f"/api/orders/{order_id}", error_message="Failed to load order")
        return Order.model_validate(data.get("order", data))

    def cancel_order(self, order_id: str, reason: str) -> Order:
        if not reason or not reason.strip():
            raise ValidationFailed("Please provide a reason for cancellation")

        data = self.api.patch(
            f"/api/orders/{order_id}/cancel",
            json={"reason": reason.strip()},
            error_message="Failed to cancel order",
        )
        logger.info("Order cancelled successfully")
        return Order.model_validate(data.get("order", data))
