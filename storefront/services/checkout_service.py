import logging
from typing import Optional, Tuple

from storefront.constants.order_status import PAYMENT_METHODS
from storefront.exceptions import StorefrontError, ValidationFailed
from storefront.schemas.order_schemas import (
    CheckoutSummary,
    Order,
    OrderLine,
    OrderPayload,
    PaymentIntent,
    ShippingAddress,
)
from storefront.services.api_client import ApiClient
from storefront.services.shipping_service import (
    calculate_shipping_charges,
    get_shipping_info,
)
from storefront.state.cart_state import CartState

logger = logging.getLogger(__name__)


class CheckoutService:
    def __init__(self, api: ApiClient, cart: CartState):
        self.api = api
        self.cart = cart

    def quote(self, pincode: Optional[str]) -> CheckoutSummary:
        # shipping is judged on the discounted subtotal, so a coupon can move
        # an order across the free-shipping line
        discounted = self.cart.get_discounted_total()
        shipping_cost = calculate_shipping_charges(pincode, discounted)

        return CheckoutSummary(
            subtotal=self.cart.total,
            coupon_discount=self.cart.coupon_discount,
            discounted_subtotal=discounted,
            shipping_cost=shipping_cost,
            total=discounted + shipping_cost,
            shipping=get_shipping_info(pincode, discounted),
        )

    def build_order_payload(
        self,
        address: ShippingAddress,
        payment_method: str,
    ) -> OrderPayload:
        if not self.cart.items:
            raise ValidationFailed("Your cart is empty")

        if payment_method not in PAYMENT_METHODS:
            raise ValidationFailed(f"Unsupported payment method: {payment_method}")

        summary = self.quote(address.zip_code)

        return OrderPayload(
            items=[
                OrderLine(book_id=item.book.id, quantity=item.quantity)
                for item in self.cart.items
            ],
            shipping_address=address,
            payment_method=payment_method,
            total=summary.total,
            subtotal=summary.discounted_subtotal,
            shipping_cost=summary.shipping_cost,
            coupon_discount=summary.coupon_discount,
            applied_coupon=self.cart.applied_coupon,
        )

    def _order_placed(self, data) -> Order:
        order = Order.model_validate(data["order"])

        # the order exists now; a failed cart clear must not hide that
        try:
            self.cart.clear_cart()
        except StorefrontError as e:
            logger.warning(f"Order {order.id} placed but cart was not cleared: {e}")

        logger.info(f"Order placed successfully! ({order.order_number or order.id})")
        return order

    # -------------------------
    # Cash on delivery
    # -------------------------
    def place_order(self, address: ShippingAddress, payment_method: str = "cod") -> Order:
        payload = self.build_order_payload(address, payment_method)

        data = self.api.post(
            "/api/orders",
            json=payload.model_dump(by_alias=True, mode="json"),
            error_message="Failed to place order",
        )
        return self._order_placed(data)

    # -------------------------
    # Razorpay
    # -------------------------
    def start_gateway_payment(self, address: ShippingAddress) -> Tuple[PaymentIntent, OrderPayload]:
        payload = self.build_order_payload(address, "razorpay")

        data = self.api.post(
            "/api/payment/create-order",
            json={"amount": payload.total},
            error_message="Failed to create payment order",
        )
        return PaymentIntent.model_validate(data), payload

    def verify_gateway_payment(
        self,
        razorpay_order_id: str,
        razorpay_payment_id: str,
        razorpay_signature: str,
        order_payload: OrderPayload,
    ) -> Order:
        data = self.api.post(
            "/api/payment/verify-payment",
            json={
                "razorpay_order_id": razorpay_order_id,
                "razorpay_payment_id": razorpay_payment_id,
                "razorpay_signature": razorpay_signature,
                "orderData": order_payload.model_dump(by_alias=True, mode="json"),
            },
            error_message="Payment verification failed",
        )
        return self._order_placed(data)
