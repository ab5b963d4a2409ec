import logging

from storefront.exceptions import ServerRejected, ValidationFailed
from storefront.schemas.cart_schemas import AppliedCoupon, CouponValidation
from storefront.services.api_client import ApiClient
from storefront.state.cart_state import CartState

logger = logging.getLogger(__name__)


class CouponService:
    """Coupon math lives on the backend; we only ask it and store the answer."""

    def __init__(self, api: ApiClient, cart: CartState):
        self.api = api
        self.cart = cart

    def validate(self, code: str, order_amount: float) -> AppliedCoupon:
        code = (code or "").strip()
        if not code:
            raise ValidationFailed("Please enter a coupon code")

        data = self.api.post(
            "/api/coupons/validate",
            json={"code": code.upper(), "orderAmount": order_amount},
            error_message="Invalid coupon code",
        )

        result = CouponValidation.model_validate(data)
        if not result.valid or result.coupon is None:
            raise ServerRejected(result.message or "Invalid coupon code", payload=data)
        return result.coupon

    def apply(self, code: str) -> AppliedCoupon:
        coupon = self.validate(code, self.cart.total)
        self.cart.apply_coupon(coupon.discount, coupon)
        logger.info(f"Coupon {coupon.code} applied, discount {coupon.discount}")
        return coupon

    def remove(self) -> None:
        self.cart.remove_coupon()
