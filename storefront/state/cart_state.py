import logging
from typing import Any, Dict, List, Optional

from storefront.events import AuthEvent, EventBus
from storefront.exceptions import AuthenticationRequired, StorefrontError, ValidationFailed
from storefront.schemas.book_schemas import Book
from storefront.schemas.cart_schemas import (
    AppliedCoupon,
    CartAddRequest,
    CartItem,
    CartSnapshot,
    CartUpdateRequest,
)
from storefront.services.api_client import ApiClient
from storefront.services.shipping_service import calculate_shipping_charges

logger = logging.getLogger(__name__)


def items_from_response(data: Dict[str, Any]) -> Optional[List[CartItem]]:
    """Mutations answer {"cart": {"items": [...]}}, GET answers {"items": [...]}."""
    cart = data.get("cart", data) if isinstance(data, dict) else None
    if not cart or cart.get("items") is None:
        return None
    return [
        CartItem(book=item["book"], quantity=item["quantity"])
        for item in cart["items"]
    ]


class CartState:
    """
    The customer's cart.

    Every mutation round-trips to the backend and replaces the whole item
    list with the backend's answer. Two overlapping mutations therefore
    resolve last-response-wins on the entire list.
    """

    def __init__(
        self,
        api: ApiClient,
        events: EventBus,
        auth_ready_timeout: float = 2.0,
    ):
        self.api = api
        self.events = events
        self.auth_ready_timeout = auth_ready_timeout

        self.items: List[CartItem] = []
        self.total: float = 0
        self.item_count: int = 0
        self.coupon_discount: float = 0
        self.applied_coupon: Optional[AppliedCoupon] = None

        self.is_authenticated = False
        self.user = None

        self.events.on(AuthEvent.LOGIN, self._on_login)
        self.events.on(AuthEvent.LOGOUT, self._on_logout)

    def close(self) -> None:
        self.events.off(AuthEvent.LOGIN, self._on_login)
        self.events.off(AuthEvent.LOGOUT, self._on_logout)

    # -------------------------
    # Auth bridge
    # -------------------------
    def _on_login(self, user) -> None:
        self.is_authenticated = True
        self.user = user

        if not self.api.auth_ready.wait(self.auth_ready_timeout):
            logger.warning("Authorization context not ready, cart not loaded")
            return

        try:
            self.load_from_server()
        except (StorefrontError, KeyError, ValueError) as e:
            # a failed or unreadable hydrate leaves the cart empty; the next mutation resyncs it
            logger.error(f"Failed to load cart from server: {e}")

    def _on_logout(self, _data=None) -> None:
        # server copy is kept for the next login
        logger.info(f"Clearing {len(self.items)} cart items locally on logout")
        self._reset()
        self.is_authenticated = False
        self.user = None

    # -------------------------
    # Derived state
    # -------------------------
    def _sync(self, items: Optional[List[CartItem]]) -> None:
        if items is None:
            return
        self.items = list(items)
        self._calculate_totals()

    def _calculate_totals(self) -> None:
        self.total = sum(item.book.price * item.quantity for item in self.items)
        self.item_count = sum(item.quantity for item in self.items)

    def _reset(self) -> None:
        self.items = []
        self.coupon_discount = 0
        self.applied_coupon = None
        self._calculate_totals()

    def _require_login(self, message: str) -> None:
        if not self.is_authenticated:
            raise AuthenticationRequired(message)

    # -------------------------
    # Server-backed operations
    # -------------------------
    def load_from_server(self) -> None:
        data = self.api.get("/api/cart", error_message="Failed to load cart")
        items = items_from_response(data)
        if items is None:
            logger.info("No cart items found on server")
            return
        self._sync(items)
        logger.info(f"Cart loaded from server ({len(self.items)} lines)")

    def add_to_cart(self, book: Book, quantity: int = 1) -> None:
        self._require_login("Please login to add items to cart")

        if quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")

        if book.stock < quantity:
            raise ValidationFailed("Not enough stock available")

        existing = self.get_cart_item(book.id)
        current_quantity = existing.quantity if existing else 0

        if current_quantity + quantity > book.stock:
            raise ValidationFailed("Cannot add more items than available stock")

        payload = CartAddRequest(book_id=book.id, quantity=quantity)
        data = self.api.post(
            "/api/cart/add",
            json=payload.model_dump(by_alias=True),
            error_message="Failed to add to cart",
        )
        self._sync(items_from_response(data))
        logger.info(f"{book.title} added to cart!")

    def remove_from_cart(self, book_id: str) -> None:
        self._require_login("Please login to manage cart")

        data = self.api.delete(
            f"/api/cart/remove/{book_id}",
            error_message="Failed to remove from cart",
        )
        self._sync(items_from_response(data))
        logger.info("Item removed from cart")

    def update_quantity(self, book_id: str, quantity: int) -> None:
        self._require_login("Please login to manage cart")

        if quantity <= 0:
            self.remove_from_cart(book_id)
            return

        item = self.get_cart_item(book_id)
        if item and quantity > item.book.stock:
            raise ValidationFailed("Cannot exceed available stock")

        payload = CartUpdateRequest(book_id=book_id, quantity=quantity)
        data = self.api.put(
            "/api/cart/update",
            json=payload.model_dump(by_alias=True),
            error_message="Failed to update quantity",
        )
        self._sync(items_from_response(data))

    def clear_cart(self) -> None:
        if self.is_authenticated:
            self.api.delete("/api/cart/clear", error_message="Failed to clear cart")
        self._reset()
        logger.info("Cart cleared")

    # -------------------------
    # Queries
    # -------------------------
    def get_cart_item(self, book_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.book.id == book_id), None)

    def is_in_cart(self, book_id: str) -> bool:
        return self.get_cart_item(book_id) is not None

    # -------------------------
    # Coupon
    # -------------------------
    def apply_coupon(self, discount: float, coupon: AppliedCoupon) -> None:
        # discount was computed by the backend; never recomputed here
        self.coupon_discount = discount
        self.applied_coupon = coupon

    def remove_coupon(self) -> None:
        self.coupon_discount = 0
        self.applied_coupon = None

    def get_discounted_total(self) -> float:
        return max(0, self.total - self.coupon_discount)

    def get_final_total(self, pincode: Optional[str] = None) -> float:
        discounted = self.get_discounted_total()
        return discounted + calculate_shipping_charges(pincode, discounted)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            items=list(self.items),
            total=self.total,
            item_count=self.item_count,
            coupon_discount=self.coupon_discount,
            applied_coupon=self.applied_coupon,
        )
