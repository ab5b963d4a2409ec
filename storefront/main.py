import logging
from typing import Optional

import requests

from storefront.config import Settings, settings
from storefront.database import create_storage_engine
from storefront.events import EventBus
from storefront.services.admin_orders_service import AdminOrdersService
from storefront.services.admin_payments_service import AdminPaymentsService
from storefront.services.api_client import ApiClient
from storefront.services.checkout_service import CheckoutService
from storefront.services.coupon_service import CouponService
from storefront.services.local_storage import LocalStorage
from storefront.services.order_service import OrderService
from storefront.services.seller_payments_service import SellerPaymentsService
from storefront.state.auth_session import AuthSession
from storefront.state.cart_state import CartState
from storefront.state.wishlist_state import WishlistState

logger = logging.getLogger(__name__)


class Storefront:
    """One customer/seller/admin session against the bookstore backend."""

    def __init__(
        self,
        config: Settings = settings,
        http_session: Optional[requests.Session] = None,
        engine=None,
    ):
        self.settings = config

        self.api = ApiClient(
            config.api_url,
            session=http_session,
            timeout=config.request_timeout,
        )
        self.storage = LocalStorage(engine or create_storage_engine(config.storage_url))
        self.events = EventBus()

        self.auth = AuthSession(self.api, self.storage, self.events)
        self.cart = CartState(
            self.api,
            self.events,
            auth_ready_timeout=config.auth_ready_timeout,
        )
        self.wishlist = WishlistState(self.storage, self.events)

        self.coupons = CouponService(self.api, self.cart)
        self.checkout = CheckoutService(self.api, self.cart)
        self.orders = OrderService(self.api)
        self.seller_payments = SellerPaymentsService(self.api)
        self.admin_orders = AdminOrdersService(self.api)
        self.admin_payments = AdminPaymentsService(
            self.api,
            default_commission_rate=config.default_commission_rate,
        )

    def start(self):
        user = self.auth.restore()
        if user:
            logger.info(f"Session restored for {user.email}")
        return user

    def close(self) -> None:
        self.cart.close()
        self.wishlist.close()
        self.auth.close()
        self.api.close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def create_storefront(**overrides) -> Storefront:
    config = Settings(**overrides) if overrides else settings
    return Storefront(config)
