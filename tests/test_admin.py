import logging

import pytest

from storefront.exceptions import ServerRejected, ValidationFailed
from storefront.schemas.order_schemas import ShippingAddress


def _payment(admin, seller_id):
    order = admin.admin_orders.get_order("o1")
    return next(p for p in order.seller_payments if p.seller.id == seller_id)


# -------------------------
# Admin: seller payments
# -------------------------
def test_list_orders_checks_figures(admin, backend, caplog):
    backend.admin_orders["o1"]["sellerPayments"][0]["netAmount"] = 900

    with caplog.at_level(logging.WARNING):
        orders = admin.admin_payments.list_orders(status="delivered", search="BB")

    assert [o.order_number for o in orders.orders] == ["BB-0001"]
    # server figures are shown as-is
    assert orders.orders[0].seller_payments[0].net_amount == 900
    assert "s1" in caplog.text


def test_list_orders_drops_all_filter(admin, backend):
    assert len(admin.admin_payments.list_orders(status="all").orders) == 1


def test_non_admin_is_rejected(logged_in):
    with pytest.raises(ServerRejected, match="Admin access required"):
        logged_in.admin_payments.list_orders()


def test_mark_seller_paid(admin, backend):
    payment = _payment(admin, "s1")

    admin.admin_payments.mark_seller_paid("o1", payment, notes="UPI ref 42")

    stored = backend.admin_orders["o1"]["sellerPayments"][0]
    assert stored["paymentStatus"] == "paid"
    assert stored["notes"] == "UPI ref 42"
    assert _payment(admin, "s1").paid_at is not None


def test_paid_payment_cannot_be_paid_again(admin, backend):
    payment = _payment(admin, "s2")

    with pytest.raises(ValidationFailed, match="already marked as paid"):
        admin.admin_payments.mark_seller_paid("o1", payment)

    assert not backend.called("PATCH", "/api/admin/orders/o1/seller-payment/s2")


def test_preview_commission(admin):
    figures = admin.admin_payments.preview_commission(_payment(admin, "s1"), "10")

    assert figures.admin_commission == 100
    assert figures.net_amount == 830


def test_update_seller_commission(admin, backend):
    admin.admin_payments.update_seller_commission("o1", "s1", 10)

    updated = _payment(admin, "s1")
    assert updated.commission_rate == 10
    assert updated.net_amount == 830


@pytest.mark.parametrize("rate", [-1, 101, "ten", None])
def test_bad_commission_rate_is_rejected(admin, backend, rate):
    with pytest.raises(ValidationFailed, match="between 0 and 100"):
        admin.admin_payments.update_seller_commission("o1", "s1", rate)
    assert not backend.called("PATCH", "/api/admin/orders/o1/seller-payment/s1/commission")


def test_update_default_commission(admin, backend):
    admin.admin_payments.update_default_commission(5)

    assert backend.commission_rate == 5
    assert admin.admin_payments.default_commission_rate == 5


def test_update_shipping(admin, backend):
    admin.admin_payments.update_shipping("o1", "120")
    assert backend.admin_orders["o1"]["shippingCost"] == 120


def test_negative_shipping_is_rejected(admin, backend):
    with pytest.raises(ValidationFailed):
        admin.admin_payments.update_shipping("o1", -5)
    assert not backend.called("PATCH", "/api/admin/orders/o1/shipping")


# -------------------------
# Admin: orders
# -------------------------
def test_update_status(admin, backend):
    admin.admin_orders.update_status("o1", "shipped", tracking_number="TRK1")

    assert backend.admin_orders["o1"]["orderStatus"] == "shipped"
    assert backend.admin_orders["o1"]["trackingNumber"] == "TRK1"


def test_unknown_status_is_rejected(admin):
    with pytest.raises(ValidationFailed):
        admin.admin_orders.update_status("o1", "lost")


def test_refund(admin, backend):
    admin.admin_orders.process_refund("o1", 500, "Damaged copy")
    assert backend.admin_orders["o1"]["refund"] == {"amount": 500, "reason": "Damaged copy"}


def test_refund_must_be_positive(admin, backend):
    with pytest.raises(ValidationFailed):
        admin.admin_orders.process_refund("o1", 0, "Nothing")
    assert not backend.called("POST", "/api/admin/orders/o1/refund")


def test_refund_over_total_reports_server_message(admin):
    with pytest.raises(ServerRejected, match="exceeds order total"):
        admin.admin_orders.process_refund("o1", 5000, "Too much")


# -------------------------
# Seller
# -------------------------
def test_seller_sees_own_payments(storefront):
    storefront.auth.login("seller@example.com", "secret")

    payments = storefront.seller_payments.list_payments()

    assert [p.order_number for p in payments.payments] == ["BB-0001"]
    assert storefront.seller_payments.total_due(payments) == 905


def test_seller_filters_paid(storefront):
    storefront.auth.login("seller@example.com", "secret")

    payments = storefront.seller_payments.list_payments(status="paid")

    assert payments.payments == []
    assert storefront.seller_payments.total_due(payments) == 0


# -------------------------
# Customer orders
# -------------------------
def _place_order(store, books):
    store.cart.add_to_cart(books["b1"], 1)
    return store.checkout.place_order(
        ShippingAddress(
            name="Reader",
            email="reader@example.com",
            phone="9800000000",
            street="1 Park Street",
            city="Kolkata",
            state="West Bengal",
            zip_code="700016",
        )
    )


def test_my_orders(logged_in, books):
    placed = _place_order(logged_in, books)

    orders = logged_in.orders.list_my_orders()

    assert [o.id for o in orders.orders] == [placed.id]
    assert logged_in.orders.get_order(placed.id).total == 170


def test_cancel_order(logged_in, books):
    placed = _place_order(logged_in, books)

    cancelled = logged_in.orders.cancel_order(placed.id, "  Ordered twice ")

    assert cancelled.order_status == "cancelled"
    assert cancelled.cancellationReason == "Ordered twice"


def test_cancel_requires_reason(logged_in, books, backend):
    placed = _place_order(logged_in, books)

    with pytest.raises(ValidationFailed, match="reason for cancellation"):
        logged_in.orders.cancel_order(placed.id, " ")

    assert not backend.called("PATCH", f"/api/orders/{placed.id}/cancel")


def test_payment_without_rate_follows_default(admin, backend, caplog):
    stored = backend.admin_orders["o1"]["sellerPayments"][0]
    del stored["commissionRate"]
    stored["adminCommission"] = 100
    stored["netAmount"] = 830

    admin.admin_payments.update_default_commission(10)
    with caplog.at_level(logging.WARNING):
        orders = admin.admin_payments.list_orders()

    payment = orders.orders[0].seller_payments[0]
    assert payment.commission_rate is None
    assert "Settlement drift for seller s1" not in caplog.text

    figures = admin.admin_payments.preview_commission(payment)
    assert figures.commission_rate == 10
    assert figures.net_amount == 830


def test_preview_without_rate_uses_updated_default(admin):
    admin.admin_payments.update_default_commission(10)

    figures = admin.admin_payments.preview_commission(_payment(admin, "s1"), None)

    assert figures.admin_commission == 100


def test_out_of_range_server_rate_does_not_break_listing(admin, backend):
    backend.admin_orders["o1"]["sellerPayments"][1]["commissionRate"] = 150

    orders = admin.admin_payments.list_orders()

    assert orders.orders[0].seller_payments[1].commission_rate == 150
