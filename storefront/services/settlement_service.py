import logging
from typing import Optional

from storefront.config import settings
from storefront.constants.order_status import ALLOWED_PAYMENT_TRANSITIONS
from storefront.exceptions import ValidationFailed
from storefront.schemas.seller_payment_schemas import SellerPayment, SettlementFigures

logger = logging.getLogger(__name__)

# figures are rupees with paise; anything below this is rounding noise
TOLERANCE = 0.01


def calculate_admin_commission(items_total: float, commission_rate: float) -> float:
    return round(items_total * commission_rate / 100, 2)


def calculate_net_amount(
    items_total: float,
    commission_rate: float,
    shipping_charges: float = 0,
) -> float:
    commission = calculate_admin_commission(items_total, commission_rate)
    return round(items_total - commission - shipping_charges, 2)


def validate_commission_rate(rate) -> float:
    try:
        rate = float(rate)
    except (TypeError, ValueError):
        raise ValidationFailed("Please enter a valid commission rate between 0 and 100")

    if rate < 0 or rate > 100:
        raise ValidationFailed("Please enter a valid commission rate between 0 and 100")
    return rate


def compute_settlement(
    items_total: float,
    commission_rate: Optional[float] = None,
    shipping_charges: float = 0,
    default_rate: Optional[float] = None,
) -> SettlementFigures:
    """
    Per-seller payout figures for one order.

    The backend is authoritative for these numbers; this is used to preview
    an edited commission rate and to check what the backend sent us.
    """
    commission_rate = validate_commission_rate(
        effective_commission_rate(commission_rate, default_rate)
    )

    return SettlementFigures(
        items_total=items_total,
        commission_rate=commission_rate,
        admin_commission=calculate_admin_commission(items_total, commission_rate),
        shipping_charges=shipping_charges,
        net_amount=calculate_net_amount(items_total, commission_rate, shipping_charges),
    )


def effective_commission_rate(
    commission_rate: Optional[float],
    default_rate: Optional[float] = None,
) -> float:
    if commission_rate is not None:
        return commission_rate
    if default_rate is not None:
        return default_rate
    return settings.default_commission_rate


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_PAYMENT_TRANSITIONS.get(current, [])


def figures_match(payment: SellerPayment, default_rate: Optional[float] = None) -> bool:
    """Compare server figures with a recomputation. Only logs; never raises on server data."""
    seller = payment.seller.id if payment.seller else "unknown"
    rate = effective_commission_rate(payment.commission_rate, default_rate)

    if not 0 <= rate <= 100:
        logger.warning(f"Settlement drift for seller {seller}: commission rate {rate} out of range")
        return False

    expected_commission = calculate_admin_commission(payment.items_total, rate)
    expected_net = calculate_net_amount(payment.items_total, rate, payment.shipping_charges)

    commission_ok = abs(expected_commission - payment.admin_commission) < TOLERANCE
    net_ok = abs(expected_net - payment.net_amount) < TOLERANCE

    if not (commission_ok and net_ok):
        logger.warning(
            f"Settlement drift for seller {seller}: "
            f"server commission={payment.admin_commission} net={payment.net_amount}, "
            f"expected commission={expected_commission} net={expected_net}"
        )
        return False
    return True
