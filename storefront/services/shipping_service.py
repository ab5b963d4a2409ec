import re
from typing import Optional

from storefront.schemas.shipping_schemas import PincodeValidation, ShippingInfo

FREE_SHIPPING_THRESHOLD = 2000
WEST_BENGAL_SHIPPING = 70
OTHER_STATES_SHIPPING = 100

# closed intervals; 744000-799999 belongs to other north-eastern states
WEST_BENGAL_PIN_RANGES = [
    (700000, 743999),
]


def _clean_pincode(pincode) -> str:
    return re.sub(r"\D", "", pincode)


def is_west_bengal_pincode(pincode: Optional[str]) -> bool:
    if not pincode or not isinstance(pincode, str):
        return False

    clean = _clean_pincode(pincode)
    if len(clean) != 6:
        return False

    number = int(clean)
    return any(start <= number <= end for start, end in WEST_BENGAL_PIN_RANGES)


def calculate_shipping_charges(pincode: Optional[str], subtotal: float = 0) -> int:
    """
    Shipping charge for an order.

    Free at or above the threshold, otherwise a flat West Bengal rate or a
    flat rate for everywhere else. A malformed PIN code is simply not a West
    Bengal PIN code; form validation is `validate_pincode`'s job.
    """
    if subtotal >= FREE_SHIPPING_THRESHOLD:
        return 0

    if is_west_bengal_pincode(pincode):
        return WEST_BENGAL_SHIPPING
    return OTHER_STATES_SHIPPING


def get_shipping_info(pincode: Optional[str], subtotal: float = 0) -> ShippingInfo:
    charges = calculate_shipping_charges(pincode, subtotal)

    if charges == 0:
        return ShippingInfo(charges=0, description="FREE Shipping", region="All India")

    region = "West Bengal" if is_west_bengal_pincode(pincode) else "Other States"
    return ShippingInfo(
        charges=charges,
        description=f"₹{charges} Shipping",
        region=region,
    )


def validate_pincode(pincode: Optional[str]) -> PincodeValidation:
    if not pincode:
        return PincodeValidation(is_valid=False, message="PIN code is required")

    clean = _clean_pincode(str(pincode))

    if len(clean) != 6:
        return PincodeValidation(is_valid=False, message="PIN code must be 6 digits")

    if clean.startswith("0"):
        return PincodeValidation(is_valid=False, message="PIN code cannot start with 0")

    return PincodeValidation(is_valid=True, message="Valid PIN code")
