ORDER_STATUSES = [
    "pending",
    "confirmed",
    "processing",
    "shipped",
    "delivered",
    "cancelled",
    "returned",
]

PAYMENT_DUE = "due"
PAYMENT_PAID = "paid"

# seller payouts only ever move forward, and only by an admin
ALLOWED_PAYMENT_TRANSITIONS = {
    PAYMENT_DUE: [PAYMENT_PAID],
    PAYMENT_PAID: [],
}

PAYMENT_METHODS = ["razorpay", "cod"]
