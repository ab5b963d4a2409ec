from typing import Optional, Union

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

Amount = Optional[Union[int, float, str]]


def _group_indian(whole: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(whole) <= 3:
        return whole

    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Amount, currency: str = "INR") -> str:
    if amount is None:
        return "₹0.00"

    rupees = float(amount)
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")

    sign = "-" if rupees < 0 else ""
    whole, fraction = f"{abs(rupees):.2f}".split(".")

    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"


def parse_currency(amount: Amount) -> float:
    if not amount:
        return 0
    return float(amount)


def format_price(price: Amount) -> str:
    if not price:
        return "₹0.00"
    return format_currency(price)
