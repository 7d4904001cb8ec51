"""Integer arithmetic for league money.

All prices, balances and amounts are int millions. No float, no Decimal.
"""


def millions_to_display(amount: int) -> str:
    """67 -> '67M€', -10 -> '-10M€'."""
    if amount < 0:
        return f"-{-amount:,}M€"
    return f"{amount:,}M€"


def market_sell_price(purchase_price: int) -> int:
    """Two thirds of ``purchase_price``, rounded half up to the nearest million.

    Integer-only: round(p * 2 / 3) == floor((4p + 3) / 6).
    """
    if purchase_price < 0:
        raise ValueError(f"Price must be non-negative, got {purchase_price}")
    return (4 * purchase_price + 3) // 6
