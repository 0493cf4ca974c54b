"""Display helpers for amounts (presentation only, never used in calculations)."""

CURRENCY_SYMBOL = "₹"


def group_indian(integer_part: str) -> str:
    """Group digits the Indian way: last three, then pairs (12,34,567)."""
    if len(integer_part) <= 3:
        return integer_part
    head, tail = integer_part[:-3], integer_part[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format an amount as e.g. '₹1,23,456.78' (2 decimals, sign in front)."""
    sign = "-" if amount < 0 else ""
    integer_part, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}{symbol}{group_indian(integer_part)}.{fraction}"
