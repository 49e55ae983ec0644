from decimal import ROUND_HALF_UP, Decimal

from apps.exchange.domain.models import Money, round_money


def format_money(money: Money) -> str:
    """Render an amount the way the dashboard shows it, e.g. "$12.50" or "12.50 дин"."""
    formatted = str(round_money(money.amount))

    if money.currency == "USD":
        return "$" + formatted
    if money.currency == "EUR":
        return "€" + formatted
    if money.currency == "GBP":
        return "£" + formatted
    if money.currency == "RSD":
        return formatted + " дин"
    if money.currency == "JPY":
        return "¥" + str(money.amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if money.currency == "CHF":
        return "CHF " + formatted
    return f"{formatted} {money.currency}"
