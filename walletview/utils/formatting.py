import os
from typing import Optional


def _format_number(value: int, decimals: int) -> str:
    """Render integer base units as a decimal string without floats."""
    if decimals <= 0:
        return str(value)
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10 ** decimals)
    text = f"{sign}{whole}.{frac:0{decimals}d}"
    return text.rstrip("0").rstrip(".")


def format_amount(amount: Optional[int], unit: Optional[str] = None, plus: bool = False,
                  decimals: Optional[int] = None, settings=None) -> str:
    """
    Format a base-unit amount for display (e.g. 150000000 -> '1.5 BTC').

    Unit and decimals come from the explicit arguments, then `settings`
    (currency_unit / amount_decimals), then the WALLETVIEW_CURRENCY_UNIT and
    WALLETVIEW_AMOUNT_DECIMALS environment variables.
    """
    if amount is None:
        amount = 0

    try:
        value = int(amount)
    except (TypeError, ValueError):
        value = 0

    if settings is not None:
        unit = unit or settings.currency_unit
        decimals = settings.amount_decimals if decimals is None else decimals
    base_unit = unit or os.getenv("WALLETVIEW_CURRENCY_UNIT", "BTC")
    if decimals is None:
        try:
            decimals = int(os.getenv("WALLETVIEW_AMOUNT_DECIMALS", "8"))
        except ValueError:
            decimals = 8
    if decimals < 0:
        decimals = 0

    text = _format_number(value, decimals)
    if plus and value > 0:
        text = "+" + text
    return f"{text} {base_unit}"
