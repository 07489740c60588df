"""
Design (utils.py)
- Purpose: Reusable helpers: price formatting for display and the desktop notification wrapper.
- Inputs: Various helper parameters (price, title/message).
- Outputs: Formatted strings; notification delivery flag.
- Side effects: notify_desktop shows an OS notification through plyer.
- Thread-safety: Stateless; safe to call from any thread.
"""

import logging

from plyer import notification

from .config import PRICE_CURRENCY

logger = logging.getLogger(__name__)

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "CHF": "CHF "}


def format_price(price: float, currency: str = PRICE_CURRENCY) -> str:
    """
    Purpose: Render a price with currency symbol, thousands separators and two decimals.
    Inputs: price (non-negative number), currency (ISO code).
    Outputs: e.g. 900000 -> "$900,000.00"; unknown codes are suffixed ("1.00 XYZ").
    Side Effects: None.
    """
    amount = f"{price:,.2f}"
    symbol = _CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{amount} {currency}"
    return f"{symbol}{amount}"


def notify_desktop(title: str, message: str, timeout: int = 5) -> bool:
    """
    Purpose: Show a desktop notification.
    Outputs: True if plyer accepted it, False when the platform has no backend.
    Side Effects: OS notification.
    """
    try:
        notification.notify(title=title, message=message, timeout=timeout)
    except NotImplementedError:
        logger.info("Desktop notifications not supported on this platform")
        return False
    return True
