"""Display helpers for monetary amounts."""

from babel.numbers import format_currency as babel_format_currency

DEFAULT_CURRENCY = "DZD"
DEFAULT_LOCALE = "ar_DZ"


def format_currency(
    amount: float,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Format an amount for display using the locale's currency conventions.

    The locale's standard currency pattern fixes two fraction digits
    regardless of the currency, e.g. "$1,234.50" for ("USD", "en_US").
    """
    return babel_format_currency(
        amount,
        currency,
        locale=locale,
        currency_digits=False,
    )
