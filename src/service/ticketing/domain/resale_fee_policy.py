"""
Resale Fee Policy

Pure pricing rules for resale and primary purchases. No I/O.

Seller and buyer are charged independently: the seller's payout is the list
price minus a 5% platform commission, and the buyer pays the list price plus
a 5% service fee. The two adjustments are kept separate and are never netted
into a combined rate.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

import attrs

from src.platform.exception.exceptions import InvalidResalePrice


Amount = Union[int, float, Decimal, str]

PLATFORM_COMMISSION_RATE = Decimal('0.05')
BUYER_SERVICE_FEE_RATE = Decimal('0.05')

_WHOLE_UNIT = Decimal('1')
_CENT = Decimal('0.01')


def to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        # repr() gives the shortest round-tripping literal, so 0.1 stays 0.1
        return Decimal(repr(amount))
    return Decimal(amount)


def round_to_unit(amount: Decimal) -> int:
    """Nearest whole currency unit, halves rounded up."""
    return int(amount.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP))


def platform_commission(resale_price: Amount) -> Decimal:
    return to_decimal(resale_price) * PLATFORM_COMMISSION_RATE


def seller_payout_quote(resale_price: Amount) -> int:
    price = to_decimal(resale_price)
    return round_to_unit(price * (1 - PLATFORM_COMMISSION_RATE))


def buyer_service_fee(resale_price: Amount) -> Decimal:
    return to_decimal(resale_price) * BUYER_SERVICE_FEE_RATE


def buyer_total(resale_price: Amount) -> Decimal:
    """Exact price plus fee; cent-precision prices keep this to four decimals."""
    return to_decimal(resale_price) * (1 + BUYER_SERVICE_FEE_RATE)


def primary_purchase_total(price: Amount, quantity: int) -> int:
    """Checkout total for primary tickets, service fee included."""
    subtotal = to_decimal(price) * quantity
    return round_to_unit(subtotal * (1 + BUYER_SERVICE_FEE_RATE))


def validate_resale_price(resale_price: Amount, *, max_price: Amount) -> Decimal:
    try:
        price = to_decimal(resale_price)
    except (ArithmeticError, ValueError, TypeError):
        raise InvalidResalePrice(f'Invalid resale price: {resale_price!r}')

    if not price.is_finite() or price <= 0:
        raise InvalidResalePrice('Resale price must be greater than zero')
    if price > to_decimal(max_price):
        raise InvalidResalePrice(f'Resale price cannot exceed {max_price}')
    if price != price.quantize(_CENT, rounding=ROUND_HALF_UP):
        raise InvalidResalePrice('Resale price cannot have more than two decimal places')
    return price


@attrs.define(frozen=True)
class ResaleQuote:
    resale_price: Decimal
    platform_commission: Decimal
    seller_payout: int
    buyer_service_fee: Decimal
    buyer_total: Decimal

    @classmethod
    def for_price(cls, resale_price: Amount) -> 'ResaleQuote':
        price = to_decimal(resale_price)
        return cls(
            resale_price=price,
            platform_commission=platform_commission(price),
            seller_payout=seller_payout_quote(price),
            buyer_service_fee=buyer_service_fee(price),
            buyer_total=buyer_total(price),
        )
