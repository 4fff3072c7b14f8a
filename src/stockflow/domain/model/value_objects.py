"""Money and Quantity: the two immutable values an order line is made of.

Both validate on construction, so a line can never carry a fractional
cent or a non-positive quantity.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from stockflow.domain.exceptions import ValidationError

_CENT = Decimal("0.01")


@functools.total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in whole cents.

    Prices and totals are Decimal end to end; summing a thousand line
    totals gives exactly the same figure as adding them by hand.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        try:
            cents = self.amount.quantize(_CENT)
        except InvalidOperation as exc:
            raise ValidationError(f"Money amount {self.amount} is out of range") from exc
        if cents != self.amount:
            raise ValidationError(
                f"Money amount {self.amount} has more than two decimal places"
            )
        object.__setattr__(self, "amount", cents)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal(0), currency)

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = "USD") -> Money:
        """Parse user input; floats go through ``str`` first."""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = "USD") -> Money:
        result = Money.zero(currency)
        for amount in amounts:
            result = result + amount
        return result

    def __add__(self, other: Money) -> Money:
        self._same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._same_currency(other)
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"${self.amount:,.2f}"

    def _same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")


@dataclass(frozen=True)
class Quantity:
    """Units on an order line: a positive int."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
