"""Promo preview. Uses the same engine as the booking transaction."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from experiences.domain import DiscountKind, Money, PromoCode, PromoEngine, PromoRejection
from experiences.domain.errors import InvalidPromoRequestError
from experiences.domain.value_objects import MAX_AMOUNT, round_money


@dataclass(frozen=True)
class PromoPreview:
    valid: bool
    code: str
    message: str
    error: str | None = None
    kind: DiscountKind | None = None
    value: Decimal | None = None
    discount: Decimal | None = None
    final_amount: Decimal | None = None
    min_amount: Decimal | None = None
    description: str | None = None


class PromoService:
    def __init__(self, engine: PromoEngine, currency_symbol: str = "") -> None:
        self._engine = engine
        self._currency = currency_symbol

    def list_codes(self) -> tuple[PromoCode, ...]:
        return self._engine.codes

    def preview(self, code: Any, amount: Any) -> PromoPreview:
        """Show what a code would do to an amount without booking anything.

        Raises:
            InvalidPromoRequestError: If code is missing or amount is not positive
                or is larger than a booking total can be.
        """
        if code is None or not str(code).strip():
            raise InvalidPromoRequestError("Promo code is required")
        try:
            parsed = Money.from_value(amount).amount
        except ValueError:
            raise InvalidPromoRequestError("Valid amount is required")
        if not 0 < parsed <= MAX_AMOUNT:
            raise InvalidPromoRequestError("Valid amount is required")

        evaluation = self._engine.evaluate(code, parsed)
        if evaluation.reason is PromoRejection.INVALID_CODE:
            return PromoPreview(
                valid=False,
                code=evaluation.code,
                error="Invalid promo code",
                message="The promo code you entered is not valid",
            )
        if evaluation.reason is PromoRejection.MINIMUM_NOT_MET:
            return PromoPreview(
                valid=False,
                code=evaluation.code,
                error="Minimum amount not met",
                message=(
                    "This promo code requires a minimum purchase of "
                    f"{self._currency}{evaluation.min_amount}"
                ),
                min_amount=evaluation.min_amount,
            )

        promo = evaluation.promo
        if promo.kind is DiscountKind.PERCENT:
            discount_text = f"{promo.value.normalize():f}%"
        else:
            discount_text = f"{self._currency}{promo.value.normalize():f}"
        return PromoPreview(
            valid=True,
            code=evaluation.code,
            message=f"{discount_text} discount applied successfully!",
            kind=promo.kind,
            value=promo.value,
            discount=evaluation.discount,
            final_amount=round_money(parsed - evaluation.discount),
            description=promo.description,
        )
