"""Promo engine: a pure function of (code, amount, catalog)."""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from experiences.domain.models import DiscountKind, PromoApplication, PromoCode
from experiences.domain.value_objects import round_money


class PromoRejection(Enum):
    INVALID_CODE = "invalid_code"
    MINIMUM_NOT_MET = "minimum_not_met"


@dataclass(frozen=True)
class PromoEvaluation:
    """Outcome of evaluating a code against an amount."""

    code: str
    applicable: bool
    discount: Decimal = Decimal("0")
    promo: PromoCode | None = None
    reason: PromoRejection | None = None
    min_amount: Decimal | None = None

    def as_application(self) -> PromoApplication | None:
        if not self.applicable or self.promo is None:
            return None
        return PromoApplication(
            code=self.code,
            kind=self.promo.kind,
            value=self.promo.value,
            discount=self.discount,
        )


def normalize_code(code: str) -> str:
    return str(code).strip().upper()


class PromoEngine:
    """Evaluates promo codes against a static, injected catalog.

    Discounts are rounded to cents here so that the preview endpoint and
    the booking transaction always agree for the same inputs.
    """

    def __init__(self, catalog: Mapping[str, PromoCode]) -> None:
        self._catalog = {normalize_code(code): promo for code, promo in catalog.items()}

    @classmethod
    def from_config(cls, config: Mapping[str, Mapping[str, Any]]) -> Self:
        """Build an engine from the PROMO_CODES settings dictionary."""
        catalog = {}
        for code, entry in config.items():
            min_amount = entry.get("min_amount")
            catalog[code] = PromoCode(
                code=normalize_code(code),
                kind=DiscountKind(entry["type"]),
                value=Decimal(str(entry["value"])),
                min_amount=Decimal(str(min_amount)) if min_amount is not None else None,
                description=entry.get("description", ""),
            )
        return cls(catalog)

    @property
    def codes(self) -> tuple[PromoCode, ...]:
        return tuple(self._catalog.values())

    def lookup(self, code: str) -> PromoCode | None:
        return self._catalog.get(normalize_code(code))

    def evaluate(self, code: str, amount: Decimal) -> PromoEvaluation:
        normalized = normalize_code(code)
        promo = self._catalog.get(normalized)
        if promo is None:
            return PromoEvaluation(
                code=normalized,
                applicable=False,
                reason=PromoRejection.INVALID_CODE,
            )

        if promo.min_amount is not None and amount < promo.min_amount:
            return PromoEvaluation(
                code=normalized,
                applicable=False,
                promo=promo,
                reason=PromoRejection.MINIMUM_NOT_MET,
                min_amount=promo.min_amount,
            )

        if promo.kind is DiscountKind.PERCENT:
            discount = amount * promo.value / 100
        else:
            discount = promo.value
        discount = min(round_money(discount), amount)

        return PromoEvaluation(
            code=normalized,
            applicable=True,
            discount=discount,
            promo=promo,
        )
