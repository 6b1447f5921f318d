"""Subscription plan catalog and price lookup."""

from dataclasses import dataclass

from interview_coach.domain.common.exceptions import ValidationError
from interview_coach.domain.identity.entities.subscription import CURRENCIES

PAYMENT_METHODS = ("upi",)
DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class PlanOffer:
    plan: str
    duration_days: int
    prices: dict[str, int]

    def price_for(self, currency: str) -> int:
        return self.prices[currency]


PLAN_CATALOG: dict[str, PlanOffer] = {
    "pro": PlanOffer(plan="pro", duration_days=30, prices={"INR": 499, "USD": 8, "EUR": 7}),
    "elite": PlanOffer(
        plan="elite", duration_days=365, prices={"INR": 4499, "USD": 79, "EUR": 69}
    ),
}


def normalize_currency(currency: str | None) -> str:
    """Uppercase a currency code; unknown codes fall back to INR."""
    value = (currency or "").strip().upper()
    return value if value in CURRENCIES else DEFAULT_CURRENCY


def get_plan_offer(plan: str | None) -> PlanOffer:
    """
    Look up a purchasable plan.

    Raises:
        ValidationError: If the plan is not pro or elite
    """
    offer = PLAN_CATALOG.get((plan or "").strip().lower())
    if offer is None:
        raise ValidationError("Valid plan is required (pro/elite).", field="plan", value=plan)
    return offer
