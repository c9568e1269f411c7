"""Distance-tiered fare pricing.

A FareSchedule is a plain lookup table; FareCalculator turns distances and
product codes into prices using it. Neither holds any per-query state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence, Tuple

from ..domain.errors import ConfigurationError, InvalidTicketTypeError
from ..domain.models import FareQuote, Path

DEFAULT_TIERS: Tuple[Tuple[float, float], ...] = (
    (4, 2),
    (8, 3),
    (12, 4),
    (24, 5),
    (40, 6),
    (50, 7),
    (70, 8),
)
DEFAULT_MAX_FARE = 9.0
DEFAULT_CARD_DISCOUNT = 0.9
DEFAULT_DAY_PASSES: Mapping[str, float] = {
    "1-day": 18.0,
    "3-day": 45.0,
    "7-day": 90.0,
}

# Chinese product names accepted for the day passes
DEFAULT_DAY_PASS_ALIASES: Mapping[str, str] = {
    "1日票": "1-day",
    "3日票": "3-day",
    "7日票": "7-day",
}

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True)
class FareSchedule:
    """Fare lookup table.

    Attributes:
        tiers: Ascending (upper bound in km, price) pairs
        max_fare: Price beyond the last bound; defaults to the last tier price
        card_discount: Multiplier applied for stored-value card journeys
        day_passes: Day-pass product code -> fixed price
        day_pass_aliases: Alternative product code -> day-pass product code
    """

    tiers: Tuple[Tuple[float, float], ...] = DEFAULT_TIERS
    max_fare: Optional[float] = DEFAULT_MAX_FARE
    card_discount: float = DEFAULT_CARD_DISCOUNT
    day_passes: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_DAY_PASSES)
    )
    day_pass_aliases: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_DAY_PASS_ALIASES)
    )

    def __post_init__(self) -> None:
        """Validate tier ordering and the discount rate."""
        if not self.tiers:
            raise ConfigurationError("Fare schedule needs at least one tier", setting_name="tiers")

        previous_bound, previous_price = -math.inf, -math.inf
        for bound, price in self.tiers:
            if bound <= previous_bound or price < previous_price:
                raise ConfigurationError(
                    f"Fare tiers must increase monotonically, got ({bound}, {price}) "
                    f"after ({previous_bound}, {previous_price})",
                    setting_name="tiers",
                )
            previous_bound, previous_price = bound, price

        if self.max_fare is not None and self.max_fare < previous_price:
            raise ConfigurationError(
                f"max_fare {self.max_fare} is below the last tier price {previous_price}",
                setting_name="max_fare",
            )
        if not 0 < self.card_discount <= 1:
            raise ConfigurationError(
                f"card_discount must be in (0, 1], got {self.card_discount}",
                setting_name="card_discount",
            )

    @property
    def top_fare(self) -> float:
        """Price charged beyond the last tier bound."""
        if self.max_fare is not None:
            return self.max_fare
        return float(self.tiers[-1][1])

    @classmethod
    def from_pairs(
        cls,
        tiers: Sequence[Sequence[float]],
        max_fare: Optional[float] = None,
        card_discount: float = DEFAULT_CARD_DISCOUNT,
        day_passes: Optional[Mapping[str, float]] = None,
    ) -> FareSchedule:
        return cls(
            tiers=tuple((float(bound), float(price)) for bound, price in tiers),
            max_fare=max_fare,
            card_discount=card_discount,
            day_passes=dict(day_passes if day_passes is not None else DEFAULT_DAY_PASSES),
        )


@dataclass(frozen=True)
class FareCalculator:
    """Pure fare functions driven by a FareSchedule."""

    schedule: FareSchedule = field(default_factory=FareSchedule)

    def regular_fare(self, distance_km: float) -> float:
        """Single-ticket price for a journey of ``distance_km``.

        Raises:
            ValueError: If the distance is negative.
        """
        if distance_km < 0:
            raise ValueError(f"Distance must be non-negative, got {distance_km}")
        for bound, price in self.schedule.tiers:
            if distance_km <= bound:
                return float(price)
        return self.schedule.top_fare

    def card_fare(self, distance_km: float) -> float:
        """Stored-value card price, rounded half-up to one decimal."""
        regular = Decimal(str(self.regular_fare(distance_km)))
        discounted = regular * Decimal(str(self.schedule.card_discount))
        return float(discounted.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))

    def day_pass_fare(self, product_code: str) -> float:
        """Fixed price of a day-pass product.

        Accepts the product code or one of its aliases, e.g. ``1日票``.

        Raises:
            InvalidTicketTypeError: If the product code is unknown.
        """
        code = self.schedule.day_pass_aliases.get(product_code, product_code)
        try:
            return self.schedule.day_passes[code]
        except KeyError:
            raise InvalidTicketTypeError(
                f"Invalid ticket type: {product_code}", ticket_type=product_code
            ) from None

    def day_pass_products(self) -> Tuple[Tuple[str, float], ...]:
        """Day-pass products sorted by price."""
        return tuple(sorted(self.schedule.day_passes.items(), key=lambda item: item[1]))

    def quote(self, path: Path) -> FareQuote:
        distance = path.total_distance
        return FareQuote(
            distance_km=distance,
            regular=self.regular_fare(distance),
            card=self.card_fare(distance),
        )
