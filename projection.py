"""
Projection engine for the Google Ads ROI calculator.

Turns the four raw form fields into a "current" and an "improved" metric
set plus their deltas. Everything here is pure: the same inputs always
give the same rounded output and nothing is cached between calls.
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass
from typing import Optional

import config as cfg

logger = logging.getLogger(__name__)


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CampaignInputs:
    """Raw form fields, exactly as typed (blank until filled)."""

    monthly_ad_spend: str = ""             # currency units
    current_conversion_rate: str = ""      # percent, 2.5 means 2.5%
    average_customer_value: str = ""       # currency units
    current_click_through_rate: str = ""   # percent, accepted but unused

    @classmethod
    def from_mapping(cls, data) -> "CampaignInputs":
        """Build inputs from a form or JSON mapping, ignoring unknown keys."""
        def _get(key: str) -> str:
            val = data.get(key, "")
            return "" if val is None else str(val)

        return cls(
            monthly_ad_spend=_get("monthly_ad_spend"),
            current_conversion_rate=_get("current_conversion_rate"),
            average_customer_value=_get("average_customer_value"),
            current_click_through_rate=_get("current_click_through_rate"),
        )


@dataclass(frozen=True)
class MetricSet:
    """One column of the projection, already rounded for display."""

    conversions: float   # 1 d.p.
    revenue: int         # whole currency units
    roi: float           # percent, 1 d.p.
    clicks: int


@dataclass(frozen=True)
class Increases:
    """Improved minus current, rounded like the source fields."""

    revenue: int
    conversions: float
    roi: float


@dataclass(frozen=True)
class Projection:
    """Output of the calculator."""

    current: MetricSet
    improved: MetricSet
    increases: Increases


class View(enum.Enum):
    """Which metric set the results panel shows."""

    CURRENT = "current"
    IMPROVED = "improved"

    @classmethod
    def parse(cls, value: Optional[str]) -> "View":
        if value and value.strip().lower() == cls.IMPROVED.value:
            return cls.IMPROVED
        return cls.CURRENT


# ─── Parsing & rounding ──────────────────────────────────────────────

# ASCII digits only: parseFloat rejects Arabic-Indic and full-width digits
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)

# Intermediate values must stay finite after 1 d.p. scaling and the
# annual multiplication, or rounding and formatting would overflow.
_SCALE_HEADROOM = 1e3


def parse_number(text: Optional[str]) -> float:
    """Read the leading decimal literal of *text*, like a browser parseFloat.

    ``"12.5"`` -> 12.5, ``" 40abc"`` -> 40.0, ``""`` / ``"abc"`` -> 0.0.
    Non-finite results are treated as 0 too.
    """
    if text is None:
        return 0.0
    m = _LEADING_NUMBER.match(str(text).lstrip())
    if not m:
        return 0.0
    val = float(m.group(0))
    if not math.isfinite(val):
        return 0.0
    return val


def round_half_up(x: float, decimals: int = 0) -> float:
    """Round half toward +infinity (Math.round semantics).

    Python's built-in ``round`` uses banker's rounding, so 0.5 -> 0;
    here 0.5 -> 1 and -0.5 -> 0.
    """
    factor = 10 ** decimals
    y = x * factor
    # floor(y + 0.5) misrounds 0.49999999999999994, where the sum rounds to 1.0
    whole = math.floor(y)
    if y - whole >= 0.5:
        whole += 1
    return whole / factor


def _round_int(x: float) -> int:
    return int(round_half_up(x))


def _round_1dp(x: float) -> float:
    return round_half_up(x, 1)


# ─── Core Calculation ────────────────────────────────────────────────

def calculate_projection(inputs: CampaignInputs) -> Optional[Projection]:
    """Project current vs. optimised campaign performance.

    Returns ``None`` when spend, conversion rate or customer value is not
    strictly positive, or when the inputs are so large that the results
    overflow. The click-through rate never affects the output.
    """
    spend = parse_number(inputs.monthly_ad_spend)
    conv_rate = parse_number(inputs.current_conversion_rate)
    customer_value = parse_number(inputs.average_customer_value)

    if spend <= 0 or conv_rate <= 0 or customer_value <= 0:
        logger.debug(
            "Insufficient inputs (spend=%s, conv_rate=%s, value=%s); no projection",
            spend, conv_rate, customer_value,
        )
        return None

    # Current performance
    estimated_clicks = spend / cfg.ESTIMATED_CPC
    current_conversions = estimated_clicks * conv_rate / 100
    current_revenue = current_conversions * customer_value
    current_roi = (current_revenue - spend) / spend * 100

    # Improved performance: higher conversion rate, cheaper clicks
    improved_conv_rate = conv_rate * (1 + cfg.CONVERSION_RATE_INCREASE / 100)
    improved_cpc = cfg.ESTIMATED_CPC * (1 - cfg.COST_REDUCTION / 100)
    improved_clicks = spend / improved_cpc
    improved_conversions = improved_clicks * improved_conv_rate / 100
    improved_revenue = improved_conversions * customer_value
    improved_roi = (improved_revenue - spend) / spend * 100

    raw = (
        estimated_clicks, current_conversions, current_revenue, current_roi,
        improved_clicks, improved_conversions, improved_revenue, improved_roi,
        improved_revenue - current_revenue,
    )
    if not all(math.isfinite(v * _SCALE_HEADROOM) for v in raw):
        logger.debug(
            "Inputs out of range (spend=%s, conv_rate=%s, value=%s); no projection",
            spend, conv_rate, customer_value,
        )
        return None

    return Projection(
        current=MetricSet(
            conversions=_round_1dp(current_conversions),
            revenue=_round_int(current_revenue),
            roi=_round_1dp(current_roi),
            clicks=_round_int(estimated_clicks),
        ),
        improved=MetricSet(
            conversions=_round_1dp(improved_conversions),
            revenue=_round_int(improved_revenue),
            roi=_round_1dp(improved_roi),
            clicks=_round_int(improved_clicks),
        ),
        increases=Increases(
            revenue=_round_int(improved_revenue - current_revenue),
            conversions=_round_1dp(improved_conversions - current_conversions),
            roi=_round_1dp(improved_roi - current_roi),
        ),
    )


def select_metrics(projection: Projection, view: View) -> MetricSet:
    """Return the metric set for *view*; the projection is left untouched."""
    if view is View.IMPROVED:
        return projection.improved
    return projection.current


def annual_projection(projection: Projection) -> int:
    """Additional revenue per year, from the rounded monthly increase."""
    return projection.increases.revenue * cfg.MONTHS_PER_YEAR
