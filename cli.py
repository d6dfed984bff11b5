"""
CLI interface and shared display-data computation for the
Google Ads ROI calculator.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import config as cfg
from projection import (
    CampaignInputs,
    MetricSet,
    Projection,
    View,
    annual_projection,
    calculate_projection,
    round_half_up,
    select_metrics,
)
import report


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float) -> str:
    """Format number as $X,XXX (no decimals, sign before the symbol)."""
    rounded = round_half_up(abs(val))
    sign = "-" if val < 0 and rounded > 0 else ""
    return f"{sign}{cfg.CURRENCY_SYMBOL}{rounded:,.0f}"


def pct(val: float, decimals: int = 1) -> str:
    return f"{val:.{decimals}f}%"


def num(val: float) -> str:
    """Print a 1 d.p. value without a trailing '.0' (84.4, 50)."""
    if float(val).is_integer():
        return str(int(val))
    return f"{val:.1f}"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt_field(label: str, example: str) -> str:
    """Blank is accepted; it simply counts as zero in the projection."""
    return input(f"  {label} (e.g. {example}): ").strip()


def collect_inputs() -> CampaignInputs:
    """Prompt the user for the four campaign fields."""
    print("\n  Enter your current Google Ads data:\n")

    spend = _prompt_field("Monthly Google Ads spend ($)", cfg.PLACEHOLDER_SPEND)
    conv = _prompt_field("Current conversion rate (%)", cfg.PLACEHOLDER_CONV_RATE)
    value = _prompt_field("Average customer value ($)", cfg.PLACEHOLDER_CUSTOMER_VALUE)
    ctr = _prompt_field("Current click-through rate (%)", cfg.PLACEHOLDER_CTR)

    return CampaignInputs(
        monthly_ad_spend=spend,
        current_conversion_rate=conv,
        average_customer_value=value,
        current_click_through_rate=ctr,
    )


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI, web app and report)
# ═══════════════════════════════════════════════════════════════════

def _metric_dict(m: MetricSet) -> Dict[str, Any]:
    return {
        "conversions": m.conversions,
        "revenue": m.revenue,
        "roi": m.roi,
        "clicks": m.clicks,
    }


def _metric_display(m: MetricSet) -> Dict[str, str]:
    return {
        "conversions": num(m.conversions),
        "revenue": fmt(m.revenue),
        "roi": pct(m.roi),
        "clicks": str(m.clicks),
    }


def improvement_lines() -> List[str]:
    return [
        f"{cfg.CONVERSION_RATE_INCREASE}% improvement in conversion rates",
        f"{cfg.CTR_INCREASE}% increase in click-through rates",
        f"{cfg.COST_REDUCTION}% reduction in cost-per-click",
    ]


def compute_display_data(
    inputs: CampaignInputs,
    view: View = View.CURRENT,
    projection: Optional[Projection] = None,
) -> Dict[str, Any]:
    """Extract every value needed for the output sections.

    ``has_result`` is False when the inputs are insufficient; the other
    result keys are then absent and the placeholder should be shown.
    """
    if projection is None:
        projection = calculate_projection(inputs)

    d: Dict[str, Any] = {
        "has_result": projection is not None,
        "view": view.value,
        "improvements": improvement_lines(),
        "placeholder": cfg.PLACEHOLDER_TEXT,
    }
    if projection is None:
        return d

    annual = annual_projection(projection)
    inc = projection.increases
    d.update({
        "projection": projection,
        "current": _metric_dict(projection.current),
        "improved": _metric_dict(projection.improved),
        "current_fmt": _metric_display(projection.current),
        "improved_fmt": _metric_display(projection.improved),
        "selected_fmt": _metric_display(select_metrics(projection, view)),
        "increases": {
            "revenue": inc.revenue,
            "conversions": inc.conversions,
            "roi": inc.roi,
        },
        "increases_fmt": {
            "revenue": fmt(inc.revenue),
            "conversions": f"{num(inc.conversions)}+",
            "roi": pct(inc.roi),
        },
        "annual": annual,
        "annual_fmt": fmt(annual),
    })
    return d


def json_payload(d: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-safe subset of the display data (no dataclasses)."""
    if not d["has_result"]:
        return {"result": None, "placeholder": d["placeholder"]}
    return {
        "result": {
            "current": d["current"],
            "improved": d["improved"],
            "increases": d["increases"],
            "annual": d["annual"],
        },
        "display": {
            "current": d["current_fmt"],
            "improved": d["improved_fmt"],
            "increases": d["increases_fmt"],
            "annual": d["annual_fmt"],
        },
        "view": d["view"],
    }


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 66  # box width (characters)


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{'═' * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{'═' * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 34) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{'═' * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_improvements(d: Dict[str, Any]) -> None:
    rows = [_box_line(f"• {line}") for line in d["improvements"]]
    _print_section(f"{cfg.AGENCY_NAME.upper()} IMPROVEMENTS", rows)


def _print_placeholder(d: Dict[str, Any]) -> None:
    _print_section("YOUR ROI POTENTIAL", [_box_line(d["placeholder"])])


def _print_metrics(title: str, m: Dict[str, str]) -> None:
    rows = [
        _box_row("Monthly conversions", m["conversions"]),
        _box_row("Monthly revenue", m["revenue"]),
        _box_row("ROI", m["roi"]),
        _box_row("Monthly clicks", m["clicks"]),
    ]
    _print_section(title, rows)


def _print_increases(d: Dict[str, Any]) -> None:
    inc = d["increases_fmt"]
    rows = [
        _box_row("Additional revenue", inc["revenue"]),
        _box_row("More conversions", inc["conversions"]),
        _box_row("ROI improvement", inc["roi"]),
        _box_line(),
        _box_row("Annual projection", f"{d['annual_fmt']} per year"),
    ]
    _print_section("POTENTIAL MONTHLY INCREASES", rows)


def _print_cta(pdf_path: Optional[str]) -> None:
    rows = [
        _box_line(f"{cfg.CTA_LABEL}:"),
        _box_line(f"  {cfg.CTA_URL}"),
    ]
    if pdf_path:
        rows.append(_box_line())
        rows.append(_box_line(f"PDF summary saved to: {pdf_path}"))
    _print_section("NEXT STEP", rows)


def print_results(d: Dict[str, Any], pdf_path: Optional[str] = None) -> None:
    """Print every output section for already computed display data."""
    _print_improvements(d)
    if not d["has_result"]:
        _print_placeholder(d)
        return
    _print_metrics("CURRENT PERFORMANCE", d["current_fmt"])
    _print_metrics(f"WITH {cfg.AGENCY_NAME.upper()}", d["improved_fmt"])
    _print_increases(d)
    _print_cta(pdf_path)
    print(f"  {cfg.DISCLAIMER}\n")


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(report_path: Optional[str] = None) -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Google Ads ROI Calculator")
    print("=" * W)

    try:
        inputs = collect_inputs()
    except (EOFError, KeyboardInterrupt):
        print("\n  Cancelled.")
        return

    d = compute_display_data(inputs)
    print()

    pdf_path = None
    if report_path and d["has_result"]:
        print("  Generating PDF summary...")
        with open(report_path, "wb") as fh:
            fh.write(report.generate_pdf(inputs, d))
        pdf_path = report_path
        print(f"  Saved to {pdf_path}\n")
    elif report_path:
        print(f"  No projection to report; {report_path} was not written.\n")

    print_results(d, pdf_path)


if __name__ == "__main__":
    run_cli()
