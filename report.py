"""
PDF summary generation and reusable chart rendering for the
Google Ads ROI calculator.

Provides:
  - One-page summary plus chart pages as PDF bytes (generate_pdf)
  - Base64-encoded chart images for inline embedding (get_web_charts)
  - PNG bytes for a single chart served by the web app (render_chart_png)
"""

from __future__ import annotations

import base64
import io
from typing import Any, Dict, List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter
import numpy as np

import config as cfg
from projection import CampaignInputs, Projection, annual_projection

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0b1a14"
CARD = "#12251d"
TEXT = "#f0fdf4"
TEXT2 = "#cbd5e1"
GREEN = "#4ade80"
BLUE = "#60a5fa"
AMBER = "#fbbf24"
SLATE = "#94a3b8"
BORDER = "#1f3a2e"
GREEN_DEEP = "#16a34a"
BLUE_DEEP = "#2563eb"

LETTER_W, LETTER_H = 8.5, 11
WEB_W, WEB_H = 10, 5


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _usd_fmt(x, _):
    if abs(x) >= 1e6:
        return f"${x / 1e6:.1f}M"
    if abs(x) >= 1e3:
        return f"${x / 1e3:.0f}k"
    return f"${x:.0f}"


USD_FMT = FuncFormatter(_usd_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply the dark agency theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, axis="y", alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Chart 1: Current vs Improved (one panel per metric)
# ═══════════════════════════════════════════════════════════════════

def _chart_comparison(projection: Projection,
                      figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Side-by-side bars for conversions, revenue and clicks."""
    fig, axes = plt.subplots(1, 3, figsize=figsize, constrained_layout=True)
    _style(fig, *axes)

    cur, imp = projection.current, projection.improved
    panels = [
        ("Monthly Conversions", cur.conversions, imp.conversions, None),
        ("Monthly Revenue", cur.revenue, imp.revenue, USD_FMT),
        ("Monthly Clicks", cur.clicks, imp.clicks, None),
    ]

    x = np.arange(2)
    for ax, (title, before, after, yfmt) in zip(axes, panels):
        vals = np.array([before, after], dtype=float)
        ax.bar(x, vals, 0.6, color=[BLUE, GREEN],
               edgecolor=[BLUE_DEEP, GREEN_DEEP], linewidth=0.5)
        ax.set_xticks(x)
        ax.set_xticklabels(["Current", cfg.AGENCY_NAME], fontsize=8)
        ax.set_title(title, fontsize=11, pad=10)
        if yfmt is not None:
            ax.yaxis.set_major_formatter(yfmt)
        ax.set_ylim(0, vals.max() * 1.2)
        for xi, v in zip(x, vals):
            if yfmt is not None:
                label = _usd_fmt(v, None)
            elif float(v).is_integer():
                label = f"{v:,.0f}"
            else:
                label = f"{v:,.1f}"
            ax.annotate(label, xy=(xi, v), xytext=(0, 4),
                        textcoords="offset points", ha="center",
                        fontsize=9, color=TEXT, fontweight="bold")

    fig.suptitle("Current Performance vs. Optimised Campaigns",
                 fontsize=13, color=TEXT, fontweight="bold")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart 2: Cumulative additional revenue over a year
# ═══════════════════════════════════════════════════════════════════

def _chart_annual(projection: Projection,
                  figsize=(WEB_W, WEB_H)) -> plt.Figure:
    fig, ax = plt.subplots(figsize=figsize, constrained_layout=True)
    _style(fig, ax)

    months = np.arange(0, cfg.MONTHS_PER_YEAR + 1)
    cumulative = months * float(projection.increases.revenue)

    ax.plot(months, cumulative, color=GREEN, linewidth=2.5,
            label="Additional revenue", solid_capstyle="round")
    ax.fill_between(months, cumulative, alpha=0.1, color=GREEN)

    annual = annual_projection(projection)
    ax.annotate(
        f"${annual:,.0f} per year",
        xy=(months[-1], cumulative[-1]), fontsize=10, color=GREEN,
        fontweight="bold", ha="right",
        xytext=(-10, 8), textcoords="offset points",
        bbox=dict(boxstyle="round,pad=0.3", facecolor=BG,
                  edgecolor=GREEN, alpha=0.9),
    )

    ax.set_xticks(months)
    ax.yaxis.set_major_formatter(USD_FMT)
    ax.set_xlabel("Months")
    ax.set_ylabel("Cumulative Additional Revenue")
    ax.set_title("Annual Projection", fontsize=13, pad=12)
    _legend(ax)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 1: Summary (text only)
# ═══════════════════════════════════════════════════════════════════

def _page_summary(inputs: CampaignInputs, d: Dict[str, Any]) -> plt.Figure:
    fig = plt.figure(figsize=(LETTER_W, LETTER_H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "Google Ads ROI Calculator",
             ha="center", fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, f"Your ROI potential with {cfg.AGENCY_NAME}",
             ha="center", fontsize=11, color=TEXT2)

    y = 0.85
    fig.text(0.08, y, "Your Inputs", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    params = [
        f"Monthly spend: {inputs.monthly_ad_spend or '-'}  |  "
        f"Conversion rate: {inputs.current_conversion_rate or '-'}%",
        f"Average customer value: {inputs.average_customer_value or '-'}  |  "
        f"Click-through rate: {inputs.current_click_through_rate or '-'}%",
    ]
    for p in params:
        fig.text(0.10, y, p, fontsize=9, color=TEXT2)
        y -= 0.024

    for title, key, color in (
        ("Current Performance", "current_fmt", BLUE),
        (f"With {cfg.AGENCY_NAME}", "improved_fmt", GREEN),
    ):
        y -= 0.025
        fig.text(0.08, y, title, fontsize=13, color=color, fontweight="bold")
        y -= 0.028
        m = d[key]
        for line in (
            f"Monthly conversions: {m['conversions']}",
            f"Monthly revenue: {m['revenue']}",
            f"ROI: {m['roi']}",
            f"Monthly clicks: {m['clicks']}",
        ):
            fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)
            y -= 0.024

    y -= 0.025
    fig.text(0.08, y, "Potential Monthly Increases",
             fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    inc = d["increases_fmt"]
    for line in (
        f"Additional revenue: {inc['revenue']}",
        f"More conversions: {inc['conversions']}",
        f"ROI improvement: {inc['roi']}",
    ):
        fig.text(0.10, y, line, fontsize=9.5, color=TEXT2)
        y -= 0.024

    y -= 0.02
    fig.text(0.10, y, f"Annual projection: additional {d['annual_fmt']} per year",
             fontsize=12, color=GREEN, fontweight="bold")

    y -= 0.05
    fig.text(0.08, y, "Assumptions", fontsize=13, color=AMBER, fontweight="bold")
    y -= 0.028
    for line in d["improvements"] + [f"Estimated cost per click: ${cfg.ESTIMATED_CPC:.2f}"]:
        fig.text(0.10, y, f"• {line}", fontsize=9, color=TEXT2)
        y -= 0.022

    fig.text(0.50, 0.06, f"{cfg.CTA_LABEL}: {cfg.CTA_URL}",
             ha="center", fontsize=10, color=GREEN, fontweight="bold")
    fig.text(0.50, 0.03, cfg.DISCLAIMER,
             ha="center", fontsize=8, color=SLATE, style="italic")
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

CHARTS = {
    "comparison": _chart_comparison,
    "annual": _chart_annual,
}


def figure_to_png(fig: plt.Figure) -> bytes:
    """Render a matplotlib figure to PNG bytes."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    data = buf.getvalue()
    buf.close()
    return data


def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    return base64.b64encode(figure_to_png(fig)).decode()


def render_chart_png(projection: Projection, kind: str = "comparison") -> bytes:
    """PNG bytes for one of the web charts (``comparison`` or ``annual``)."""
    if kind not in CHARTS:
        raise ValueError(f"Unknown chart: {kind!r}")
    fig = CHARTS[kind](projection)
    try:
        return figure_to_png(fig)
    finally:
        plt.close(fig)


def generate_pdf(inputs: CampaignInputs, d: Dict[str, Any]) -> bytes:
    """Build the PDF summary in memory. ``d`` must hold a projection."""
    projection = d["projection"]
    pages = [
        _page_summary(inputs, d),
        _chart_comparison(projection, figsize=(LETTER_W, LETTER_H * 0.45)),
        _chart_annual(projection, figsize=(LETTER_W, LETTER_H * 0.45)),
    ]

    buf = io.BytesIO()
    with PdfPages(buf) as pdf:
        for fig in pages:
            pdf.savefig(fig, facecolor=fig.get_facecolor())
    for fig in pages:
        plt.close(fig)
    return buf.getvalue()


def get_web_charts(projection: Projection) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 2 charts:
      [0] Current vs Improved  (bars per metric)
      [1] Annual Projection    (cumulative additional revenue)
    """
    chart_figs = [
        _chart_comparison(projection),
        _chart_annual(projection),
    ]

    images = [figure_to_base64(f) for f in chart_figs]
    for f in chart_figs:
        plt.close(f)
    return images
