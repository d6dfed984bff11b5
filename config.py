"""
Business assumptions and UI settings for the Google Ads ROI calculator.

All monetary values in USD. The improvement rates are the typical gains
GreenFlow SEM reports for client accounts; they are fixed, not user input.
"""

# ── Agency ───────────────────────────────────────────────────────────
AGENCY_NAME = "GreenFlow SEM"
CTA_LABEL = "Get Your Free Google Ads Audit"
CTA_URL = "https://greenflowsem.com/free-audit"

# ── Click cost assumption ────────────────────────────────────────────
ESTIMATED_CPC = 2.5              # typical $2-3 CPC across most industries

# ── Typical improvements (percent) ───────────────────────────────────
CONVERSION_RATE_INCREASE = 35    # conversion rate uplift
CTR_INCREASE = 25                # click-through rate uplift (display only)
COST_REDUCTION = 20              # cost-per-click reduction

MONTHS_PER_YEAR = 12

# ── Presentation ─────────────────────────────────────────────────────
CURRENCY_SYMBOL = "$"
PLACEHOLDER_TEXT = "Enter your current Google Ads data to see your ROI potential"
DISCLAIMER = (
    "* Results based on typical improvements achieved by GreenFlow SEM "
    "clients. Individual results may vary."
)

# Form placeholders shown in empty inputs
PLACEHOLDER_SPEND = "5000"
PLACEHOLDER_CONV_RATE = "2.5"
PLACEHOLDER_CUSTOMER_VALUE = "250"
PLACEHOLDER_CTR = "3.0"

# ── Web server ───────────────────────────────────────────────────────
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000
