"""Tests for the projection engine."""

import dataclasses
import logging

import pytest

import config as cfg
from projection import (
    CampaignInputs,
    Increases,
    MetricSet,
    View,
    annual_projection,
    calculate_projection,
    parse_number,
    round_half_up,
    select_metrics,
)


class TestParseNumber:
    """Browser-style leading-number parsing."""

    @pytest.mark.parametrize("text, expected", [
        ("12.5", 12.5),
        ("  40", 40.0),
        ("40abc", 40.0),
        ("-3", -3.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("1,000", 1.0),
    ])
    def test_leading_number(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", [
        "", "   ", "abc", "$100", None, "1e400",
        "\u0665\u0660\u0660\u0660",  # Arabic-Indic 5000
        "\uff15\uff10\uff10\uff10",  # full-width 5000
    ])
    def test_unparsable_is_zero(self, text):
        assert parse_number(text) == 0.0


class TestRoundHalfUp:
    """Half-up rounding, unlike Python's banker's rounding."""

    def test_halves_go_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round(2.5) == 2  # built-in differs

    def test_negative_half_goes_toward_positive_infinity(self):
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_just_below_half_goes_down(self):
        # 0.49999999999999994 + 0.5 is 1.0 in floating point
        assert round_half_up(0.49999999999999994) == 0
        assert round_half_up(-0.5000000000000001) == -1

    def test_one_decimal(self):
        assert round_half_up(1.25, 1) == 1.3
        assert round_half_up(84.375, 1) == 84.4
        assert round_half_up(50.0, 1) == 50.0


class TestGuard:
    """No projection unless spend, conversion rate and value are positive."""

    @pytest.mark.parametrize("field", [
        "monthly_ad_spend",
        "current_conversion_rate",
        "average_customer_value",
    ])
    @pytest.mark.parametrize("bad", ["", "0", "-10", "abc", "0.0"])
    def test_non_positive_field_gives_no_result(self, example_inputs, field, bad):
        inputs = dataclasses.replace(example_inputs, **{field: bad})
        assert calculate_projection(inputs) is None

    def test_all_blank(self):
        assert calculate_projection(CampaignInputs()) is None

    def test_guard_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="projection"):
            calculate_projection(CampaignInputs(monthly_ad_spend="100"))
        assert "no projection" in caplog.text

    @pytest.mark.parametrize("spend, rate, value", [
        ("1e300", "50", "1e300"),
        ("1e308", "1", "1"),
        ("1", "1e308", "1"),
    ])
    def test_overflowing_inputs_give_no_result(self, spend, rate, value):
        inputs = CampaignInputs(
            monthly_ad_spend=spend,
            current_conversion_rate=rate,
            average_customer_value=value,
        )
        assert calculate_projection(inputs) is None

    def test_large_but_finite_inputs_still_compute(self):
        p = calculate_projection(CampaignInputs(
            monthly_ad_spend="1e9",
            current_conversion_rate="2.5",
            average_customer_value="1e6",
        ))
        assert p is not None
        assert p.current.clicks == 400_000_000
        assert annual_projection(p) == p.increases.revenue * cfg.MONTHS_PER_YEAR

    def test_blank_ctr_still_computes(self, example_inputs):
        inputs = dataclasses.replace(example_inputs, current_click_through_rate="")
        assert calculate_projection(inputs) is not None


class TestWorkedExample:
    """Spend 5000, conversion rate 2.5%, customer value 250."""

    def test_current(self, example_inputs):
        p = calculate_projection(example_inputs)
        assert p.current == MetricSet(conversions=50.0, revenue=12500, roi=150.0, clicks=2000)

    def test_improved(self, example_inputs):
        p = calculate_projection(example_inputs)
        assert p.improved.clicks == 2500
        assert p.improved.conversions == 84.4
        # 21093.75 rounds half up
        assert p.improved.revenue == 21094
        assert p.improved.roi == 321.9

    def test_increases(self, example_inputs):
        p = calculate_projection(example_inputs)
        assert p.increases == Increases(revenue=8594, conversions=34.4, roi=171.9)

    def test_rounded_types(self, example_inputs):
        p = calculate_projection(example_inputs)
        assert isinstance(p.current.revenue, int)
        assert isinstance(p.current.clicks, int)
        assert isinstance(p.increases.revenue, int)

    def test_annual_projection(self, example_inputs):
        p = calculate_projection(example_inputs)
        assert annual_projection(p) == 103128
        assert annual_projection(p) == p.increases.revenue * cfg.MONTHS_PER_YEAR

    def test_losing_campaign_has_negative_roi(self):
        p = calculate_projection(CampaignInputs(
            monthly_ad_spend="1000",
            current_conversion_rate="1",
            average_customer_value="50",
        ))
        # 400 clicks, 4 conversions, $200 revenue
        assert p.current.revenue == 200
        assert p.current.roi == -80.0
        assert p.improved.roi > p.current.roi


class TestProperties:
    """Purity and independence from the click-through rate."""

    def test_idempotent(self, example_inputs):
        assert calculate_projection(example_inputs) == calculate_projection(example_inputs)

    @pytest.mark.parametrize("ctr", ["", "0", "1.5", "99", "junk", "-4"])
    def test_ctr_never_changes_output(self, example_inputs, ctr):
        other = dataclasses.replace(example_inputs, current_click_through_rate=ctr)
        assert calculate_projection(other) == calculate_projection(example_inputs)

    def test_whitespace_and_trailing_text(self, example_inputs):
        noisy = CampaignInputs(
            monthly_ad_spend=" 5000 ",
            current_conversion_rate="2.5%",
            average_customer_value="250 dollars",
        )
        assert calculate_projection(noisy) == calculate_projection(example_inputs)

    def test_projection_is_immutable(self, example_inputs):
        p = calculate_projection(example_inputs)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.current.revenue = 0


class TestView:
    """Display toggle between the two metric sets."""

    def test_parse(self):
        assert View.parse("improved") is View.IMPROVED
        assert View.parse(" IMPROVED ") is View.IMPROVED
        assert View.parse("current") is View.CURRENT
        assert View.parse("") is View.CURRENT
        assert View.parse(None) is View.CURRENT
        assert View.parse("bogus") is View.CURRENT

    def test_select_does_not_alter_projection(self, example_inputs):
        p = calculate_projection(example_inputs)
        before = dataclasses.asdict(p)
        assert select_metrics(p, View.IMPROVED) is p.improved
        assert select_metrics(p, View.CURRENT) is p.current
        assert select_metrics(p, View.IMPROVED) is p.improved
        assert dataclasses.asdict(p) == before


class TestFromMapping:
    def test_ignores_unknown_keys_and_none(self):
        inputs = CampaignInputs.from_mapping({
            "monthly_ad_spend": 5000,
            "current_conversion_rate": None,
            "extra": "x",
        })
        assert inputs == CampaignInputs(monthly_ad_spend="5000")
