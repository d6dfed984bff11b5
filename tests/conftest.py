"""Shared fixtures for the ROI calculator tests."""

import pytest

from app import app as flask_app
from projection import CampaignInputs


EXAMPLE_FORM = {
    "monthly_ad_spend": "5000",
    "current_conversion_rate": "2.5",
    "average_customer_value": "250",
    "current_click_through_rate": "3.1",
}


@pytest.fixture
def example_form():
    return dict(EXAMPLE_FORM)


@pytest.fixture
def example_inputs():
    return CampaignInputs(**EXAMPLE_FORM)


@pytest.fixture
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c
