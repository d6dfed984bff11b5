"""Tests for the Flask web application."""

import pytest

PLACEHOLDER = "Enter your current Google Ads data to see your ROI potential"


class TestIndex:
    """Server-rendered page."""

    def test_get_shows_placeholder(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "Google Ads ROI Calculator" in html
        assert PLACEHOLDER in html
        assert '<div id="results" hidden' in html

    def test_post_renders_current_view(self, client, example_form):
        resp = client.post("/", data=example_form)
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert 'id="m-revenue">$12,500<' in html
        assert 'id="m-roi">150.0%<' in html
        assert 'id="inc-revenue">$8,594<' in html
        assert 'id="annual">$103,128<' in html
        assert 'value="5000"' in html

    def test_post_improved_view(self, client, example_form):
        example_form["view"] = "improved"
        html = client.post("/", data=example_form).get_data(as_text=True)
        assert 'id="m-revenue">$21,094<' in html
        assert 'id="m-clicks">2500<' in html

    def test_clicked_toggle_wins_over_hidden_field(self, client, example_form):
        example_form["view"] = ["current", "improved"]
        html = client.post("/", data=example_form).get_data(as_text=True)
        assert 'id="m-conversions">84.4<' in html

    def test_post_insufficient_inputs(self, client, example_form):
        example_form["average_customer_value"] = "0"
        resp = client.post("/", data=example_form)
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert '<div id="placeholder" class="placeholder" >' in html

    def test_garbage_inputs_do_not_error(self, client):
        resp = client.post("/", data={"monthly_ad_spend": "lots", "view": "???"})
        assert resp.status_code == 200

    def test_post_embeds_both_charts(self, client, example_form):
        html = client.post("/", data=example_form).get_data(as_text=True)
        assert 'id="chart-annual"' in html
        assert html.count('src="data:image/png;base64,') == 2

    def test_live_refresh_keeps_only_latest_response(self, client):
        html = client.get("/").get_data(as_text=True)
        assert "if(mine!==seq) return;" in html
        assert ".catch(" in html
        assert "kind=annual" in html

    def test_overflowing_inputs_render_placeholder(self, client):
        resp = client.post("/", data={
            "monthly_ad_spend": "1e300",
            "current_conversion_rate": "50",
            "average_customer_value": "1e300",
        })
        assert resp.status_code == 200
        assert '<div id="placeholder" class="placeholder" >' in resp.get_data(as_text=True)

    def test_cta_link(self, client, example_form):
        html = client.post("/", data=example_form).get_data(as_text=True)
        assert "Get Your Free Google Ads Audit" in html


class TestApi:
    """JSON endpoint used on every keystroke."""

    def test_form_body(self, client, example_form):
        data = client.post("/api/projection", data=example_form).get_json()
        assert data["result"]["current"] == {
            "conversions": 50.0, "revenue": 12500, "roi": 150.0, "clicks": 2000,
        }
        assert data["result"]["increases"]["revenue"] == 8594
        assert data["display"]["annual"] == "$103,128"

    def test_json_body(self, client, example_form):
        data = client.post("/api/projection", json=example_form).get_json()
        assert data["result"]["improved"]["revenue"] == 21094

    def test_numeric_json_values(self, client):
        data = client.post("/api/projection", json={
            "monthly_ad_spend": 5000,
            "current_conversion_rate": 2.5,
            "average_customer_value": 250,
        }).get_json()
        assert data["result"]["annual"] == 103128

    def test_no_result(self, client):
        data = client.post("/api/projection", data={"monthly_ad_spend": "5000"}).get_json()
        assert data["result"] is None
        assert data["placeholder"] == PLACEHOLDER

    def test_non_object_json_is_empty_input(self, client):
        data = client.post("/api/projection", json=[1, 2, 3]).get_json()
        assert data["result"] is None

    def test_overflowing_inputs_give_no_result(self, client):
        resp = client.post("/api/projection", data={
            "monthly_ad_spend": "1e300",
            "current_conversion_rate": "50",
            "average_customer_value": "1e300",
        })
        assert resp.status_code == 200
        assert resp.get_json()["result"] is None

    @pytest.mark.parametrize("ctr", ["", "1", "50"])
    def test_ctr_ignored(self, client, example_form, ctr):
        base = client.post("/api/projection", data=example_form).get_json()
        example_form["current_click_through_rate"] = ctr
        other = client.post("/api/projection", data=example_form).get_json()
        assert other["result"] == base["result"]


class TestChartAndReport:
    def test_chart_png(self, client, example_form):
        resp = client.get("/chart.png", query_string=example_form)
        assert resp.status_code == 200
        assert resp.mimetype == "image/png"
        assert resp.data.startswith(b"\x89PNG")

    def test_annual_chart(self, client, example_form):
        example_form["kind"] = "annual"
        resp = client.get("/chart.png", query_string=example_form)
        assert resp.status_code == 200

    def test_unknown_chart_kind(self, client, example_form):
        example_form["kind"] = "pie"
        assert client.get("/chart.png", query_string=example_form).status_code == 404

    def test_chart_without_inputs(self, client):
        assert client.get("/chart.png").status_code == 404

    def test_report_pdf(self, client, example_form):
        resp = client.get("/report.pdf", query_string=example_form)
        assert resp.status_code == 200
        assert resp.mimetype == "application/pdf"
        assert "attachment" in resp.headers["Content-Disposition"]
        assert resp.data.startswith(b"%PDF")

    def test_report_without_inputs(self, client):
        resp = client.get("/report.pdf")
        assert resp.status_code == 404
