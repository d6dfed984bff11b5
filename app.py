"""
Flask web application for the Google Ads ROI calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.  The page refreshes the
projection through ``/api/projection`` on every keystroke; a plain form
submit renders the same page server-side.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict
from urllib.parse import urlencode

from flask import Flask, jsonify, render_template_string, request, send_file

import config as cfg
from projection import CampaignInputs, View, calculate_projection
from cli import compute_display_data, json_payload
import report

logger = logging.getLogger(__name__)

app = Flask(__name__)

FIELDS = (
    "monthly_ad_spend",
    "current_conversion_rate",
    "average_customer_value",
    "current_click_through_rate",
)

# ═══════════════════════════════════════════════════════════════════
# Request parsing
# ═══════════════════════════════════════════════════════════════════

def _request_data() -> Dict[str, Any]:
    """Merge query string, form and JSON object body into one mapping."""
    data: Dict[str, Any] = dict(request.args.to_dict())
    data.update(request.form.to_dict())
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        data.update(body)
    return data


def parse_form(form: Dict[str, Any]) -> CampaignInputs:
    """Parse the HTML form (or JSON body) into CampaignInputs."""
    return CampaignInputs.from_mapping(form)


def _query_string(inputs: CampaignInputs) -> str:
    return urlencode({f: getattr(inputs, f) for f in FIELDS})


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Google Ads ROI Calculator | {{ cfg.AGENCY_NAME }}</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  :root{
    --text:#1f2937;--muted:#6b7280;--green:#16a34a;--green-soft:#f0fdf4;
    --blue:#2563eb;--purple:#7e22ce;--orange:#c2410c;--radius:16px;
  }
  body{
    font-family:system-ui,-apple-system,sans-serif;color:var(--text);
    background:linear-gradient(135deg,#f0fdf4 0%,#eff6ff 100%);min-height:100vh;
  }
  .container{max-width:1140px;margin:0 auto;padding:2rem 1.5rem}
  .hero{text-align:center;margin-bottom:2rem}
  .hero h1{font-size:clamp(1.6rem,4vw,2.4rem);font-weight:800}
  .hero p{color:var(--muted);max-width:640px;margin:.6rem auto 0;font-size:1.05rem}
  .grid{display:grid;grid-template-columns:1fr 1fr;gap:2rem}
  @media(max-width:900px){.grid{grid-template-columns:1fr}}
  .card{background:#fff;border-radius:var(--radius);box-shadow:0 10px 30px rgba(0,0,0,.08);padding:2rem}
  h2{font-size:1.35rem;font-weight:700;margin-bottom:1.4rem}
  .form-group{margin-bottom:1.3rem}
  .form-group label{display:block;font-size:.85rem;font-weight:600;margin-bottom:.4rem}
  .form-group input{
    width:100%;padding:.75rem 1rem;font-size:1.05rem;border:1px solid #d1d5db;
    border-radius:10px;font-family:inherit;
  }
  .form-group input:focus{outline:none;border-color:var(--green);box-shadow:0 0 0 3px rgba(22,163,74,.15)}
  .hint{font-size:.8rem;color:var(--muted);margin-top:.3rem}
  .improvements{background:var(--green-soft);border:1px solid #bbf7d0;border-radius:10px;padding:1rem}
  .improvements strong{color:#166534}
  .improvements ul{list-style:none;margin-top:.4rem;font-size:.88rem;color:#15803d}
  .toggle{display:flex;background:#f3f4f6;border-radius:10px;padding:4px;margin-bottom:1.2rem}
  .toggle button{
    flex:1;padding:.55rem 1rem;border:none;border-radius:8px;background:none;
    font:inherit;font-weight:600;color:var(--muted);cursor:pointer;
  }
  .toggle button.active{background:#fff;color:var(--text);box-shadow:0 1px 3px rgba(0,0,0,.1)}
  .metrics{display:grid;grid-template-columns:1fr 1fr;gap:1rem}
  .metric{border-radius:10px;padding:1rem;border:1px solid #e5e7eb}
  .metric p:first-child{font-size:.82rem;font-weight:600}
  .metric p:last-child{font-size:1.55rem;font-weight:800}
  .m-conv{color:var(--blue);background:#eff6ff}
  .m-rev{color:var(--green);background:#f0fdf4}
  .m-roi{color:var(--purple);background:#faf5ff}
  .m-clicks{color:var(--orange);background:#fff7ed}
  .increases{
    margin-top:1.2rem;padding:1.4rem;border-radius:12px;color:#fff;
    background:linear-gradient(90deg,#22c55e,#2563eb);
  }
  .increases h3{margin-bottom:.9rem}
  .increases .row{display:grid;grid-template-columns:repeat(3,1fr);text-align:center}
  .increases .big{font-size:1.7rem;font-weight:800}
  .increases .small{font-size:.8rem;opacity:.9}
  .annual{margin-top:1.2rem;padding:1rem;border:2px dashed #d1d5db;border-radius:10px;background:#f9fafb}
  .annual strong{color:var(--green)}
  .cta{text-align:center;padding-top:1.2rem}
  .btn{
    display:inline-block;padding:1rem 2rem;border-radius:12px;color:#fff;font-weight:700;
    text-decoration:none;background:linear-gradient(90deg,#16a34a,#2563eb);
    box-shadow:0 8px 20px rgba(37,99,235,.25);
  }
  .cta p{font-size:.85rem;color:var(--muted);margin-top:.5rem}
  .placeholder{text-align:center;padding:3rem 0;color:var(--muted);font-size:1.05rem}
  .chart-img{width:100%;border-radius:10px;margin-top:1.2rem}
  .links{text-align:center;margin-top:.8rem;font-size:.85rem}
  .links a{color:var(--blue)}
  .footer{text-align:center;margin-top:2rem;font-size:.82rem;color:var(--muted)}
  [hidden]{display:none !important}
</style>
</head>
<body>
<div class="container">

<div class="hero">
  <h1>Google Ads ROI Calculator</h1>
  <p>Discover how much more revenue you could generate with optimized Google Ads campaigns.
     See the potential ROI improvements {{ cfg.AGENCY_NAME }} can deliver for your business.</p>
</div>

<form method="POST" id="roi-form">
<input type="hidden" name="view" id="view-field" value="{{ d.view }}">
<div class="grid">

  <!-- Inputs -->
  <div class="card">
    <h2>Your Current Performance</h2>
    <div class="form-group">
      <label for="monthly_ad_spend">Monthly Google Ads Spend ($)</label>
      <input type="number" id="monthly_ad_spend" name="monthly_ad_spend"
             placeholder="{{ cfg.PLACEHOLDER_SPEND }}" value="{{ form.monthly_ad_spend }}">
    </div>
    <div class="form-group">
      <label for="current_conversion_rate">Current Conversion Rate (%)</label>
      <input type="number" step="0.1" id="current_conversion_rate" name="current_conversion_rate"
             placeholder="{{ cfg.PLACEHOLDER_CONV_RATE }}" value="{{ form.current_conversion_rate }}">
      <p class="hint">Industry average: 2-5%</p>
    </div>
    <div class="form-group">
      <label for="average_customer_value">Average Customer Value ($)</label>
      <input type="number" id="average_customer_value" name="average_customer_value"
             placeholder="{{ cfg.PLACEHOLDER_CUSTOMER_VALUE }}" value="{{ form.average_customer_value }}">
      <p class="hint">Lifetime value or average order value</p>
    </div>
    <div class="form-group">
      <label for="current_click_through_rate">Current Click-Through Rate (%)</label>
      <input type="number" step="0.1" id="current_click_through_rate" name="current_click_through_rate"
             placeholder="{{ cfg.PLACEHOLDER_CTR }}" value="{{ form.current_click_through_rate }}">
    </div>
    <div class="improvements">
      <strong>{{ cfg.AGENCY_NAME }} Improvements</strong>
      <ul>
        {% for line in d.improvements %}<li>&bull; {{ line }}</li>{% endfor %}
      </ul>
    </div>
    <noscript><p style="margin-top:1rem"><button type="submit" class="btn">Calculate</button></p></noscript>
  </div>

  <!-- Results -->
  <div class="card">
    <h2>Your ROI Potential</h2>

    <div id="placeholder" class="placeholder" {{ 'hidden' if d.has_result }}>
      <p>{{ d.placeholder }}</p>
    </div>

    <div id="results" {{ 'hidden' if not d.has_result }}>
      <div class="toggle">
        <button type="submit" name="view" value="current" data-view="current"
                class="{{ 'active' if d.view == 'current' }}">Current Performance</button>
        <button type="submit" name="view" value="improved" data-view="improved"
                class="{{ 'active' if d.view == 'improved' }}">With {{ cfg.AGENCY_NAME }}</button>
      </div>

      <div class="metrics">
        <div class="metric m-conv"><p>Monthly Conversions</p><p id="m-conversions">{{ d.selected_fmt.conversions if d.has_result }}</p></div>
        <div class="metric m-rev"><p>Monthly Revenue</p><p id="m-revenue">{{ d.selected_fmt.revenue if d.has_result }}</p></div>
        <div class="metric m-roi"><p>ROI</p><p id="m-roi">{{ d.selected_fmt.roi if d.has_result }}</p></div>
        <div class="metric m-clicks"><p>Monthly Clicks</p><p id="m-clicks">{{ d.selected_fmt.clicks if d.has_result }}</p></div>
      </div>

      <div class="increases">
        <h3>Potential Monthly Increases</h3>
        <div class="row">
          <div><p class="big" id="inc-revenue">{{ d.increases_fmt.revenue if d.has_result }}</p><p class="small">Additional Revenue</p></div>
          <div><p class="big" id="inc-conversions">{{ d.increases_fmt.conversions if d.has_result }}</p><p class="small">More Conversions</p></div>
          <div><p class="big" id="inc-roi">{{ d.increases_fmt.roi if d.has_result }}</p><p class="small">ROI Improvement</p></div>
        </div>
      </div>

      <div class="annual">
        <h4>Annual Projection</h4>
        <p>Additional <strong id="annual">{{ d.annual_fmt if d.has_result }}</strong> per year</p>
      </div>

      <img class="chart-img" id="chart" alt="Current vs optimised performance"
           src="{{ ('data:image/png;base64,' ~ charts[0]) if charts else '' }}">
      <img class="chart-img" id="chart-annual" alt="Cumulative additional revenue over a year"
           src="{{ ('data:image/png;base64,' ~ charts[1]) if charts|length > 1 else '' }}">
      <div class="links"><a id="report-link" href="/report.pdf?{{ query }}">Download PDF summary</a></div>

      <div class="cta">
        <a class="btn" href="{{ cfg.CTA_URL }}">{{ cfg.CTA_LABEL }}</a>
        <p>See how {{ cfg.AGENCY_NAME }} can achieve these results for your business</p>
      </div>
    </div>
  </div>

</div>
</form>

<div class="footer">{{ cfg.DISCLAIMER }}</div>
</div>

<script>
(function(){
  var form=document.getElementById('roi-form');
  var viewField=document.getElementById('view-field');
  var last={{ payload|tojson }};

  function show(){
    var has=last && last.result;
    document.getElementById('placeholder').hidden=!!has;
    document.getElementById('results').hidden=!has;
    if(!has) return;
    var view=viewField.value==='improved'?'improved':'current';
    var m=last.display[view];
    document.getElementById('m-conversions').textContent=m.conversions;
    document.getElementById('m-revenue').textContent=m.revenue;
    document.getElementById('m-roi').textContent=m.roi;
    document.getElementById('m-clicks').textContent=m.clicks;
    document.getElementById('inc-revenue').textContent=last.display.increases.revenue;
    document.getElementById('inc-conversions').textContent=last.display.increases.conversions;
    document.getElementById('inc-roi').textContent=last.display.increases.roi;
    document.getElementById('annual').textContent=last.display.annual;
    document.querySelectorAll('.toggle button').forEach(function(b){
      b.classList.toggle('active',b.dataset.view===view);
    });
  }

  /* Only the newest request may update the panel */
  var seq=0;
  var pending=null;

  function refresh(){
    var data=new FormData(form);
    var qs=new URLSearchParams(data);
    qs.delete('view');
    var mine=++seq;
    if(pending) pending.abort();
    pending=window.AbortController?new AbortController():null;
    fetch('/api/projection',{method:'POST',body:data,signal:pending?pending.signal:undefined})
      .then(function(r){
        if(!r.ok) throw new Error('HTTP '+r.status);
        return r.json();
      })
      .then(function(p){
        if(mine!==seq) return;
        last=p;
        if(p.result){
          var q=qs.toString();
          document.getElementById('chart').src='/chart.png?'+q;
          document.getElementById('chart-annual').src='/chart.png?kind=annual&'+q;
          document.getElementById('report-link').href='/report.pdf?'+q;
        }
        show();
      })
      .catch(function(err){
        if(mine!==seq || err.name==='AbortError') return;
        last=null;
        show();
        if(window.console) console.error('Projection refresh failed:',err);
      });
  }

  form.querySelectorAll('input[type=number]').forEach(function(el){
    el.addEventListener('input',refresh);
  });
  document.querySelectorAll('.toggle button').forEach(function(b){
    b.addEventListener('click',function(e){
      e.preventDefault();
      viewField.value=b.dataset.view;
      show();
    });
  });
})();
</script>
</body>
</html>
"""


def _render(form: Dict[str, Any], view: View):
    inputs = parse_form(form)
    projection = calculate_projection(inputs)
    d = compute_display_data(inputs, view, projection)
    charts = report.get_web_charts(projection) if projection is not None else []
    return render_template_string(
        HTML_TEMPLATE,
        form={f: form.get(f, "") for f in FIELDS},
        d=d,
        charts=charts,
        payload=json_payload(d),
        query=_query_string(inputs),
        cfg=cfg,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    if request.method == "GET":
        return _render({}, View.CURRENT)

    # POST: recompute from the submitted form. A clicked toggle button
    # comes after the hidden view field, so the last value wins.
    form = request.form.to_dict()
    views = request.form.getlist("view")
    return _render(form, View.parse(views[-1] if views else None))


@app.route("/api/projection", methods=["POST"])
def api_projection():
    data = _request_data()
    inputs = parse_form(data)
    d = compute_display_data(inputs, View.parse(str(data.get("view") or "")))
    return jsonify(json_payload(d))


@app.route("/chart.png")
def chart_png():
    projection = calculate_projection(parse_form(request.args.to_dict()))
    if projection is None:
        return "Enter spend, conversion rate and customer value first.", 404
    kind = request.args.get("kind", "comparison")
    if kind not in report.CHARTS:
        return f"Unknown chart: {kind}", 404
    png = report.render_chart_png(projection, kind)
    return send_file(io.BytesIO(png), mimetype="image/png")


@app.route("/report.pdf")
def report_pdf():
    inputs = parse_form(request.args.to_dict())
    d = compute_display_data(inputs)
    if not d["has_result"]:
        return "No projection to report yet. Fill in the calculator first.", 404
    logger.info("Generating PDF summary for spend=%s", inputs.monthly_ad_spend)
    pdf = report.generate_pdf(inputs, d)
    return send_file(
        io.BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name="google_ads_roi_projection.pdf",
    )


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(
    host: str = cfg.WEB_HOST,
    port: int = cfg.WEB_PORT,
    debug: bool = True,
    open_browser: bool = True,
) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{host}:{port}"
    print(f"Starting web app at {url}")
    if open_browser:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_web()
