"""
Tests for JSON / CSV / HTML report rendering.
"""
import csv
import io
import json
import random

from climate_risk.schemas.assessment_request import PropertyAssessmentInput
from climate_risk.scoring.engine import assess
from climate_risk.services.report_export import (
    PORTFOLIO_CSV_HEADER, portfolio_to_csv, portfolio_to_json,
    report_to_csv, report_to_html, report_to_json,
)


def _report(seed=1, **overrides):
    kwargs = {
        "latitude": 22.57,
        "longitude": 88.36,
        "property_type": "mixed_use",
        "loan_amount": 320.0,
        "reference": "KOL-019",
    }
    kwargs.update(overrides)
    return assess(PropertyAssessmentInput(**kwargs), rng=random.Random(seed))


class TestJSON:
    def test_round_trips_key_fields(self):
        report = _report()
        data = json.loads(report_to_json(report))
        assert data["location_name"] == "Kolkata Urban Agglomeration"
        assert data["risk_classification"] == report.risk_classification.value
        assert data["property_type"] == "mixed_use"
        assert len(data["factors"]) == 4
        assert len(data["projections"]) == 11

    def test_portfolio_json(self):
        reports = [_report(1), _report(2, loan_amount=80.0)]
        data = json.loads(portfolio_to_json(reports))
        assert data["summary"]["total_properties"] == 2
        assert data["summary"]["total_exposure_lakhs"] == 400.0
        assert len(data["assessments"]) == 2
        assert "IPCC AR6" in data["report_metadata"]["data_sources"]


class TestCSV:
    def test_report_csv_sections(self):
        report = _report()
        rows = list(csv.reader(io.StringIO(report_to_csv(report))))
        assert rows[0][0] == "Factor"
        assert [r[0] for r in rows[1:5]] == [f.factor for f in report.factors]
        assert rows[5][0] == "Composite"
        projection_header = rows.index(["Year", "Flood Risk", "Heat Stress", "Sea-Level Rise", "Water Scarcity", "Composite Risk"])
        assert len(rows) - projection_header - 1 == 11

    def test_portfolio_csv(self):
        reports = [_report(1), _report(2, reference=None, loan_amount=None)]
        rows = list(csv.reader(io.StringIO(portfolio_to_csv(reports))))
        assert rows[0] == PORTFOLIO_CSV_HEADER
        assert rows[1][0] == "KOL-019"
        assert rows[1][3] == "mixed use"
        assert rows[2][0] == reports[1].assessment_id
        assert rows[2][6] == ""


class TestHTML:
    def test_contains_sections(self):
        report = _report()
        html = report_to_html(report)
        assert html.startswith("<!DOCTYPE html>")
        assert "Kolkata Urban Agglomeration" in html
        assert "Hazard Breakdown" in html
        for adj in report.lending_adjustments:
            assert adj.title in html

    def test_escapes_text(self):
        report = _report().model_copy(update={"location_name": "Plot <7> & Sons"})
        html = report_to_html(report)
        assert "Plot &lt;7&gt; &amp; Sons" in html
        assert "<7>" not in html
