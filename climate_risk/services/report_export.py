"""
Report export — JSON / CSV / HTML renderings of assessment reports.

Downloads are produced by walking ClimateRiskReport; nothing here recomputes
a score.
"""
from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from html import escape

from climate_risk.core.config import get_settings
from climate_risk.schemas.risk_report import ClimateRiskReport, RiskClassification
from climate_risk.services.portfolio import summarize_portfolio

DATA_SOURCES = ["IMD 2023", "IPCC AR6", "CWMI", "NATMO"]

DISCLAIMER = (
    "These recommendations are generated by the Climate Credit Risk Engine and are advisory "
    "in nature. Final lending decisions remain with the Credit Committee as per bank policy. "
    "Ref: RBI/2024-25/DOR/FINC/001."
)

PORTFOLIO_CSV_HEADER = [
    "Reference", "Location", "Region", "Property Type", "Risk Score",
    "Classification", "Loan Amount (Lakhs)", "Assessment Date",
]

CLASSIFICATION_COLORS = {
    RiskClassification.LOW: "#16a34a",
    RiskClassification.MODERATE: "#f59e0b",
    RiskClassification.HIGH: "#ea580c",
    RiskClassification.SEVERE: "#dc2626",
}


def report_to_json(report: ClimateRiskReport) -> str:
    return json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False)


def report_to_csv(report: ClimateRiskReport) -> str:
    """Factor breakdown followed by the projection table."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow(["Factor", "Score", "Weight", "Weighted Score", "Data Source"])
    for f in report.factors:
        writer.writerow([f.factor, f.score, f.weight, f.weighted_score, f.data_source])
    writer.writerow(["Composite", report.climate_risk_score, 1.0, report.climate_risk_score, ""])

    writer.writerow([])
    writer.writerow(["Year", "Flood Risk", "Heat Stress", "Sea-Level Rise", "Water Scarcity", "Composite Risk"])
    for p in report.projections:
        writer.writerow([p.year, p.flood_risk, p.heat_stress, p.sea_level_rise, p.water_scarcity, p.composite_risk])

    return buf.getvalue()


def portfolio_to_csv(reports: list[ClimateRiskReport]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(PORTFOLIO_CSV_HEADER)
    for r in reports:
        writer.writerow([
            r.reference or r.assessment_id,
            r.location_name,
            r.region,
            r.property_type.value.replace("_", " "),
            r.climate_risk_score,
            r.risk_classification.value,
            "" if r.loan_amount is None else r.loan_amount,
            r.assessment_date.date().isoformat(),
        ])
    return buf.getvalue()


def portfolio_to_json(reports: list[ClimateRiskReport]) -> str:
    settings = get_settings()
    summary = summarize_portfolio(reports)
    payload = {
        "report_metadata": {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "engine_version": settings.model_version,
            "data_sources": DATA_SOURCES,
        },
        "summary": {
            "total_properties": summary.property_count,
            "total_exposure_lakhs": summary.total_exposure,
            "avg_risk_score": summary.weighted_average_score,
            "high_severe_count": (
                summary.distribution[RiskClassification.HIGH.value]
                + summary.distribution[RiskClassification.SEVERE.value]
            ),
            "concentration_index": summary.concentration_index,
            "distribution": summary.distribution,
        },
        "assessments": [r.model_dump(mode="json") for r in reports],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def report_to_html(report: ClimateRiskReport) -> str:
    color = CLASSIFICATION_COLORS[report.risk_classification]

    factor_rows = "".join(
        f"<tr><td>{escape(f.factor)}</td><td>{f.score}</td><td>{f.weight:.2f}</td>"
        f"<td>{f.weighted_score:.1f}</td><td>{escape(f.description)}</td></tr>"
        for f in report.factors
    )
    adjustment_rows = "".join(
        f"<tr class=\"{a.severity.value}\"><td>{escape(a.title)}</td><td>{escape(a.value or '')}</td>"
        f"<td>{a.severity.value}</td><td>{escape(a.description)}</td></tr>"
        for a in report.lending_adjustments
    )
    horizon = report.projections[-1] if report.projections else None
    horizon_line = (
        f"<p>Projected composite risk in {horizon.year}: <strong>{horizon.composite_risk:.1f}</strong> "
        f"({escape(report.scenario)})</p>"
        if horizon else ""
    )

    return f"""<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">
<title>Climate Risk Assessment — {escape(report.location_name)}</title>
<style>body{{font-family:Inter,sans-serif;color:#1e293b;margin:0;padding:32px;background:#f8fafc}}
table{{width:100%;border-collapse:collapse;font-size:13px}}
th{{background:#1e3a5f;color:white;padding:8px;text-align:left}}
td{{padding:8px;border-bottom:1px solid #e5e7eb}}
tr.critical td{{color:#dc2626}}tr.warning td{{color:#b45309}}
.footer{{margin-top:32px;font-size:11px;color:#94a3b8}}</style></head><body>
<h1>{escape(report.location_name)}</h1>
<p>{escape(report.region)} · {report.latitude:.4f}°N, {report.longitude:.4f}°E · {escape(report.property_type.value.replace("_", " "))}</p>
<p>Climate Risk Score: <strong style="color:{color}">{report.climate_risk_score:.1f}/100</strong>
 — {report.risk_classification.value} · confidence {report.confidence_level:.0%}</p>
{horizon_line}
<h2>Hazard Breakdown</h2>
<table><thead><tr><th>Factor</th><th>Score</th><th>Weight</th><th>Weighted</th><th>Detail</th></tr></thead>
<tbody>{factor_rows}</tbody></table>
<h2>Lending Adjustments</h2>
<table><thead><tr><th>Action</th><th>Value</th><th>Severity</th><th>Detail</th></tr></thead>
<tbody>{adjustment_rows}</tbody></table>
<div class="footer">{escape(DISCLAIMER)} Model {escape(report.model_version)} · Data: {escape(report.data_vintage)} ·
Assessed {report.assessment_date.isoformat()}</div>
</body></html>"""
