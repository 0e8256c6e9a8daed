# src/vetengine/report.py
"""
Printable worksheet. Produces a standalone HTML document from the already
computed selection; no dose math happens here.
"""
from __future__ import annotations

from html import escape
from typing import Sequence

from .dosing import round_half_up
from .ranges import format_dose
from .types import SPECIES_LABELS, PatientSummary, SelectedItem

_CELL = "padding:6px;border:1px solid #ddd"

_STYLE = (
    "body{font-family:ui-sans-serif,system-ui,Segoe UI,Roboto,Helvetica,Arial,sans-serif;margin:24px}"
    " h1{font-size:20px;margin:0 0 12px}"
    " table{border-collapse:collapse;width:100%}"
    " th{background:#f5f5f5;text-align:left;padding:8px;border:1px solid #ddd}"
)

DISCLAIMER = "Generated by Vet Medication Suite. Verify against clinic protocols before administering."

HEADERS = ("Drug", "Category", "Route", "Dose", "Result", "Notes")


def dose_cell_text(item: SelectedItem) -> str:
    dose = format_dose(item.dose) if item.dose is not None else ""
    return f"{dose} {item.unit_label}".strip()


def _row(item: SelectedItem) -> str:
    name = escape(item.name)
    if item.presentation is not None:
        name += f" <span style='color:#666'>({escape(item.presentation.label)})</span>"
    cells = (
        name,
        escape(item.category),
        escape(item.route or ""),
        escape(dose_cell_text(item)),
        f"<b>{escape(item.result_text)}</b>",
        escape(item.notes or ""),
    )
    return "<tr>" + "".join(f"<td style='{_CELL}'>{c}</td>" for c in cells) + "</tr>"


def render_summary_html(items: Sequence[SelectedItem], patient: PatientSummary) -> str:
    """
    Selected drugs as a printable table headed by species and weight (kg,
    2 decimals). Catalog and user text is HTML-escaped.
    """
    species = SPECIES_LABELS.get(patient.species, patient.species)
    weight = format_dose(round_half_up(patient.weight_kg, 2))
    head = "".join(f"<th>{h}</th>" for h in HEADERS)
    rows = "".join(_row(it) for it in items)
    return (
        "<!doctype html><html><head><meta charset='utf-8'><title>Selected Meds</title>"
        f"<style>{_STYLE}</style></head><body>"
        f"<h1>Selected Meds — {escape(species)} — {weight} kg</h1>"
        f"<table><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table>"
        f"<p style='margin-top:12px;font-size:12px;color:#666'>{escape(DISCLAIMER)}</p>"
        "</body></html>"
    )
