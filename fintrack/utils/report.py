import csv
import io
from typing import Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from fintrack.models.finance import Transaction
from fintrack.utils.metrics import DashboardView, in_month, plain_amount

CSV_FIELDS = ["date", "type", "category", "amount", "description"]


def _line(pdf: FPDF, text: str) -> None:
    pdf.cell(0, 10, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _latin1(text: str) -> str:
    # Core PDF fonts only cover latin-1
    return text.encode("latin-1", "replace").decode("latin-1")


def generate_pdf(view: DashboardView) -> bytes:
    currency = view.currency or ""
    metrics = view.metrics

    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    _line(pdf, f"Monthly Report - {view.reference_month}")

    pdf.set_font("Helvetica", "", 12)
    _line(pdf, f"Income: {plain_amount(metrics.income)} {currency}".rstrip())
    _line(pdf, f"Expenses: {plain_amount(metrics.expenses)} {currency}".rstrip())
    _line(pdf, f"Budget: {plain_amount(metrics.total_budget)} ({metrics.used_percent:.1f}% used)")
    _line(pdf, f"Remaining: {plain_amount(metrics.remaining)}")
    _line(pdf, f"Savings Rate: {metrics.savings_rate:.1f}%")
    pdf.ln(5)

    pdf.set_font("Helvetica", "B", 12)
    _line(pdf, "Category Breakdown:")
    pdf.set_font("Helvetica", "", 12)
    if view.category_breakdown:
        for item in view.category_breakdown:
            _line(pdf, f"- {item.category}: {plain_amount(item.amount)} ({item.share:.1f}%)")
    else:
        _line(pdf, "None")

    pdf.ln(5)
    pdf.set_font("Helvetica", "B", 12)
    _line(pdf, "Insights:")
    pdf.set_font("Helvetica", "", 12)
    for insight in view.insights:
        pdf.multi_cell(0, 8, _latin1(f"{insight.title}: {insight.message}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    return bytes(pdf.output())


def generate_csv(view: DashboardView, transactions: Sequence[Transaction]) -> bytes:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for tx in transactions:
        if not in_month(tx, view.reference_month):
            continue
        writer.writerow({
            "date": tx.date,
            "type": tx.type,
            "category": tx.category,
            "amount": tx.amount,
            "description": tx.description or "",
        })
    return output.getvalue().encode()
