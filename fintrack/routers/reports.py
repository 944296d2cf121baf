import logging

from fastapi import APIRouter, HTTPException, Response

from fintrack.models.finance import DashboardRequest
from fintrack.routers.dashboard import build_view
from fintrack.utils import report

router = APIRouter()
logger = logging.getLogger(__name__)


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/monthly.pdf")
def monthly_pdf_report(request: DashboardRequest) -> Response:
    """
    Render the month's dashboard summary as a PDF.
    """
    view = build_view(request)
    try:
        content = report.generate_pdf(view)
    except Exception as e:
        logger.error(f"Error rendering PDF for {view.reference_month}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error rendering report: {str(e)}")

    logger.info(f"PDF report rendered for {view.reference_month} ({len(content)} bytes)")
    return _attachment(content, "application/pdf", f"report_{view.reference_month}.pdf")


@router.post("/monthly.csv")
def monthly_csv_report(request: DashboardRequest) -> Response:
    view = build_view(request)
    try:
        content = report.generate_csv(view, request.transactions)
    except Exception as e:
        logger.error(f"Error rendering CSV for {view.reference_month}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error rendering report: {str(e)}")

    return _attachment(content, "text/csv", f"report_{view.reference_month}.csv")
