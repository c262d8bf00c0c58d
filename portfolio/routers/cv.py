from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from urllib.parse import quote
import logging
import unicodedata

from portfolio.constants import NOT_LOADED_NOTICE
from portfolio.dependencies import get_cv_exporter, get_portfolio_store
from portfolio.models import ErrorResponse
from portfolio.services.cv_exporter import CVExportError, CVExporter
from portfolio.services.store import PortfolioNotLoadedError, PortfolioStore

logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    # Header values must be latin-1; the exact name travels in filename*
    folded = unicodedata.normalize("NFKD", filename)
    fallback = folded.encode("ascii", "ignore").decode("ascii") or "CV.pdf"
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.get(
    "/cv",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
def download_cv(
    store: PortfolioStore = Depends(get_portfolio_store),
    exporter: CVExporter = Depends(get_cv_exporter),
):
    """
    Build the CV from the record cached by the last successful fetch.
    Nothing is fetched here: without a cached record the caller gets a
    409 notice and is expected to retry once the page has loaded.
    """
    try:
        data = store.get()
    except PortfolioNotLoadedError:
        return JSONResponse(status_code=409, content={"error": NOT_LOADED_NOTICE})

    try:
        document = exporter.export(data)
    except CVExportError as e:
        logger.warning(f"CV export refused: {e}")
        return JSONResponse(status_code=422, content={"error": str(e)})

    return Response(
        content=document.content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(document.filename)},
    )
