from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from portfolio.dependencies import get_data_provider, get_portfolio_store
from portfolio.models import ErrorResponse
from portfolio.services.data_provider import DataProviderError, PortfolioDataProvider
from portfolio.services.store import PortfolioStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/data", responses={500: {"model": ErrorResponse}})
def get_portfolio_data(
    provider: PortfolioDataProvider = Depends(get_data_provider),
    store: PortfolioStore = Depends(get_portfolio_store),
):
    """
    Return the combined record: profile, skills, projects and, when
    provisioned, services. Store failures come back as 500 with an error
    message and leave the cached record untouched.
    """
    try:
        data = provider.fetch()
    except DataProviderError as e:
        logger.error(f"Error in /data endpoint: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    store.set(data)
    return JSONResponse(status_code=200, content=data.to_response())
