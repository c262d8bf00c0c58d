from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
import logging

from portfolio.config import Settings, get_settings
from portfolio.dependencies import get_data_provider, get_portfolio_store
from portfolio.services.data_provider import DataProviderError, PortfolioDataProvider
from portfolio.services.renderer import build_fallback_view, build_page_view, render_page
from portfolio.services.store import PortfolioStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
def portfolio_page(
    provider: PortfolioDataProvider = Depends(get_data_provider),
    store: PortfolioStore = Depends(get_portfolio_store),
    settings: Settings = Depends(get_settings),
):
    try:
        data = provider.fetch()
    except DataProviderError as e:
        # Degraded page: only the name slot is filled
        logger.error(f"Error fetching portfolio data: {e}")
        return HTMLResponse(render_page(build_fallback_view(settings.fallback_name)))

    store.set(data)
    return HTMLResponse(render_page(build_page_view(data)))
