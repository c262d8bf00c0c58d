from portfolio.config import get_settings
from portfolio.services.cv_exporter import CVExporter
from portfolio.services.data_provider import PortfolioDataProvider
from portfolio.services.store import PortfolioStore

_portfolio_store: PortfolioStore = None
_cv_exporter: CVExporter = None


def get_data_provider() -> PortfolioDataProvider:
    return PortfolioDataProvider(get_settings())


def get_portfolio_store() -> PortfolioStore:
    global _portfolio_store
    if _portfolio_store is None:
        _portfolio_store = PortfolioStore()
    return _portfolio_store


def get_cv_exporter() -> CVExporter:
    global _cv_exporter
    if _cv_exporter is None:
        _cv_exporter = CVExporter()
    return _cv_exporter
