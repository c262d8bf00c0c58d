from typing import Optional

from portfolio.models import PortfolioData


class PortfolioNotLoadedError(Exception):
    """Raised when the cached record is read before any successful fetch."""


class PortfolioStore:
    """
    Holds the last successfully fetched combined record.

    "Not loaded" (no fetch has succeeded yet) is kept apart from a loaded
    record that happens to be empty. The record is swapped as a whole and
    never mutated in place.
    """

    def __init__(self):
        self._data: Optional[PortfolioData] = None

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def set(self, data: PortfolioData) -> None:
        self._data = data

    def get(self) -> PortfolioData:
        if self._data is None:
            raise PortfolioNotLoadedError("Portfolio data has not been loaded yet")
        return self._data

    def clear(self) -> None:
        self._data = None
