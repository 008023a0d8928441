"""
AQHI Lab - Collector Module
Scrapes embedded JSON blocks from the AQHI website behind a TTL file cache.
"""

from .errors import AqhiFetchError, NetworkError, ExtractionError, ParseError, FeedShapeError
from .cache import FileCache
from .aqhi_fetcher import fetch_and_extract

__all__ = [
    "fetch_and_extract", "FileCache",
    "AqhiFetchError", "NetworkError", "ExtractionError", "ParseError", "FeedShapeError",
    "fetch_pollutant_history", "fetch_report_and_forecast",
]


async def fetch_pollutant_history() -> list:
    """Past 24h pollutant records, grouped by the upstream's outer dimension."""
    from config import AQHI_POLLUTANT_URL, AQHI_POLLUTANT_VARIABLE

    return await fetch_and_extract(AQHI_POLLUTANT_URL, AQHI_POLLUTANT_VARIABLE)


async def fetch_report_and_forecast() -> dict:
    """
    Fetch the AQHI report and forecast blocks independently.

    Each key holds either the parsed array or an {"error": ...} payload, so
    one failing block never hides the other.
    """
    import asyncio
    from config import AQHI_FORECAST_URL, AQHI_REPORT_VARIABLE, AQHI_FORECAST_VARIABLE

    names = (AQHI_REPORT_VARIABLE, AQHI_FORECAST_VARIABLE)
    results = await asyncio.gather(
        *(fetch_and_extract(AQHI_FORECAST_URL, name) for name in names),
        return_exceptions=True,
    )

    payload = {}
    for name, result in zip(names, results):
        if isinstance(result, AqhiFetchError):
            payload[name] = {"error": f"No match found for {name}."}
        elif isinstance(result, BaseException):
            raise result
        else:
            payload[name] = result
    return payload
