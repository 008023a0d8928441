# Load environment variables FIRST (before any other imports)
from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI

# Silence verbose loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger("web_server")

import collector
from collector.errors import AqhiFetchError
from core.features import build_feature_collection

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: Optional[str]) -> bool:
    """Accept the usual boolean spellings; anything else reads as False."""
    if value is None:
        return False
    if value in _TRUE_VALUES:
        return True
    if value not in _FALSE_VALUES and value != "":
        logger.debug(f"Ignoring unparsable boolean {value!r}")
    return False


async def get_station_data(last: bool, recent: bool) -> Dict[str, Any]:
    records = await collector.fetch_pollutant_history()
    return build_feature_collection(records, only_last=last, only_recent=recent)


app = FastAPI(title="AQHI Proxy")


@app.get("/")
async def handle_request(
    data_type: Optional[str] = None,
    last: Optional[str] = None,
    recent: Optional[str] = None,
):
    """
    Single entry point, dispatched on `data_type`.

    Always answers 200; failures travel inside the body under "error".
    """
    if data_type == "data":
        try:
            return await get_station_data(parse_bool(last), parse_bool(recent))
        except AqhiFetchError as e:
            logger.info(f"Station data unavailable: {e}")
            return {"error": str(e)}
    if data_type == "repo":
        return await collector.fetch_report_and_forecast()
    return {"error": "Invalid data_type."}


if __name__ == "__main__":
    import uvicorn
    from config import LOG_FORMAT, LOG_LEVEL, PROXY_PORT
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info(f"Starting server on :{PROXY_PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PROXY_PORT)
