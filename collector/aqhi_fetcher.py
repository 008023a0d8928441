"""
AQHI Lab - Embedded Data Fetcher
Pulls `var <name> = [...];` JSON blocks out of the AQHI site's JavaScript files.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

import httpx

from config import CACHE_TTL_SECONDS
from collector.cache import FileCache, get_default_cache
from collector.errors import ExtractionError, NetworkError, ParseError

logger = logging.getLogger("aqhi_fetcher")


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(follow_redirects=True)


def _variable_pattern(variable_name: str) -> re.Pattern:
    # Non-greedy up to the first "];" so the literal may span lines and nest.
    return re.compile(rf"var {re.escape(variable_name)} = (\[.+?\]);", re.DOTALL)


def _load_cached(payload: bytes) -> Optional[List[Any]]:
    try:
        data = json.loads(payload)
    except ValueError:
        return None
    return data if isinstance(data, list) else None


def extract_variable(body: str, variable_name: str) -> str:
    """
    Return the raw array literal assigned to `variable_name` in `body`.

    Raises:
        ExtractionError: no matching assignment in the document
    """
    match = _variable_pattern(variable_name).search(body)
    if match is None:
        logger.warning(
            f"Failed to find variable {variable_name} in the response body.\nResponse Body: {body}"
        )
        raise ExtractionError(f"variable {variable_name} not found")
    return match.group(1)


def parse_array(text: str, variable_name: str) -> List[Any]:
    """
    Decode an extracted literal, which must be a JSON array.

    Raises:
        ParseError: invalid JSON or a non-array value
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        logger.warning(f"Failed to decode JSON for variable {variable_name}.\nJSON: {text}\nError: {e}")
        raise ParseError(f"invalid JSON for variable {variable_name}: {e}") from e
    if not isinstance(data, list):
        logger.warning(f"Variable {variable_name} is not a JSON array.\nJSON: {text}")
        raise ParseError(f"variable {variable_name} is not a JSON array")
    return data


async def _download(url: str) -> str:
    try:
        async with _build_client() as client:
            response = await client.get(url)
            return response.text
    except httpx.HTTPError as e:
        raise NetworkError(f"request to {url} failed: {e}") from e


async def fetch_and_extract(
    url: str,
    variable_name: str,
    cache: Optional[FileCache] = None,
) -> List[Any]:
    """
    Fetch `url` and return the JSON array assigned to `variable_name`.

    A cached copy younger than CACHE_TTL_SECONDS short-circuits the request.
    Only the raw matched text is written back, and only after it parsed.

    Raises:
        NetworkError, ExtractionError, ParseError
    """
    cache = cache or get_default_cache()
    cache_key = url + variable_name

    # Cache files are small; blocking reads/writes inside the handler are accepted.
    cached = cache.get(cache_key, CACHE_TTL_SECONDS)
    if cached is not None:
        data = _load_cached(cached)
        if data is not None:
            logger.debug(f"Cache hit for {variable_name}")
            return data

    body = await _download(url)
    raw = extract_variable(body, variable_name)
    data = parse_array(raw, variable_name)

    cache.set(cache_key, raw.encode("utf-8"))
    return data
