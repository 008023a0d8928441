"""
AQHI Lab - Fetch errors
Failures raised while pulling embedded data blocks from the AQHI site.
"""


class AqhiFetchError(Exception):
    """Base class for every failure of a single fetch-and-extract call."""


class NetworkError(AqhiFetchError):
    """Upstream unreachable or the response body could not be read."""


class ExtractionError(AqhiFetchError):
    """The `var <name> = [...];` assignment is missing from the page."""


class ParseError(AqhiFetchError):
    """The extracted text is not a JSON array."""


class FeedShapeError(ParseError):
    """Decoded JSON does not have the nesting the reshaper expects."""
