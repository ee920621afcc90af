from typing import Dict, Optional
from urllib.parse import quote
import requests

from .constants import FINDING_OPERATION
from .errors import FetchError
from .models import SearchQuery
from .utils.config import Config, MAX_ENTRIES_PER_PAGE
from .utils.logger import get_logger
from .utils.rate_limiter import RateLimiter

class EbaySearchGateway:
    """Issues findItemsByKeywords calls against the eBay Finding API."""

    def __init__(self, config: Optional[Config] = None, rate_limiter: Optional[RateLimiter] = None,
                 http_session: Optional[requests.Session] = None):
        self.config = config or Config()
        self.rate_limiter = rate_limiter or RateLimiter(self.config.MAX_REQUESTS_PER_MINUTE)
        self.http_session = http_session or requests.Session()
        self.num_of_results = self.config.NUM_OF_RESULTS
        self.logger = get_logger(__name__)

    def search(self, query: SearchQuery) -> Dict:
        """Run one keyword search and return the decoded JSON payload.

        Raises:
            FetchError: when the rate limit is spent, on timeout, transport
                failure, HTTP error status or a body that is not a JSON object.
        """
        url = self._construct_search_url(query)
        self.logger.info(f"Searching eBay: {self._redact(url)}")
        self.rate_limiter.wait(max_wait=self.config.REQUEST_TIMEOUT)

        try:
            response = self.http_session.get(url, timeout=self.config.REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.Timeout as e:
            raise FetchError(f"Search timed out after {self.config.REQUEST_TIMEOUT}s") from e
        except requests.RequestException as e:
            raise FetchError(f"Search request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError("Search response is not valid JSON") from e

        if not isinstance(payload, dict):
            raise FetchError("Search response is not a JSON object")
        return payload

    def _construct_search_url(self, query: SearchQuery) -> str:
        """Build a Finding API URL; filter indices count only the filters present."""
        entries_per_page = min(self.num_of_results, MAX_ENTRIES_PER_PAGE)
        params = [
            f"OPERATION-NAME={FINDING_OPERATION}",
            f"SERVICE-VERSION={self.config.EBAY_SERVICE_VERSION}",
            f"SECURITY-APPNAME={self.config.EBAY_APP_ID}",
            "RESPONSE-DATA-FORMAT=JSON",
            "REST-PAYLOAD",
            f"paginationInput.entriesPerPage={entries_per_page}",
            f"keywords={quote(query.keyword, safe='')}",
        ]

        for index, (name, value) in enumerate(query.item_filters()):
            params.append(f"itemFilter({index}).name={name}")
            params.append(f"itemFilter({index}).value={quote(value, safe='')}")

        return f"{self.config.EBAY_FINDING_URL}?{'&'.join(params)}"

    def _redact(self, url: str) -> str:
        return url.replace(self.config.EBAY_APP_ID, "***")

    def close(self) -> None:
        self.http_session.close()
        self.logger.info("HTTP session closed.")
