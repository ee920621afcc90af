"""Turn Finding API payloads into the chat reply shown to the shopper.

The Finding API's JSON wraps nearly every value in a one-element list, so
field access goes through ``_first``; a missing field surfaces as
``MalformedPayloadError`` rather than a bare ``KeyError``.
"""
from html import escape
from typing import Any, Dict, List, Optional

from .constants import (
    FETCH_ERROR_MESSAGE,
    FINDING_RESPONSE_KEY,
    LINK_COLOR,
    SEARCH_AGAIN_SUFFIX,
    ZERO_RESULTS_MESSAGE,
)
from .errors import FetchError, MalformedPayloadError
from .models import FetchedItem, TurnResult
from .utils.logger import get_logger

logger = get_logger(__name__)

def _first(container: Any, key: str) -> Any:
    try:
        value = container[key]
        return value[0] if isinstance(value, list) else value
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedPayloadError(f"Missing '{key}' in search response") from e

def _optional(container: Any, key: str) -> Optional[Any]:
    try:
        return _first(container, key)
    except MalformedPayloadError:
        return None

def upstream_error_message(body: Dict) -> Optional[str]:
    """Return the embedded error text when the call was acknowledged as a failure."""
    ack = _first(body, "ack")
    if str(ack).lower() != "failure":
        return None
    error = _first(_first(body, "errorMessage"), "error")
    return _first(error, "message")

def result_count(body: Dict) -> int:
    raw_count = _first(_first(body, "searchResult"), "@count")
    try:
        return int(raw_count)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Result count '{raw_count}' is not a number") from e

def parse_items(body: Dict) -> List[FetchedItem]:
    search_result = _first(body, "searchResult")
    if not isinstance(search_result, dict):
        raise MalformedPayloadError("searchResult is not an object")
    items = []
    for element in search_result.get("item", []):
        current_price = _first(_first(element, "sellingStatus"), "currentPrice")
        items.append(FetchedItem(
            id=_first(element, "itemId"),
            gallery_url=_optional(element, "galleryURL"),
            item_url=_first(element, "viewItemURL"),
            title=_first(element, "title"),
            condition=_first(_first(element, "condition"), "conditionDisplayName"),
            price=_first(current_price, "__value__"),
            currency=_optional(current_price, "@currencyId"),
        ))
    return items

def _link(url: str) -> str:
    url = escape(url, quote=True)
    return f"<a href='{url}' target='_blank' style='color:{LINK_COLOR};'>{url}</a>"

def render_items(items: List[FetchedItem], reported_count: int, page_url: str) -> str:
    parts = [f"There are {reported_count} items matching your criteria : <br>"]
    for i, item in enumerate(items, 1):
        price = f"{item.price} {item.currency}" if item.currency else item.price
        parts.append(f"<br> Item {i} Title : {escape(item.title)}")
        parts.append(f"<br> Item {i} Condition : {escape(item.condition)}")
        parts.append(f"<br> Item {i} Price : {price}")
        if item.gallery_url:
            parts.append(f"<br> Item {i} Gallery : <img src='{escape(item.gallery_url, quote=True)}'></img>")
        parts.append(f"<br> Item {i} URL : {_link(item.item_url)}<br>")
    parts.append(f"<br> Results Page URL : {_link(page_url)} <br><br> {SEARCH_AGAIN_SUFFIX}")
    return "".join(parts)

def format_search_response(payload: Dict, num_of_results: int) -> TurnResult:
    """Render a search payload as a terminal reply.

    Checked in order: failure acknowledgement, zero results, then the item
    listing. The reported count is the returned count when fewer items came
    back than were requested.
    """
    body = _first(payload, FINDING_RESPONSE_KEY)

    error_message = upstream_error_message(body)
    if error_message is not None:
        logger.warning(f"Search API reported failure: {error_message}")
        return TurnResult(message=f"{error_message}<br>  {SEARCH_AGAIN_SUFFIX} ", terminal=True)

    count = result_count(body)
    if count == 0:
        logger.info("Search returned no items")
        return TurnResult(message=ZERO_RESULTS_MESSAGE, terminal=True)

    items = parse_items(body)
    page_url = _first(body, "itemSearchURL")
    reported_count = count if count < num_of_results else num_of_results
    logger.info(f"Rendering {len(items)} items")
    return TurnResult(message=render_items(items, reported_count, page_url), terminal=True)

def format_fetch_error(error: FetchError) -> TurnResult:
    logger.error(f"Search failed: {error}", exc_info=error)
    return TurnResult(message=FETCH_ERROR_MESSAGE, terminal=True, status_code=502)
