from .errors import FetchError
from .response_formatter import format_fetch_error, format_search_response
from .slot_filling import to_search_query


def build_search_query(state: dict) -> dict:
    return {
        **state,
        "search_query": to_search_query(state["session"])
    }


def search_ebay(state: dict) -> dict:
    gateway = state["gateway"]
    try:
        payload = gateway.search(state["search_query"])
    except FetchError as e:
        return {
            **state,
            "fetch_error": e
        }
    return {
        **state,
        "payload": payload
    }


def route_after_search(state: dict) -> str:
    return "format_fetch_error" if state.get("fetch_error") else "format_results"


def format_results(state: dict) -> dict:
    """
    Renders the search payload. A payload missing the fields the reply needs
    is reported the same way as a failed fetch.
    """
    try:
        turn_result = format_search_response(state["payload"], state["gateway"].num_of_results)
    except FetchError as e:
        turn_result = format_fetch_error(e)
    return {
        **state,
        "turn_result": turn_result
    }


def format_failed_fetch(state: dict) -> dict:
    return {
        **state,
        "turn_result": format_fetch_error(state["fetch_error"])
    }
