from typing import Any, Dict, Optional, TypedDict
from langgraph.graph import StateGraph, END
from .models import SearchQuery, Session, TurnResult
from .errors import FetchError
from .search_gateway import EbaySearchGateway
from .session_store import SessionStore
from .slot_filling import SlotFillingEngine
from .utils.config import Config
from .utils.rate_limiter import RateLimiter
from .langgraph_nodes import (
    build_search_query,
    search_ebay,
    route_after_search,
    format_results,
    format_failed_fetch
)

class ShopperState(TypedDict, total=False):
    session: Session
    gateway: EbaySearchGateway
    search_query: SearchQuery
    payload: Dict[str, Any]
    fetch_error: FetchError
    turn_result: TurnResult

def build_search_graph():
    """Compile the dispatch pipeline: query -> search -> reply (results or fetch error)."""
    graph = StateGraph(state_schema=ShopperState)
    graph.add_node("build_search_query", build_search_query)
    graph.add_node("search_ebay", search_ebay)
    graph.add_node("format_results", format_results)
    graph.add_node("format_fetch_error", format_failed_fetch)

    graph.add_edge("build_search_query", "search_ebay")
    graph.add_conditional_edges("search_ebay", route_after_search, {
        "format_results": "format_results",
        "format_fetch_error": "format_fetch_error"
    })
    graph.add_edge("format_results", END)
    graph.add_edge("format_fetch_error", END)

    graph.set_entry_point("build_search_query")
    return graph.compile()

def initialize_agent(gateway: Optional[EbaySearchGateway] = None):
    """
    Initializes the search gateway, the dispatch graph, the slot-filling engine
    and the session store.
    Args:
        gateway: Search gateway to use; one is built from Config when omitted.
    Returns:
        Tuple: session_store, engine
    """
    if gateway is None:
        config = Config()
        rate_limiter = RateLimiter(max_requests_per_minute=config.MAX_REQUESTS_PER_MINUTE)
        gateway = EbaySearchGateway(config=config, rate_limiter=rate_limiter)
        session_store = SessionStore(ttl_seconds=config.SESSION_TTL_SECONDS)
    else:
        session_store = SessionStore()

    engine = SlotFillingEngine(graph_app=build_search_graph(), gateway=gateway)
    return session_store, engine

def process_message(session_store: SessionStore, engine: SlotFillingEngine, session_id: str, message: str) -> TurnResult:
    """
    Processes one chat turn for a session while holding that session's lock.
    Raises:
        SessionNotFoundError: if no session was created for session_id.
    """
    with session_store.checkout(session_id) as session:
        return engine.step(session, message)

def format_console_message(message: str) -> str:
    """Formats an HTML-flavoured reply for terminal display."""
    return message.replace("<br>", "\n").strip()
