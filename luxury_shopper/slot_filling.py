from dataclasses import dataclass
from typing import Callable, Optional

from .constants import (
    CONDITION_LABELS,
    CONDITION_PROMPT,
    MAX_PRICE_PROMPT,
    MIN_PRICE_PROMPT,
    NO_FILTER_SENTINELS,
)
from .models import SearchQuery, Session, TurnResult
from .utils.logger import get_logger

def normalize_condition(answer: str) -> str:
    """Map new/used in any case to the canonical label; anything else is kept as typed."""
    answer = answer.strip()
    for label in CONDITION_LABELS:
        if answer.lower() == label.lower():
            return label
    return answer

def is_no_filter(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in NO_FILTER_SENTINELS + ("",)

@dataclass(frozen=True)
class SlotDescriptor:
    """A criterion asked for on one turn and read from the next."""
    name: str
    value_field: str
    asked_field: str
    prompt: str
    normalize: Callable[[str], str] = str.strip

# Asked in this order, once each, before a search is dispatched
SLOTS = (
    SlotDescriptor("condition", "condition", "condition_asked", CONDITION_PROMPT, normalize_condition),
    SlotDescriptor("minPrice", "min_price", "min_price_asked", MIN_PRICE_PROMPT),
    SlotDescriptor("maxPrice", "max_price", "max_price_asked", MAX_PRICE_PROMPT),
)

def to_search_query(session: Session) -> SearchQuery:
    """Translate filled slots into a query, dropping every no-filter answer.

    A condition other than New/Used counts as no filter.
    """
    condition = session.condition if session.condition in CONDITION_LABELS else None
    return SearchQuery(
        keyword=session.search_by_keyword,
        condition=condition,
        min_price=None if is_no_filter(session.min_price) else session.min_price,
        max_price=None if is_no_filter(session.max_price) else session.max_price,
    )

class SlotFillingEngine:
    """Walks a session through keyword, condition, min price and max price.

    The first utterance of a conversation is always the keyword. Each slot
    then costs two turns: one to ask, one to take the answer. Once all three
    are filled the search pipeline runs, and the session is emptied whatever
    the outcome.
    """

    def __init__(self, graph_app, gateway, slots=SLOTS):
        self.graph_app = graph_app
        self.gateway = gateway
        self.slots = slots
        self.logger = get_logger(__name__)

    def step(self, session: Session, message: str) -> TurnResult:
        if session.search_by_keyword is None:
            session.search_by_keyword = message

        for slot in self.slots:
            if getattr(session, slot.value_field) is not None:
                continue
            if not getattr(session, slot.asked_field):
                setattr(session, slot.asked_field, True)
                self.logger.info(f"Asking for {slot.name}")
                return TurnResult(message=slot.prompt, session=session.snapshot())
            setattr(session, slot.value_field, slot.normalize(message))

        try:
            return self.dispatch(session)
        finally:
            session.clear()

    def dispatch(self, session: Session) -> TurnResult:
        """Run the search pipeline for a fully filled session."""
        result = self.graph_app.invoke({
            "session": session,
            "gateway": self.gateway,
        })
        return result["turn_result"]
