from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

class Session(BaseModel):
    """Slot values gathered for one conversation.

    Each ``*_asked`` flag turns true on the turn its question is emitted; the
    matching value is written on the following turn. Serialised with the
    camelCase keys clients already rely on.
    """
    model_config = ConfigDict(populate_by_name=True)

    search_by_keyword: Optional[str] = Field(default=None, alias="searchByKeyword")
    condition_asked: bool = Field(default=False, alias="conditionBool")
    condition: Optional[str] = None
    min_price_asked: bool = Field(default=False, alias="minPriceBool")
    min_price: Optional[str] = Field(default=None, alias="minPrice")
    max_price_asked: bool = Field(default=False, alias="maxPriceBool")
    max_price: Optional[str] = Field(default=None, alias="maxPrice")

    def clear(self) -> None:
        """Drop every slot in place so the same object starts a new conversation."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.default)

    def is_empty(self) -> bool:
        return all(
            getattr(self, name) == field.default
            for name, field in type(self).model_fields.items()
        )

    def snapshot(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

class SearchQuery(BaseModel):
    """Keyword plus the filters that are actually active (None means no filter)."""
    keyword: str
    condition: Optional[str] = None
    min_price: Optional[str] = None
    max_price: Optional[str] = None

    def item_filters(self) -> List[Tuple[str, str]]:
        """Active (name, value) filter pairs in Condition, MinPrice, MaxPrice order."""
        candidates = [
            ("Condition", self.condition),
            ("MinPrice", self.min_price),
            ("MaxPrice", self.max_price),
        ]
        return [(name, value) for name, value in candidates if value is not None]

class FetchedItem(BaseModel):
    """One result row of a keyword search."""
    id: str
    gallery_url: Optional[str] = None
    item_url: str
    title: str
    condition: str
    price: str
    currency: Optional[str] = None

class ChatRequest(BaseModel):
    message: str

class TurnResult(BaseModel):
    """Reply produced for one chat turn."""
    message: str
    session: Optional[Dict[str, Any]] = None
    terminal: bool = False
    status_code: int = 200

    def to_response(self) -> Dict[str, Any]:
        body = {"message": self.message}
        if self.session is not None:
            body["session"] = self.session
        return body
