from app.domains.suggestions.entities import ChangeSuggestion, SuggestionStatus
from app.domains.suggestions.schemas import SuggestionCreate, SuggestionResponse, SuggestionListResponse

__all__ = [
    "ChangeSuggestion", "SuggestionStatus",
    "SuggestionCreate", "SuggestionResponse", "SuggestionListResponse"
]
