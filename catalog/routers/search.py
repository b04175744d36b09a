# catalog/routers/search.py
# Responsibility: Public category search endpoint. Validates input and formats output.

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from catalog.services.search_service import SearchService, get_search_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/inventory",
    tags=["Search"]
)

# --- Pydantic Models ---
class CategorySearchResult(BaseModel):
    category: str
    imageurl: Optional[str] = None
    comment: Optional[str] = None
    score: float
    exact_matches: int
    partial_matches: int
    similarity: float

# --- Endpoints ---
@router.get("", response_model=List[CategorySearchResult])
def search_endpoint(
    search: Optional[str] = Query(None, description="Free-text category query"),
    service: SearchService = Depends(get_search_service)
):
    """
    Ranked category search.
    A missing or blank query returns an empty list.
    """
    try:
        results = service.search_categories(search)
    except Exception as e:
        logger.exception("[Search] Search failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error during search")

    return [CategorySearchResult(**item) for item in results]
