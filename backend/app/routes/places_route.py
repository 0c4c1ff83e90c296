from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.core.categories import CATEGORIES
from app.models.base_model import ErrorResponse
from app.models.places_model import CategoryInfo, Place
from app.services.Places_service import PlacesService

router = APIRouter(prefix="/api/places", tags=["places"])

def get_places_service() -> PlacesService:
    return PlacesService()

@router.get(
    "/search",
    response_model=List[Place],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def search_places_endpoint(
    categories: Optional[str] = Query(None, description='Comma separated, e.g. "playground,museum"'),
    bbox: Optional[str] = Query(None, description="south,west,north,east; defaults to the city centre"),
    service: PlacesService = Depends(get_places_service)
):
    return await service.search(categories, bbox)

@router.get("/categories", response_model=List[CategoryInfo])
async def list_categories_endpoint():
    """The category table the search endpoint understands, in display order."""
    return [CategoryInfo(id=c.id, label=c.label) for c in CATEGORIES]
