from fastapi import APIRouter, Depends, Response, status
from typing import List

from app.core.config import settings
from app.core.db_connection import get_db
from app.core.security import get_current_user_id
from app.models.base_model import ErrorResponse
from app.models.saved_place_model import SavedPlace, SavedPlaceCreate
from app.repos.local_repo import LocalSavedPlacesRepository
from app.repos.saved_places_repo import SavedPlacesRepository
from app.services.Bookmarks_service import BookmarksService

router = APIRouter(
    prefix="/api/saved-places",
    tags=["saved-places"],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)

# --- Dependency Injection ---
async def get_saved_places_repo():
    """Get the appropriate repository based on storage mode."""
    if settings.STORAGE_MODE == "local":
        return LocalSavedPlacesRepository()
    return SavedPlacesRepository(await get_db())

def get_bookmarks_service(repo = Depends(get_saved_places_repo)) -> BookmarksService:
    return BookmarksService(repo)

# --- Endpoints ---
@router.get("", response_model=List[SavedPlace])
async def list_saved_places(
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service)
):
    return await service.list(user_id)

@router.post("", response_model=SavedPlace, status_code=status.HTTP_201_CREATED,
             responses={400: {"model": ErrorResponse}})
async def create_saved_place(
    payload: SavedPlaceCreate,
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service)
):
    return await service.create(user_id, payload)

@router.delete("/{place_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_place(
    place_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service)
):
    await service.delete(user_id, place_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{place_id}/visited", response_model=SavedPlace)
async def toggle_visited(
    place_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service)
):
    return await service.toggle_visited(user_id, place_id)

@router.patch("/{place_id}/favorite", response_model=SavedPlace)
async def toggle_favorited(
    place_id: int,
    user_id: str = Depends(get_current_user_id),
    service: BookmarksService = Depends(get_bookmarks_service)
):
    return await service.toggle_favorited(user_id, place_id)
