import logging
from typing import List, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import NotFound, ValidationError
from app.core.logger import logs
from app.models.saved_place_model import SavedPlace, SavedPlaceCreate

FAVORITED = "is_favorited"
VISITED = "visited"

class BookmarksService:
    """
    Per-user saved places. `user_id` is always passed in by the caller
    (resolved from the bearer token); rows of other users are invisible.
    """
    def __init__(self, repo):
        # SavedPlacesRepository (MongoDB) or LocalSavedPlacesRepository
        self.repo = repo

    async def list(self, user_id: str) -> List[SavedPlace]:
        return await self.repo.list_for_user(user_id)

    async def create(self, user_id: str, fields: Union[SavedPlaceCreate, dict]) -> SavedPlace:
        data = self._validate(fields)

        if await self.repo.find_by_osm_id(user_id, data.osm_id) is not None:
            raise ValidationError("osmId", "Place already saved")

        place = await self.repo.insert(user_id, data)
        logs.log(logging.INFO, f"Saved place {place.id} for user {user_id}", extra={"osm_id": place.osm_id})
        return place

    async def delete(self, user_id: str, place_id: int) -> None:
        if not await self.repo.delete(user_id, place_id):
            raise NotFound()
        logs.log(logging.INFO, f"Deleted saved place {place_id} for user {user_id}")

    async def toggle_visited(self, user_id: str, place_id: int) -> SavedPlace:
        return await self._toggle(user_id, place_id, VISITED)

    async def toggle_favorited(self, user_id: str, place_id: int) -> SavedPlace:
        return await self._toggle(user_id, place_id, FAVORITED)

    async def _toggle(self, user_id: str, place_id: int, flag: str) -> SavedPlace:
        place = await self.repo.toggle(user_id, place_id, flag)
        if place is None:
            raise NotFound()
        return place

    @staticmethod
    def _validate(fields: Union[SavedPlaceCreate, dict]) -> SavedPlaceCreate:
        if isinstance(fields, SavedPlaceCreate):
            return fields
        try:
            return SavedPlaceCreate.model_validate(fields)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "body"
            raise ValidationError(field, first["msg"])
